from pydantic import BaseModel, EmailStr, Field

class LoginSchema(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class LoginResponse(BaseModel):
    success: bool = True
    token: str
    role: str

class ChangePasswordSchema(BaseModel):
    currentPassword: str = Field(..., min_length=1)
    # length policy is enforced by the service so it can answer WEAK_PASSWORD
    newPassword: str
