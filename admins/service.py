import logging
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from core.auth import AdminIdentity, Role, create_token
from core.config import settings
from core.errors import ErrorCode, ErrorMessage, bad_request, unauthorized
from core.models import Admin

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # not a recognizable hash, e.g. a legacy plaintext row
        return False


def login(db: Session, email: str, password: str) -> tuple[str, str]:
    admin = db.query(Admin).filter(Admin.email == email).first()
    if not admin or not verify_password(password, admin.password_hash):
        logger.warning("Rejected admin login for %s", email)
        raise unauthorized(ErrorCode.AUTH_INVALID_CREDENTIALS, ErrorMessage.INVALID_CREDENTIALS)

    logger.info("Admin %s logged in as %s", admin.email, admin.role)
    return create_token(admin.email, admin.role), admin.role


def change_password(db: Session, identity: AdminIdentity, current_password: str, new_password: str) -> None:
    """Replace the password of the admin the token belongs to.

    The target is always the token identity; the request body never names
    whose password is being changed.
    """
    admin = (
        db.query(Admin)
        .filter(Admin.email == identity.email)
        .with_for_update()
        .first()
    )
    if not admin or not verify_password(current_password, admin.password_hash):
        raise bad_request(ErrorCode.INVALID_CURRENT_PASSWORD, ErrorMessage.INVALID_CURRENT_PASSWORD)

    if len(new_password) < settings.MIN_PASSWORD_LENGTH:
        raise bad_request(
            ErrorCode.WEAK_PASSWORD,
            ErrorMessage.WEAK_PASSWORD.format(length=settings.MIN_PASSWORD_LENGTH),
        )

    admin.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Admin %s changed password", admin.email)


def upsert_admin(db: Session, email: str, password: str, role: Role = Role.SUPERADMIN) -> Admin:
    admin = db.query(Admin).filter(Admin.email == email).first()
    if admin:
        admin.password_hash = hash_password(password)
        admin.role = role.value
        logger.info("Admin %s already exists, password and role updated", email)
    else:
        admin = Admin(email=email, password_hash=hash_password(password), role=role.value)
        db.add(admin)
        logger.info("Created admin %s with role %s", email, role.value)

    db.commit()
    db.refresh(admin)
    return admin
