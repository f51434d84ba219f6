"""
Account registration and credential checks.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session
from app.core.exceptions import AuthenticationError, ConflictError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.db.retry import run_with_retry
from app.db.session import unit_of_work
from app.models.user import User

logger = logging.getLogger(__name__)


def _find_by_email(email: str, db: Session) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def register_user(email: str, password: str, full_name: Optional[str] = None, db: Session = None) -> User:
    """Register a new user. Emails are stored lower-cased and must be unique."""
    if not email or not password:
        raise ValidationError("Email and password required")

    def register() -> User:
        with unit_of_work(db):
            if _find_by_email(email, db):
                raise ConflictError("User already exists", {"email": email})
            user = User(
                email=email.lower(),
                password_hash=get_password_hash(password),
                full_name=full_name
            )
            db.add(user)
        return user

    user = run_with_retry(db, register)
    run_with_retry(db, db.refresh, user)
    logger.info(f"User {user.user_id} registered")
    return user


def authenticate_user(email: str, password: str, db: Session) -> User:
    """Check credentials. Unknown email and wrong password fail the same way."""
    if not email or not password:
        raise ValidationError("Email and password required")

    user = run_with_retry(db, _find_by_email, email, db)
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    return user


def get_user(user_id: int, db: Session) -> Optional[User]:
    """Load a user by id."""
    return run_with_retry(db, db.get, User, user_id)
