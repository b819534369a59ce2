"""Service layer for user accounts."""
import logging
from uuid import UUID

import bcrypt
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from services.exceptions import AlreadyExistsError, InvalidCredentialsError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; newer releases reject longer input
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    hashed = bcrypt.hashpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a stored bcrypt hash. A missing hash never matches."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:BCRYPT_MAX_BYTES],
            password_hash.encode("utf-8"),
        )
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def register_user(
    db: AsyncSession,
    username: str,
    password: str,
    email: str | None = None,
) -> User:
    """
    Create a new user account.

    Does not log the user in; the client follows up with a login.

    Raises:
        AlreadyExistsError: If the username or email is taken.
    """
    existing = await get_user_by_username(db, username)
    if existing is not None:
        raise AlreadyExistsError("User", "username", username)

    if email is not None:
        result = await db.execute(select(User.id).where(User.email == email))
        if result.scalar_one_or_none() is not None:
            raise AlreadyExistsError("User", "email", email)

    user = User(username=username, email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same name or email
        await db.rollback()
        raise AlreadyExistsError("User", "username or email", username) from e

    logger.info("Registered user %s", user.id)
    return user


async def authenticate_user(
    db: AsyncSession,
    username: str,
    password: str,
    check_password: bool,
) -> User:
    """
    Resolve login credentials to a user.

    With check_password disabled, knowing a username is sufficient to log in.

    Raises:
        InvalidCredentialsError: If the username is unknown, or the password does
            not match while check_password is enabled.
    """
    user = await get_user_by_username(db, username)
    if user is None:
        raise InvalidCredentialsError
    if check_password and not verify_password(password, user.password_hash):
        raise InvalidCredentialsError
    return user


async def delete_user(db: AsyncSession, user_id: UUID) -> None:
    """
    Delete a user account.

    Sessions, categories, tags, sites and their tag links go with it through the
    ON DELETE CASCADE foreign keys.
    """
    await db.execute(delete(User).where(User.id == user_id))
    logger.info("Deleted user %s", user_id)
