import logging
import bcrypt
from passlib.context import CryptContext
from datetime import datetime, timedelta
from typing import Optional
from jose import jwt, JWTError
from app.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

logger = logging.getLogger(__name__)

# bcrypt hard limit
MAX_PASSWORD_BYTES = 72

# passlib is only used to verify hashes bcrypt.checkpw rejects
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


def _password_bytes(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        logger.warning("Password exceeds 72 bytes, truncating before hashing (validation should have caught this)")
        password_bytes = password_bytes[:MAX_PASSWORD_BYTES]
    return password_bytes


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt directly.
    
    Args:
        password: Plain text password (max 72 bytes in UTF-8, longer input is truncated)
        
    Returns:
        Hashed password string (bcrypt format compatible with passlib)
        
    Raises:
        ValueError: If password cannot be hashed
    """
    try:
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")
    except (TypeError, ValueError) as e:
        logger.error(f"Password hashing failed: {e}")
        raise ValueError("Invalid password") from e


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """
    Verify a password against its hash.
    
    Supports both bcrypt-native hashes and passlib-wrapped hashes.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        try:
            return pwd_context.verify(password, hashed)
        except (ValueError, TypeError) as e:
            logger.error(f"Password verification failed: {e}")
            return False


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_user_token(user) -> str:
    """Issue an access token identifying the user by id."""
    return create_access_token({"sub": str(user.id), "email": user.email})


def decode_access_token(token: str) -> Optional[int]:
    """Return the user id carried by a token, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None

    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
