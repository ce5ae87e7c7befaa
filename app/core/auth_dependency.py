from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.db.models.user import User, UserRole

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _credentials_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to the User it was issued for."""
    user_id = decode_access_token(token)
    if user_id is None:
        raise _credentials_error("Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise _credentials_error("Invalid token")

    return user


def require_roles(*roles: str):
    """
    Dependency factory restricting an endpoint to the given roles.

    Admins always pass.
    """
    allowed = {UserRole.ADMIN.value, *roles}

    def role_checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions"
            )
        return user

    return role_checker


require_admin = require_roles(UserRole.ADMIN.value)
