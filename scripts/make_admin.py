"""
Promote an existing user to the admin role.
Run: python -m scripts.make_admin someone@example.com
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.session import SessionLocal
from app.db.models.user import User, UserRole
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def make_admin(email: str) -> bool:
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email.lower()).first()
        if not user:
            logger.error(f"User {email} not found")
            return False
        
        user.role = UserRole.ADMIN.value
        db.commit()
        logger.info(f"User {email} (ID: {user.id}) is now an admin")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Error promoting user: {e}", exc_info=True)
        return False
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python -m scripts.make_admin <email>")
        sys.exit(2)
    
    if not make_admin(sys.argv[1]):
        sys.exit(1)
