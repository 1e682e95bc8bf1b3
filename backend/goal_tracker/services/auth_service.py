import logging

from sqlalchemy.orm import Session

from goal_tracker.models.user import User
from goal_tracker.schemas.user import GoogleProfile

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service."""

    @staticmethod
    def upsert_user(db: Session, profile: GoogleProfile) -> User:
        """Insert a user on first login, otherwise refresh their profile fields."""
        user = db.query(User).filter(User.id == profile.id).first()
        if user is None:
            user = User(id=profile.id, ads_removed=False)
            db.add(user)
            logger.info(f"Creating user {profile.id}")

        # ads_removed survives re-login
        user.email = profile.email
        user.name = profile.name
        user.picture = profile.picture
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> User | None:
        """Get a user by ID."""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def remove_ads(db: Session, user: User) -> User:
        """Set the user's ads-removed flag. Idempotent."""
        if not user.ads_removed:
            user.ads_removed = True
            db.commit()
            db.refresh(user)
        return user
