from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from goal_tracker.database import Base


class User(Base):
    """User identified by the id issued by the OAuth provider."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=True)
    name = Column(String, nullable=True)
    picture = Column(String, nullable=True)
    ads_removed = Column(Boolean, default=False, nullable=False)

    # Relationships
    tasks = relationship(
        "Task", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<User(id='{self.id}', email='{self.email}')>"
