from sqlalchemy import Column, String, Text
from sqlalchemy.orm import Session

from goal_tracker.database import Base

ADS_REMOVED_KEY = "ads_removed"

# Rows inserted at startup when missing; existing values are never overwritten.
DEFAULT_SETTINGS = {
    ADS_REMOVED_KEY: "false",
}


class AppSetting(Base):
    """Global key/value settings applied to anonymous visitors."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=True)

    def __repr__(self):
        return f"<AppSetting(key='{self.key}', value='{self.value}')>"


def seed_defaults(db: Session) -> None:
    """Insert default settings rows that do not exist yet."""
    for key, value in DEFAULT_SETTINGS.items():
        if db.get(AppSetting, key) is None:
            db.add(AppSetting(key=key, value=value))
    db.commit()


def get_flag(db: Session, key: str) -> bool:
    """Read a boolean setting stored as the text 'true' or 'false'."""
    setting = db.get(AppSetting, key)
    return setting is not None and setting.value == "true"
