"""SQLAlchemy database models."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from familyplate.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CheckedStateRecord(Base):
    """Checked shopping list items for one storage key."""

    __tablename__ = "shopping_list_checked_state"

    storage_key: Mapped[str] = mapped_column(String(255), primary_key=True)
    # Flat map of normalized ingredient name -> checked
    state: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
