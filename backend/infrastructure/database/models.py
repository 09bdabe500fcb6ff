from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String

from .connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SettingsRow(Base):
    """The settings singleton. Only one row, keyed ``"settings"``."""

    __tablename__ = "settings"

    id = Column(String, primary_key=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class RecordRowMixin:
    """Keyed record holding the full camelCase document in ``payload``."""

    id = Column(String, primary_key=True)
    # Insertion order, kept stable across updates of the same id
    position = Column(Integer, nullable=False, index=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class MemoryRow(RecordRowMixin, Base):
    __tablename__ = "memories"


class PlanRow(RecordRowMixin, Base):
    __tablename__ = "plans"
