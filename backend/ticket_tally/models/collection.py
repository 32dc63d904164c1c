"""Collection document model."""
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, JSON
from ticket_tally.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CollectionDocument(Base):
    """One named collection stored as a single JSON document.

    Mirrors the get-all/replace-all access pattern of the repository: a
    write replaces the whole payload of the row.
    """

    __tablename__ = "collections"

    key = Column(String(50), primary_key=True)
    payload = Column(JSON, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<CollectionDocument(key={self.key})>"
