"""SQLAlchemy-backed repository."""
from typing import Any, Optional
from fastapi import Depends
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from ticket_tally.database import get_db
from ticket_tally.models.collection import CollectionDocument
from ticket_tally.repositories import Repository


class SqlRepository(Repository):
    """Stores each collection as one JSON row of the ``collections`` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def read(self, key: str) -> Optional[Any]:
        result = await self.db.execute(
            select(CollectionDocument).where(CollectionDocument.key == key)
        )
        document = result.scalar_one_or_none()
        if document is None:
            return None
        return document.payload

    async def write(self, key: str, payload: Any) -> None:
        document = await self.db.get(CollectionDocument, key)
        if document is None:
            self.db.add(CollectionDocument(key=key, payload=payload))
        else:
            # Assign a new object so the JSON column is flagged dirty
            document.payload = payload
        await self.db.commit()

    async def delete(self, key: str) -> None:
        await self.db.execute(delete(CollectionDocument).where(CollectionDocument.key == key))
        await self.db.commit()


async def get_repository(db: AsyncSession = Depends(get_db)) -> Repository:
    """Dependency that yields the request's repository."""
    return SqlRepository(db)
