"""Collection repositories.

Every collection is read and written whole: ``load_all`` returns the full
sequence, ``replace_all`` overwrites it. There are no partial updates and no
transactions spanning collections, so the last writer wins.
"""
import enum
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type
from pydantic import BaseModel
from ticket_tally.schemas.auth import Principal
from ticket_tally.schemas.preferences import UserSettings
from ticket_tally.schemas.project import Project
from ticket_tally.schemas.staff import StaffMember
from ticket_tally.schemas.ticket import Ticket


class Collection(str, enum.Enum):
    """Persisted collection keys."""
    TICKETS = "tickets"
    PROJECTS = "projects"
    STAFF = "staff"
    SESSION = "user"
    THEME = "theme"
    SETTINGS = "settings"


RECORD_MODELS: Dict[Collection, Type[BaseModel]] = {
    Collection.TICKETS: Ticket,
    Collection.PROJECTS: Project,
    Collection.STAFF: StaffMember,
    Collection.SESSION: Principal,
    Collection.SETTINGS: UserSettings,
}


class Repository(ABC):
    """Base class for collection stores.

    Subclasses only move JSON-compatible payloads in and out; conversion
    to and from the pydantic records happens here.
    """

    @abstractmethod
    async def read(self, key: str) -> Optional[Any]:
        """Return the raw payload stored under ``key``, or None if absent."""
        pass

    @abstractmethod
    async def write(self, key: str, payload: Any) -> None:
        """Replace the payload stored under ``key``."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key`` entirely."""
        pass

    async def has(self, collection: Collection) -> bool:
        """Whether the collection has ever been written."""
        return await self.read(collection.value) is not None

    async def load_all(self, collection: Collection) -> List[Any]:
        """Load every record of a list collection."""
        model = RECORD_MODELS[collection]
        payload = await self.read(collection.value)
        if not payload:
            return []
        return [model.model_validate(item) for item in payload]

    async def replace_all(self, collection: Collection, records: List[BaseModel]) -> None:
        """Overwrite a list collection with ``records``."""
        await self.write(
            collection.value,
            [record.model_dump(mode="json") for record in records],
        )

    async def load_one(self, collection: Collection) -> Optional[Any]:
        """Load a single-record collection (session, settings)."""
        payload = await self.read(collection.value)
        if payload is None:
            return None
        return RECORD_MODELS[collection].model_validate(payload)

    async def save_one(self, collection: Collection, record: BaseModel) -> None:
        """Overwrite a single-record collection."""
        await self.write(collection.value, record.model_dump(mode="json"))

    async def clear(self, collection: Collection) -> None:
        """Remove a collection."""
        await self.delete(collection.value)


__all__ = ["Collection", "Repository", "RECORD_MODELS"]
