"""Client, document and category shapes.

Only the fields authorization and the activity log read are modelled here.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Category:
    id: Optional[int]
    name: str


@dataclass(frozen=True)
class Client:
    id: Optional[int]
    name: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Document:
    id: Optional[int]
    title: str
    client_id: Optional[int] = None
    category_id: Optional[int] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        """Documents in the trash keep their row with ``deleted_at`` set."""
        return self.deleted_at is not None
