"""
Store Outcome Models

Mutations and loads report what happened to persistence instead of
silently dropping failures. The caller decides whether to care.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from cashapp.models.item import Collection


class OutcomeKind(str, Enum):
    """Result of a load or persist step."""
    OK = "ok"
    DATA_CORRUPT = "data_corrupt"
    PERSISTENCE_WRITE_FAILED = "persistence_write_failed"


class StoreOutcome(BaseModel):
    """Outcome of one store operation against one collection."""
    
    kind: OutcomeKind = Field(
        default=OutcomeKind.OK,
        description="What happened"
    )
    collection: Collection = Field(
        ...,
        description="Collection the operation touched"
    )
    message: Optional[str] = Field(
        default=None,
        description="Error detail when kind is not OK"
    )
    
    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.OK
    
    @classmethod
    def success(cls, collection: Collection) -> "StoreOutcome":
        return cls(collection=collection)
    
    @classmethod
    def data_corrupt(cls, collection: Collection, message: str) -> "StoreOutcome":
        return cls(
            kind=OutcomeKind.DATA_CORRUPT,
            collection=collection,
            message=message,
        )
    
    @classmethod
    def write_failed(cls, collection: Collection, message: str) -> "StoreOutcome":
        return cls(
            kind=OutcomeKind.PERSISTENCE_WRITE_FAILED,
            collection=collection,
            message=message,
        )
