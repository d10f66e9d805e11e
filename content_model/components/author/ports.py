"""
Author component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import UUID

from content_model.domain.entities import Author


@runtime_checkable
class Labelable(Protocol):
    """Entity variant able to produce a display label."""

    has_label_key: bool

    def label(self) -> str:
        """Human-readable label."""
        ...


class AuthorRepoPort(Protocol):
    """Repository interface for authors."""

    def get_by_id(self, author_id: UUID) -> Author | None:
        """Get author by ID."""
        ...

    def save(self, author: Author) -> Author:
        """Save or update author."""
        ...


class ReferenceLookupPort(Protocol):
    """Resolves the entities an author references."""

    def referenced_entities(self, author: Author) -> list[object]:
        """Referenced entities in stored order; missing ones are left out."""
        ...
