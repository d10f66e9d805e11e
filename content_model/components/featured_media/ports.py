"""
Featured media component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from content_model.domain.entities import Media, Node


class NodeRepoPort(Protocol):
    """Repository interface for nodes (the parent records)."""

    def get_by_id(self, node_id: UUID) -> Node | None:
        """Load node with all of its field values."""
        ...

    def save(self, node: Node) -> Node:
        """Persist node and all of its field values atomically."""
        ...


class MediaLookupPort(Protocol):
    """Lookup for referenced media entities."""

    def get_by_id(self, media_id: str) -> Media | None:
        """Get media by ID, None if it does not exist."""
        ...
