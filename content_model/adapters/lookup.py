"""
Reference lookup adapter.

Resolves author references against the media and node repositories.
"""

from __future__ import annotations

import logging
from typing import Protocol
from uuid import UUID

from content_model.components.featured_media import media_id_of
from content_model.domain.entities import Author, Media, Node

logger = logging.getLogger(__name__)


class _MediaSource(Protocol):
    def get_by_id(self, media_id: str) -> Media | None: ...


class _NodeSource(Protocol):
    def get_by_id(self, node_id: UUID) -> Node | None: ...


class EntityReferenceLookup:
    def __init__(self, media_repo: _MediaSource, node_repo: _NodeSource) -> None:
        self._media_repo = media_repo
        self._node_repo = node_repo

    def referenced_entities(self, author: Author) -> list[object]:
        entities: list[object] = []
        for ref in author.references:
            entity: object | None
            if ref.target_type == "media":
                entity = self._media_repo.get_by_id(media_id_of(ref.target_id))
            else:
                try:
                    entity = self._node_repo.get_by_id(UUID(ref.target_id))
                except ValueError:
                    entity = None

            if entity is None:
                logger.debug("Reference %s:%s not found", ref.target_type, ref.target_id)
                continue
            entities.append(entity)
        return entities
