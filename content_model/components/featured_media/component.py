"""
Featured media component - Editing and saving featured media fields.

Edit session state machine:
- editing → validating (submit)
- validating → invalid → editing (errors attached per item position)
- validating → valid → persisted (node saved with the exact current order)
- persisted → editing (any further edit starts a new save attempt)

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Literal
from uuid import UUID

from content_model.domain.entities import Node, ReferenceCaptionItem

from ._impl import FeaturedMediaField, render_featured_media, validate_featured_media
from .models import (
    CreateNodeInput,
    FeaturedMediaConfig,
    FeaturedMediaValidationError,
    GetNodeInput,
    NodeOutput,
    RenderFeaturedMediaInput,
    RenderOutput,
    SaveFeaturedMediaInput,
)
from .ports import MediaLookupPort, NodeRepoPort

logger = logging.getLogger(__name__)

EditState = Literal["editing", "validating", "valid", "invalid", "persisted"]


def _not_found(node_id: UUID) -> FeaturedMediaValidationError:
    return FeaturedMediaValidationError(
        code="node_not_found",
        message=f"Node with ID {node_id} not found",
    )


# --- Edit Session ---


class FeaturedMediaEditSession:
    """
    One user's editing session over a single featured media field.

    Edits only touch the in-memory field. `submit()` validates the whole
    field once and, when valid, saves the node through the repository.
    """

    def __init__(
        self,
        node: Node,
        field_name: str,
        *,
        repo: NodeRepoPort,
        config: FeaturedMediaConfig | None = None,
        media_lookup: MediaLookupPort | None = None,
    ) -> None:
        self.node = node
        self.field_name = field_name
        self.field = FeaturedMediaField(node.featured_media.get(field_name, []), config=config)
        self.state: EditState = "editing"
        self.errors: list[FeaturedMediaValidationError] = []
        self._repo = repo
        self._media_lookup = media_lookup

    @classmethod
    def open(
        cls,
        node_id: UUID,
        field_name: str,
        *,
        repo: NodeRepoPort,
        config: FeaturedMediaConfig | None = None,
        media_lookup: MediaLookupPort | None = None,
    ) -> FeaturedMediaEditSession | None:
        """Start a session on a stored node; None if the node does not exist."""
        node = repo.get_by_id(node_id)
        if node is None:
            return None
        return cls(node, field_name, repo=repo, config=config, media_lookup=media_lookup)

    # Editing operations

    def add(self, item: ReferenceCaptionItem | None = None) -> int:
        self._resume()
        return self.field.add(item)

    def remove(self, index: int) -> ReferenceCaptionItem:
        self._resume()
        return self.field.remove(index)

    def reorder(self, new_order: Sequence[int]) -> None:
        self._resume()
        self.field.reorder(new_order)

    def set_target(self, index: int, target_id: str | None) -> None:
        self._resume()
        self.field.set_target(index, target_id)

    def set_caption(self, index: int, caption: str) -> None:
        self._resume()
        self.field.set_caption(index, caption)

    def select(self, index: int, selection: Sequence[str]) -> None:
        self._resume()
        self.field.select(index, selection)

    def get_values(self) -> tuple[ReferenceCaptionItem, ...]:
        return self.field.get_values()

    def _resume(self) -> None:
        if self.state in ("persisted", "invalid"):
            self.state = "editing"

    # Save

    def submit(self) -> bool:
        """
        Validate and, when valid, persist the node.

        Returns True when the node was saved. Repository errors propagate
        unchanged and leave the session editable.
        """
        self.state = "validating"
        items = self.field.get_values()
        errors = validate_featured_media(
            items,
            self.field.config,
            field_name=self.field_name,
            media_lookup=self._media_lookup,
        )
        if errors:
            self.errors = errors
            self.state = "invalid"
            logger.warning(
                "Rejected save of %s on node %s: %d validation error(s)",
                self.field_name,
                self.node.id,
                len(errors),
            )
            self.state = "editing"
            return False

        self.errors = []
        self.state = "valid"

        node = self.node.model_copy(deep=True)
        node.featured_media[self.field_name] = [item for item in items if not item.is_empty()]
        node.updated_at = datetime.utcnow()
        try:
            saved = self._repo.save(node)
        except Exception:
            self.state = "editing"
            raise

        self.node = saved
        self.state = "persisted"
        logger.info(
            "Saved %d item(s) in %s on node %s",
            len(node.featured_media[self.field_name]),
            self.field_name,
            saved.id,
        )
        return True


# --- Shell Layer Functions ---


def run_create_node(
    input_data: CreateNodeInput,
    *,
    repo: NodeRepoPort,
) -> NodeOutput:
    """Create a new node."""
    if not input_data.title or not input_data.title.strip():
        return NodeOutput(
            node=None,
            errors=(
                FeaturedMediaValidationError(
                    code="title_required",
                    message="Title is required",
                    field="title",
                ),
            ),
            success=False,
        )

    node = Node(
        type=input_data.type,
        title=input_data.title.strip(),
        references={name: list(ids) for name, ids in input_data.references.items()},
    )
    saved = repo.save(node)
    return NodeOutput(node=saved)


def run_get_node(
    input_data: GetNodeInput,
    *,
    repo: NodeRepoPort,
) -> NodeOutput:
    """Get a node by ID."""
    node = repo.get_by_id(input_data.node_id)
    if node is None:
        return NodeOutput(node=None, errors=(_not_found(input_data.node_id),), success=False)
    return NodeOutput(node=node)


def run_save_featured_media(
    input_data: SaveFeaturedMediaInput,
    *,
    repo: NodeRepoPort,
    config: FeaturedMediaConfig | None = None,
    media_lookup: MediaLookupPort | None = None,
) -> NodeOutput:
    """
    Save a featured media field from its submitted rows.

    The submitted row order is the order that gets persisted.
    """
    node = repo.get_by_id(input_data.node_id)
    if node is None:
        return NodeOutput(node=None, errors=(_not_found(input_data.node_id),), success=False)

    session = FeaturedMediaEditSession(
        node,
        input_data.field_name,
        repo=repo,
        config=config,
        media_lookup=media_lookup,
    )
    session.field = FeaturedMediaField.from_values(input_data.items, config=session.field.config)

    if not session.submit():
        return NodeOutput(node=None, errors=tuple(session.errors), success=False)

    return NodeOutput(node=session.node)


def run_render_featured_media(
    input_data: RenderFeaturedMediaInput,
    *,
    repo: NodeRepoPort,
    media_lookup: MediaLookupPort,
) -> RenderOutput:
    """Render a stored featured media field."""
    node = repo.get_by_id(input_data.node_id)
    if node is None:
        return RenderOutput(items=(), errors=(_not_found(input_data.node_id),), success=False)

    items = node.featured_media.get(input_data.field_name, [])
    rendered = render_featured_media(items, media_lookup, link=input_data.link)
    return RenderOutput(items=tuple(rendered))
