"""
Featured media component - Data models.

Ordered, captioned media references attached to a node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from content_model.domain.entities import Node, NodeType
from content_model.rules.models import FeaturedMediaRules

UNLIMITED = -1

# --- Errors ---


class FeaturedMediaFieldError(ValueError):
    """Base error for in-memory field operations."""


class InvalidOrderError(FeaturedMediaFieldError):
    """Raised when a reorder is not a permutation of the current positions."""


class CardinalityError(FeaturedMediaFieldError):
    """Raised when adding an item would exceed the field cardinality."""


@dataclass(frozen=True)
class FeaturedMediaValidationError:
    """Validation error attributed to one item position."""

    code: str
    message: str
    field: str | None = None
    delta: int | None = None


# --- Configuration ---


@dataclass(frozen=True)
class FeaturedMediaConfig:
    """Field storage and widget settings."""

    cardinality: int = UNLIMITED
    caption_max_length: int = 255
    target_label: str = "Media entity"
    caption_description: str = "The caption that goes with the referenced media."
    allowed_target_bundles: tuple[str, ...] = ()

    @classmethod
    def from_rules(cls, rules: FeaturedMediaRules) -> FeaturedMediaConfig:
        return cls(
            cardinality=rules.cardinality,
            caption_max_length=rules.caption_max_length,
            target_label=rules.target_label,
            caption_description=rules.caption_description,
            allowed_target_bundles=tuple(rules.allowed_target_bundles),
        )

    @property
    def is_unlimited(self) -> bool:
        return self.cardinality == UNLIMITED


# --- Input Models ---


@dataclass(frozen=True)
class CreateNodeInput:
    """Input for creating a node."""

    title: str
    type: NodeType = "page"
    references: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class GetNodeInput:
    """Input for loading a node."""

    node_id: UUID


@dataclass(frozen=True)
class SaveFeaturedMediaInput:
    """
    Input for saving a featured media field.

    `items` is the client-confirmed order, one dict per row with
    `target_id` and `caption` keys.
    """

    node_id: UUID
    field_name: str
    items: tuple[dict[str, Any], ...]


@dataclass(frozen=True)
class RenderFeaturedMediaInput:
    """Input for rendering a featured media field."""

    node_id: UUID
    field_name: str
    link: bool = True


# --- Output Models ---


@dataclass(frozen=True)
class NodeOutput:
    """Output from node operations."""

    node: Node | None
    errors: tuple[FeaturedMediaValidationError, ...] = ()
    success: bool = True


@dataclass(frozen=True)
class WidgetRow:
    """One editable row of the entity browser widget."""

    delta: int
    target_id: str | None
    target_label: str | None
    caption: str
    caption_description: str
    show_select_button: bool
    show_remove_button: bool


@dataclass(frozen=True)
class RenderedMediaItem:
    """Display output for one featured media item."""

    media_id: str
    label: str
    caption: str
    url: str | None = None


@dataclass(frozen=True)
class RenderOutput:
    """Output from rendering a featured media field."""

    items: tuple[RenderedMediaItem, ...]
    errors: tuple[FeaturedMediaValidationError, ...] = ()
    success: bool = True
