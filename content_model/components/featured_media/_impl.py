"""
FeaturedMediaField - Ordered, captioned media references.

Holds the in-progress item list of one field while it is edited, validates
it as a whole before save, and prepares widget rows and display output.

Functional Core - pure business logic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from content_model.domain.entities import ReferenceCaptionItem

from .models import (
    CardinalityError,
    FeaturedMediaConfig,
    FeaturedMediaValidationError,
    InvalidOrderError,
    RenderedMediaItem,
    WidgetRow,
)
from .ports import MediaLookupPort

logger = logging.getLogger(__name__)

SELECTION_PREFIX = "media:"


def media_id_of(target_id: str) -> str:
    """Strip the entity browser `media:` prefix from a target id, if present."""
    if target_id.startswith(SELECTION_PREFIX):
        return target_id[len(SELECTION_PREFIX) :]
    return target_id


# --- Field ---


class FeaturedMediaField:
    """
    Ordered multi-value field of reference/caption items.

    Operations only mutate the in-memory sequence; the owning node's save
    is the only durability boundary.
    """

    def __init__(
        self,
        items: Iterable[ReferenceCaptionItem] = (),
        config: FeaturedMediaConfig | None = None,
    ) -> None:
        self.config = config or FeaturedMediaConfig()
        self._items: list[ReferenceCaptionItem] = [item.model_copy() for item in items]

    @classmethod
    def from_values(
        cls,
        values: Iterable[dict[str, Any]],
        config: FeaturedMediaConfig | None = None,
    ) -> FeaturedMediaField:
        items = [
            ReferenceCaptionItem(
                target_id=_clean_target(value.get("target_id")),
                caption=value.get("caption") or "",
            )
            for value in values
        ]
        return cls(items, config=config)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item: ReferenceCaptionItem | None = None) -> int:
        """Append an item (a blank row by default). Returns its position."""
        self._check_room(1)
        self._items.append(item.model_copy() if item is not None else ReferenceCaptionItem())
        return len(self._items) - 1

    def remove(self, index: int) -> ReferenceCaptionItem:
        """Remove the item at `index`; later items shift down by one."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"No item at position {index}")
        return self._items.pop(index)

    def reorder(self, new_order: Sequence[int]) -> None:
        """
        Reorder items.

        `new_order[i]` is the current position of the item that moves to
        position `i`. It must be a permutation of the current positions.
        """
        current = len(self._items)
        if (
            len(new_order) != current
            or not all(isinstance(i, int) and not isinstance(i, bool) for i in new_order)
            or sorted(new_order) != list(range(current))
        ):
            raise InvalidOrderError(
                f"Order {list(new_order)} is not a permutation of 0..{current - 1}"
            )
        self._items = [self._items[old] for old in new_order]

    def get_values(self) -> tuple[ReferenceCaptionItem, ...]:
        """Items in current order."""
        return tuple(item.model_copy() for item in self._items)

    def set_target(self, index: int, target_id: str | None) -> None:
        self._item_at(index).target_id = _clean_target(target_id)

    def set_caption(self, index: int, caption: str) -> None:
        self._item_at(index).caption = caption or ""

    def select(self, index: int, selection: Sequence[str]) -> None:
        """
        Apply entity browser output to the row at `index`.

        The first selected media fills the row; any further selections are
        appended as new rows, in selection order.
        """
        if not selection:
            return
        first, *rest = selection
        row = self._item_at(index)
        self._check_room(len(rest))
        row.target_id = _clean_target(media_id_of(first))
        self._items.extend(ReferenceCaptionItem(target_id=media_id_of(extra)) for extra in rest)

    def to_values(self, *, skip_empty: bool = True) -> list[dict[str, Any]]:
        """Persisted shape: list of `{"target_id", "caption"}` dicts."""
        return [
            {"target_id": item.target_id, "caption": item.caption}
            for item in self._items
            if not (skip_empty and item.is_empty())
        ]

    def _check_room(self, count: int) -> None:
        if not self.config.is_unlimited and len(self._items) + count > self.config.cardinality:
            raise CardinalityError(
                f"Field allows at most {self.config.cardinality} values"
            )

    def _item_at(self, index: int) -> ReferenceCaptionItem:
        if not 0 <= index < len(self._items):
            raise IndexError(f"No item at position {index}")
        return self._items[index]


def _clean_target(target_id: Any) -> str | None:
    if target_id is None:
        return None
    value = str(target_id).strip()
    return value or None


# --- Validation Functions ---


def validate_featured_media(
    items: Sequence[ReferenceCaptionItem],
    config: FeaturedMediaConfig,
    *,
    field_name: str = "featured_media_field",
    media_lookup: MediaLookupPort | None = None,
) -> list[FeaturedMediaValidationError]:
    """Validate every item of a field; returns one error per offending item."""
    errors: list[FeaturedMediaValidationError] = []

    filled = [item for item in items if not item.is_empty()]
    if not config.is_unlimited and len(filled) > config.cardinality:
        errors.append(
            FeaturedMediaValidationError(
                code="too_many_values",
                message=f"This field cannot hold more than {config.cardinality} values",
                field=field_name,
            )
        )

    for delta, item in enumerate(items):
        if item.is_empty():
            continue

        if item.has_caption() and item.target_id is None:
            errors.append(
                FeaturedMediaValidationError(
                    code="caption_without_target",
                    message=f"Please either remove the caption or select a {config.target_label}",
                    field=f"{field_name}[{delta}][caption]",
                    delta=delta,
                )
            )

        if len(item.caption) > config.caption_max_length:
            errors.append(
                FeaturedMediaValidationError(
                    code="caption_too_long",
                    message=(
                        f"Caption must be {config.caption_max_length} characters or less"
                    ),
                    field=f"{field_name}[{delta}][caption]",
                    delta=delta,
                )
            )

        if item.target_id is not None and media_lookup is not None:
            media = media_lookup.get_by_id(media_id_of(item.target_id))
            if media is None:
                errors.append(
                    FeaturedMediaValidationError(
                        code="target_not_found",
                        message=f"Referenced media {item.target_id} not found",
                        field=f"{field_name}[{delta}][target_id]",
                        delta=delta,
                    )
                )
            elif (
                config.allowed_target_bundles
                and media.bundle not in config.allowed_target_bundles
            ):
                errors.append(
                    FeaturedMediaValidationError(
                        code="target_bundle_not_allowed",
                        message=f"Media of type '{media.bundle}' cannot be referenced here",
                        field=f"{field_name}[{delta}][target_id]",
                        delta=delta,
                    )
                )

    return errors


# --- Widget / Display ---


def build_widget_rows(
    field: FeaturedMediaField,
    media_lookup: MediaLookupPort,
) -> list[WidgetRow]:
    """Rows of the entity browser widget, one per item."""
    rows = []
    for delta, item in enumerate(field.get_values()):
        media = (
            media_lookup.get_by_id(media_id_of(item.target_id))
            if item.target_id is not None
            else None
        )
        has_target = item.target_id is not None
        rows.append(
            WidgetRow(
                delta=delta,
                target_id=item.target_id,
                target_label=media.label() if media else None,
                caption=item.caption,
                caption_description=field.config.caption_description,
                show_select_button=not has_target,
                show_remove_button=has_target,
            )
        )
    return rows


def render_featured_media(
    items: Sequence[ReferenceCaptionItem],
    media_lookup: MediaLookupPort,
    *,
    link: bool = True,
) -> list[RenderedMediaItem]:
    """Label formatter output: media label, optional link, caption."""
    rendered = []
    for item in items:
        if item.target_id is None:
            continue
        media_id = media_id_of(item.target_id)
        media = media_lookup.get_by_id(media_id)
        if media is None:
            logger.debug("Skipping missing media %s", media_id)
            continue
        rendered.append(
            RenderedMediaItem(
                media_id=media.id,
                label=media.label(),
                caption=item.caption,
                url=f"/media/{media.id}" if link else None,
            )
        )
    return rendered
