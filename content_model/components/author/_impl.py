"""
Author labels.

Authors carry no name; their label is composed from the labels of the
entities they reference, e.g. "Author: Image 1, Image 2".

Functional Core - pure business logic.
"""

from __future__ import annotations

import html
import logging

from content_model.domain.entities import Author

from .ports import Labelable, ReferenceLookupPort

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ", "


def referenced_entity_labels(
    author: Author,
    lookup: ReferenceLookupPort,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Labels of the referenced entities, joined in stored order."""
    labels = []
    for entity in lookup.referenced_entities(author):
        if not isinstance(entity, Labelable) or not entity.has_label_key:
            logger.debug("Skipping unlabelled %s on author %s", type(entity).__name__, author.id)
            continue
        labels.append(entity.label())
    return separator.join(labels)


def compose_label(
    author: Author,
    lookup: ReferenceLookupPort,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Author label, falling back to the sub-entity default when nothing is labelled."""
    labels = referenced_entity_labels(author, lookup, separator)
    if labels:
        return f"{author.bundle}: {labels}"
    return author.default_label()


def render_label(
    author: Author,
    lookup: ReferenceLookupPort,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """HTML variant of `compose_label` with the bundle name in bold."""
    labels = referenced_entity_labels(author, lookup, separator)
    if labels:
        return f"<strong>{html.escape(author.bundle)}</strong>: {html.escape(labels)}"
    return html.escape(author.default_label())
