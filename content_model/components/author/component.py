"""
Author component - Author sub-entities and their derived labels.

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

import logging

from content_model.domain.entities import Author

from ._impl import DEFAULT_SEPARATOR, compose_label
from .models import AuthorOutput, AuthorValidationError, CreateAuthorInput, GetAuthorInput
from .ports import AuthorRepoPort, ReferenceLookupPort

logger = logging.getLogger(__name__)


def run_create(
    input_data: CreateAuthorInput,
    *,
    repo: AuthorRepoPort,
    lookup: ReferenceLookupPort,
    allowed_bundles: list[str] | None = None,
    separator: str = DEFAULT_SEPARATOR,
) -> AuthorOutput:
    """Create an author."""
    if allowed_bundles is not None and input_data.bundle not in allowed_bundles:
        return AuthorOutput(
            author=None,
            errors=(
                AuthorValidationError(
                    code="bundle_invalid",
                    message=f"Unknown author type '{input_data.bundle}'",
                    field="bundle",
                ),
            ),
            success=False,
        )

    author = Author(
        bundle=input_data.bundle,
        references=list(input_data.references),
        parent_type=input_data.parent_type,
        parent_id=input_data.parent_id,
        parent_field_name=input_data.parent_field_name,
    )
    saved = repo.save(author)
    logger.info("Created %s author %s", saved.bundle, saved.id)

    return AuthorOutput(author=saved, label=compose_label(saved, lookup, separator))


def run_get(
    input_data: GetAuthorInput,
    *,
    repo: AuthorRepoPort,
    lookup: ReferenceLookupPort,
    separator: str = DEFAULT_SEPARATOR,
) -> AuthorOutput:
    """Get an author by ID, with its label."""
    author = repo.get_by_id(input_data.author_id)
    if author is None:
        return AuthorOutput(
            author=None,
            errors=(
                AuthorValidationError(
                    code="author_not_found",
                    message=f"Author with ID {input_data.author_id} not found",
                ),
            ),
            success=False,
        )

    return AuthorOutput(author=author, label=compose_label(author, lookup, separator))
