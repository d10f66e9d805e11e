"""
Author component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from content_model.domain.entities import Author, EntityReference, ParentType


@dataclass(frozen=True)
class AuthorValidationError:
    """Author validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CreateAuthorInput:
    """Input for creating an author."""

    bundle: str
    references: tuple[EntityReference, ...] = ()
    parent_type: ParentType | None = None
    parent_id: UUID | None = None
    parent_field_name: str | None = None


@dataclass(frozen=True)
class GetAuthorInput:
    """Input for getting an author."""

    author_id: UUID


# --- Output Models ---


@dataclass(frozen=True)
class AuthorOutput:
    """Output from author operations, with the composed label."""

    author: Author | None
    label: str | None = None
    errors: tuple[AuthorValidationError, ...] = field(default_factory=tuple)
    success: bool = True
