from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from content_model.adapters.lookup import EntityReferenceLookup
from content_model.adapters.sqlite.repos import SQLiteAuthorRepo
from content_model.api.deps import get_author_repo, get_reference_lookup, get_rules
from content_model.api.schemas import AuthorCreateRequest, AuthorResponse
from content_model.components.author import (
    AuthorOutput,
    CreateAuthorInput,
    GetAuthorInput,
    run_create,
    run_get,
)
from content_model.domain.entities import EntityReference
from content_model.rules.models import Rules

router = APIRouter()


def _to_response(result: AuthorOutput) -> AuthorResponse:
    assert result.author is not None
    return AuthorResponse(
        label=result.label or "",
        **result.author.model_dump(
            include={"id", "bundle", "references", "parent_type", "parent_id", "parent_field_name"}
        ),
    )


@router.post("", response_model=AuthorResponse)
def create_author(
    req: AuthorCreateRequest,
    repo: SQLiteAuthorRepo = Depends(get_author_repo),
    lookup: EntityReferenceLookup = Depends(get_reference_lookup),
    rules: Rules = Depends(get_rules),
) -> AuthorResponse:
    """Create an author."""
    inp = CreateAuthorInput(
        bundle=req.bundle,
        references=tuple(
            EntityReference(target_type=r.target_type, target_id=r.target_id)
            for r in req.references
        ),
        parent_type=req.parent_type,
        parent_id=req.parent_id,
        parent_field_name=req.parent_field_name,
    )
    result = run_create(
        inp,
        repo=repo,
        lookup=lookup,
        allowed_bundles=rules.authors.bundles,
        separator=rules.authors.label_separator,
    )

    if not result.success:
        raise HTTPException(status_code=400, detail=result.errors[0].message)

    return _to_response(result)


@router.get("/{author_id}", response_model=AuthorResponse)
def get_author(
    author_id: UUID,
    repo: SQLiteAuthorRepo = Depends(get_author_repo),
    lookup: EntityReferenceLookup = Depends(get_reference_lookup),
    rules: Rules = Depends(get_rules),
) -> AuthorResponse:
    """Get an author with its composed label."""
    result = run_get(
        GetAuthorInput(author_id=author_id),
        repo=repo,
        lookup=lookup,
        separator=rules.authors.label_separator,
    )

    if not result.success:
        raise HTTPException(status_code=404, detail="Author not found")

    return _to_response(result)
