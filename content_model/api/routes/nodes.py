from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from content_model.adapters.sqlite.repos import SQLiteMediaRepo, SQLiteNodeRepo
from content_model.api.deps import get_featured_media_config, get_media_repo, get_node_repo
from content_model.api.schemas import (
    FeaturedMediaSaveRequest,
    NodeCreateRequest,
    NodeResponse,
    RenderedMediaItemResponse,
)
from content_model.components.featured_media import (
    CreateNodeInput,
    FeaturedMediaConfig,
    GetNodeInput,
    RenderFeaturedMediaInput,
    SaveFeaturedMediaInput,
    run_create_node,
    run_get_node,
    run_render_featured_media,
    run_save_featured_media,
)
from content_model.domain.entities import Node

router = APIRouter()


def _to_response(node: Node) -> NodeResponse:
    return NodeResponse.model_validate(node.model_dump())


@router.post("", response_model=NodeResponse)
def create_node(
    req: NodeCreateRequest,
    repo: SQLiteNodeRepo = Depends(get_node_repo),
) -> NodeResponse:
    """Create a node."""
    inp = CreateNodeInput(title=req.title, type=req.type, references=req.references)
    result = run_create_node(inp, repo=repo)

    if not result.success or result.node is None:
        raise HTTPException(status_code=400, detail=result.errors[0].message)

    return _to_response(result.node)


@router.get("/{node_id}", response_model=NodeResponse)
def get_node(
    node_id: UUID,
    repo: SQLiteNodeRepo = Depends(get_node_repo),
) -> NodeResponse:
    """Get a node with all of its field values."""
    result = run_get_node(GetNodeInput(node_id=node_id), repo=repo)

    if not result.success or result.node is None:
        raise HTTPException(status_code=404, detail="Node not found")

    return _to_response(result.node)


@router.put("/{node_id}/featured-media/{field_name}", response_model=NodeResponse)
def save_featured_media(
    node_id: UUID,
    field_name: str,
    req: FeaturedMediaSaveRequest,
    repo: SQLiteNodeRepo = Depends(get_node_repo),
    media_repo: SQLiteMediaRepo = Depends(get_media_repo),
    config: FeaturedMediaConfig = Depends(get_featured_media_config),
) -> NodeResponse:
    """
    Save a featured media field.

    The submitted item order is persisted as is. Every validation error is
    returned, each attributed to its item position.
    """
    inp = SaveFeaturedMediaInput(
        node_id=node_id,
        field_name=field_name,
        items=tuple(item.model_dump() for item in req.items),
    )
    result = run_save_featured_media(inp, repo=repo, config=config, media_lookup=media_repo)

    if not result.success or result.node is None:
        if result.errors and result.errors[0].code == "node_not_found":
            raise HTTPException(status_code=404, detail="Node not found")
        raise HTTPException(status_code=422, detail=[asdict(e) for e in result.errors])

    return _to_response(result.node)


@router.get(
    "/{node_id}/featured-media/{field_name}/display",
    response_model=list[RenderedMediaItemResponse],
)
def display_featured_media(
    node_id: UUID,
    field_name: str,
    link: bool = True,
    repo: SQLiteNodeRepo = Depends(get_node_repo),
    media_repo: SQLiteMediaRepo = Depends(get_media_repo),
) -> list[RenderedMediaItemResponse]:
    """Rendered featured media items, in stored order."""
    inp = RenderFeaturedMediaInput(node_id=node_id, field_name=field_name, link=link)
    result = run_render_featured_media(inp, repo=repo, media_lookup=media_repo)

    if not result.success:
        raise HTTPException(status_code=404, detail="Node not found")

    return [RenderedMediaItemResponse(**asdict(item)) for item in result.items]
