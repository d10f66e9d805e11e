from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

NodeType = Literal["page", "oe_news"]


# --- Featured media ---
class FeaturedMediaItemModel(BaseModel):
    target_id: str | None = None
    caption: str = ""


class FeaturedMediaSaveRequest(BaseModel):
    # Order of the list is the order that gets saved.
    items: list[FeaturedMediaItemModel]


class RenderedMediaItemResponse(BaseModel):
    media_id: str
    label: str
    caption: str
    url: str | None = None


class ValidationErrorResponse(BaseModel):
    code: str
    message: str
    field: str | None = None
    delta: int | None = None


# --- Nodes ---
class NodeCreateRequest(BaseModel):
    title: str
    type: NodeType = "page"
    references: dict[str, list[str]] = {}


class NodeResponse(BaseModel):
    id: UUID
    type: NodeType
    title: str
    revision_id: int
    featured_media: dict[str, list[FeaturedMediaItemModel]]
    references: dict[str, list[str]]
    created_at: datetime
    updated_at: datetime


# --- Authors ---
class EntityReferenceModel(BaseModel):
    target_type: Literal["media", "node"]
    target_id: str


class AuthorCreateRequest(BaseModel):
    bundle: str
    references: list[EntityReferenceModel] = []
    parent_type: Literal["node"] | None = None
    parent_id: UUID | None = None
    parent_field_name: str | None = None


class AuthorResponse(BaseModel):
    id: UUID
    bundle: str
    label: str
    references: list[EntityReferenceModel]
    parent_type: Literal["node"] | None = None
    parent_id: UUID | None = None
    parent_field_name: str | None = None
