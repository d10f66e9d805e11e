from datetime import datetime
from typing import ClassVar, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
NodeType = Literal["page", "oe_news"]
MediaBundle = Literal["image", "document", "av_portal_photo", "remote_video"]
ParentType = Literal["node"]

# --- Media ---

class Media(BaseModel):
    id: str
    bundle: MediaBundle = "image"
    name: str
    # Media always carries a name key, so it can be labelled.
    has_label_key: ClassVar[bool] = True

    created_at: datetime = Field(default_factory=datetime.utcnow)

    def label(self) -> str:
        return self.name

# --- Featured media ---

class ReferenceCaptionItem(BaseModel):
    target_id: str | None = None
    caption: str = ""

    def has_caption(self) -> bool:
        return bool(self.caption and self.caption.strip())

    def is_empty(self) -> bool:
        return self.target_id is None and not self.has_caption()

# --- Nodes ---

class Node(BaseModel):
    has_label_key: ClassVar[bool] = True

    id: UUID = Field(default_factory=uuid4)
    type: NodeType = "page"
    title: str
    revision_id: int = 0

    # Field name -> ordered items; position is list order.
    featured_media: dict[str, list[ReferenceCaptionItem]] = Field(default_factory=dict)
    # Field name -> ordered plain entity reference target ids.
    references: dict[str, list[str]] = Field(default_factory=dict)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def label(self) -> str:
        return self.title

# --- Sub-entities ---

class EntityReference(BaseModel):
    target_type: Literal["media", "node"]
    target_id: str


class Author(BaseModel):
    """
    Author sub-entity.

    Authors have no name of their own; the label is always derived from
    the entities they reference.
    """

    id: UUID = Field(default_factory=uuid4)
    bundle: str = "Author"
    references: list[EntityReference] = Field(default_factory=list)

    parent_type: ParentType | None = None
    parent_id: UUID | None = None
    parent_field_name: str | None = None

    status: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def default_label(self) -> str:
        return f"{self.bundle} {self.id}"
