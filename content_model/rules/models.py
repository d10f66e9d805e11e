from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class FeaturedMediaRules(BaseModel):
    # -1 means unlimited
    cardinality: int = -1
    caption_max_length: int = 255
    target_label: str = "Media entity"
    caption_description: str = "The caption that goes with the referenced media."
    allowed_target_bundles: list[str] = Field(default_factory=list)

class AuthorRules(BaseModel):
    label_separator: str = ", "
    bundles: list[str] = Field(default_factory=lambda: ["Author"])

class OpsRules(BaseModel):
    data_dir_required: bool = False
    required_env: list[str] = Field(default_factory=list)

class Rules(BaseModel):
    project: ProjectRules
    featured_media: FeaturedMediaRules = Field(default_factory=FeaturedMediaRules)
    authors: AuthorRules = Field(default_factory=AuthorRules)
    ops: OpsRules = Field(default_factory=OpsRules)
