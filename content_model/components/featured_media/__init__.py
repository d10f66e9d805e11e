"""
Featured media component - Ordered, captioned media references on nodes.
"""

from ._impl import (
    FeaturedMediaField,
    build_widget_rows,
    media_id_of,
    render_featured_media,
    validate_featured_media,
)
from .component import (
    FeaturedMediaEditSession,
    run_create_node,
    run_get_node,
    run_render_featured_media,
    run_save_featured_media,
)
from .models import (
    UNLIMITED,
    CardinalityError,
    CreateNodeInput,
    FeaturedMediaConfig,
    FeaturedMediaFieldError,
    FeaturedMediaValidationError,
    GetNodeInput,
    InvalidOrderError,
    NodeOutput,
    RenderedMediaItem,
    RenderFeaturedMediaInput,
    RenderOutput,
    SaveFeaturedMediaInput,
    WidgetRow,
)
from .ports import MediaLookupPort, NodeRepoPort

__all__ = [
    # Entry points
    "run_create_node",
    "run_get_node",
    "run_save_featured_media",
    "run_render_featured_media",
    # Core
    "FeaturedMediaField",
    "FeaturedMediaEditSession",
    "validate_featured_media",
    "build_widget_rows",
    "render_featured_media",
    "media_id_of",
    # Models
    "UNLIMITED",
    "FeaturedMediaConfig",
    "CreateNodeInput",
    "GetNodeInput",
    "SaveFeaturedMediaInput",
    "RenderFeaturedMediaInput",
    "NodeOutput",
    "RenderOutput",
    "RenderedMediaItem",
    "WidgetRow",
    # Errors
    "FeaturedMediaFieldError",
    "InvalidOrderError",
    "CardinalityError",
    "FeaturedMediaValidationError",
    # Ports
    "NodeRepoPort",
    "MediaLookupPort",
]
