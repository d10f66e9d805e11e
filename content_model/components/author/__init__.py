"""
Author component - Author sub-entities with labels derived from references.
"""

from ._impl import compose_label, referenced_entity_labels, render_label
from .component import run_create, run_get
from .models import AuthorOutput, AuthorValidationError, CreateAuthorInput, GetAuthorInput
from .ports import AuthorRepoPort, Labelable, ReferenceLookupPort

__all__ = [
    # Entry points
    "run_create",
    "run_get",
    # Labels
    "compose_label",
    "render_label",
    "referenced_entity_labels",
    # Models
    "CreateAuthorInput",
    "GetAuthorInput",
    "AuthorOutput",
    "AuthorValidationError",
    # Ports
    "AuthorRepoPort",
    "ReferenceLookupPort",
    "Labelable",
]
