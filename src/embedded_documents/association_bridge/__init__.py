"""Association bridge exports."""

from .association_bridge import (
    AssociationAccessor,
    AssociationCycleError,
    associations_for,
    commit_associations,
    declare_association,
    embedded_association_attributes,
    split_associations,
    stage_associations,
)
from .association_models import Association, Cardinality

__all__ = [
    "Association",
    "Cardinality",
    "AssociationAccessor",
    "AssociationCycleError",
    "associations_for",
    "commit_associations",
    "declare_association",
    "embedded_association_attributes",
    "split_associations",
    "stage_associations",
]
