from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kinpath.config import settings
from kinpath.domain.person import Sex
from kinpath.domain.relationships import (
    EdgeDirection,
    Lineage,
    RelationshipKind,
    SiblingType,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RelationshipPathRequest(_CamelModel):
    """Request to find the relationship between two persons."""

    person1_id: str = Field(..., min_length=1)
    person2_id: str = Field(..., min_length=1)
    tree_scope: str | None = Field(None, description="Tree to search; all trees when omitted")
    max_search_depth: int = Field(
        default_factory=lambda: settings.default_max_search_depth,
        ge=1,
        le=settings.max_search_depth_limit,
    )
    language: str | None = Field(None, description="Label language; the default when omitted")


class DisplayFields(_CamelModel):
    primary_name: str
    sex: Sex
    birth_date: date | None = None
    death_date: date | None = None
    is_living: bool = False


class PathPersonNode(_CamelModel):
    """A person on the path and the edge leading to the next person."""

    person_id: str
    display_fields: DisplayFields
    edge_to_next: EdgeDirection = EdgeDirection.NONE  # what the NEXT person is to this one
    relationship_to_next_key: str = ""
    relationship_to_next: str = ""


class CommonAncestorNode(_CamelModel):
    person_id: str
    primary_name: str
    generations_from_person1: int
    generations_from_person2: int
    via_spouse: bool = False


class RelationshipPathResponse(_CamelModel):
    """Relationship of person 2 to person 1, with the path that explains it."""

    path_found: bool
    path: list[PathPersonNode] = []
    common_ancestors: list[CommonAncestorNode] = []
    relationship_kind: RelationshipKind | None = None
    relationship_label_key: str = ""
    relationship_label: str = ""
    relationship_description: str = ""
    degree: int | None = None
    removal: int | None = None
    sibling_type: SiblingType | None = None
    lineage: Lineage | None = None
    path_length: int = Field(
        0, description="Number of hops (edges) on the path; the path lists path_length + 1 persons"
    )
    error_message: str | None = None
