"""Parent-child and union edge models, and the tree snapshot that carries them."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, field_validator

from kinpath.domain.person import Person


class ParentChildKind(str, Enum):
    BIOLOGICAL = "Biological"
    ADOPTIVE = "Adoptive"
    STEP = "Step"
    FOSTER = "Foster"


class UnionKind(str, Enum):
    MARRIAGE = "Marriage"
    CIVIL_UNION = "CivilUnion"
    PARTNERSHIP = "Partnership"
    ENGAGEMENT = "Engagement"
    INFORMAL = "Informal"


class ParentChildEdge(BaseModel):
    """Directed edge from a parent to a child."""

    parent_id: str
    child_id: str
    kind: ParentChildKind = ParentChildKind.BIOLOGICAL


class UnionEdge(BaseModel):
    """Union between two or more members (marriage, partnership, ...)."""

    union_id: str
    member_ids: list[str]
    kind: UnionKind = UnionKind.MARRIAGE
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("member_ids")
    @classmethod
    def _deduplicate_members(cls, member_ids: list[str]) -> list[str]:
        return list(dict.fromkeys(member_ids))


class TreeSnapshot(BaseModel):
    """Read-only view of the records in a scope (one tree or a merged scope).

    Attributes:
        tree_id: Tree the snapshot was taken from, None for a merged scope
        generation: Store generation counter at the time the snapshot was taken
        persons: Persons in scope
        parent_child_edges: Parent-child edges between persons in scope
        unions: Unions restricted to their members in scope, at least two each
    """

    tree_id: str | None = None
    generation: int = 0
    persons: list[Person] = []
    parent_child_edges: list[ParentChildEdge] = []
    unions: list[UnionEdge] = []
