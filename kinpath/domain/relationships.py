"""Relationship domain models: path edges, resolved paths and classifications."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class EdgeDirection(str, Enum):
    """What the next person on a path IS relative to the current person."""

    NONE = "None"
    PARENT = "Parent"  # next is the parent of current
    CHILD = "Child"  # next is the child of current
    SPOUSE = "Spouse"

    def invert(self) -> "EdgeDirection":
        """Read the same edge from the other end."""
        return _INVERSE[self]


_INVERSE = {
    EdgeDirection.NONE: EdgeDirection.NONE,
    EdgeDirection.PARENT: EdgeDirection.CHILD,
    EdgeDirection.CHILD: EdgeDirection.PARENT,
    EdgeDirection.SPOUSE: EdgeDirection.SPOUSE,
}


class RelationshipPath(BaseModel):
    """Ordered persons from source to target.

    ``directions[i]`` describes the edge between ``persons[i]`` and ``persons[i + 1]``,
    read from ``persons[i]``.
    """

    model_config = ConfigDict(frozen=True)

    persons: tuple[str, ...]
    directions: tuple[EdgeDirection, ...] = ()

    @model_validator(mode="after")
    def _check_shape(self) -> "RelationshipPath":
        if not self.persons:
            raise ValueError("a path needs at least one person")
        if len(self.directions) != len(self.persons) - 1:
            raise ValueError("a path needs exactly one direction per hop")
        if EdgeDirection.NONE in self.directions:
            raise ValueError("a hop cannot have direction None")
        if len(set(self.persons)) != len(self.persons):
            raise ValueError("a path cannot revisit a person")
        return self

    @property
    def source(self) -> str:
        return self.persons[0]

    @property
    def target(self) -> str:
        return self.persons[-1]

    @property
    def length(self) -> int:
        """Number of hops."""
        return len(self.directions)

    def reversed(self) -> "RelationshipPath":
        return RelationshipPath(
            persons=tuple(reversed(self.persons)),
            directions=tuple(d.invert() for d in reversed(self.directions)),
        )


class CommonAncestorInfo(BaseModel):
    """A common ancestor of the two endpoints of a path.

    Attributes:
        person_id: The ancestor
        generations_from_person1: Parent/child hops between person 1's side and the ancestor
        generations_from_person2: Parent/child hops between person 2's side and the ancestor
        via_spouse: True when one side reaches its blood relative through a spouse hop
    """

    person_id: str
    generations_from_person1: int
    generations_from_person2: int
    via_spouse: bool = False


class SpouseSide(str, Enum):
    """Where a single spouse hop sits on an otherwise blood-related path."""

    NONE = "None"
    SOURCE = "Source"  # person 1's spouse is the blood relative
    TARGET = "Target"  # person 2 is the spouse of the blood relative


class PathShape(str, Enum):
    SELF = "Self"
    LINEAGE = "Lineage"  # single ascent then descent (either may be empty)
    SPOUSE = "Spouse"
    STEP_SIBLING = "StepSibling"  # parent -> spouse -> child
    MARRIAGE = "Marriage"  # spouse hops that do not fit a single-spouse pattern
    VALLEY = "Valley"  # no single turning point from ascent to descent


class CommonAncestorSet(BaseModel):
    """Output of the common-ancestor resolver for one path."""

    shape: PathShape
    ancestors: list[CommonAncestorInfo] = []
    generations_from_person1: int = 0
    generations_from_person2: int = 0
    spouse_side: SpouseSide = SpouseSide.NONE
    # First and last path index of the blood-related stretch, for LINEAGE paths
    blood_span: tuple[int, int] | None = None


class RelationshipKind(str, Enum):
    """Relationship category, identical whichever endpoint the search starts from."""

    SELF = "Self"
    PARENT_CHILD = "ParentChild"
    GRANDPARENT_GRANDCHILD = "GrandparentGrandchild"
    SIBLING = "Sibling"
    AUNT_UNCLE_NIECE_NEPHEW = "AuntOrUncleNieceOrNephew"
    COUSIN = "Cousin"
    SPOUSE = "Spouse"
    RELATED_BY_MARRIAGE = "RelatedByMarriage"
    RELATED = "Related"


class SiblingType(str, Enum):
    FULL = "Full"
    HALF = "Half"
    STEP = "Step"


class Lineage(str, Enum):
    BIOLOGICAL = "Biological"
    ADOPTIVE = "Adoptive"
    FOSTER = "Foster"
    STEP = "Step"


class Classification(BaseModel):
    """Relationship of person 2 to person 1, before wording.

    ``generations_from_person1`` and ``generations_from_person2`` are the blood-line
    distances to the pivot; for the in-law forms they belong to the blood relative.
    """

    kind: RelationshipKind
    generations_from_person1: int = 0
    generations_from_person2: int = 0
    degree: int | None = None
    removal: int | None = None
    greats: int = 0
    sibling_type: SiblingType | None = None
    lineage: Lineage = Lineage.BIOLOGICAL
    spouse_side: SpouseSide = SpouseSide.NONE

    @property
    def person2_is_elder(self) -> bool:
        """Person 2 sits closer to the pivot than person 1."""
        return self.generations_from_person2 < self.generations_from_person1


class RelationshipLabel(BaseModel):
    key: str
    text: str
