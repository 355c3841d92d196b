"""Maps a path shape and its generation distances to a relationship kind."""

from loguru import logger

from kinpath.domain.edges import ParentChildKind
from kinpath.domain.relationships import (
    Classification,
    CommonAncestorSet,
    EdgeDirection,
    Lineage,
    PathShape,
    RelationshipKind,
    RelationshipPath,
    SiblingType,
)
from kinpath.errors import AmbiguousPivotError, MalformedPathError
from kinpath.resolver.graph_index import GraphIndex

# The strongest qualifier found on a line wins.
_LINEAGE_PRIORITY = [
    (ParentChildKind.STEP, Lineage.STEP),
    (ParentChildKind.FOSTER, Lineage.FOSTER),
    (ParentChildKind.ADOPTIVE, Lineage.ADOPTIVE),
]

_SHAPE_KINDS = {
    PathShape.SELF: RelationshipKind.SELF,
    PathShape.SPOUSE: RelationshipKind.SPOUSE,
    PathShape.MARRIAGE: RelationshipKind.RELATED_BY_MARRIAGE,
    PathShape.VALLEY: RelationshipKind.RELATED,
}


class RelationshipClassifier:
    def __init__(self, index: GraphIndex) -> None:
        self._index = index

    def classify(self, path: RelationshipPath, ancestors: CommonAncestorSet) -> Classification:
        """Classify the relationship of ``path.target`` to ``path.source``.

        Raises:
            AmbiguousPivotError: If the common ancestors disagree on their distances
            MalformedPathError: If a lineage path comes without a pivot
        """
        self._check_pivots(ancestors)

        if ancestors.shape in _SHAPE_KINDS:
            return Classification(kind=_SHAPE_KINDS[ancestors.shape])

        if ancestors.shape == PathShape.STEP_SIBLING:
            return Classification(
                kind=RelationshipKind.SIBLING,
                generations_from_person1=1,
                generations_from_person2=1,
                sibling_type=SiblingType.STEP,
            )

        if not ancestors.ancestors or ancestors.blood_span is None:
            raise MalformedPathError("lineage path without a pivot")

        g1 = ancestors.generations_from_person1
        g2 = ancestors.generations_from_person2
        start, end = ancestors.blood_span
        classification = Classification(
            kind=RelationshipKind.RELATED,
            generations_from_person1=g1,
            generations_from_person2=g2,
            spouse_side=ancestors.spouse_side,
            lineage=self._lineage(path, start, end),
        )

        nearer, farther = min(g1, g2), max(g1, g2)
        if nearer == 0:
            if farther == 1:
                classification.kind = RelationshipKind.PARENT_CHILD
            else:
                classification.kind = RelationshipKind.GRANDPARENT_GRANDCHILD
                classification.greats = farther - 2
        elif nearer == 1 and farther == 1:
            classification.kind = RelationshipKind.SIBLING
            classification.sibling_type = self._sibling_type(
                path.persons[start], path.persons[end]
            )
        elif nearer == 1:
            classification.kind = RelationshipKind.AUNT_UNCLE_NIECE_NEPHEW
            classification.greats = farther - 2
        else:
            classification.kind = RelationshipKind.COUSIN
            classification.degree = nearer - 1
            classification.removal = farther - nearer

        return classification

    def _check_pivots(self, ancestors: CommonAncestorSet) -> None:
        distances = {
            (a.generations_from_person1, a.generations_from_person2) for a in ancestors.ancestors
        }
        if len(distances) > 1:
            error = AmbiguousPivotError([a.person_id for a in ancestors.ancestors])
            logger.error(str(error))
            raise error

    def _lineage(self, path: RelationshipPath, start: int, end: int) -> Lineage:
        kinds = set()
        for i in range(start, end):
            current, following = path.persons[i], path.persons[i + 1]
            if path.directions[i] == EdgeDirection.PARENT:
                edge = self._index.parent_edge(following, current)
            else:
                edge = self._index.parent_edge(current, following)
            if edge is not None:
                kinds.add(edge.kind)

        for kind, lineage in _LINEAGE_PRIORITY:
            if kind in kinds:
                return lineage
        return Lineage.BIOLOGICAL

    def _sibling_type(self, person1_id: str, person2_id: str) -> SiblingType:
        """Full with two or more shared parents, half with one, whatever the edge kinds."""
        shared = set(self._index.parents(person1_id)) & set(self._index.parents(person2_id))
        return SiblingType.FULL if len(shared) >= 2 else SiblingType.HALF
