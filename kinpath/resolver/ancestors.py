"""Pivot (common ancestor) detection on a resolved path."""

from loguru import logger

from kinpath.domain.relationships import (
    CommonAncestorInfo,
    CommonAncestorSet,
    EdgeDirection,
    PathShape,
    RelationshipPath,
    SpouseSide,
)
from kinpath.errors import MalformedPathError
from kinpath.resolver.graph_index import GraphIndex

_STEP_SIBLING = (EdgeDirection.PARENT, EdgeDirection.SPOUSE, EdgeDirection.CHILD)


class CommonAncestorResolver:
    """Finds where a path stops ascending and starts descending.

    A single spouse hop at either end of the path is set aside: the rest of the
    path is the blood-related stretch, and the pivot found there is reported with
    ``via_spouse`` so in-law labels can still show it. Paths that dip down before
    going up, or turn more than once, have no pivot and are reported as
    ``PathShape.VALLEY`` rather than given a guessed ancestor.
    """

    def __init__(self, index: GraphIndex) -> None:
        self._index = index

    def resolve(self, path: RelationshipPath) -> CommonAncestorSet:
        """Resolve the common ancestors of a path.

        Raises:
            MalformedPathError: If a hop of the path is not an edge of the index
        """
        self._check_edges(path)
        directions = path.directions

        if path.length == 0:
            return CommonAncestorSet(shape=PathShape.SELF)

        spouse_hops = [i for i, d in enumerate(directions) if d == EdgeDirection.SPOUSE]
        if len(spouse_hops) == len(directions):
            shape = PathShape.SPOUSE if path.length == 1 else PathShape.MARRIAGE
            return CommonAncestorSet(shape=shape)

        if not spouse_hops:
            return self._resolve_blood(path, 0, path.length, SpouseSide.NONE)

        if len(spouse_hops) == 1:
            if spouse_hops[0] == 0:
                return self._resolve_blood(path, 1, path.length, SpouseSide.SOURCE)
            if spouse_hops[0] == path.length - 1:
                return self._resolve_blood(path, 0, path.length - 1, SpouseSide.TARGET)
            if directions == _STEP_SIBLING:
                return CommonAncestorSet(
                    shape=PathShape.STEP_SIBLING,
                    generations_from_person1=1,
                    generations_from_person2=1,
                )

        return CommonAncestorSet(shape=PathShape.MARRIAGE)

    def _resolve_blood(
        self, path: RelationshipPath, start: int, end: int, spouse_side: SpouseSide
    ) -> CommonAncestorSet:
        """Resolve the pivot of ``path.persons[start..end]``, which has no spouse hops."""
        directions = path.directions[start:end]

        ascent = 0
        while ascent < len(directions) and directions[ascent] == EdgeDirection.PARENT:
            ascent += 1
        if any(d != EdgeDirection.CHILD for d in directions[ascent:]):
            logger.debug(f"Path {path.source} -> {path.target} has no single pivot")
            return CommonAncestorSet(shape=PathShape.VALLEY, spouse_side=spouse_side)

        descent = len(directions) - ascent
        pivot_index = start + ascent
        pivot_ids = [path.persons[pivot_index]]

        # Both ends arrive at the pivot through a child of it, so any other parent
        # those two children share is a common ancestor at the same distances.
        if ascent > 0 and descent > 0:
            below_source = set(self._index.parents(path.persons[pivot_index - 1]))
            below_target = set(self._index.parents(path.persons[pivot_index + 1]))
            shared = (below_source & below_target) - set(pivot_ids)
            pivot_ids.extend(sorted(shared))

        ancestors = [
            CommonAncestorInfo(
                person_id=person_id,
                generations_from_person1=ascent,
                generations_from_person2=descent,
                via_spouse=spouse_side != SpouseSide.NONE,
            )
            for person_id in pivot_ids
        ]
        return CommonAncestorSet(
            shape=PathShape.LINEAGE,
            ancestors=ancestors,
            generations_from_person1=ascent,
            generations_from_person2=descent,
            spouse_side=spouse_side,
            blood_span=(start, end),
        )

    def _check_edges(self, path: RelationshipPath) -> None:
        for i, direction in enumerate(path.directions):
            current, following = path.persons[i], path.persons[i + 1]
            if not self._index.has_edge(current, direction, following):
                error = MalformedPathError(
                    f"{following} is not recorded as {direction.value} of {current}"
                )
                logger.error(str(error))
                raise error
