"""Bidirectional breadth-first search for the canonical shortest path between two persons."""

import time
from typing import Callable, Literal

from loguru import logger
from pydantic import BaseModel

from kinpath.domain.relationships import EdgeDirection, RelationshipPath
from kinpath.errors import LineageCycleError
from kinpath.resolver.graph_index import GraphIndex

DEFAULT_MAX_DEPTH = 20


class NotConnected(BaseModel):
    """One side exhausted its component without meeting the other side."""

    explored: int


class DepthExceeded(BaseModel):
    """The search stopped at its bound before the two sides met."""

    max_depth: int
    explored: int
    reason: Literal["depth", "time_budget"] = "depth"


PathSearchResult = RelationshipPath | NotConnected | DepthExceeded


class _Frontier:
    """Search state grown from one endpoint."""

    def __init__(self, root: str, limit: int) -> None:
        self.root = root
        self.limit = limit
        self.rounds = 0
        self.frontier = [root]
        # person -> (person it was discovered from, what it is relative to that person)
        self.came_from: dict[str, tuple[str, EdgeDirection] | None] = {root: None}
        # Persons on a parent-child cycle reached by this side
        self.cyclic: list[str] = []


class PathFinder:
    """Finds one canonical shortest path between two persons of a GraphIndex.

    Both endpoints grow a frontier one full layer at a time, source first, with
    neighbors visited in the index's order (parents, children, spouses; ids
    ascending). The source side may run ``ceil(max_depth / 2)`` rounds and the
    target side ``floor(max_depth / 2)``, so a returned path never has more than
    ``max_depth`` hops. The first person discovered by one side that the other side
    already reached is the meeting point.

    Persons on a parent-child cycle are searched through like any other. Only a
    path that crosses one, or a failed search that reached one, is an error.
    """

    def __init__(
        self,
        index: GraphIndex,
        *,
        time_budget: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._index = index
        self._time_budget = time_budget
        self._clock = clock

    def find_path(
        self, source: str, target: str, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> PathSearchResult:
        """Find the canonical shortest path from source to target.

        Raises:
            UnknownPersonError: If either endpoint is not in the index
            LineageCycleError: If an endpoint or the found path lies on a parent-child
                cycle, or if the search fails after reaching such a cycle
            ValueError: If max_depth is negative
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")

        self._index.require(source)
        self._index.require(target)
        self._check_lineage(source)
        self._check_lineage(target)

        if source == target:
            return RelationshipPath(persons=(source,))

        forward = _Frontier(source, (max_depth + 1) // 2)
        backward = _Frontier(target, max_depth // 2)
        deadline = None if self._time_budget is None else self._clock() + self._time_budget

        while True:
            expanded = False
            for side, other in ((forward, backward), (backward, forward)):
                if not side.frontier:
                    logger.debug(f"No path between {source} and {target}")
                    return self._unless_cyclic(
                        NotConnected(explored=_explored(forward, backward)), forward, backward
                    )
                if side.rounds >= side.limit:
                    continue
                if deadline is not None and self._clock() > deadline:
                    logger.warning(
                        f"Path search {source} -> {target} ran out of its "
                        f"{self._time_budget}s budget"
                    )
                    return self._unless_cyclic(
                        DepthExceeded(
                            max_depth=max_depth,
                            explored=_explored(forward, backward),
                            reason="time_budget",
                        ),
                        forward,
                        backward,
                    )

                meeting = self._expand(side, other)
                expanded = True
                if meeting is not None:
                    logger.debug(
                        f"Path search {source} -> {target} met at {meeting} after "
                        f"{forward.rounds}+{backward.rounds} rounds"
                    )
                    path = _splice(meeting, forward, backward)
                    for person_id in path.persons:
                        self._check_lineage(person_id)
                    return path

            if not expanded:
                logger.debug(f"Path search {source} -> {target} exceeded depth {max_depth}")
                return self._unless_cyclic(
                    DepthExceeded(max_depth=max_depth, explored=_explored(forward, backward)),
                    forward,
                    backward,
                )

    def _expand(self, side: _Frontier, other: _Frontier) -> str | None:
        """Grow one layer; return the first person the other side has already reached."""
        next_frontier = []
        for current in side.frontier:
            for neighbor in self._index.neighbors(current):
                if neighbor.person_id in side.came_from:
                    continue
                if self._index.is_on_cycle(neighbor.person_id):
                    side.cyclic.append(neighbor.person_id)
                side.came_from[neighbor.person_id] = (current, neighbor.direction)
                if neighbor.person_id in other.came_from:
                    return neighbor.person_id
                next_frontier.append(neighbor.person_id)
        side.frontier = next_frontier
        side.rounds += 1
        return None

    def _unless_cyclic(
        self, result: NotConnected | DepthExceeded, forward: _Frontier, backward: _Frontier
    ) -> NotConnected | DepthExceeded:
        """A failed search is only trusted if it never went through a cycle."""
        for person_id in forward.cyclic + backward.cyclic:
            self._check_lineage(person_id)
        return result

    def _check_lineage(self, person_id: str) -> None:
        if self._index.is_on_cycle(person_id):
            error = LineageCycleError(self._index.lineage_cycle(person_id))
            logger.error(str(error))
            raise error


def _splice(meeting: str, forward: _Frontier, backward: _Frontier) -> RelationshipPath:
    persons = [meeting]
    directions = []

    node = meeting
    while forward.came_from[node] is not None:
        previous, direction = forward.came_from[node]
        persons.append(previous)
        directions.append(direction)
        node = previous
    persons.reverse()
    directions.reverse()

    # Target-side steps were discovered walking away from the target, so each one
    # is read from the opposite end here.
    node = meeting
    while backward.came_from[node] is not None:
        previous, direction = backward.came_from[node]
        persons.append(previous)
        directions.append(direction.invert())
        node = previous

    return RelationshipPath(persons=tuple(persons), directions=tuple(directions))


def _explored(forward: _Frontier, backward: _Frontier) -> int:
    return len(forward.came_from) + len(backward.came_from)
