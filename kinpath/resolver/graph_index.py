"""In-memory adjacency view over the persons and edges of one scope."""

import itertools
from typing import NamedTuple

import networkx as nx
from loguru import logger

from kinpath.domain.edges import ParentChildEdge, TreeSnapshot, UnionEdge
from kinpath.domain.person import Person
from kinpath.domain.relationships import EdgeDirection
from kinpath.errors import EmptyScopeError, UnknownPersonError

# Neighbor visiting order: parents, then children, then spouses; ids ascending within each.
DIRECTION_ORDER = {
    EdgeDirection.PARENT: 0,
    EdgeDirection.CHILD: 1,
    EdgeDirection.SPOUSE: 2,
}


class Neighbor(NamedTuple):
    person_id: str
    direction: EdgeDirection
    edge: ParentChildEdge | UnionEdge


class GraphIndex:
    """Immutable adjacency lists for one scope, in the canonical visiting order.

    Parent-child edges are also kept in a networkx lineage digraph so that cycles
    recorded by mistake can be found before any traversal trusts them.
    """

    def __init__(
        self,
        *,
        persons: dict[str, Person],
        adjacency: dict[str, list[Neighbor]],
        parent_child_edges: dict[tuple[str, str], ParentChildEdge],
        lineage: nx.DiGraph,
        tree_id: str | None = None,
        generation: int = 0,
    ) -> None:
        self._persons = persons
        self._adjacency = adjacency
        self._parent_child_edges = parent_child_edges
        self._lineage = lineage
        self._cyclic_persons = _find_cyclic_persons(lineage)
        self.tree_id = tree_id
        self.generation = generation

    @classmethod
    def build(cls, snapshot: TreeSnapshot) -> "GraphIndex":
        """Build the index for a snapshot.

        Raises:
            EmptyScopeError: If the snapshot has no persons
        """
        if not snapshot.persons:
            raise EmptyScopeError(snapshot.tree_id)

        persons = {person.id: person for person in snapshot.persons}
        entries: dict[str, dict[tuple[str, EdgeDirection], Neighbor]] = {pid: {} for pid in persons}
        parent_child_edges: dict[tuple[str, str], ParentChildEdge] = {}
        lineage = nx.DiGraph()
        lineage.add_nodes_from(persons)

        for edge in snapshot.parent_child_edges:
            if edge.parent_id not in persons or edge.child_id not in persons:
                logger.warning(
                    f"Skipping parent-child edge {edge.parent_id} -> {edge.child_id}: "
                    "endpoint not in scope"
                )
                continue
            key = (edge.parent_id, edge.child_id)
            if key in parent_child_edges:
                continue
            parent_child_edges[key] = edge
            lineage.add_edge(edge.parent_id, edge.child_id)
            if edge.parent_id == edge.child_id:
                continue
            entries[edge.child_id].setdefault(
                (edge.parent_id, EdgeDirection.PARENT),
                Neighbor(edge.parent_id, EdgeDirection.PARENT, edge),
            )
            entries[edge.parent_id].setdefault(
                (edge.child_id, EdgeDirection.CHILD),
                Neighbor(edge.child_id, EdgeDirection.CHILD, edge),
            )

        for union in snapshot.unions:
            members = [m for m in union.member_ids if m in persons]
            if len(members) < len(union.member_ids):
                logger.warning(f"Union {union.union_id} has members outside the scope")
            for a, b in itertools.permutations(members, 2):
                entries[a].setdefault(
                    (b, EdgeDirection.SPOUSE), Neighbor(b, EdgeDirection.SPOUSE, union)
                )

        adjacency = {
            pid: sorted(
                neighbors.values(), key=lambda n: (DIRECTION_ORDER[n.direction], n.person_id)
            )
            for pid, neighbors in entries.items()
        }

        index = cls(
            persons=persons,
            adjacency=adjacency,
            parent_child_edges=parent_child_edges,
            lineage=lineage,
            tree_id=snapshot.tree_id,
            generation=snapshot.generation,
        )
        if index._cyclic_persons:
            logger.error(
                f"Scope {snapshot.tree_id or '<merged>'} has {len(index._cyclic_persons)} persons "
                "on parent-child cycles"
            )
        logger.info(
            f"Built graph index for {snapshot.tree_id or '<merged>'}: {len(persons)} persons, "
            f"{len(parent_child_edges)} parent-child edges, {len(snapshot.unions)} unions"
        )
        return index

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._persons

    def __len__(self) -> int:
        return len(self._persons)

    def require(self, person_id: str) -> Person:
        """Get a person, raising UnknownPersonError when not in scope."""
        try:
            return self._persons[person_id]
        except KeyError:
            raise UnknownPersonError(person_id, self.tree_id) from None

    def neighbors(self, person_id: str) -> list[Neighbor]:
        """Neighbors of a person in the canonical visiting order."""
        self.require(person_id)
        return self._adjacency[person_id]

    def parents(self, person_id: str) -> list[str]:
        return [
            n.person_id for n in self.neighbors(person_id) if n.direction == EdgeDirection.PARENT
        ]

    def parent_edge(self, parent_id: str, child_id: str) -> ParentChildEdge | None:
        return self._parent_child_edges.get((parent_id, child_id))

    def has_edge(self, person_id: str, direction: EdgeDirection, other_id: str) -> bool:
        """Whether ``other_id`` is the ``direction`` of ``person_id``."""
        if person_id not in self._persons:
            return False
        return any(
            n.person_id == other_id and n.direction == direction
            for n in self._adjacency[person_id]
        )

    def is_on_cycle(self, person_id: str) -> bool:
        return person_id in self._cyclic_persons

    def lineage_cycle(self, person_id: str) -> list[str]:
        """A parent-child cycle reachable from ``person_id``, as a closed list of persons."""
        try:
            edges = nx.find_cycle(self._lineage, source=person_id)
        except nx.NetworkXNoCycle:
            return []
        cycle = [u for u, _ in edges]
        return cycle + [cycle[0]]


def _find_cyclic_persons(lineage: nx.DiGraph) -> set[str]:
    cyclic = set(nx.nodes_with_selfloops(lineage))
    for component in nx.strongly_connected_components(lineage):
        if len(component) > 1:
            cyclic.update(component)
    return cyclic
