from typing import List, Protocol

from kinpath.domain.edges import ParentChildEdge, TreeSnapshot, UnionEdge
from kinpath.domain.person import Person


class TreeStore(Protocol):
    """Protocol for the record stores the resolver reads from."""

    def get_snapshot(self, tree_id: str | None = None) -> TreeSnapshot:
        """Get a read-only snapshot of one tree, or of every tree when tree_id is None."""
        ...

    def get_generation(self, tree_id: str | None = None) -> int:
        """Get the mutation counter of one tree, or of the whole store when tree_id is None."""
        ...

    def get_tree_ids(self) -> List[str]:
        """Get all tree IDs in the store."""
        ...

    def get_person(self, person_id: str) -> Person | None:
        """Get a person by their ID."""
        ...

    def update_person(self, person: Person) -> None:
        """Add a new person or update an existing one."""
        ...

    def delete_person(self, person_id: str) -> None:
        """Delete a person together with their parent-child edges and union memberships."""
        ...

    def add_parent_child_edge(self, edge: ParentChildEdge) -> None:
        """Add a parent-child edge, replacing an existing edge between the same pair."""
        ...

    def delete_parent_child_edge(self, parent_id: str, child_id: str) -> None:
        """Delete the parent-child edge between two persons."""
        ...

    def update_union(self, union: UnionEdge) -> None:
        """Add a new union or update an existing one."""
        ...

    def delete_union(self, union_id: str) -> None:
        """Delete a union."""
        ...

    def save(self, filepath: str | None = None) -> None:
        """Save the store to disk."""
        ...
