import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List

from kinpath.domain.edges import ParentChildEdge, TreeSnapshot, UnionEdge
from kinpath.domain.person import Person
from kinpath.tree_stores.base import TreeStore


class LocalTreeStore(TreeStore):
    """Local tree store that keeps persons, parent-child edges and unions in a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalTreeStore.

        Args:
            filepath: Path to the store file. If provided and exists, will auto-load.
                     If provided and doesn't exist, will save to this path when save() is called.
                     If not provided, creates an empty store in memory only.
        """
        self._filepath = str(filepath) if filepath else None
        self._generations: Dict[str, int] = defaultdict(int)
        self._store_generation = 0

        if self._filepath and Path(self._filepath).exists():
            with open(self._filepath, "r") as f:
                data = json.load(f)
            self._persons = {
                person_id: Person(**person_data)
                for person_id, person_data in data["persons"].items()
            }
            self._parent_child_edges = {
                (edge.parent_id, edge.child_id): edge
                for edge in (ParentChildEdge(**e) for e in data.get("parent_child_edges", []))
            }
            self._unions = {
                union_id: UnionEdge(**union_data)
                for union_id, union_data in data.get("unions", {}).items()
            }
        else:
            self._persons = {}
            self._parent_child_edges = {}
            self._unions = {}

    @classmethod
    def from_data(
        cls,
        persons: Iterable[Person] = (),
        parent_child_edges: Iterable[ParentChildEdge] = (),
        unions: Iterable[UnionEdge] = (),
    ) -> "LocalTreeStore":
        """Create LocalTreeStore from provided records (useful for testing)."""
        instance = cls(filepath=None)
        instance._persons = {person.id: person for person in persons}
        instance._parent_child_edges = {
            (edge.parent_id, edge.child_id): edge for edge in parent_child_edges
        }
        instance._unions = {union.union_id: union for union in unions}
        return instance

    def get_snapshot(self, tree_id: str | None = None) -> TreeSnapshot:
        if tree_id is None:
            persons = list(self._persons.values())
        else:
            persons = [p for p in self._persons.values() if p.tree_id == tree_id]
        in_scope = {p.id for p in persons}

        edges = [
            edge
            for edge in self._parent_child_edges.values()
            if edge.parent_id in in_scope and edge.child_id in in_scope
        ]
        unions = []
        for union in self._unions.values():
            members = [m for m in union.member_ids if m in in_scope]
            if len(members) >= 2:
                unions.append(union.model_copy(update={"member_ids": members}))

        return TreeSnapshot(
            tree_id=tree_id,
            generation=self.get_generation(tree_id),
            persons=persons,
            parent_child_edges=edges,
            unions=unions,
        )

    def get_generation(self, tree_id: str | None = None) -> int:
        if tree_id is None:
            return self._store_generation
        return self._generations[tree_id]

    def get_tree_ids(self) -> List[str]:
        return sorted({p.tree_id for p in self._persons.values()})

    def get_person(self, person_id: str) -> Person | None:
        return self._persons.get(person_id)

    def update_person(self, person: Person) -> None:
        previous = self._persons.get(person.id)
        self._persons[person.id] = person
        self._touch({person.tree_id} | ({previous.tree_id} if previous else set()))

    def delete_person(self, person_id: str) -> None:
        if person_id not in self._persons:
            return
        self._touch(self._trees_of([person_id]))

        for key in [k for k in self._parent_child_edges if person_id in k]:
            del self._parent_child_edges[key]
        for union_id, union in list(self._unions.items()):
            if person_id in union.member_ids:
                members = [m for m in union.member_ids if m != person_id]
                self._unions[union_id] = union.model_copy(update={"member_ids": members})
        del self._persons[person_id]

    def add_parent_child_edge(self, edge: ParentChildEdge) -> None:
        self._parent_child_edges[(edge.parent_id, edge.child_id)] = edge
        self._touch(self._trees_of([edge.parent_id, edge.child_id]))

    def delete_parent_child_edge(self, parent_id: str, child_id: str) -> None:
        if self._parent_child_edges.pop((parent_id, child_id), None) is not None:
            self._touch(self._trees_of([parent_id, child_id]))

    def update_union(self, union: UnionEdge) -> None:
        previous = self._unions.get(union.union_id)
        self._unions[union.union_id] = union
        members = union.member_ids + (previous.member_ids if previous else [])
        self._touch(self._trees_of(members))

    def delete_union(self, union_id: str) -> None:
        union = self._unions.pop(union_id, None)
        if union is not None:
            self._touch(self._trees_of(union.member_ids))

    def save(self, filepath: str | None = None) -> None:
        """Save the tree store to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        save_path = str(save_path)
        data = {
            "persons": {
                person_id: person.model_dump(mode="json")
                for person_id, person in self._persons.items()
            },
            "parent_child_edges": [
                edge.model_dump(mode="json") for edge in self._parent_child_edges.values()
            ],
            "unions": {
                union_id: union.model_dump(mode="json") for union_id, union in self._unions.items()
            },
        }
        with open(save_path, "w") as f:
            json.dump(data, f)

    def _trees_of(self, person_ids: Iterable[str]) -> set[str]:
        return {self._persons[pid].tree_id for pid in person_ids if pid in self._persons}

    def _touch(self, tree_ids: Iterable[str]) -> None:
        """Bump the generation of the given trees and of the store."""
        for tree_id in set(tree_ids):
            self._generations[tree_id] += 1
        self._store_generation += 1
