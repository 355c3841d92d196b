import pytest
from fastapi.testclient import TestClient

from kinpath.api import create_app
from kinpath.domain.edges import ParentChildEdge, ParentChildKind, TreeSnapshot, UnionEdge
from kinpath.domain.person import Person, Sex
from kinpath.resolver.graph_index import GraphIndex
from kinpath.tree_stores.base import TreeStore
from tests.fakes import FakeTreeStore


def _person(person_id: str, name: str, sex: Sex, tree_id: str = "smith") -> Person:
    return Person(id=person_id, tree_id=tree_id, primary_name=name, sex=sex)


def _edge(parent_id: str, child_id: str, kind: ParentChildKind = ParentChildKind.BIOLOGICAL):
    return ParentChildEdge(parent_id=parent_id, child_id=child_id, kind=kind)


@pytest.fixture
def family_persons() -> list[Person]:
    """Four generations of the Smith tree, plus a small unrelated tree.

    gm + gp          gp + iris (no union)
      |-- ada + carl     |-- hal
      |     |-- cora -- kim
      |     |-- jon (adopted by ada)
      |-- ben + dina     dina's earlier son: eli
            |-- bea (ben's daughter from an earlier partner)
            |-- dev -- lou
    zed has no recorded relatives.
    """
    return [
        _person("gm", "Grace", Sex.FEMALE),
        _person("gp", "George", Sex.MALE),
        _person("iris", "Iris", Sex.FEMALE),
        _person("ada", "Ada", Sex.FEMALE),
        _person("carl", "Carl", Sex.MALE),
        _person("ben", "Ben", Sex.MALE),
        _person("dina", "Dina", Sex.FEMALE),
        _person("hal", "Hal", Sex.MALE),
        _person("cora", "Cora", Sex.FEMALE),
        _person("jon", "Jon", Sex.MALE),
        _person("bea", "Bea", Sex.FEMALE),
        _person("dev", "Dev", Sex.MALE),
        _person("eli", "Eli", Sex.MALE),
        _person("kim", "Kim", Sex.FEMALE),
        _person("lou", "Lou", Sex.MALE),
        _person("zed", "Zed", Sex.UNKNOWN),
        _person("ola", "Ola", Sex.FEMALE, tree_id="jones"),
        _person("pat", "Pat", Sex.MALE, tree_id="jones"),
    ]


@pytest.fixture
def family_edges() -> list[ParentChildEdge]:
    return [
        _edge("gm", "ada"),
        _edge("gp", "ada"),
        _edge("gm", "ben"),
        _edge("gp", "ben"),
        _edge("gp", "hal"),
        _edge("iris", "hal"),
        _edge("ada", "cora"),
        _edge("carl", "cora"),
        _edge("ada", "jon", ParentChildKind.ADOPTIVE),
        _edge("ben", "bea"),
        _edge("ben", "dev"),
        _edge("dina", "dev"),
        _edge("dina", "eli"),
        _edge("cora", "kim"),
        _edge("dev", "lou"),
        _edge("ola", "pat"),
    ]


@pytest.fixture
def family_unions() -> list[UnionEdge]:
    return [
        UnionEdge(union_id="u-grandparents", member_ids=["gp", "gm"]),
        UnionEdge(union_id="u-ada-carl", member_ids=["ada", "carl"]),
        UnionEdge(union_id="u-ben-dina", member_ids=["ben", "dina"]),
    ]


@pytest.fixture
def family_store(
    family_persons: list[Person],
    family_edges: list[ParentChildEdge],
    family_unions: list[UnionEdge],
) -> FakeTreeStore:
    return FakeTreeStore(family_persons, family_edges, family_unions)


@pytest.fixture
def family_index(family_store: FakeTreeStore) -> GraphIndex:
    return GraphIndex.build(family_store.get_snapshot("smith"))


@pytest.fixture
def cyclic_snapshot() -> TreeSnapshot:
    """A tree where a and b are recorded as each other's parent, and c, d, x are not."""
    return TreeSnapshot(
        tree_id="broken",
        persons=[
            _person("a", "A", Sex.UNKNOWN, "broken"),
            _person("b", "B", Sex.UNKNOWN, "broken"),
            _person("c", "C", Sex.UNKNOWN, "broken"),
            _person("d", "D", Sex.UNKNOWN, "broken"),
            _person("x", "X", Sex.UNKNOWN, "broken"),
        ],
        parent_child_edges=[_edge("a", "b"), _edge("b", "a"), _edge("a", "x"), _edge("c", "d")],
    )


@pytest.fixture(autouse=True)
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Override settings for testing."""
    monkeypatch.setattr("kinpath.config.settings.auth_username", "admin")
    monkeypatch.setattr("kinpath.config.settings.auth_password", "password")


@pytest.fixture
def test_client(family_store: TreeStore) -> TestClient:
    """Create test client over the fake family store."""
    app = create_app(tree_store=family_store)
    return TestClient(app)
