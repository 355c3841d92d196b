"""Tests for RelationshipResolver orchestration."""

import pytest

from kinpath.domain.relationships import EdgeDirection, RelationshipKind
from kinpath.errors import UnknownPersonError
from kinpath.resolver.schemas import RelationshipPathRequest, RelationshipPathResponse
from kinpath.resolver.service import RelationshipResolver
from tests.fakes import FakeTreeStore


def test_resolve_reads_each_scope_once(family_store: FakeTreeStore) -> None:
    resolver = RelationshipResolver(family_store)

    for person1_id, person2_id in [("ada", "dev"), ("kim", "lou")]:
        resolver.resolve(
            RelationshipPathRequest(
                person1_id=person1_id, person2_id=person2_id, tree_scope="smith"
            )
        )

    assert family_store.snapshot_calls == {"smith": 1}


def test_resolve_step_parent(family_store: FakeTreeStore) -> None:
    response = RelationshipResolver(family_store).resolve(
        RelationshipPathRequest(person1_id="eli", person2_id="ben")
    )

    assert response.relationship_kind == RelationshipKind.PARENT_CHILD
    assert response.relationship_label == "stepfather"
    assert [node.edge_to_next for node in response.path] == [
        EdgeDirection.PARENT,
        EdgeDirection.SPOUSE,
        EdgeDirection.NONE,
    ]
    assert response.common_ancestors[0].person_id == "dina"
    assert response.common_ancestors[0].via_spouse


def test_resolve_uses_default_language(family_store: FakeTreeStore) -> None:
    resolver = RelationshipResolver(family_store, default_language="ar")
    response = resolver.resolve(RelationshipPathRequest(person1_id="cora", person2_id="ada"))

    assert response.relationship_label == "أم"
    assert response.relationship_description == "Ada: أم Cora"


def test_resolve_time_budget(family_store: FakeTreeStore) -> None:
    resolver = RelationshipResolver(family_store, time_budget=-1.0)
    response = resolver.resolve(RelationshipPathRequest(person1_id="kim", person2_id="lou"))

    assert response.path_found is False
    assert response.relationship_label_key == "relationship.searchDepthExceeded"
    assert "time" in response.error_message


def test_resolve_unknown_person(family_store: FakeTreeStore) -> None:
    with pytest.raises(UnknownPersonError):
        RelationshipResolver(family_store).resolve(
            RelationshipPathRequest(person1_id="ada", person2_id="nobody")
        )


def test_request_accepts_camel_case() -> None:
    request = RelationshipPathRequest.model_validate(
        {"person1Id": "ada", "person2Id": "ben", "treeScope": "smith", "maxSearchDepth": 8}
    )
    assert request.person1_id == "ada"
    assert request.tree_scope == "smith"
    assert request.max_search_depth == 8
    assert RelationshipPathRequest(person1_id="a", person2_id="b").max_search_depth == 20


def test_path_length_counts_hops(family_store: FakeTreeStore) -> None:
    response = RelationshipResolver(family_store).resolve(
        RelationshipPathRequest(person1_id="cora", person2_id="dev", tree_scope="smith")
    )

    assert [node.person_id for node in response.path] == ["cora", "ada", "gm", "ben", "dev"]
    assert response.path_length == 4
    assert "hops" in RelationshipPathResponse.model_fields["path_length"].description
