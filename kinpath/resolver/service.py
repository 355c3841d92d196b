"""Resolution of a relationship request from index lookup to the rendered response."""

from loguru import logger

from kinpath.config import settings
from kinpath.domain.person import Person
from kinpath.domain.relationships import (
    Classification,
    CommonAncestorSet,
    RelationshipKind,
    RelationshipPath,
)
from kinpath.resolver.ancestors import CommonAncestorResolver
from kinpath.resolver.classifier import RelationshipClassifier
from kinpath.resolver.graph_index import GraphIndex
from kinpath.resolver.index_cache import GraphIndexCache
from kinpath.resolver.labels import LabelRenderer
from kinpath.resolver.path_finder import DepthExceeded, NotConnected, PathFinder
from kinpath.resolver.schemas import (
    CommonAncestorNode,
    DisplayFields,
    PathPersonNode,
    RelationshipPathRequest,
    RelationshipPathResponse,
)
from kinpath.tree_stores.base import TreeStore


class RelationshipResolver:
    """Answers "how are these two persons related?" for one scope at a time.

    Input errors (unknown person, empty scope) and invariant violations are raised;
    "not connected" and "beyond the search depth" are ordinary responses with
    ``path_found=False``.
    """

    def __init__(
        self,
        tree_store: TreeStore,
        *,
        index_cache: GraphIndexCache | None = None,
        label_renderer: LabelRenderer | None = None,
        time_budget: float | None = settings.search_time_budget_seconds,
        default_language: str = settings.default_language,
    ) -> None:
        self.index_cache = index_cache or GraphIndexCache(
            tree_store, ttl_seconds=settings.index_cache_ttl_seconds
        )
        self.label_renderer = label_renderer or LabelRenderer()
        self._time_budget = time_budget
        self._default_language = default_language

    def resolve(self, request: RelationshipPathRequest) -> RelationshipPathResponse:
        language = request.language or self._default_language
        index = self.index_cache.get(request.tree_scope)
        person1 = index.require(request.person1_id)
        person2 = index.require(request.person2_id)

        finder = PathFinder(index, time_budget=self._time_budget)
        result = finder.find_path(person1.id, person2.id, request.max_search_depth)

        if isinstance(result, NotConnected):
            return RelationshipPathResponse(
                path_found=False,
                relationship_label_key="relationship.noRelationFound",
                error_message="No relationship path found between these individuals.",
            )
        if isinstance(result, DepthExceeded):
            if result.reason == "time_budget":
                message = "The relationship search ran out of time before finding a path."
            else:
                message = (
                    f"No relationship found within {result.max_depth} steps; "
                    "retry with a larger maxSearchDepth."
                )
            return RelationshipPathResponse(
                path_found=False,
                relationship_label_key="relationship.searchDepthExceeded",
                error_message=message,
            )

        ancestors = CommonAncestorResolver(index).resolve(result)
        classification = RelationshipClassifier(index).classify(result, ancestors)
        return self._build_response(index, result, ancestors, classification, language)

    def _build_response(
        self,
        index: GraphIndex,
        path: RelationshipPath,
        ancestors: CommonAncestorSet,
        classification: Classification,
        language: str,
    ) -> RelationshipPathResponse:
        person1 = index.require(path.source)
        person2 = index.require(path.target)
        label = self.label_renderer.render(classification, person2, language)
        logger.debug(
            f"{person2.id} is {person1.id}'s {label.key} "
            f"(path {' -> '.join(path.persons)})"
        )

        nodes = []
        for i, person_id in enumerate(path.persons):
            person = index.require(person_id)
            node = PathPersonNode(person_id=person_id, display_fields=_display_fields(person))
            if i < path.length:
                direction = path.directions[i]
                edge_label = self.label_renderer.render_edge(
                    direction, index.require(path.persons[i + 1]), language
                )
                node.edge_to_next = direction
                node.relationship_to_next_key = edge_label.key
                node.relationship_to_next = edge_label.text
            nodes.append(node)

        return RelationshipPathResponse(
            path_found=True,
            path=nodes,
            common_ancestors=[
                CommonAncestorNode(
                    person_id=a.person_id,
                    primary_name=index.require(a.person_id).primary_name,
                    generations_from_person1=a.generations_from_person1,
                    generations_from_person2=a.generations_from_person2,
                    via_spouse=a.via_spouse,
                )
                for a in ancestors.ancestors
            ],
            relationship_kind=classification.kind,
            relationship_label_key=label.key,
            relationship_label=label.text,
            relationship_description=self.label_renderer.describe(
                label.text, person1, person2, language
            ),
            degree=classification.degree,
            removal=classification.removal,
            sibling_type=classification.sibling_type,
            lineage=classification.lineage if _has_lineage(classification) else None,
            path_length=path.length,
        )


def _display_fields(person: Person) -> DisplayFields:
    return DisplayFields(
        primary_name=person.primary_name,
        sex=person.sex,
        birth_date=person.birth_date,
        death_date=person.death_date,
        is_living=person.is_living,
    )


def _has_lineage(classification: Classification) -> bool:
    return classification.kind in (
        RelationshipKind.PARENT_CHILD,
        RelationshipKind.GRANDPARENT_GRANDCHILD,
        RelationshipKind.SIBLING,
    )
