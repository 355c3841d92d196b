"""Tests for relationship wording."""

import pytest

from kinpath.domain.person import Person, Sex
from kinpath.domain.relationships import (
    Classification,
    EdgeDirection,
    RelationshipKind,
    RelationshipLabel,
    SpouseSide,
)
from kinpath.resolver.ancestors import CommonAncestorResolver
from kinpath.resolver.classifier import RelationshipClassifier
from kinpath.resolver.graph_index import GraphIndex
from kinpath.resolver.labels import LabelRenderer, LabelTable, LanguageLabels
from kinpath.resolver.path_finder import PathFinder


def label(
    index: GraphIndex, person1_id: str, person2_id: str, language: str = "en"
) -> RelationshipLabel:
    path = PathFinder(index).find_path(person1_id, person2_id)
    ancestors = CommonAncestorResolver(index).resolve(path)
    classification = RelationshipClassifier(index).classify(path, ancestors)
    return LabelRenderer().render(classification, index.require(person2_id), language)


@pytest.mark.parametrize(
    "person1_id, person2_id, key, text",
    [
        ("ada", "ada", "relationship.self", "self"),
        ("cora", "ada", "relationship.mother", "mother"),
        ("ada", "cora", "relationship.daughter", "daughter"),
        ("ada", "ben", "relationship.brother", "brother"),
        ("ben", "ada", "relationship.sister", "sister"),
        ("ada", "hal", "relationship.halfBrother", "half-brother"),
        ("bea", "eli", "relationship.stepBrother", "stepbrother"),
        ("eli", "bea", "relationship.stepSister", "stepsister"),
        ("ada", "dev", "relationship.nephew", "nephew"),
        ("dev", "ada", "relationship.aunt", "aunt"),
        ("cora", "dev", "relationship.cousin1", "first cousin"),
        ("kim", "lou", "relationship.cousin2", "second cousin"),
        ("cora", "lou", "relationship.cousin1x1Removed", "first cousin once removed"),
        ("cora", "gm", "relationship.grandmother", "grandmother"),
        ("lou", "gm", "relationship.greatGrandmother", "great-grandmother"),
        ("gm", "lou", "relationship.greatGrandson", "great-grandson"),
        ("ada", "carl", "relationship.husband", "husband"),
        ("carl", "ada", "relationship.wife", "wife"),
        ("carl", "gm", "relationship.motherInLaw", "mother-in-law"),
        ("gm", "carl", "relationship.sonInLaw", "son-in-law"),
        ("carl", "ben", "relationship.brotherInLaw", "brother-in-law"),
        ("dina", "cora", "relationship.nieceInLaw", "niece-in-law"),
        ("cora", "dina", "relationship.auntInLaw", "aunt-in-law"),
        ("eli", "ben", "relationship.stepFather", "stepfather"),
        ("ben", "eli", "relationship.stepSon", "stepson"),
        ("jon", "ada", "relationship.adoptiveMother", "adoptive mother"),
        ("ada", "jon", "relationship.adoptedSon", "adopted son"),
        ("gm", "eli", "relationship.relatedByMarriage", "relative by marriage"),
        ("gp", "iris", "relationship.related", "relative"),
    ],
)
def test_family_labels(
    family_index: GraphIndex, person1_id: str, person2_id: str, key: str, text: str
) -> None:
    assert label(family_index, person1_id, person2_id) == RelationshipLabel(key=key, text=text)


@pytest.mark.parametrize(
    "greats, key, text",
    [
        (0, "relationship.grandfather", "grandfather"),
        (1, "relationship.greatGrandfather", "great-grandfather"),
        (2, "relationship.greatGrandfather2", "great-great-grandfather"),
        (4, "relationship.greatGrandfather4", "4x great-grandfather"),
    ],
)
def test_great_prefixes(greats: int, key: str, text: str) -> None:
    classification = Classification(
        kind=RelationshipKind.GRANDPARENT_GRANDCHILD,
        generations_from_person1=greats + 2,
        generations_from_person2=0,
        greats=greats,
    )
    person = Person(id="p", tree_id="t", sex=Sex.MALE)
    assert LabelRenderer().render(classification, person, "en") == RelationshipLabel(
        key=key, text=text
    )


def test_great_aunt() -> None:
    classification = Classification(
        kind=RelationshipKind.AUNT_UNCLE_NIECE_NEPHEW,
        generations_from_person1=3,
        generations_from_person2=1,
        greats=1,
    )
    person = Person(id="p", tree_id="t", sex=Sex.FEMALE)
    result = LabelRenderer().render(classification, person, "en")
    assert result.key == "relationship.greatAunt"
    assert result.text == "great-aunt"


def test_distant_cousins_beyond_the_ordinal_table() -> None:
    classification = Classification(
        kind=RelationshipKind.COUSIN,
        generations_from_person1=10,
        generations_from_person2=13,
        degree=9,
        removal=3,
    )
    result = LabelRenderer().render(classification, Person(id="p", tree_id="t"), "en")
    assert result.key == "relationship.cousin9x3Removed"
    assert result.text == "9th cousin 3 times removed"


def test_grandparent_by_marriage() -> None:
    person = Person(id="p", tree_id="t", sex=Sex.MALE)
    spouse_grandfather = Classification(
        kind=RelationshipKind.GRANDPARENT_GRANDCHILD,
        generations_from_person1=2,
        generations_from_person2=0,
        spouse_side=SpouseSide.SOURCE,
    )
    grandmother_husband = spouse_grandfather.model_copy(update={"spouse_side": SpouseSide.TARGET})

    renderer = LabelRenderer()
    assert renderer.render(spouse_grandfather, person, "en").text == "grandfather-in-law"
    assert renderer.render(grandmother_husband, person, "en").key == "relationship.stepGrandfather"
    assert renderer.render(grandmother_husband, person, "en").text == "step-grandfather"


def test_unknown_sex_uses_neutral_term() -> None:
    classification = Classification(
        kind=RelationshipKind.PARENT_CHILD,
        generations_from_person1=1,
        generations_from_person2=0,
    )
    result = LabelRenderer().render(classification, Person(id="p", tree_id="t"), "en")
    assert result == RelationshipLabel(key="relationship.parent", text="parent")


def test_edge_labels() -> None:
    renderer = LabelRenderer()
    mother = Person(id="m", tree_id="t", sex=Sex.FEMALE)
    son = Person(id="s", tree_id="t", sex=Sex.MALE)
    unknown = Person(id="u", tree_id="t")

    assert renderer.render_edge(EdgeDirection.PARENT, mother, "en") == RelationshipLabel(
        key="relationship.motherOf", text="mother"
    )
    assert renderer.render_edge(EdgeDirection.CHILD, son, "en").key == "relationship.sonOf"
    assert renderer.render_edge(EdgeDirection.CHILD, unknown, "en").key == "relationship.childOf"
    assert renderer.render_edge(EdgeDirection.SPOUSE, son, "en").key == "relationship.husbandOf"
    assert renderer.render_edge(EdgeDirection.NONE, son, "en") == RelationshipLabel(
        key="", text=""
    )


def test_arabic_labels(family_index: GraphIndex) -> None:
    result = label(family_index, "ada", "ben", "ar")
    assert result.key == "relationship.brother"
    assert result.text == "أخ"


def test_missing_terms_fall_back_to_english(family_index: GraphIndex) -> None:
    assert label(family_index, "kim", "lou", "ar").text == "second cousin"
    assert label(family_index, "ada", "ben", "xx").text == "brother"


def test_description() -> None:
    renderer = LabelRenderer()
    ada = Person(id="ada", tree_id="t", primary_name="Ada")
    dev = Person(id="dev", tree_id="t", primary_name="Dev", sex=Sex.MALE)

    assert renderer.describe("nephew", ada, dev, "en") == "Dev is Ada's nephew"
    assert renderer.describe("self", ada, ada, "en") == "Ada and Ada are the same person"
    assert renderer.describe("ابن", ada, dev, "ar") == "Dev: ابن Ada"


def test_custom_label_table() -> None:
    table = LabelTable(
        key_names={"sibling": {Sex.UNKNOWN: "sibling", Sex.MALE: "brother"}},
        languages={
            "en": LanguageLabels(terms={"sibling": {Sex.UNKNOWN: "sib", Sex.MALE: "bro"}}),
        },
    )
    classification = Classification(
        kind=RelationshipKind.SIBLING,
        generations_from_person1=1,
        generations_from_person2=1,
    )
    person = Person(id="p", tree_id="t", sex=Sex.MALE)
    assert LabelRenderer(table).render(classification, person, "en") == RelationshipLabel(
        key="relationship.brother", text="bro"
    )
