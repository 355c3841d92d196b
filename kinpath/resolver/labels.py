"""Wording of classifications: i18n keys and display text per language."""

from typing import Callable

from loguru import logger
from pydantic import BaseModel

from kinpath.domain.person import Person, Sex
from kinpath.domain.relationships import (
    Classification,
    EdgeDirection,
    Lineage,
    RelationshipKind,
    RelationshipLabel,
    SiblingType,
    SpouseSide,
)


class LanguageLabels(BaseModel):
    """Display text for one language.

    Attributes:
        terms: Base term -> sex -> word. ``Sex.UNKNOWN`` holds the neutral word.
        ordinals: Cousin degree -> ordinal word
        removals: Cousin removal -> adverb ("once", "twice")
        templates: Format strings keyed by template name
    """

    terms: dict[str, dict[Sex, str]]
    ordinals: dict[int, str] = {}
    removals: dict[int, str] = {}
    templates: dict[str, str] = {}


class LabelTable(BaseModel):
    """Everything the renderer looks up, passed in explicitly.

    Attributes:
        key_names: Base term -> sex -> i18n key name (language independent)
        languages: Language code -> labels
        fallback_language: Used when the requested language lacks a term or template
    """

    key_names: dict[str, dict[Sex, str]]
    languages: dict[str, LanguageLabels]
    fallback_language: str = "en"


class _MissingLabel(LookupError):
    pass


class _Term(BaseModel):
    """Language-independent description of the words to produce."""

    base: str
    greats: int = 0
    wrap: str | None = None
    degree: int | None = None
    removal: int | None = None


class LabelRenderer:
    """Turns a classification and the relative's recorded sex into a key and a text."""

    def __init__(self, table: LabelTable | None = None) -> None:
        self._table = table or DEFAULT_LABELS

    def render(
        self, classification: Classification, person: Person, language: str
    ) -> RelationshipLabel:
        """Label what ``person`` (the second person of the request) is to the first."""
        term = _term_for(classification)
        return RelationshipLabel(
            key=self._key(term, person.sex),
            text=self._text(lambda labels: self._words(labels, term, person.sex), language),
        )

    def render_edge(
        self, direction: EdgeDirection, next_person: Person, language: str
    ) -> RelationshipLabel:
        """Label one hop: what ``next_person`` is to the person before it."""
        if direction == EdgeDirection.NONE:
            return RelationshipLabel(key="", text="")
        base = _EDGE_TERMS[direction]
        key_name = self._key_name(base, next_person.sex)
        return RelationshipLabel(
            key=f"relationship.{key_name}Of",
            text=self._text(lambda labels: _lookup(labels, base, next_person.sex), language),
        )

    def describe(self, label: str, person1: Person, person2: Person, language: str) -> str:
        """Sentence stating the relationship, e.g. "Dev is Cora's nephew"."""
        name = "same_person" if person1.id == person2.id else "description"
        return self._text(
            lambda labels: _template(labels, name).format(
                name1=person1.primary_name, name2=person2.primary_name, label=label
            ),
            language,
        )

    def _text(self, produce: Callable[[LanguageLabels], str], language: str) -> str:
        labels = self._table.languages.get(language)
        if labels is not None:
            try:
                return produce(labels)
            except _MissingLabel as e:
                logger.debug(f"No '{e}' label for language {language}, falling back")
        else:
            logger.debug(f"Unknown label language {language}, falling back")
        return produce(self._table.languages[self._table.fallback_language])

    def _key_name(self, base: str, sex: Sex) -> str:
        names = self._table.key_names[base]
        return names.get(sex, names[Sex.UNKNOWN])

    def _key(self, term: _Term, sex: Sex) -> str:
        name = self._key_name(term.base, sex)
        if term.degree is not None:
            name = f"{name}{term.degree}"
            if term.removal:
                name = f"{name}x{term.removal}Removed"
        if term.greats == 1:
            name = f"great{_capitalize(name)}"
        elif term.greats > 1:
            name = f"great{_capitalize(name)}{term.greats}"
        if term.wrap == "in_law":
            name = f"{name}InLaw"
        elif term.wrap is not None:
            name = f"{term.wrap}{_capitalize(name)}"
        return f"relationship.{name}"

    def _words(self, labels: LanguageLabels, term: _Term, sex: Sex) -> str:
        word = _lookup(labels, term.base, sex)

        if term.degree is not None:
            ordinal = labels.ordinals.get(term.degree)
            if ordinal is None:
                ordinal = _template(labels, "ordinal").format(n=term.degree)
            word = _template(labels, "cousin").format(ordinal=ordinal, term=word)
            if term.removal:
                removal = labels.removals.get(term.removal)
                if removal is None:
                    removal = _template(labels, "removal").format(n=term.removal)
                word = _template(labels, "removed").format(term=word, removal=removal)

        if term.greats == 1:
            word = _template(labels, "great").format(term=word)
        elif term.greats == 2:
            word = _template(labels, "great_great").format(term=word)
        elif term.greats > 2:
            word = _template(labels, "great_n").format(term=word, n=term.greats)

        if term.wrap is not None:
            word = _template(labels, term.wrap).format(term=word)
        return word


def _term_for(c: Classification) -> _Term:
    elder = c.person2_is_elder
    side = c.spouse_side

    if c.kind == RelationshipKind.SELF:
        return _Term(base="self")
    if c.kind == RelationshipKind.SPOUSE:
        return _Term(base="spouse")
    if c.kind == RelationshipKind.RELATED_BY_MARRIAGE:
        return _Term(base="relatedByMarriage")
    if c.kind == RelationshipKind.RELATED:
        return _Term(base="related")

    if c.kind == RelationshipKind.PARENT_CHILD:
        if side == SpouseSide.SOURCE:
            return _Term(base="parentInLaw" if elder else "stepChild")
        if side == SpouseSide.TARGET:
            return _Term(base="stepParent" if elder else "childInLaw")
        if c.lineage == Lineage.STEP:
            return _Term(base="stepParent" if elder else "stepChild")
        return _Term(base="parent" if elder else "child", wrap=_lineage_wrap(c.lineage, elder))

    if c.kind == RelationshipKind.SIBLING:
        if side != SpouseSide.NONE:
            return _Term(base="siblingInLaw")
        return _Term(base=_SIBLING_TERMS[c.sibling_type or SiblingType.FULL])

    if c.kind == RelationshipKind.GRANDPARENT_GRANDCHILD:
        base = "grandparent" if elder else "grandchild"
        if side != SpouseSide.NONE:
            # Ancestors of one's spouse are in-laws; one's spouse's descendants and
            # an ancestor's spouse are step relatives.
            in_law = (side == SpouseSide.SOURCE) == elder
            return _Term(base=base, greats=c.greats, wrap="in_law" if in_law else "step")
        return _Term(base=base, greats=c.greats, wrap=_lineage_wrap(c.lineage, elder))

    wrap = "in_law" if side != SpouseSide.NONE else None
    if c.kind == RelationshipKind.AUNT_UNCLE_NIECE_NEPHEW:
        base = "auntOrUncle" if elder else "nieceOrNephew"
        return _Term(base=base, greats=c.greats, wrap=wrap)

    return _Term(base="cousin", degree=c.degree, removal=c.removal, wrap=wrap)


def _lineage_wrap(lineage: Lineage, elder: bool) -> str | None:
    if lineage == Lineage.STEP:
        return "step"
    if lineage == Lineage.FOSTER:
        return "foster"
    if lineage == Lineage.ADOPTIVE:
        return "adoptive" if elder else "adopted"
    return None


def _lookup(labels: LanguageLabels, base: str, sex: Sex) -> str:
    words = labels.terms.get(base)
    if not words:
        raise _MissingLabel(base)
    word = words.get(sex) or words.get(Sex.UNKNOWN)
    if word is None:
        raise _MissingLabel(base)
    return word


def _template(labels: LanguageLabels, name: str) -> str:
    try:
        return labels.templates[name]
    except KeyError:
        raise _MissingLabel(name) from None


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


_EDGE_TERMS = {
    EdgeDirection.PARENT: "parent",
    EdgeDirection.CHILD: "child",
    EdgeDirection.SPOUSE: "spouse",
}

_SIBLING_TERMS = {
    SiblingType.FULL: "sibling",
    SiblingType.HALF: "halfSibling",
    SiblingType.STEP: "stepSibling",
}


def _gendered(male: str, female: str, neutral: str) -> dict[Sex, str]:
    return {Sex.MALE: male, Sex.FEMALE: female, Sex.UNKNOWN: neutral}


def _neutral(word: str) -> dict[Sex, str]:
    return {Sex.UNKNOWN: word}


DEFAULT_LABELS = LabelTable(
    key_names={
        "self": _neutral("self"),
        "spouse": _gendered("husband", "wife", "spouse"),
        "relatedByMarriage": _neutral("relatedByMarriage"),
        "related": _neutral("related"),
        "parent": _gendered("father", "mother", "parent"),
        "child": _gendered("son", "daughter", "child"),
        "sibling": _gendered("brother", "sister", "sibling"),
        "halfSibling": _gendered("halfBrother", "halfSister", "halfSibling"),
        "stepSibling": _gendered("stepBrother", "stepSister", "stepSibling"),
        "stepParent": _gendered("stepFather", "stepMother", "stepParent"),
        "stepChild": _gendered("stepSon", "stepDaughter", "stepChild"),
        "parentInLaw": _gendered("fatherInLaw", "motherInLaw", "parentInLaw"),
        "childInLaw": _gendered("sonInLaw", "daughterInLaw", "childInLaw"),
        "siblingInLaw": _gendered("brotherInLaw", "sisterInLaw", "siblingInLaw"),
        "grandparent": _gendered("grandfather", "grandmother", "grandparent"),
        "grandchild": _gendered("grandson", "granddaughter", "grandchild"),
        "auntOrUncle": _gendered("uncle", "aunt", "auntOrUncle"),
        "nieceOrNephew": _gendered("nephew", "niece", "nieceOrNephew"),
        "cousin": _neutral("cousin"),
    },
    languages={
        "en": LanguageLabels(
            terms={
                "self": _neutral("self"),
                "spouse": _gendered("husband", "wife", "spouse"),
                "relatedByMarriage": _neutral("relative by marriage"),
                "related": _neutral("relative"),
                "parent": _gendered("father", "mother", "parent"),
                "child": _gendered("son", "daughter", "child"),
                "sibling": _gendered("brother", "sister", "sibling"),
                "halfSibling": _gendered("half-brother", "half-sister", "half-sibling"),
                "stepSibling": _gendered("stepbrother", "stepsister", "stepsibling"),
                "stepParent": _gendered("stepfather", "stepmother", "stepparent"),
                "stepChild": _gendered("stepson", "stepdaughter", "stepchild"),
                "parentInLaw": _gendered("father-in-law", "mother-in-law", "parent-in-law"),
                "childInLaw": _gendered("son-in-law", "daughter-in-law", "child-in-law"),
                "siblingInLaw": _gendered("brother-in-law", "sister-in-law", "sibling-in-law"),
                "grandparent": _gendered("grandfather", "grandmother", "grandparent"),
                "grandchild": _gendered("grandson", "granddaughter", "grandchild"),
                "auntOrUncle": _gendered("uncle", "aunt", "aunt/uncle"),
                "nieceOrNephew": _gendered("nephew", "niece", "niece/nephew"),
                "cousin": _neutral("cousin"),
            },
            ordinals={
                1: "first",
                2: "second",
                3: "third",
                4: "fourth",
                5: "fifth",
                6: "sixth",
                7: "seventh",
                8: "eighth",
            },
            removals={1: "once", 2: "twice"},
            templates={
                "ordinal": "{n}th",
                "cousin": "{ordinal} {term}",
                "removal": "{n} times",
                "removed": "{term} {removal} removed",
                "great": "great-{term}",
                "great_great": "great-great-{term}",
                "great_n": "{n}x great-{term}",
                "in_law": "{term}-in-law",
                "step": "step-{term}",
                "foster": "foster {term}",
                "adoptive": "adoptive {term}",
                "adopted": "adopted {term}",
                "description": "{name2} is {name1}'s {label}",
                "same_person": "{name1} and {name2} are the same person",
            },
        ),
        "ar": LanguageLabels(
            terms={
                "self": _neutral("نفس الشخص"),
                "spouse": _gendered("زوج", "زوجة", "زوج"),
                "parent": _gendered("أب", "أم", "والد"),
                "child": _gendered("ابن", "ابنة", "طفل"),
                "sibling": _gendered("أخ", "أخت", "أخ/أخت"),
                "grandparent": _gendered("جد", "جدة", "جد"),
                "grandchild": _gendered("حفيد", "حفيدة", "حفيد"),
            },
            templates={
                "description": "{name2}: {label} {name1}",
                "same_person": "{name1}: {label}",
            },
        ),
    },
)
