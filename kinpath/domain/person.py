"""Person domain models."""

from datetime import date
from enum import Enum

from pydantic import BaseModel


class Sex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"


class Person(BaseModel):
    """A person record as seen by the relationship resolver.

    Attributes:
        id: Opaque identifier, unique across all trees
        tree_id: Identifier of the tree the person belongs to
        primary_name: Display name
        sex: Recorded sex, used only for wording of labels
        birth_date: Optional birth date, display only
        death_date: Optional death date, display only
        is_living: Whether the person is marked as living
    """

    id: str
    tree_id: str
    primary_name: str = "Unknown"
    sex: Sex = Sex.UNKNOWN
    birth_date: date | None = None
    death_date: date | None = None
    is_living: bool = False
