"""Data models for WeddingSeatingPlan."""
from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


HONOR_TABLE_NUMBER = 1
HONOR_TABLE_NAME = "Honor table"

ROLES = ("married", "witness", "bridesmaid", "groomsman", "regular")
HONOR_ROLES = ("married", "witness")
ROLE_RANK = {"married": 0, "witness": 1, "bridesmaid": 2, "groomsman": 2, "regular": 3}
ROLE_LABELS = {
    "married": "Married",
    "witness": "Witness",
    "bridesmaid": "Bridesmaid",
    "groomsman": "Groomsman",
    "regular": "Guest",
}

TABLE_SHAPES = ("round", "square")

# Warning kinds emitted by the placement engine
EXCLUSION_VIOLATED = "exclusion_violated"
HONOR_TABLE_FALLBACK = "honor_table_fallback"
UNPLACED = "unplaced"
FAMILY_SPLIT = "family_split"
# Advisory kinds re-derived after manual edits
COUPLE_SEPARATED = "couple_separated"
OVER_CAPACITY = "over_capacity"


def is_missing(value: object) -> bool:
    """Return True for ``None``, blank strings and pandas ``nan``."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    text = str(value).strip()
    return not text or text.lower() == "nan"


def parse_text(value: object) -> str:
    """Stringify a cell, mapping missing values to ``""``."""
    if is_missing(value):
        return ""
    return str(value).strip()


def parse_optional_int(value: object) -> Optional[int]:
    """Parse an integer cell. Missing values give ``None``.

    ``"42.0"`` is accepted, ``"3.7"`` raises ValueError.
    """
    if is_missing(value):
        return None
    number = float(str(value).strip())
    if not number.is_integer():
        raise ValueError(f"not a whole number: {value!r}")
    return int(number)


def normalize_family(name: Optional[str]) -> str:
    """Family key used for grouping: lower-cased and trimmed."""
    return (name or "").strip().lower()


@dataclass
class Guest:
    """Representation of a wedding guest."""

    id: str
    first_name: str
    last_name: Optional[str] = None
    age: Optional[int] = None
    role: str = "regular"

    @property
    def full_name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name

    @property
    def family_key(self) -> str:
        return normalize_family(self.last_name)

    @property
    def is_honor(self) -> bool:
        return self.role in HONOR_ROLES


@dataclass
class Couple:
    """Two guests who must share a table."""

    guest_a_id: str
    guest_b_id: str
    id: str = ""

    def members(self) -> Tuple[str, str]:
        return self.guest_a_id, self.guest_b_id


@dataclass
class Exclusion:
    """Two guests who should not share a table."""

    guest_a_id: str
    guest_b_id: str
    id: str = ""

    def members(self) -> Tuple[str, str]:
        return self.guest_a_id, self.guest_b_id


@dataclass
class Table:
    """A table and the guests seated at it, in seating order."""

    id: str
    number: int
    name: str
    capacity: int
    guests: List[Guest] = field(default_factory=list)

    @property
    def is_honor(self) -> bool:
        return self.number == HONOR_TABLE_NUMBER

    @property
    def remaining(self) -> int:
        return self.capacity - len(self.guests)

    def guest_ids(self) -> List[str]:
        return [g.id for g in self.guests]


@dataclass
class SortingCriteria:
    """Sorting options selected by the user."""

    by_family: bool = False
    by_age: bool = False
    by_role: bool = False
    random: bool = False


@dataclass
class PlanConfiguration:
    """Table layout and sorting options for one generation run."""

    total_guests: int = 0
    number_of_tables: int = 0
    seats_per_table: int = 8
    honor_table_seats: int = 8
    sorting_criteria: SortingCriteria = field(default_factory=SortingCriteria)
    table_shape: str = "round"

    def __post_init__(self) -> None:
        for name in ("total_guests", "number_of_tables", "seats_per_table", "honor_table_seats"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        if self.number_of_tables > 0 and self.seats_per_table == 0:
            raise ValueError("seats_per_table must be at least 1 when tables are configured")
        if self.table_shape not in TABLE_SHAPES:
            raise ValueError(f"table_shape must be one of {', '.join(TABLE_SHAPES)}")

    @property
    def total_seats(self) -> int:
        return self.honor_table_seats + self.number_of_tables * self.seats_per_table


@dataclass(frozen=True)
class PlanWarning:
    """Soft constraint violation or forced placement."""

    kind: str
    message: str
    guest_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DecisionEvent:
    """One step of the placement trace."""

    unit: Tuple[str, ...]
    table: Optional[int]
    outcome: str
    reason: str = ""


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SeatingPlanResult:
    """Outcome of one generation run."""

    success: bool
    tables: Tuple[Table, ...] = ()
    warnings: Tuple[PlanWarning, ...] = ()
    errors: Tuple[str, ...] = ()
    debug_trace: Tuple[DecisionEvent, ...] = ()

    def table(self, number: int) -> Optional[Table]:
        return next((t for t in self.tables if t.number == number), None)

    @property
    def honor_table(self) -> Optional[Table]:
        return self.table(HONOR_TABLE_NUMBER)

    def table_of(self, guest_id: str) -> Optional[Table]:
        """Return the table seating ``guest_id`` or ``None`` when unplaced."""
        for t in self.tables:
            if guest_id in t.guest_ids():
                return t
        return None

    def assignments(self) -> dict:
        """Map guest id to table number."""
        return {g.id: t.number for t in self.tables for g in t.guests}

    def copy(self) -> "SeatingPlanResult":
        """Deep copy whose tables can be edited without touching this result."""
        return copy.deepcopy(self)
