"""
Greedy table placement with a best effort fallback.

Each unit (a guest plus any unplaced couple partners) goes to the first
table that works, trying in turn:
    1. the table the guest's family already sits at,
    2. any table with room and no exclusion conflict,
    3. any table with room, reporting each violated exclusion,
    4. the honor table, when it has room and no exclusion conflict.
A unit that fits nowhere is reported and left unplaced.
"""
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from .checks import family_split_warnings
from .models import (
    EXCLUSION_VIOLATED,
    HONOR_TABLE_FALLBACK,
    HONOR_TABLE_NAME,
    HONOR_TABLE_NUMBER,
    UNPLACED,
    Couple,
    DecisionEvent,
    Exclusion,
    Guest,
    PlanConfiguration,
    PlanWarning,
    SeatingPlanResult,
    Table,
)
from .relationships import RelationshipResolver
from .sequencer import sequence_guests
from .validation import honor_guest_ids, validate

logger = logging.getLogger(__name__)

# Trace outcomes
PLACED = "placed"
REJECTED = "rejected"
BEST_EFFORT = "best_effort"
HONOR_FALLBACK = "honor_fallback"
NOT_PLACED = "unplaced"
SKIPPED = "skipped"
HONOR_SEATED = "honor_seated"


def shuffle_tables(tables: Sequence[Table], rng: Optional[random.Random] = None) -> None:
    """Shuffle guests within every table except the honor table."""
    rng = rng or random.Random()
    for table in tables:
        if not table.is_honor:
            rng.shuffle(table.guests)


class PlacementEngine:
    """Seats guests table by table for a single generation run."""

    def __init__(self, configuration: PlanConfiguration, rng: Optional[random.Random] = None) -> None:
        self.configuration = configuration
        self.rng = rng
        # Inputs
        self.guests: List[Guest] = []
        self.couples: List[Couple] = []
        self.exclusions: List[Exclusion] = []
        self.resolver: Optional[RelationshipResolver] = None
        # Run state
        self.tables: List[Table] = []
        self.placed: set = set()
        self.unplaced: set = set()
        self.family_tables: Dict[str, int] = {}
        self.warnings: List[PlanWarning] = []
        self.trace: List[DecisionEvent] = []

    def build(self, guests: List[Guest], couples: List[Couple], exclusions: List[Exclusion]) -> None:
        """Store inputs and index relationships."""
        self.guests = list(guests)
        self.couples = list(couples)
        self.exclusions = list(exclusions)
        self.resolver = RelationshipResolver(self.guests, self.couples, self.exclusions)

    # ----------------------------- helpers -----------------------------
    def _log(self, unit: Sequence[Guest], table: Optional[Table], outcome: str, reason: str = "") -> None:
        event = DecisionEvent(
            unit=tuple(g.id for g in unit),
            table=table.number if table else None,
            outcome=outcome,
            reason=reason,
        )
        self.trace.append(event)
        logger.debug(
            "%s -> %s: %s %s",
            " + ".join(g.full_name for g in unit),
            table.name if table else "-",
            outcome,
            reason,
        )

    def _warn(self, kind: str, message: str, guest_ids: Sequence[str]) -> None:
        self.warnings.append(PlanWarning(kind=kind, message=message, guest_ids=tuple(guest_ids)))

    def _create_tables(self) -> None:
        cfg = self.configuration
        self.tables = [
            Table(
                id=f"table-{HONOR_TABLE_NUMBER}",
                number=HONOR_TABLE_NUMBER,
                name=HONOR_TABLE_NAME,
                capacity=cfg.honor_table_seats,
            )
        ]
        for i in range(cfg.number_of_tables):
            number = i + 2
            self.tables.append(
                Table(id=f"table-{number}", number=number, name=f"Table {number}", capacity=cfg.seats_per_table)
            )

    @property
    def honor_table(self) -> Table:
        return self.tables[0]

    @property
    def regular_tables(self) -> List[Table]:
        return self.tables[1:]

    def _seat_honor_guests(self, honor_ids: List[str]) -> None:
        for gid in honor_ids:
            guest = self.resolver.guest_by_id[gid]
            self.honor_table.guests.append(guest)
            self.placed.add(gid)
        if honor_ids:
            self._log(self.honor_table.guests, self.honor_table, HONOR_SEATED, "married, witnesses and partners")

    def _unit_for(self, guest: Guest) -> List[Guest]:
        """Guest plus every couple partner not seated yet."""
        return [g for g in self.resolver.couple_group_of(guest) if g.id not in self.placed]

    def _conflicts(self, unit: List[Guest], table: Table) -> List[Tuple[Guest, Guest]]:
        return self.resolver.conflicts(unit, table.guests)

    def _try_table(self, unit: List[Guest], table: Table, label: str) -> bool:
        if table.remaining < len(unit):
            self._log(unit, table, REJECTED, f"{label}: full ({len(table.guests)}/{table.capacity})")
            return False
        conflicts = self._conflicts(unit, table)
        if conflicts:
            a, b = conflicts[0]
            self._log(unit, table, REJECTED, f"{label}: {a.first_name} cannot sit with {b.first_name}")
            return False
        return True

    def _find_table(self, unit: List[Guest], preferred: Optional[int]) -> Optional[Table]:
        if preferred is not None:
            table = next((t for t in self.regular_tables if t.number == preferred), None)
            if table is not None and self._try_table(unit, table, "family table"):
                self._log(unit, table, PLACED, "family grouped")
                return table

        for table in self.regular_tables:
            if self._try_table(unit, table, "scan"):
                self._log(unit, table, PLACED, "no exclusion")
                return table

        for table in self.regular_tables:
            if table.remaining < len(unit):
                continue
            for newcomer, existing in self._conflicts(unit, table):
                self._warn(
                    EXCLUSION_VIOLATED,
                    f"{newcomer.full_name} and {existing.full_name} are at the same table despite exclusion.",
                    [newcomer.id, existing.id],
                )
            self._log(unit, table, BEST_EFFORT, "room left but exclusions violated")
            return table
        return None

    def _seat(self, unit: List[Guest], table: Table) -> None:
        by_family = self.configuration.sorting_criteria.by_family
        # Exclusions inside a couple chain
        for first, second in self.resolver.internal_conflicts(unit):
            self._warn(
                EXCLUSION_VIOLATED,
                f"{first.full_name} and {second.full_name} are at the same table despite exclusion.",
                [first.id, second.id],
            )
        for g in unit:
            table.guests.append(g)
            self.placed.add(g.id)
            if by_family and g.family_key and not table.is_honor:
                self.family_tables.setdefault(g.family_key, table.number)

    def _place_last_resort(self, unit: List[Guest]) -> None:
        honor = self.honor_table
        names = " and ".join(g.full_name for g in unit)
        ids = [g.id for g in unit]
        if honor.remaining < len(unit):
            self._log(unit, honor, NOT_PLACED, "all tables full, honor table included")
            self._warn(UNPLACED, f"Cannot place {names}: all tables are full, including honor table.", ids)
            self.unplaced.update(ids)
            return
        if self._conflicts(unit, honor):
            self._log(unit, honor, NOT_PLACED, "all tables full, exclusion at honor table")
            self._warn(UNPLACED, f"Cannot place {names}: all tables are full and exclusion with honor table.", ids)
            self.unplaced.update(ids)
            return
        self._seat(unit, honor)
        self._log(unit, honor, HONOR_FALLBACK, "no room elsewhere")
        self._warn(HONOR_TABLE_FALLBACK, f"{names} placed at honor table due to lack of space elsewhere.", ids)

    # ----------------------------- solve -----------------------------
    def solve(self) -> SeatingPlanResult:
        """Validate, seat the honor table, then place everyone else."""
        if self.resolver is None:
            raise RuntimeError("build() must be called before solve()")
        cfg = self.configuration
        logger.info(
            "Generating plan: %d guests, %d couples, %d exclusions, %d tables of %d + honor table of %d",
            len(self.guests), len(self.couples), len(self.exclusions),
            cfg.number_of_tables, cfg.seats_per_table, cfg.honor_table_seats,
        )

        validation = validate(self.guests, self.couples, self.exclusions, cfg, self.resolver)
        if not validation.valid:
            return SeatingPlanResult(success=False, errors=validation.errors)

        self.tables, self.placed, self.unplaced, self.family_tables = [], set(), set(), {}
        self.warnings, self.trace = [], []
        self._create_tables()

        honor_ids = honor_guest_ids(self.guests, self.resolver)
        self._seat_honor_guests(honor_ids)

        remaining = [g for g in self.guests if g.id not in self.placed]
        ordered = sequence_guests(remaining, cfg, self.resolver)

        for guest in ordered:
            if guest.id in self.placed:
                self._log([guest], None, SKIPPED, "already seated with partner")
                continue
            if guest.id in self.unplaced:
                self._log([guest], None, SKIPPED, "left out with partner")
                continue
            unit = self._unit_for(guest)
            preferred = None
            if cfg.sorting_criteria.by_family and guest.family_key:
                preferred = self.family_tables.get(guest.family_key)
            table = self._find_table(unit, preferred)
            if table is not None:
                self._seat(unit, table)
            else:
                self._place_last_resort(unit)

        if cfg.sorting_criteria.by_family:
            self.warnings.extend(family_split_warnings(self.tables))

        if cfg.sorting_criteria.random:
            shuffle_tables(self.tables, self.rng)

        unplaced = len(self.guests) - len(self.placed)
        logger.info(
            "Plan generated: %d seated, %d unplaced, %d warning(s)",
            len(self.placed), unplaced, len(self.warnings),
        )
        return SeatingPlanResult(
            success=True,
            tables=tuple(self.tables),
            warnings=tuple(self.warnings),
            debug_trace=tuple(self.trace),
        )


def generate(
    guests: List[Guest],
    couples: List[Couple],
    exclusions: List[Exclusion],
    configuration: PlanConfiguration,
    rng: Optional[random.Random] = None,
) -> SeatingPlanResult:
    """Run one full generation and return its result."""
    engine = PlacementEngine(configuration, rng=rng)
    engine.build(guests, couples, exclusions)
    return engine.solve()
