"""Advisories derived from table state, and manual moves between tables.

The placement engine reports what happened during generation. Once guests
are moved by hand those warnings go stale, so the same categories are
recomputed here from whatever the tables currently hold.
"""
from __future__ import annotations

from typing import Dict, Iterable, List

from .models import (
    COUPLE_SEPARATED,
    EXCLUSION_VIOLATED,
    FAMILY_SPLIT,
    OVER_CAPACITY,
    Couple,
    Exclusion,
    PlanWarning,
    SeatingPlanResult,
    Table,
)
from .sequencer import is_auto_generated


def family_split_warnings(tables: Iterable[Table]) -> List[PlanWarning]:
    """One warning per family spread over several regular tables."""
    spread: Dict[str, Dict[int, List[str]]] = {}
    members: Dict[str, List[str]] = {}
    display: Dict[str, str] = {}
    for table in tables:
        if table.is_honor:
            continue
        for g in table.guests:
            if not g.family_key or is_auto_generated(g):
                continue
            spread.setdefault(g.family_key, {}).setdefault(table.number, []).append(g.id)
            members.setdefault(g.family_key, []).append(g.id)
            display.setdefault(g.family_key, (g.last_name or "").strip())

    warnings: List[PlanWarning] = []
    for family, by_table in spread.items():
        if len(by_table) < 2:
            continue
        numbers = ", ".join(str(n) for n in sorted(by_table))
        warnings.append(
            PlanWarning(
                kind=FAMILY_SPLIT,
                message=f"Family {display[family]} is split across tables {numbers}.",
                guest_ids=tuple(members[family]),
            )
        )
    return warnings


def check_plan(
    result: SeatingPlanResult,
    couples: Iterable[Couple],
    exclusions: Iterable[Exclusion],
    by_family: bool = False,
) -> List[PlanWarning]:
    """Recompute advisories for the current table state."""
    if not result.success:
        return []
    warnings: List[PlanWarning] = []

    for table in result.tables:
        if len(table.guests) > table.capacity:
            warnings.append(
                PlanWarning(
                    kind=OVER_CAPACITY,
                    message=f"{table.name} exceeds capacity ({len(table.guests)}/{table.capacity}).",
                    guest_ids=tuple(table.guest_ids()),
                )
            )

    # Honor table members are fixed, so pairs there are not reported
    seat: Dict[str, Table] = {}
    for table in result.tables:
        if table.is_honor:
            continue
        for g in table.guests:
            seat[g.id] = table
    by_id = {g.id: g for t in result.tables for g in t.guests}

    for e in exclusions:
        a, b = e.members()
        if a in seat and b in seat and seat[a] is seat[b]:
            warnings.append(
                PlanWarning(
                    kind=EXCLUSION_VIOLATED,
                    message=f"{by_id[a].full_name} and {by_id[b].full_name} should not be at the same table.",
                    guest_ids=(a, b),
                )
            )

    for c in couples:
        a, b = c.members()
        if a in seat and b in seat and seat[a] is not seat[b]:
            warnings.append(
                PlanWarning(
                    kind=COUPLE_SEPARATED,
                    message=f"{by_id[a].full_name} and {by_id[b].full_name} are a couple but separated.",
                    guest_ids=(a, b),
                )
            )

    if by_family:
        warnings.extend(family_split_warnings(result.tables))
    return warnings


def move_guest(result: SeatingPlanResult, guest_id: str, table_number: int) -> SeatingPlanResult:
    """Return a copy of ``result`` with ``guest_id`` seated at ``table_number``.

    Raises ValueError when the guest or table is unknown or the target table
    is already full. Exclusions are not checked; use ``check_plan``.
    """
    if not result.success:
        raise ValueError("Cannot edit a failed seating plan.")
    edited = result.copy()
    source = edited.table_of(guest_id)
    if source is None:
        raise ValueError(f"Unknown guest: {guest_id}")
    target = edited.table(table_number)
    if target is None:
        raise ValueError(f"Unknown table number: {table_number}")
    if target is source:
        return edited
    if target.remaining < 1:
        raise ValueError(f"{target.name} is full ({len(target.guests)}/{target.capacity}).")

    guest = next(g for g in source.guests if g.id == guest_id)
    source.guests.remove(guest)
    target.guests.append(guest)
    return edited
