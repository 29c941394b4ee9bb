"""Feasibility checks run before any table is created."""
from __future__ import annotations

import logging
from typing import List, Optional

from .models import Couple, Exclusion, Guest, PlanConfiguration, ValidationResult
from .relationships import RelationshipResolver, couple_connected_groups

logger = logging.getLogger(__name__)


def honor_guest_ids(guests: List[Guest], resolver: RelationshipResolver) -> List[str]:
    """Ids that must sit at the honor table, in guest order.

    Married guests and witnesses bring their partner whatever the partner's
    role. Longer couple chains come along as a whole.
    """
    wanted = set()
    for g in guests:
        if g.is_honor:
            wanted.update(member.id for member in resolver.couple_group_of(g))
    return [g.id for g in guests if g.id in wanted]


def validate(
    guests: List[Guest],
    couples: List[Couple],
    exclusions: List[Exclusion],
    configuration: PlanConfiguration,
    resolver: Optional[RelationshipResolver] = None,
) -> ValidationResult:
    """Decide whether a seating can exist at all. Every error is collected."""
    errors: List[str] = []

    if not guests:
        errors.append("No guests have been added.")
        return ValidationResult(valid=False, errors=tuple(errors))

    if resolver is None:
        resolver = RelationshipResolver(guests, couples, exclusions)

    # Honor table capacity
    honor_ids = set(honor_guest_ids(guests, resolver))
    if len(honor_ids) > configuration.honor_table_seats:
        errors.append(
            f"The honor table can only accommodate {configuration.honor_table_seats} people, "
            f"but {len(honor_ids)} people need to be seated there "
            f"(witnesses/married and their partners)."
        )

    # A couple cannot also be an exclusion
    for couple in couples:
        a, b = couple.members()
        guest_a = resolver.guest_by_id.get(a)
        guest_b = resolver.guest_by_id.get(b)
        if guest_a and guest_b and resolver.excludes(guest_a, guest_b):
            errors.append(
                f"Conflict: {guest_a.full_name} and {guest_b.full_name} "
                f"are a couple but have an exclusion between them."
            )

    # Couple groups must fit on one table
    for group in couple_connected_groups(guests, couples):
        in_honor = any(gid in honor_ids for gid in group)
        max_capacity = configuration.honor_table_seats if in_honor else configuration.seats_per_table
        if len(group) > max_capacity:
            errors.append(
                f"The couple group ({resolver.names(group)}) contains {len(group)} people, "
                f"but the maximum table capacity is {max_capacity}."
            )

    if len(guests) > configuration.total_seats:
        errors.append(
            f"{len(guests)} guests cannot be seated with {configuration.total_seats} seats "
            f"({configuration.number_of_tables} tables of {configuration.seats_per_table} "
            f"plus {configuration.honor_table_seats} at the honor table)."
        )

    if errors:
        logger.info("Validation failed with %d error(s)", len(errors))
    return ValidationResult(valid=not errors, errors=tuple(errors))
