"""Placement order for guests outside the honor table.

Ordering rules, earliest dominates:
    1. guests named in an exclusion come before everyone else,
    2. auto-generated filler guests come last,
    3. with family grouping, guests are clustered by family name, each
       cluster absorbs outside partners, and clusters go largest first,
    4. without it, role rank, family name and age break ties when enabled.
"""
from __future__ import annotations

import re
from typing import Dict, List, Tuple

from .models import ROLE_RANK, Guest, PlanConfiguration
from .relationships import RelationshipResolver

AUTO_GENERATED_NAME = re.compile(r"^(Invité|Guest)\s+\d+$")


def is_auto_generated_name(name: str) -> bool:
    """True for names such as ``Guest 12`` created to pad the roster."""
    return bool(AUTO_GENERATED_NAME.match((name or "").strip()))


def is_auto_generated(guest: Guest) -> bool:
    return is_auto_generated_name(guest.full_name)


def group_by_family(guests: List[Guest]) -> List[List[Guest]]:
    """Cluster guests by family key, keeping first-seen order."""
    families: Dict[str, List[Guest]] = {}
    for g in guests:
        families.setdefault(g.family_key or "_no_family_", []).append(g)
    return list(families.values())


def _base_key(guest: Guest, configuration: PlanConfiguration, resolver: RelationshipResolver) -> Tuple:
    criteria = configuration.sorting_criteria
    key: List = [0 if resolver.has_exclusion(guest) else 1]
    if criteria.by_role:
        key.append(ROLE_RANK.get(guest.role, ROLE_RANK["regular"]))
    if criteria.by_family:
        key.append((guest.family_key == "", guest.family_key))
    if criteria.by_age:
        key.append((guest.age is None, guest.age or 0))
    return tuple(key)


def sequence_guests(
    guests: List[Guest],
    configuration: PlanConfiguration,
    resolver: RelationshipResolver,
) -> List[Guest]:
    """Return ``guests`` in the order the placement engine should take them.

    ``guests`` holds only guests still to be seated, so partners outside it
    (the honor table, for one) are never pulled into a cluster.
    """
    real = [g for g in guests if not is_auto_generated(g)]
    fillers = [g for g in guests if is_auto_generated(g)]
    # sorted() is stable so input order settles remaining ties
    real = sorted(real, key=lambda g: _base_key(g, configuration, resolver))

    if not configuration.sorting_criteria.by_family:
        return real + fillers

    clusters = group_by_family(real)
    # Largest families claim their members before partners are pulled in
    clusters.sort(key=len, reverse=True)

    remaining_ids = {g.id for g in guests}
    processed = set()
    extended: List[List[Guest]] = []
    for cluster in clusters:
        group: List[Guest] = []
        for member in cluster:
            if member.id in processed:
                continue
            group.append(member)
            processed.add(member.id)
            for partner in resolver.couple_group_of(member)[1:]:
                if partner.id in processed or partner.id not in remaining_ids:
                    continue
                group.append(partner)
                processed.add(partner.id)
        if group:
            extended.append(group)

    def cluster_key(group: List[Guest]) -> Tuple[int, int]:
        has_exclusion = any(resolver.has_exclusion(g) for g in group)
        return -len(group), 0 if has_exclusion else 1

    extended.sort(key=cluster_key)
    ordered: List[Guest] = []
    for group in extended:
        ordered.extend(sorted(group, key=lambda g: 0 if resolver.has_exclusion(g) else 1))
    # Fillers absorbed as partners are already placed in a cluster
    return ordered + [g for g in fillers if g.id not in processed]
