"""Couple and exclusion lookups over a fixed guest list."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from .models import Couple, Exclusion, Guest


def couple_connected_groups(guests: Iterable[Guest], couples: Iterable[Couple]) -> List[List[str]]:
    """Depth first walk of the couple graph.

    Returns the connected groups of guest ids in guest order. Guests without
    a partner are not groups and are left out.
    """
    guest_ids = [g.id for g in guests]
    adjacency = _couple_adjacency(couples)

    visited: Set[str] = set()
    groups: List[List[str]] = []
    for gid in guest_ids:
        if gid in visited:
            continue
        group: List[str] = []
        stack = [gid]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            group.append(current)
            # reversed keeps declaration order when popping
            for other in reversed(adjacency.get(current, [])):
                if other not in visited:
                    stack.append(other)
        if len(group) > 1:
            groups.append(group)
    return groups


def _couple_adjacency(couples: Iterable[Couple]) -> Dict[str, List[str]]:
    adjacency: Dict[str, List[str]] = {}
    for c in couples:
        a, b = c.members()
        if a == b:
            continue
        adjacency.setdefault(a, []).append(b)
        adjacency.setdefault(b, []).append(a)
    return adjacency


class RelationshipResolver:
    """Answers partner and exclusion questions for one generation run."""

    def __init__(self, guests: List[Guest], couples: List[Couple], exclusions: List[Exclusion]) -> None:
        self.guests = guests
        self.guest_by_id: Dict[str, Guest] = {g.id: g for g in guests}
        self.couples = couples
        self.exclusions = exclusions
        self._partners = _couple_adjacency(couples)
        # Symmetric exclusion map
        self._excluded: Dict[str, Set[str]] = {}
        for e in exclusions:
            a, b = e.members()
            self._excluded.setdefault(a, set()).add(b)
            self._excluded.setdefault(b, set()).add(a)

    def partner_of(self, guest: Guest) -> Optional[Guest]:
        """Other member of the first couple containing ``guest``."""
        for c in self.couples:
            if c.guest_a_id == guest.id:
                return self.guest_by_id.get(c.guest_b_id)
            if c.guest_b_id == guest.id:
                return self.guest_by_id.get(c.guest_a_id)
        return None

    def coupled_with(self, guest_id: str) -> Set[str]:
        return set(self._partners.get(guest_id, []))

    def couple_group_of(self, guest: Guest) -> List[Guest]:
        """``guest`` followed by every guest reachable through couples."""
        order: List[Guest] = []
        seen: Set[str] = set()
        stack = [guest.id]
        while stack:
            current = stack.pop()
            if current in seen or current not in self.guest_by_id:
                continue
            seen.add(current)
            order.append(self.guest_by_id[current])
            for other in reversed(self._partners.get(current, [])):
                if other not in seen:
                    stack.append(other)
        return order

    def excludes(self, guest_a: Guest, guest_b: Guest) -> bool:
        return guest_b.id in self._excluded.get(guest_a.id, set())

    def exclusion_partners(self, guest_id: str) -> Set[str]:
        return set(self._excluded.get(guest_id, set()))

    def has_exclusion(self, guest: Guest) -> bool:
        return bool(self._excluded.get(guest.id))

    def conflicts(self, unit: Iterable[Guest], seated: Iterable[Guest]) -> List[Tuple[Guest, Guest]]:
        """Excluded pairs between newcomers and guests already seated."""
        seated = list(seated)
        pairs: List[Tuple[Guest, Guest]] = []
        for newcomer in unit:
            for existing in seated:
                if self.excludes(newcomer, existing):
                    pairs.append((newcomer, existing))
        return pairs

    def internal_conflicts(self, unit: Iterable[Guest]) -> List[Tuple[Guest, Guest]]:
        """Excluded pairs inside one unit, each pair once."""
        unit = list(unit)
        pairs: List[Tuple[Guest, Guest]] = []
        for i, first in enumerate(unit):
            for second in unit[i + 1:]:
                if self.excludes(first, second):
                    pairs.append((first, second))
        return pairs

    def names(self, guest_ids: Iterable[str]) -> str:
        return ", ".join(
            self.guest_by_id[g].full_name if g in self.guest_by_id else "Unknown" for g in guest_ids
        )
