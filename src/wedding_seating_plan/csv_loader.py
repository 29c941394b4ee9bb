"""CSV loading utilities."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Iterable, List, Optional, Set, Union

import pandas as pd

from .models import ROLES, Couple, Exclusion, Guest, parse_optional_int, parse_text

PathLike = Union[Path, str, IO[Any]]


def _read(path: PathLike, required: Iterable[str], label: str) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{label}: missing columns: {', '.join(missing)}")
    return df


def load_guests(path: PathLike) -> List[Guest]:
    """Load guests from ``guests.csv``.

    Requires ``id`` and ``first_name``; ``last_name``, ``age`` and ``role``
    are optional. Ids must be unique and roles known.
    """
    df = _read(path, ["id", "first_name"], "guests.csv")
    guests: List[Guest] = []
    seen: Set[str] = set()
    for idx, row in df.iterrows():
        gid = parse_text(row["id"])
        first_name = parse_text(row["first_name"])
        if not gid or not first_name:
            raise ValueError(f"guests.csv row {idx + 2}: id and first_name are required")
        if gid in seen:
            raise ValueError(f"Duplicate guest id: {gid}")
        seen.add(gid)
        role = parse_text(row.get("role", "")).lower() or "regular"
        if role not in ROLES:
            raise ValueError(f"guests.csv row {idx + 2}: unknown role {role!r}")
        try:
            age = parse_optional_int(row.get("age", ""))
        except ValueError:
            raise ValueError(f"guests.csv row {idx + 2}: age must be a number") from None
        guests.append(
            Guest(
                id=gid,
                first_name=first_name,
                last_name=parse_text(row.get("last_name", "")) or None,
                age=age,
                role=role,
            )
        )
    return guests


def _load_pairs(path: PathLike, label: str, guest_ids: Optional[Set[str]]) -> List[tuple]:
    df = _read(path, ["guest1_id", "guest2_id"], label)
    pairs = []
    for idx, row in df.iterrows():
        a = parse_text(row["guest1_id"])
        b = parse_text(row["guest2_id"])
        if a == b:
            raise ValueError(f"{label} row {idx + 2}: a guest cannot be paired with themselves ({a})")
        if guest_ids is not None and (a not in guest_ids or b not in guest_ids):
            raise ValueError(f"{label} references unknown guest: {a}, {b}")
        pair_id = parse_text(row.get("id", "")) or f"{label.split('.')[0]}-{idx + 1}"
        pairs.append((pair_id, a, b))
    return pairs


def load_couples(path: PathLike, guest_ids: Optional[Set[str]] = None) -> List[Couple]:
    """Load couples. A guest may belong to one couple only."""
    couples: List[Couple] = []
    members: Set[str] = set()
    for pair_id, a, b in _load_pairs(path, "couples.csv", guest_ids):
        for gid in (a, b):
            if gid in members:
                raise ValueError(f"Guest {gid} already belongs to a couple")
            members.add(gid)
        couples.append(Couple(guest_a_id=a, guest_b_id=b, id=pair_id))
    return couples


def load_exclusions(path: PathLike, guest_ids: Optional[Set[str]] = None) -> List[Exclusion]:
    """Load exclusions. The same guest may appear in several rows."""
    return [
        Exclusion(guest_a_id=a, guest_b_id=b, id=pair_id)
        for pair_id, a, b in _load_pairs(path, "exclusions.csv", guest_ids)
    ]


def pad_guests(guests: List[Guest], total: int, prefix: str = "Guest") -> List[Guest]:
    """Append filler guests named ``Guest N`` until the roster reaches ``total``."""
    padded = list(guests)
    used = {g.id for g in padded}
    n = len(padded)
    while len(padded) < total:
        n += 1
        gid = f"auto-{n}"
        while gid in used:
            gid += "-x"
        used.add(gid)
        padded.append(Guest(id=gid, first_name=f"{prefix} {n}"))
    return padded


def load_all(
    guests_path: PathLike,
    couples_path: Optional[PathLike] = None,
    exclusions_path: Optional[PathLike] = None,
):
    """Convenience wrapper returning guests, couples and exclusions."""
    guests = load_guests(guests_path)
    guest_ids = {g.id for g in guests}
    couples = load_couples(couples_path, guest_ids) if couples_path is not None else []
    exclusions = load_exclusions(exclusions_path, guest_ids) if exclusions_path is not None else []
    return guests, couples, exclusions
