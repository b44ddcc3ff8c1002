# Portfolio/reorder.py
# Drag-and-drop re-sequencing for ordered collections.
#
# Items live in named groups (a skill's category, a testimonial's visibility,
# one group for projects) and every group keeps a dense order 0..n-1. A move
# takes an item out of its group and splices it into a target group at a
# position; then every group the batch touched is renumbered from zero.
# Nothing here touches the database.

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from Core.errors import ValidationFailed


@dataclass(frozen=True)
class Item:
    id: str
    group: str
    order: int


@dataclass(frozen=True)
class Move:
    id: str
    group: str
    order: Optional[int] = None  # None: append at the end of the group


@dataclass(frozen=True)
class Placement:
    id: str
    group: str
    order: int


Groups = Dict[str, List[str]]


def partition(items: Iterable[Item]) -> Groups:
    """Group ids by group, each list sorted by the stored order.

    Ties keep the order in which the items were given.
    """
    buckets: Dict[str, List[Item]] = OrderedDict()
    for item in items:
        buckets.setdefault(item.group, []).append(item)
    return OrderedDict(
        (group, [it.id for it in sorted(members, key=lambda it: it.order)])
        for group, members in buckets.items()
    )


def splice(groups: Groups, move: Move) -> str:
    """Move one id into ``move.group`` at ``move.order``; returns the source group."""
    source = None
    for group, ids in groups.items():
        if move.id in ids:
            ids.remove(move.id)
            source = group
            break
    if source is None:
        raise ValidationFailed(f"Unknown id: {move.id}")

    target = groups.setdefault(move.group, [])
    if move.order is None or move.order < 0 or move.order > len(target):
        target.append(move.id)
    else:
        target.insert(move.order, move.id)
    return source


def number(groups: Groups, names: Iterable[str]) -> List[Placement]:
    placements = []
    for name in names:
        for position, item_id in enumerate(groups.get(name, [])):
            placements.append(Placement(item_id, name, position))
    return placements


def resequence(items: Sequence[Item], moves: Sequence[Move]) -> List[Placement]:
    """Apply a batch of moves and return the new placement of every item in
    every touched group.

    Moves are applied in ascending target position so a batch that lists a
    whole group with its new positions lands exactly as listed. An empty
    batch, an unknown id or an id moved twice is rejected before anything is
    computed.
    """
    if not moves:
        raise ValidationFailed("At least one item is required")

    known = {item.id for item in items}
    seen = set()
    for move in moves:
        if move.id not in known:
            raise ValidationFailed(f"Unknown id: {move.id}")
        if move.id in seen:
            raise ValidationFailed(f"Duplicate id in batch: {move.id}")
        seen.add(move.id)

    groups = partition(items)
    touched: List[str] = []
    ordered = sorted(moves, key=lambda m: (m.order is None, m.order if m.order is not None else 0))
    for move in ordered:
        source = splice(groups, move)
        for name in (source, move.group):
            if name not in touched:
                touched.append(name)
    return number(groups, touched)


def densify(items: Sequence[Item], names: Iterable[str]) -> List[Placement]:
    """Renumber the named groups without moving anything (after a delete)."""
    return number(partition(items), names)
