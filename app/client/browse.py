"""
Category grouping and cyclic navigation over a list of idioms.

Idioms are bucketed major -> minor. Both levels are ordered by type code,
with idioms that lack either code collected in a trailing unclassified
bucket. Navigation walks the buckets in that order and wraps around at
both ends.
"""

from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from app.schemas.idiom import IdiomRead

UNCLASSIFIED = "__unclassified__"

T = TypeVar("T", bound=IdiomRead)

Grouping = Dict[str, Dict[str, List[T]]]


def _code(value: Optional[str]) -> str:
    return (value or "").strip()


def is_classified(idiom: IdiomRead) -> bool:
    """True when both the major and the minor code are non-blank."""
    return bool(_code(idiom.major_type_code)) and bool(_code(idiom.minor_type_code))


def category_of(idiom: IdiomRead) -> Tuple[str, str]:
    if not is_classified(idiom):
        return UNCLASSIFIED, UNCLASSIFIED
    return _code(idiom.major_type_code), _code(idiom.minor_type_code)


def sort_key(idiom: IdiomRead) -> Tuple[int, str, str, str]:
    # classified before unclassified, then major, minor, name
    if is_classified(idiom):
        major, minor = category_of(idiom)
        return 0, major, minor, idiom.idiom
    return 1, "", "", idiom.idiom


def sort_idioms(idioms: Sequence[T]) -> List[T]:
    return sorted(idioms, key=sort_key)


def _ordered_keys(keys) -> List[str]:
    ordered = sorted(k for k in keys if k != UNCLASSIFIED)
    if UNCLASSIFIED in keys:
        ordered.append(UNCLASSIFIED)
    return ordered


def group_idioms(idioms: Sequence[T], resort: bool = False) -> Grouping:
    """
    Bucket idioms by major then minor type code.

    Args:
        idioms: Idioms in fetch order
        resort: Also re-sort idioms inside each bucket by name

    Returns:
        Nested dict whose iteration order is the browse order
    """
    source = sort_idioms(idioms) if resort else idioms
    buckets: Dict[str, Dict[str, List[T]]] = {}
    for item in source:
        major, minor = category_of(item)
        buckets.setdefault(major, {}).setdefault(minor, []).append(item)

    return {
        major: {minor: buckets[major][minor] for minor in _ordered_keys(buckets[major])}
        for major in _ordered_keys(buckets)
    }


def browse_order(grouping: Grouping) -> List[T]:
    """Flatten a grouping into the sequence next/previous walk through."""
    return [item for minors in grouping.values() for items in minors.values() for item in items]


class BrowseCursor:
    """
    Next/previous over a grouping.

    next moves within the current minor bucket, then to the first idiom of
    the following bucket (next minor of the same major, else the first minor
    of the next major), wrapping from the last bucket to the first. previous
    is the exact inverse.
    """

    def __init__(self, grouping: Grouping):
        self._buckets: List[List[IdiomRead]] = [
            items for minors in grouping.values() for items in minors.values() if items
        ]
        self._positions: Dict[str, Tuple[int, int]] = {}
        for b, items in enumerate(self._buckets):
            for i, item in enumerate(items):
                self._positions.setdefault(item.idiom, (b, i))

    def __len__(self) -> int:
        return sum(len(items) for items in self._buckets)

    def first(self) -> Optional[IdiomRead]:
        return self._buckets[0][0] if self._buckets else None

    def locate(self, name: Optional[str]) -> Optional[Tuple[int, int]]:
        if name is None:
            return None
        return self._positions.get(name)

    def next(self, current: Optional[IdiomRead]) -> Optional[IdiomRead]:
        if not self._buckets:
            return None
        position = self.locate(current.idiom if current else None)
        if position is None:
            return self.first()
        b, i = position
        items = self._buckets[b]
        if i + 1 < len(items):
            return items[i + 1]
        return self._buckets[(b + 1) % len(self._buckets)][0]

    def previous(self, current: Optional[IdiomRead]) -> Optional[IdiomRead]:
        if not self._buckets:
            return None
        position = self.locate(current.idiom if current else None)
        if position is None:
            return self.first()
        b, i = position
        if i > 0:
            return self._buckets[b][i - 1]
        return self._buckets[(b - 1) % len(self._buckets)][-1]
