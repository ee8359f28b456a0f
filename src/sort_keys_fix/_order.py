"""Pairwise order checks for entry names.

Each check answers "may ``b`` follow ``a``?".  Suffix ``I`` means case
insensitive and suffix ``N`` means natural, where runs of digits compare by
their numeric value, so that ``item2`` sorts before ``item10``.
"""

import re
from typing import Callable, Dict, List, Union

OrderCheck = Callable[[str, str], bool]

_DIGITS = re.compile(r"([0-9]+)")


def natural_key(name: str) -> List[Union[str, int]]:
    # re.split with a group alternates text and digit runs, so two keys always
    # hold the same type at the same index.
    return [
        int(part) if index % 2 else part
        for index, part in enumerate(_DIGITS.split(name))
    ]


def _asc(a: str, b: str) -> bool:
    return a <= b


def _asc_i(a: str, b: str) -> bool:
    return a.lower() <= b.lower()


def _asc_n(a: str, b: str) -> bool:
    return natural_key(a) <= natural_key(b)


def _asc_in(a: str, b: str) -> bool:
    return natural_key(a.lower()) <= natural_key(b.lower())


def _reversed(check: OrderCheck) -> OrderCheck:
    def descending(a: str, b: str) -> bool:
        return check(b, a)

    return descending


IS_VALID_ORDERS: Dict[str, OrderCheck] = {
    "asc": _asc,
    "ascI": _asc_i,
    "ascN": _asc_n,
    "ascIN": _asc_in,
    "desc": _reversed(_asc),
    "descI": _reversed(_asc_i),
    "descN": _reversed(_asc_n),
    "descIN": _reversed(_asc_in),
}


def is_valid_order(order: str, *, insensitive: bool, natural: bool) -> OrderCheck:
    """Return the check for ``order`` ("asc" or "desc") and the given flags."""
    suffix = ("I" if insensitive else "") + ("N" if natural else "")
    return IS_VALID_ORDERS[order + suffix]


def compare(check: OrderCheck) -> Callable[[str, str], int]:
    """Turn an order check into a three-way comparison for a stable sort.

    Names that may follow each other either way compare equal, so their
    input order is kept.
    """

    def cmp(a: str, b: str) -> int:
        if check(a, b):
            return 0 if check(b, a) else -1
        return 1

    return cmp
