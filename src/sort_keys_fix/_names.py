"""Static names of container entries."""

import ast
from typing import Optional

from ._tree import Entry


def get_property_name(entry: Entry) -> Optional[str]:
    """Return the name ``entry`` is sorted by, or None if it has no static name.

    - A constant key gives its value: strings as they are, integral floats
      as the integer they equal (``1e3`` is ``"1000"``), anything else
      (numbers, bytes, ``True``, ``None``...) as its ``repr``.
    - An f-string key without replacement fields gives its literal text.
    - A ``dict()`` keyword argument gives the keyword.

    Every other key is computed at runtime, and spread-like entries have no
    key at all.
    """
    key = entry.key
    if isinstance(key, ast.keyword):
        return key.arg
    if isinstance(key, ast.Constant):
        if isinstance(key.value, str):
            return key.value
        if isinstance(key.value, float) and key.value.is_integer():
            return str(int(key.value))
        return repr(key.value)
    if isinstance(key, ast.JoinedStr) and all(
        isinstance(part, ast.Constant) for part in key.values
    ):
        return "".join(part.value for part in key.values)  # type: ignore
    return None
