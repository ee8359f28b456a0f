"""Keyed-entry containers in a Python syntax tree, and the walk over them.

Three constructs share the shape of an object literal:

- dict displays, ``{"b": 1, **base, "a": 2}``;
- keyword calls to the builtin, ``dict(base, b=1, a=2)``;
- mapping patterns, ``case {"b": _, "a": _}:``, which destructure rather
  than build and are never reordered.

``walk`` visits the tree depth-first in source order and yields an event for
entering each container, for each of its entries (before descending into the
entry's children), and for leaving it.
"""

import ast
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from ._source import Range, SourceCode


class Event(Enum):
    CONTAINER = "container"
    CONTAINER_EXIT = "container:exit"
    PROPERTY = "property"
    SPREAD = "spread"


class ContainerKind(Enum):
    DICT_DISPLAY = "dict-display"
    DICT_CALL = "dict-call"
    MAPPING_PATTERN = "mapping-pattern"


class EntryKind(Enum):
    PROPERTY = "property"
    SPREAD = "spread"


class Container:
    __slots__ = ("kind", "range", "entries")

    def __init__(self, kind: ContainerKind, range: Range) -> None:
        self.kind = kind
        self.range = range
        self.entries: List["Entry"] = []

    def __repr__(self) -> str:
        return f"Container({self.kind.value}, range={self.range!r})"


class Entry:
    """One element of a container.

    ``key`` is the key expression of a dict display or mapping pattern, the
    ``ast.keyword`` of a ``dict()`` keyword argument, or None for spread-like
    entries.  ``key_range`` is where a problem with this entry is reported.
    """

    __slots__ = (
        "kind",
        "key",
        "parent",
        "range",
        "key_range",
        "start_line",
        "end_line",
        "children",
    )

    def __init__(
        self,
        kind: EntryKind,
        key: Optional[ast.AST],
        parent: Container,
        range: Range,
        key_range: Range,
        source: SourceCode,
        children: Sequence[ast.AST],
    ) -> None:
        self.kind = kind
        self.key = key
        self.parent = parent
        self.range = range
        self.key_range = key_range
        self.start_line = source.line_of(range[0])
        self.end_line = source.line_of(range[1])
        self.children = tuple(children)

    def __repr__(self) -> str:
        return f"Entry({self.kind.value}, range={self.range!r})"


WalkItem = Tuple[Event, Union[Container, Entry]]


def walk(source: SourceCode) -> Iterator[WalkItem]:
    yield from _visit(source.tree, source)


def _visit(node: ast.AST, source: SourceCode) -> Iterator[WalkItem]:
    container = _make_container(node, source)
    if container is None:
        for child in ast.iter_child_nodes(node):
            yield from _visit(child, source)
        return
    yield Event.CONTAINER, container
    if isinstance(node, ast.Call):
        yield from _visit(node.func, source)
    for entry in container.entries:
        if entry.kind is EntryKind.SPREAD:
            yield Event.SPREAD, entry
        else:
            yield Event.PROPERTY, entry
        for child in entry.children:
            yield from _visit(child, source)
    yield Event.CONTAINER_EXIT, container


def _make_container(node: ast.AST, source: SourceCode) -> Optional[Container]:
    kinds = (ast.Dict, ast.Call, ast.MatchMapping)
    if isinstance(node, kinds) and source.in_string(source.node_range(node)[0]):
        # Before Python 3.12 an f-string is one token, replacement fields included.
        return None
    if isinstance(node, ast.Dict):
        return _dict_display(node, source)
    if (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id == "dict"
    ):
        return _dict_call(node, source)
    if isinstance(node, ast.MatchMapping):
        return _mapping_pattern(node, source)
    return None


def _dict_display(node: ast.Dict, source: SourceCode) -> Container:
    container = Container(ContainerKind.DICT_DISPLAY, source.node_range(node))
    floor = container.range[0]
    for key, value in zip(node.keys, node.values):
        value_range = _unwrap(source, source.node_range(value), floor)
        if key is None:
            stars = source.get_token_before(value_range[0])
            assert stars is not None and stars.value == "**", stars
            entry_range = (stars.range[0], value_range[1])
            container.entries.append(
                Entry(
                    EntryKind.SPREAD,
                    None,
                    container,
                    entry_range,
                    entry_range,
                    source,
                    [value],
                )
            )
            continue
        key_range = _unwrap(source, source.node_range(key), floor)
        container.entries.append(
            Entry(
                EntryKind.PROPERTY,
                key,
                container,
                (key_range[0], value_range[1]),
                source.node_range(key),
                source,
                [key, value],
            )
        )
    return container


def _dict_call(node: ast.Call, source: SourceCode) -> Container:
    container = Container(ContainerKind.DICT_CALL, source.node_range(node))
    # The call's own parentheses must not be mistaken for a wrapped argument.
    paren = source.get_token_after(source.node_range(node.func)[1])
    while paren is not None and paren.value == ")":
        paren = source.get_token_after(paren)
    assert paren is not None and paren.value == "(", paren
    floor = paren.range[0]

    arguments: List[Union[ast.expr, ast.keyword]] = [*node.args, *node.keywords]
    arguments.sort(key=lambda arg: (arg.lineno, arg.col_offset))
    for arg in arguments:
        if isinstance(arg, ast.keyword) and arg.arg is not None:
            value_range = _unwrap(source, source.node_range(arg.value), floor)
            start, end = source.node_range(arg)
            container.entries.append(
                Entry(
                    EntryKind.PROPERTY,
                    arg,
                    container,
                    (start, max(end, value_range[1])),
                    (start, start + len(arg.arg)),
                    source,
                    [arg.value],
                )
            )
            continue
        # Positional arguments, *args and **kwargs have no key of their own.
        if isinstance(arg, ast.keyword):
            entry_range = source.node_range(arg)
            children = [arg.value]
        else:
            entry_range = _unwrap(source, source.node_range(arg), floor)
            children = [arg]
        container.entries.append(
            Entry(
                EntryKind.SPREAD,
                None,
                container,
                entry_range,
                entry_range,
                source,
                children,
            )
        )
    return container


def _mapping_pattern(node: ast.MatchMapping, source: SourceCode) -> Container:
    container = Container(ContainerKind.MAPPING_PATTERN, source.node_range(node))
    floor = container.range[0]
    for key, pattern in zip(node.keys, node.patterns):
        key_range = _unwrap(source, source.node_range(key), floor)
        pattern_range = _unwrap(source, source.node_range(pattern), floor)
        container.entries.append(
            Entry(
                EntryKind.PROPERTY,
                key,
                container,
                (key_range[0], pattern_range[1]),
                source.node_range(key),
                source,
                [key, pattern],
            )
        )
    return container


def _unwrap(source: SourceCode, span: Range, floor: int) -> Range:
    """Widen ``span`` over any parentheses wrapping it, but not past ``floor``."""
    start, end = span
    while True:
        before = source.get_token_before(start)
        after = source.get_token_after(end)
        if (
            before is None
            or after is None
            or before.value != "("
            or after.value != ")"
            or before.range[0] <= floor
        ):
            return start, end
        start, end = before.range[0], after.range[1]
