"""The sort-keys-fix rule: require dict keys to be sorted, and sort them.

The rule listens to the container walk.  Each container gets a scope on a
stack that remembers the name of the last entry with a static name; every
named entry is checked against it.  Spreads start the comparison afresh, and
entries without a static name are skipped over.
"""

import logging
from typing import Any, Callable, Dict, NamedTuple, Optional, Sequence

from ._names import get_property_name
from ._order import is_valid_order
from ._relocate import Relocator
from ._tree import Container, ContainerKind, Entry, Event

logger = logging.getLogger(__name__)

RULE_ID = "sort-keys-fix"

SCHEMA = [
    {"enum": ["asc", "desc"]},
    {
        "type": "object",
        "properties": {
            "caseSensitive": {"type": "boolean"},
            "natural": {"type": "boolean"},
            "minKeys": {"type": "integer", "minimum": 2},
        },
        "additionalProperties": False,
    },
]

MESSAGE = (
    "Expected object keys to be in {natural}{insensitive}{order}ending order. "
    "'{thisName}' should be before '{prevName}'."
)


class Configuration(NamedTuple):
    order: str = "asc"
    case_sensitive: bool = True
    natural: bool = False
    min_keys: int = 2

    @classmethod
    def from_options(cls, options: Sequence[Any]) -> "Configuration":
        """Read positional rule options, which must already match ``SCHEMA``."""
        order = options[0] if options else "asc"
        extra = options[1] if len(options) > 1 else {}
        return cls(
            order=order,
            case_sensitive=extra.get("caseSensitive", True),
            natural=extra.get("natural", False),
            min_keys=extra.get("minKeys", 2),
        )


class _Scope:
    __slots__ = ("upper", "container", "prev_name", "prev_entry")

    def __init__(self, upper: Optional["_Scope"], container: Container) -> None:
        self.upper = upper
        self.container = container
        self.prev_name: Optional[str] = None
        self.prev_entry: Optional[Entry] = None


class SortKeysChecker:
    def __init__(self, context: Any) -> None:
        self.context = context
        self.config = Configuration.from_options(context.options)
        self.check = is_valid_order(
            self.config.order,
            insensitive=not self.config.case_sensitive,
            natural=self.config.natural,
        )
        self.relocator = Relocator(context.source_code, self.check)
        self.scope: Optional[_Scope] = None
        logger.debug("checking with %r", self.config)

    def listeners(self) -> Dict[Event, Callable[[Any], None]]:
        return {
            Event.CONTAINER: self.enter_container,
            Event.CONTAINER_EXIT: self.exit_container,
            Event.SPREAD: self.spread,
            Event.PROPERTY: self.property,
        }

    def enter_container(self, container: Container) -> None:
        self.scope = _Scope(self.scope, container)

    def exit_container(self, container: Container) -> None:
        assert self.scope is not None and self.scope.container is container
        self.scope = self.scope.upper

    def spread(self, entry: Entry) -> None:
        assert self.scope is not None
        self.scope.prev_name = None
        self.scope.prev_entry = None

    def property(self, entry: Entry) -> None:
        scope = self.scope
        assert scope is not None and scope.container is entry.parent
        container = entry.parent
        if container.kind is ContainerKind.MAPPING_PATTERN:
            return
        if len(container.entries) < self.config.min_keys:
            return

        prev_name, prev_entry = scope.prev_name, scope.prev_entry
        this_name = get_property_name(entry)
        if this_name is not None:
            scope.prev_name = this_name
            scope.prev_entry = entry
        if prev_name is None or this_name is None:
            return
        if self.check(prev_name, this_name):
            return

        logger.debug("%r is out of order after %r", entry, prev_entry)
        self.context.report(
            node=entry,
            loc=entry.key_range,
            message=MESSAGE,
            data={
                "thisName": this_name,
                "prevName": prev_name,
                "order": self.config.order,
                "insensitive": "" if self.config.case_sensitive else "insensitive ",
                "natural": "natural " if self.config.natural else "",
            },
            fix=lambda fixer: self.relocator.fix(container, fixer),
        )


def create(context: Any) -> Dict[Event, Callable[[Any], None]]:
    return SortKeysChecker(context).listeners()
