"""Compute the edits that put a container's entries into sorted order.

Every entry moves to its sorted slot in one go, by replacing the text of the
slot's current occupant.  Comments owned by an entry move with it:

- comments on their own lines directly above the entry, except any that
  start on the line of the preceding comma (or opening bracket), which
  belong to the previous entry;
- comments after the entry's comma on the entry's last line.

Entries never cross a spread, and entries whose name is not static keep
their slot; the named entries of each segment are sorted onto the slots the
named entries occupied.
"""

import functools
import logging
from typing import List, Set, Union

from ._fixer import Edit, Fixer
from ._names import get_property_name
from ._order import OrderCheck, compare
from ._segments import partition
from ._source import CommentKind, SourceCode, Token
from ._tree import Container, Entry

logger = logging.getLogger(__name__)


class Relocator:
    """Sort containers, at most once each.

    One relocator serves one pass over a source.  All of a container's entries
    move together in the first fix, so any later request for the same
    container gets no edits rather than a second, conflicting set.
    """

    def __init__(self, source: SourceCode, check: OrderCheck) -> None:
        self.source = source
        self._sort_key = functools.cmp_to_key(compare(check))
        self._fixed: Set[Container] = set()

    def fix(self, container: Container, fixer: Fixer) -> List[Edit]:
        if container in self._fixed:
            return []
        self._fixed.add(container)
        edits: List[Edit] = []
        for segment in partition(container.entries):
            slots = [
                entry for entry in segment if get_property_name(entry) is not None
            ]
            ordered = sorted(
                slots, key=lambda entry: self._sort_key(get_property_name(entry))
            )
            for entry, slot in zip(ordered, slots):
                edits.extend(self._move(entry, slot, fixer))
        logger.debug("relocating %r with %d edits", container, len(edits))
        return edits

    def _move(self, entry: Entry, slot: Entry, fixer: Fixer) -> List[Edit]:
        if entry is slot:
            return []
        source = self.source
        edits = [fixer.replace_text(slot, source.get_text(entry))]

        before = source.get_token_before(entry)
        assert before is not None, entry
        comments = source.get_comments_before(entry)
        leading = [c for c in comments if c.start_line != before.end_line]
        if leading:
            kept = [c for c in comments if c.start_line == before.end_line]
            start = kept[-1].range[1] if kept else before.range[1]
            end = leading[-1].range[1]
            edits.append(fixer.remove_range((start, end)))
            anchor = source.get_token_before(slot, include_comments=True)
            assert anchor is not None, slot
            edits.append(fixer.insert_text_after(anchor, source.text[start:end]))
            # A line comment would swallow the slot's text.
            if (
                anchor.end_line == slot.start_line
                and leading[-1].comment is CommentKind.LINE
            ):
                edits.append(fixer.insert_text_before(slot, "\n"))

        trailing = self._trailing_comments(entry)
        if trailing:
            start = self._comma_after(entry).range[1]
            end = trailing[-1].range[1]
            edits.append(fixer.remove_range((start, end)))
            target = self._comma_after(slot)
            edits.append(fixer.insert_text_after(target, source.text[start:end]))
            # The occupant's own trailing comments leave along with it.
            displaced = self._trailing_comments(slot)
            following = source.get_token_after(
                displaced[-1] if displaced else target, include_comments=True
            )
            if (
                following is not None
                and following.start_line == target.end_line
                and trailing[-1].comment is CommentKind.LINE
            ):
                edits.append(fixer.insert_text_before(following, "\n"))
        return edits

    def _comma_after(self, entry: Entry) -> Union[Entry, Token]:
        token = self.source.get_token_after(entry)
        if token is not None and token.value == ",":
            return token
        return entry

    def _trailing_comments(self, entry: Entry) -> List[Token]:
        comments = self.source.get_comments_after(self._comma_after(entry))
        return [c for c in comments if c.start_line == entry.end_line]
