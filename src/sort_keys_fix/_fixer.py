"""Text edits, and the factory a rule uses to describe them."""

from typing import List, NamedTuple, Sequence

from ._source import Range


class OverlappingEditsError(ValueError):
    pass


class Edit(NamedTuple):
    range: Range
    text: str


class Fixer:
    """Builds edits against the unmodified source text.

    Nodes are anything with a ``range``: tokens, comments or entries.
    """

    def replace_text(self, node: object, text: str) -> Edit:
        return Edit(node.range, text)  # type: ignore[attr-defined]

    def remove_range(self, range: Range) -> Edit:
        return Edit(range, "")

    def insert_text_after(self, node: object, text: str) -> Edit:
        end = node.range[1]  # type: ignore[attr-defined]
        return Edit((end, end), text)

    def insert_text_before(self, node: object, text: str) -> Edit:
        start = node.range[0]  # type: ignore[attr-defined]
        return Edit((start, start), text)


def merge_edits(edits: Sequence[Edit], text: str) -> Edit:
    """Combine the edits of one report into a single replacement.

    Edits are applied in position order; insertions at the same offset keep
    the order they were made in.  Overlapping edits cannot be combined.
    """
    assert edits, "internal error: must pass at least one edit to merge"
    ordered = sorted(edits, key=lambda edit: edit.range)
    start = ordered[0].range[0]
    parts: List[str] = []
    last = start
    for edit in ordered:
        if edit.range[0] < last:
            raise OverlappingEditsError(
                f"edit at {edit.range!r} overlaps an earlier edit ending at {last}"
            )
        parts.append(text[last : edit.range[0]])
        parts.append(edit.text)
        last = edit.range[1]
    return Edit((start, last), "".join(parts))
