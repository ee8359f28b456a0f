"""Split container entries into independently sorted segments."""

from typing import List, Sequence, Tuple

from ._tree import Entry, EntryKind

Segment = Tuple[Entry, ...]


def partition(entries: Sequence[Entry]) -> List[Segment]:
    """Split ``entries`` at every spread-like entry.

    The spreads themselves belong to no segment and never move, so there is
    always exactly one more segment than there are spreads; segments may be
    empty.
    """
    segments: List[Segment] = []
    run: List[Entry] = []
    for entry in entries:
        if entry.kind is EntryKind.SPREAD:
            segments.append(tuple(run))
            run = []
        else:
            run.append(entry)
    segments.append(tuple(run))
    return segments
