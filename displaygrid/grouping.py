"""Detection of group boundaries between consecutive rows."""

from __future__ import annotations

from enum import Enum


class Grouping(Enum):
    """Grouping transition of a cell relative to its neighbours."""

    NO_CHANGE = "no_change"  # Same value above and below
    START = "start"  # First row of a group
    END = "end"  # Last row of a group
    START_AND_END = "start_and_end"  # Group of a single row
    RESET = "reset"  # Column is not grouped

    @property
    def starts(self) -> bool:
        return self in (Grouping.START, Grouping.START_AND_END)

    @property
    def ends(self) -> bool:
        return self in (Grouping.END, Grouping.START_AND_END)


def _combine(starts: bool, ends: bool) -> Grouping:
    if starts and ends:
        return Grouping.START_AND_END
    if starts:
        return Grouping.START
    if ends:
        return Grouping.END
    return Grouping.NO_CHANGE


def classify(current: str, previous: str | None, next_value: str | None) -> Grouping:
    """Classify a cell from its own value and the values above and below.

    ``None`` means there is no previous (or next) row; it never equals a
    real value, not even the empty string.

    Example:
        >>> [classify("A", None, "A"), classify("A", "A", "B"), classify("B", "A", None)]
        [<Grouping.START: 'start'>, <Grouping.END: 'end'>, <Grouping.START_AND_END: 'start_and_end'>]
    """
    starts = previous is None or current != previous
    ends = next_value is None or current != next_value
    return _combine(starts, ends)


class GroupTracker:
    """Tracks the outermost group that started and ended on the current row.

    Groups are nested: when group 1 ends on a row, groups 2, 3, ... end on
    that row too even if their own values continue. The tracker must be
    reset before each row and fed columns in ascending column order.
    """

    def __init__(self) -> None:
        # None: no group started (or ended) yet on this row
        self.lowest_started_group: int | None = None
        self.lowest_ended_group: int | None = None

    def reset(self) -> None:
        self.lowest_started_group = None
        self.lowest_ended_group = None

    def classify(
        self,
        current: str,
        previous: str | None,
        next_value: str | None,
        group: int,
    ) -> Grouping:
        """Classify a cell of grouping level ``group``, cascading outer boundaries."""
        if self.lowest_ended_group is not None and self.lowest_ended_group < group:
            ends = True
        elif next_value is None or current != next_value:
            ends = True
            self.lowest_ended_group = group
        else:
            ends = False

        if self.lowest_started_group is not None and self.lowest_started_group < group:
            starts = True
        elif previous is None or current != previous:
            starts = True
            self.lowest_started_group = group
        else:
            starts = False

        return _combine(starts, ends)


def suppress_repeated(value: str, grouping: Grouping) -> str:
    """Default display of a grouped value: shown only on the first row of a group."""
    if grouping in (Grouping.END, Grouping.NO_CHANGE):
        return ""
    return value
