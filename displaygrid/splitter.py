"""Splitting a wide table into left, center and right panes."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from displaygrid.exceptions import ConfigurationError

if TYPE_CHECKING:
    from displaygrid.models import TableModel

logger = logging.getLogger(__name__)

# "width:120px", "width: 120px;" ... the pixel width is the trailing token
_PIXEL_WIDTH = re.compile(r"(\d+)\s*px\s*;?\s*$", re.IGNORECASE)


def _check_split_points(split_at: Sequence[int], total_columns: int) -> tuple[int, int]:
    if len(split_at) != 2:
        raise ConfigurationError(f"Expected two split points, got {len(split_at)}")
    left, right = split_at
    if not 0 <= left <= right <= total_columns:
        raise ConfigurationError(
            f"Split points ({left}, {right}) must satisfy 0 <= left <= right <= {total_columns}"
        )
    return left, right


def resolve_split_points(model: TableModel, raw_spec: str) -> tuple[int, int]:
    """Parse a ``"left,rightOffset"`` split specification.

    The first element is the number of columns in the left pane. The second
    is added to the column count, so ``-1`` leaves one column in the right
    pane.

    Args:
        model: Table to split
        raw_spec: Comma separated pair, e.g. ``"2,-1"``

    Returns:
        Absolute cut points ``(left, right)``

    Raises:
        ConfigurationError: If the specification is not two integers or the cut
            points fall outside the table

    Example:
        >>> resolve_split_points(five_column_model, "2,-1")
        (2, 4)
    """
    parts = [part.strip() for part in str(raw_spec).split(",")]
    if len(parts) != 2:
        raise ConfigurationError(
            f"Split specification {raw_spec!r} must have exactly two elements"
        )
    try:
        left = int(parts[0])
        right_offset = int(parts[1])
    except ValueError as e:
        raise ConfigurationError(
            f"Split specification {raw_spec!r} must contain integers"
        ) from e

    total_columns = model.number_of_columns
    split_at = _check_split_points((left, total_columns + right_offset), total_columns)
    logger.debug(f"[{model.id}] split specification {raw_spec!r} resolved to {split_at}")
    return split_at


def split_table_model(
    model: TableModel, split_at: Sequence[int]
) -> tuple[TableModel, TableModel, TableModel]:
    """Partition a table into three column views.

    Left keeps columns ``[0, split_at[0])``; center ``[split_at[0],
    split_at[1])`` and right ``[split_at[1], total)`` are renumbered from 0.
    Rows are shared with ``model``, which is left unchanged.

    Raises:
        ConfigurationError: If the split points fall outside the table
    """
    left, right = _check_split_points(split_at, model.number_of_columns)
    total_columns = model.number_of_columns
    return (
        model.partition(0, left),
        model.partition(left, right),
        model.partition(right, total_columns),
    )


def parse_pixel_width(style: str | None) -> int:
    """Return the pixel width at the end of a style value, or 0.

    Example:
        >>> parse_pixel_width("text-align:right;width:120px")
        120
    """
    if not style:
        return 0
    match = _PIXEL_WIDTH.search(style)
    return int(match.group(1)) if match else 0


def compute_partition_widths(
    model: TableModel, split_at: Sequence[int]
) -> tuple[int, int, int]:
    """Compute the pixel width of each pane.

    The widths come from the ``style`` attribute of the cells in the first
    row only; tables whose rows declare different widths get the first row's
    layout.

    Args:
        model: Unsplit table model
        split_at: Cut points as returned by resolve_split_points

    Returns:
        Tuple of (left, center, right) widths
    """
    left, right = _check_split_points(split_at, model.number_of_columns)
    first_row = next(model.iter_rows(), None)
    if first_row is None:
        return 0, 0, 0

    widths = [parse_pixel_width(cell.attributes.get("style")) for cell in first_row.cells]
    left_width = sum(widths[:left])
    center_width = sum(widths[:right]) - left_width
    right_width = sum(widths) - left_width - center_width
    return left_width, center_width, right_width
