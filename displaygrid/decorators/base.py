"""Base class for table decorators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from displaygrid.grouping import Grouping, suppress_repeated

if TYPE_CHECKING:
    from displaygrid.models import TableModel


@dataclass(frozen=True)
class RowContext:
    """State of the row being rendered, handed to every row-level hook."""

    obj: Any  # Backing object of the row
    view_index: int  # 0-based row number on the page
    list_index: int  # Row number plus the page offset
    is_last_row: bool


class TableDecorator:
    """Hooks invoked while a table body is rendered.

    Every hook has a neutral default, so subclasses override only what they
    need. Hooks returning a string write it to the output as-is (``None``
    writes nothing).

    Order for each row: ``init_row``, then ``start_of_group`` /
    ``end_of_group`` / ``display_grouped_value`` for grouped columns, then
    ``start_row``, the row markup and ``finish_row``. ``init`` runs before
    the first row of every body render and ``finish`` after the table.
    """

    def init(self, model: TableModel) -> None:
        """Reset decorator state for a new render of ``model``."""

    def init_row(self, ctx: RowContext) -> None:
        """Called once the row is known, before any group hook."""

    def start_row(self, ctx: RowContext) -> str | None:
        """Markup written before the row's ``<tr>``."""
        return None

    def finish_row(self, ctx: RowContext) -> str | None:
        """Markup written after the row's ``</tr>``."""
        return None

    def add_row_class(self, ctx: RowContext) -> str | None:
        """Extra css class for the row's ``<tr>``."""
        return None

    def add_row_id(self, ctx: RowContext) -> str | None:
        """Id attribute for the row's ``<tr>``."""
        return None

    def start_of_group(self, ctx: RowContext, value: str, group: int) -> None:
        """A group of level ``group`` starts on this row."""

    def end_of_group(self, ctx: RowContext, value: str, group: int) -> None:
        """A group of level ``group`` ends on this row."""

    def display_grouped_value(
        self,
        ctx: RowContext,
        value: str,
        grouping: Grouping,
        column_number: int,
    ) -> str:
        """Value displayed for a grouped cell. Shows every value by default."""
        return value

    def finish(self) -> None:
        """Called after the table has been written."""


class NullDecorator(TableDecorator):
    """Behaviour of a table rendered without a decorator.

    Grouped values are shown on the first row of their group only.
    """

    def display_grouped_value(
        self,
        ctx: RowContext,
        value: str,
        grouping: Grouping,
        column_number: int,
    ) -> str:
        return suppress_repeated(value, grouping)
