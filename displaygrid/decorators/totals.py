"""Decorator writing subtotal rows at group ends and a grand total row."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from displaygrid.columns import lookup_property
from displaygrid.decorators.base import RowContext, TableDecorator
from displaygrid.grouping import Grouping, suppress_repeated
from displaygrid.utils.html import TD_CLOSE, TD_OPEN, TR_CLOSE, escape, open_tag

if TYPE_CHECKING:
    from displaygrid.models import HeaderCell, TableModel


def _as_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class TotalsDecorator(TableDecorator):
    """Sums the columns flagged with ``total=True``.

    After the row that closes a group, a ``<tr class="subtotal">`` row is
    written for every group that ended (innermost first). After the last row
    a ``<tr class="grandtotal">`` row follows when ``show_grand_total`` is set.

    Example:
        >>> writer = HtmlTableWriter(out, decorator=TotalsDecorator())
        >>> writer.write_table(model)
    """

    def __init__(
        self,
        show_grand_total: bool = True,
        number_format: str = "{:.2f}",
        total_label: str = "Total",
        subtotal_class: str = "subtotal",
        grand_total_class: str = "grandtotal",
    ):
        self.show_grand_total = show_grand_total
        self.number_format = number_format
        self.total_label = total_label
        self.subtotal_class = subtotal_class
        self.grand_total_class = grand_total_class
        self._header_cells: list[HeaderCell] = []
        self._grand_total: dict[int, float] = {}
        self._group_totals: dict[int, dict[int, float]] = {}
        self._group_values: dict[int, str] = {}
        self._ended_groups: list[int] = []

    @property
    def _total_columns(self) -> list[HeaderCell]:
        return [h for h in self._header_cells if h.total]

    def init(self, model: TableModel) -> None:
        self._header_cells = list(model.header_cells)
        self._grand_total = {h.column_number: 0.0 for h in self._total_columns}
        self._group_totals = {}
        self._group_values = {}
        self._ended_groups = []

    def start_of_group(self, ctx: RowContext, value: str, group: int) -> None:
        self._group_values[group] = value
        self._group_totals[group] = {h.column_number: 0.0 for h in self._total_columns}

    def end_of_group(self, ctx: RowContext, value: str, group: int) -> None:
        self._ended_groups.append(group)

    def display_grouped_value(
        self,
        ctx: RowContext,
        value: str,
        grouping: Grouping,
        column_number: int,
    ) -> str:
        return suppress_repeated(value, grouping)

    def start_row(self, ctx: RowContext) -> str | None:
        for header in self._total_columns:
            amount = _as_number(lookup_property(ctx.obj, header.property_name))
            self._grand_total[header.column_number] += amount
            for totals in self._group_totals.values():
                totals[header.column_number] += amount
        return None

    def finish_row(self, ctx: RowContext) -> str | None:
        parts = []
        for group in sorted(set(self._ended_groups), reverse=True):
            totals = self._group_totals.pop(group, {})
            label = self._group_values.pop(group, "")
            parts.append(self._total_row(self.subtotal_class, totals, group, label))
        self._ended_groups = []

        if ctx.is_last_row and self.show_grand_total:
            parts.append(self._total_row(self.grand_total_class, self._grand_total))
        return "".join(parts) or None

    def _total_row(
        self,
        css_class: str,
        totals: dict[int, float],
        group: int | None = None,
        label: str = "",
    ) -> str:
        cells = []
        label_written = False
        for header in self._header_cells:
            if header.total:
                amount = totals.get(header.column_number, 0.0)
                cells.append(TD_OPEN + escape(self.number_format.format(amount)) + TD_CLOSE)
            elif group is not None and header.group == group:
                # Group values are already rendered markup
                cells.append(TD_OPEN + label + TD_CLOSE)
            elif group is None and not label_written:
                cells.append(TD_OPEN + escape(self.total_label) + TD_CLOSE)
                label_written = True
            else:
                cells.append(TD_OPEN + TD_CLOSE)
        return open_tag("tr", {"class": css_class}) + "".join(cells) + TR_CLOSE
