"""Table body rendering with group detection."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from displaygrid.columns import Column
from displaygrid.decorators.base import NullDecorator, RowContext, TableDecorator
from displaygrid.exceptions import DecoratorError, DisplayGridError, ModelInconsistencyError
from displaygrid.grouping import Grouping, GroupTracker
from displaygrid.utils.html import TD_CLOSE, TD_OPEN, TR_CLOSE, escape, join_classes, open_tag

if TYPE_CHECKING:
    from displaygrid.models import HeaderCell, Row, TableModel
    from displaygrid.output import HtmlSink

logger = logging.getLogger(__name__)


@dataclass
class CellStruct:
    """Value of one cell while its row is inside the rendering window."""

    column: Column
    body_value: str  # Formatted value, before decoration
    decorated_value: str  # Value actually written
    grouping: Grouping = Grouping.RESET


@dataclass
class RowValues:
    """Memoized values of one row."""

    cells: list[CellStruct | None]  # Rendered columns, indexed by column number
    groups: list[str]  # Grouped columns of the whole table, in column order


class TableBodyRenderer:
    """Writes the rows of a table body.

    Rows are read through a window of three rows (previous, current, next)
    so that a grouped cell can be compared with the cells above and below
    it before the current row is written. Every cell value is computed once,
    when its row first enters the window.

    Example:
        >>> sink = HtmlSink(io.StringIO())
        >>> TableBodyRenderer(sink).render(model)
    """

    def __init__(self, sink: HtmlSink, decorator: TableDecorator | None = None):
        """Initialize the renderer.

        Args:
            sink: Output the rows are written to
            decorator: Table decorator (None renders without decoration)
        """
        self.sink = sink
        self.decorator = decorator if decorator is not None else NullDecorator()

    def render(
        self,
        model: TableModel,
        split_offset: int = 0,
        group_columns: Sequence[HeaderCell] | None = None,
    ) -> None:
        """Write the body rows of ``model``.

        Args:
            model: Table model (or a partition of one)
            split_offset: Index of the model's first column in the rows' cells;
                non-zero when rendering the center or right pane of a split table
            group_columns: Grouped header cells of the unsplit table, numbered
                by their position in the rows' cells. Group boundaries (and the
                group hooks) follow these columns even when they lie outside
                ``model``, so every pane of a split table groups its rows alike.
                Defaults to the grouped columns of ``model``.

        Raises:
            ModelInconsistencyError: If a row has no cell for a header column
            DecoratorError: If a decorator hook fails
            SinkWriteError: If the output rejects a write
        """
        logger.debug(f"[{model.id}] rendering body, split offset {split_offset}")
        self._call_hook("init", model)

        if group_columns is None:
            groups = [
                (h.column_number + split_offset, h) for h in model.header_cells if h.is_grouped
            ]
        else:
            groups = [(h.column_number, h) for h in group_columns if h.is_grouped]
        groups.sort(key=lambda item: item[0])

        tracker = GroupTracker()
        rows = model.iter_rows()
        current_values: RowValues | None = None
        next_values: RowValues | None = None
        next_row = next(rows, None)

        while next_row is not None:
            current_row = next_row
            previous_values = current_values
            if next_values is not None:
                current_values = next_values
            else:
                current_values = self._row_values(model, current_row, split_offset, groups)

            # Peek one row ahead so that group ends are known for this row
            next_row = next(rows, None)
            if next_row is not None:
                next_values = self._row_values(model, next_row, split_offset, groups)
            else:
                next_values = None

            ctx = RowContext(
                obj=current_row.obj,
                view_index=current_row.row_number,
                list_index=current_row.row_number + model.page_offset,
                is_last_row=next_row is None,
            )
            self._call_hook("init_row", ctx)

            tracker.reset()
            groupings: dict[int, Grouping] = {}
            for position, (cell_index, header) in enumerate(groups):
                value = current_values.groups[position]
                grouping = tracker.classify(
                    value,
                    previous_values.groups[position] if previous_values is not None else None,
                    next_values.groups[position] if next_values is not None else None,
                    header.group,
                )
                if grouping.starts:
                    self._call_hook("start_of_group", ctx, value, header.group)
                if grouping.ends:
                    self._call_hook("end_of_group", ctx, value, header.group)
                groupings[cell_index] = grouping

            structs = []
            for header in model.header_cells:
                struct = self._lookup(current_values.cells, header, current_row)
                struct.grouping = groupings.get(
                    header.column_number + split_offset, Grouping.RESET
                )
                struct.decorated_value = struct.body_value
                if struct.grouping is not Grouping.RESET:
                    struct.decorated_value = self._call_hook(
                        "display_grouped_value",
                        ctx,
                        struct.body_value,
                        struct.grouping,
                        header.column_number,
                    )
                structs.append(struct)

            self._write_row(model, current_row, ctx, structs)

        if not model.rows:
            self.sink.write(
                model.properties.empty_list_row_message.replace(
                    "{0}", str(model.number_of_columns)
                )
            )

    def finish(self) -> None:
        """Run the decorator's table-level ``finish`` hook."""
        self._call_hook("finish")

    def _row_values(
        self,
        model: TableModel,
        row: Row,
        split_offset: int,
        groups: list[tuple[int, HeaderCell]],
    ) -> RowValues:
        """Compute the cell values of ``row``, once per row."""
        cells: list[CellStruct | None] = [None] * model.number_of_columns
        for header in model.header_cells:
            number = header.column_number
            cell_index = number + split_offset
            if not 0 <= number < len(cells) or cell_index >= len(row.cells):
                raise ModelInconsistencyError(
                    f"[{model.id}] row {row.row_number} has no cell for column {number} "
                    f"(offset {split_offset}, {len(row.cells)} cells, "
                    f"{model.number_of_columns} header cells)"
                )
            column = Column(header, row.cells[cell_index], row)
            body_value = column.value()
            cells[number] = CellStruct(column, body_value, body_value)

        group_values = []
        for cell_index, header in groups:
            number = cell_index - split_offset
            rendered = cells[number] if 0 <= number < len(cells) else None
            if rendered is not None:
                group_values.append(rendered.body_value)
                continue
            # Grouped column of another pane
            if not 0 <= cell_index < len(row.cells):
                raise ModelInconsistencyError(
                    f"[{model.id}] row {row.row_number} has no cell for grouped "
                    f"column {cell_index} ({len(row.cells)} cells)"
                )
            group_values.append(Column(header, row.cells[cell_index], row).value())
        return RowValues(cells, group_values)

    def _lookup(
        self, values: list[CellStruct | None], header: HeaderCell, row: Row
    ) -> CellStruct:
        number = header.column_number
        struct = values[number] if 0 <= number < len(values) else None
        if struct is None:
            raise ModelInconsistencyError(
                f"row {row.row_number} has no value for column {number}"
            )
        return struct

    def _write_row(
        self,
        model: TableModel,
        row: Row,
        ctx: RowContext,
        structs: list[CellStruct],
    ) -> None:
        sink = self.sink
        sink.write(self._call_hook("start_row", ctx))
        sink.write(self._row_open_tag(model, row, ctx))

        for struct in structs:
            sink.write(struct.column.open_tag())
            sink.write(struct.decorated_value)
            sink.write(struct.column.close_tag())

        if model.is_empty():
            sink.write(TD_OPEN)
            sink.write(escape(row.obj))
            sink.write(TD_CLOSE)

        sink.write(TR_CLOSE)
        sink.write(self._call_hook("finish_row", ctx))

    def _row_open_tag(self, model: TableModel, row: Row, ctx: RowContext) -> str:
        attributes: dict[str, Any] = dict(row.attributes)
        attributes["class"] = join_classes(
            model.properties.css_row(row.row_number),
            row.attributes.get("class"),
            self._call_hook("add_row_class", ctx),
        )
        row_id = self._call_hook("add_row_id", ctx)
        if row_id is not None:
            attributes["id"] = row_id
        return open_tag("tr", attributes)

    def _call_hook(self, hook: str, *args: Any) -> Any:
        try:
            return getattr(self.decorator, hook)(*args)
        except DisplayGridError:
            raise
        except Exception as e:
            raise DecoratorError(hook, e) from e
