"""Pydantic models for the table model rendered by displaygrid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

SortOrder = Literal["ascending", "descending"]

# Group id of a column that does not take part in grouping
NO_GROUP = -1


class ExportFormat(BaseModel):
    """An export format offered in the export banner."""

    name: str = Field(description="Format name (csv, excel, xml, ...)")
    code: int = Field(ge=0, description="Code sent in the export type parameter")
    label: str = Field(description="HTML label of the export link")
    enabled: bool = Field(default=True, description="Show a link for this format")


def _default_export_formats() -> list[ExportFormat]:
    return [
        ExportFormat(name="csv", code=1, label='<span class="export csv">CSV </span>'),
        ExportFormat(name="excel", code=2, label='<span class="export excel">Excel </span>'),
        ExportFormat(name="xml", code=3, label='<span class="export xml">XML </span>'),
        ExportFormat(
            name="rtf", code=4, label='<span class="export rtf">RTF </span>', enabled=False
        ),
        ExportFormat(
            name="pdf", code=5, label='<span class="export pdf">PDF </span>', enabled=False
        ),
    ]


class TableProperties(BaseModel):
    """Rendering options for a table."""

    show_header: bool = Field(default=True, description="Render the thead section")
    empty_list_show_table: bool = Field(
        default=False, description="Render the table structure even without rows"
    )
    empty_list_message: str = Field(
        default='<span class="empty">Nothing found to display.</span>',
        description="Written instead of the table when there are no rows",
    )
    empty_list_row_message: str = Field(
        default='<tr class="empty"><td colspan="{0}">Nothing found to display.</td></tr>',
        description="Body row written for an empty table; {0} is the column count",
    )
    add_paging_banner_top: bool = Field(
        default=True, description="Write search summary and page links above the table"
    )
    add_paging_banner_bottom: bool = Field(
        default=False, description="Write search summary and page links below the table"
    )
    css_odd_row: str = Field(default="odd", description="Class of rows 0, 2, 4, ...")
    css_even_row: str = Field(default="even", description="Class of rows 1, 3, 5, ...")
    css_sortable: str = Field(default="sortable", description="Class of sortable headers")
    css_sorted: str = Field(default="sorted", description="Class of the sorted header")
    css_order_ascending: str = Field(default="order1", description="Ascending sort class")
    css_order_descending: str = Field(default="order2", description="Descending sort class")
    export_banner: str = Field(
        default='<div class="exportlinks">Export options: {0}</div>',
        description="Wrapper of the export links; {0} is the joined links",
    )
    export_banner_separator: str = Field(default=" | ", description="Between export links")
    export_formats: list[ExportFormat] = Field(default_factory=_default_export_formats)
    pagination_sort_param: str = Field(default="sort", description="External sort parameter")
    pagination_sort_direction_param: str = Field(
        default="dir", description="External sort direction parameter"
    )
    pagination_page_number_param: str = Field(
        default="page", description="External page number parameter"
    )
    pagination_search_id_param: str = Field(
        default="searchid", description="External search id parameter"
    )
    pagination_asc_value: str = Field(default="asc", description="External ascending value")
    pagination_desc_value: str = Field(default="desc", description="External descending value")
    pagination_skip_page_number_in_sort: bool = Field(
        default=True, description="Drop the page number from external sort links"
    )

    def css_row(self, row_number: int) -> str:
        """Css class for a 0-based row number."""
        return self.css_odd_row if row_number % 2 == 0 else self.css_even_row

    def css_order(self, ascending: bool) -> str:
        return self.css_order_ascending if ascending else self.css_order_descending


class HeaderCell(BaseModel):
    """Column descriptor."""

    column_number: int = Field(ge=0, description="0-based position of the column")
    title: str = Field(default="", description="Header text (HTML)")
    property_name: str | None = Field(
        default=None, description="Attribute or key looked up on the row object"
    )
    group: int = Field(default=NO_GROUP, description="Grouping level, 1 = outermost")
    sortable: bool = False
    sort_name: str | None = Field(default=None, description="Name sent for server-side sorts")
    sort_property: str | None = Field(default=None, description="External sort property")
    default_sort_order: SortOrder | None = None
    already_sorted: bool = Field(default=False, description="The page is sorted by this column")
    header_attributes: dict[str, str] = Field(default_factory=dict)
    header_classes: list[str] = Field(default_factory=list)
    cell_attributes: dict[str, str] = Field(
        default_factory=dict, description="Attributes copied to every cell of the column"
    )
    value_format: str | None = Field(default=None, description="str.format pattern, e.g. {:.2f}")
    max_length: int | None = Field(default=None, ge=1, description="Chop longer values")
    escape_xml: bool = Field(default=True, description="HTML-escape the cell value")
    href: str | None = Field(default=None, description="Link every value to this URL")
    param_id: str | None = Field(default=None, description="Parameter added to the link")
    param_property: str | None = Field(
        default=None, description="Row property used as the link parameter value"
    )
    total: bool = Field(default=False, description="Column is summed by totals decorators")

    @property
    def is_grouped(self) -> bool:
        return self.group != NO_GROUP


class Cell(BaseModel):
    """A cell of a row.

    A cell either carries a static value or defers to the header cell's
    ``property_name``.
    """

    static_value: Any = None
    attributes: dict[str, str] = Field(
        default_factory=dict, description="Per-row html attributes of the cell"
    )


class Row(BaseModel):
    """A row backed by an arbitrary object."""

    obj: Any = Field(description="Backing object of the row")
    row_number: int = Field(ge=0, description="0-based position on the page")
    cells: list[Cell] = Field(default_factory=list)
    attributes: dict[str, str] = Field(default_factory=dict)


class TableModel(BaseModel):
    """One page of table data, already sorted and paginated."""

    id: str = Field(default="row", description="Table id, used to encode parameters")
    header_cells: list[HeaderCell] = Field(default_factory=list)
    rows: list[Row] = Field(default_factory=list)
    page_offset: int = Field(default=0, ge=0, description="List index of the first row")
    caption: str | None = None
    footer: str | None = None
    form: str | None = Field(default=None, description="Name of the host form, if any")
    sort_order_ascending: bool = True
    local_sort: bool = Field(default=True, description="Sorting happens on the page data")
    sort_full_table: bool = Field(default=False, description="Sorting spans every page")
    properties: TableProperties = Field(default_factory=TableProperties)

    @classmethod
    def from_objects(
        cls,
        objects: Iterable[Any],
        columns: Iterable[HeaderCell | Mapping[str, Any]],
        **kwargs: Any,
    ) -> TableModel:
        """Build a model from backing objects and column definitions.

        Column numbers are assigned from the column order. Every cell
        inherits the ``cell_attributes`` of its column.

        Args:
            objects: Backing objects, one per row
            columns: HeaderCell instances or mappings of HeaderCell fields
            **kwargs: Other TableModel fields

        Returns:
            A new TableModel
        """
        header_cells = []
        for index, column in enumerate(columns):
            data = column.model_dump() if isinstance(column, HeaderCell) else dict(column)
            data["column_number"] = index
            header_cells.append(HeaderCell.model_validate(data))

        rows = [
            Row(
                obj=obj,
                row_number=row_number,
                cells=[Cell(attributes=dict(h.cell_attributes)) for h in header_cells],
            )
            for row_number, obj in enumerate(objects)
        ]
        return cls(header_cells=header_cells, rows=rows, **kwargs)

    @property
    def number_of_columns(self) -> int:
        return len(self.header_cells)

    def is_empty(self) -> bool:
        """True if the table has no columns (rows render as a single message cell)."""
        return not self.header_cells

    def iter_rows(self) -> Iterator[Row]:
        """Forward-only iterator over the rows of the page."""
        return iter(self.rows)

    def clone(self) -> TableModel:
        """Shallow copy owning its header list; rows are shared."""
        return self.model_copy(update={"header_cells": list(self.header_cells)})

    def partition(self, start: int, stop: int) -> TableModel:
        """Return a view on columns ``[start, stop)`` numbered from 0.

        Header cells are copied with their new numbers; this model is not
        modified and the rows are shared.
        """
        header_cells = [
            cell.model_copy(update={"column_number": cell.column_number - start})
            for cell in self.header_cells[start:stop]
        ]
        return self.model_copy(update={"header_cells": header_cells})
