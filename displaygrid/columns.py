"""Columns bound to a row: cell value computation and td tags."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from displaygrid.models import Cell, HeaderCell, Row
from displaygrid.utils.href import Href
from displaygrid.utils.html import TD_CLOSE, anchor, escape, open_tag

ELLIPSIS = "..."


def lookup_property(obj: Any, name: str | None) -> Any:
    """Look up a (possibly dotted) property on an object.

    Each step tries a mapping key first, then an attribute. Missing
    properties and ``None`` along the path resolve to ``None``.

    Example:
        >>> lookup_property({"owner": {"name": "ann"}}, "owner.name")
        'ann'
    """
    if name is None:
        return obj
    value = obj
    for part in name.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


class Column:
    """A header cell bound to one row's cell."""

    def __init__(self, header_cell: HeaderCell, cell: Cell, row: Row):
        self.header_cell = header_cell
        self.cell = cell
        self.row = row

    def raw_value(self) -> Any:
        if self.cell.static_value is not None:
            return self.cell.static_value
        if self.header_cell.property_name is None:
            return None
        return lookup_property(self.row.obj, self.header_cell.property_name)

    def value(self) -> str:
        """Compute the displayed value: formatted, escaped, chopped and linked.

        The result depends only on the row object and the column definition,
        so calling it twice returns the same string.
        """
        header = self.header_cell
        raw = self.raw_value()
        if raw is None:
            return ""

        text = header.value_format.format(raw) if header.value_format else str(raw)

        if header.max_length is not None and len(text) > header.max_length:
            chopped = text[: header.max_length] + ELLIPSIS
            if header.escape_xml:
                text = f'<abbr title="{escape(text)}">{escape(chopped)}</abbr>'
            else:
                text = f'<abbr title="{escape(text)}">{chopped}</abbr>'
        elif header.escape_xml:
            text = escape(text)

        if header.href is not None:
            href = Href(header.href)
            if header.param_id is not None:
                param_value = lookup_property(self.row.obj, header.param_property)
                href = href.with_param(header.param_id, "" if param_value is None else param_value)
            text = anchor(str(href), text)

        return text

    def open_tag(self) -> str:
        return open_tag("td", self.cell.attributes)

    def close_tag(self) -> str:
        return TD_CLOSE

    def __repr__(self) -> str:
        return f"Column({self.header_cell.column_number}, row={self.row.row_number})"
