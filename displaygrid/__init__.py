"""displaygrid: HTML data tables with grouping, paging banners and split panes.

displaygrid writes one page of a sorted, paginated list as an HTML table.
Grouped columns hide repeated values (or feed a decorator that writes
subtotals), and wide tables can be split into left/center/right panes.

Example:
    >>> import io
    >>> from displaygrid import HtmlTableWriter, TableModel
    >>>
    >>> model = TableModel.from_objects(
    ...     rows,
    ...     columns=[
    ...         {"title": "Region", "property_name": "region", "group": 1},
    ...         {"title": "Amount", "property_name": "amount", "total": True},
    ...     ],
    ... )
    >>> out = io.StringIO()
    >>> HtmlTableWriter(out, attributes={"class": "list"}).write_table(model)
"""

from displaygrid.body import CellStruct, TableBodyRenderer
from displaygrid.core import HtmlTableWriter
from displaygrid.decorators import NullDecorator, RowContext, TableDecorator, TotalsDecorator
from displaygrid.exceptions import (
    ConfigurationError,
    DecoratorError,
    DisplayGridError,
    ModelInconsistencyError,
    SinkWriteError,
    TableRenderError,
)
from displaygrid.grouping import Grouping, GroupTracker, classify
from displaygrid.models import (
    Cell,
    ExportFormat,
    HeaderCell,
    Row,
    TableModel,
    TableProperties,
)
from displaygrid.navigation import PageNavigator, PaginatedList
from displaygrid.splitter import (
    compute_partition_widths,
    resolve_split_points,
    split_table_model,
)

__version__ = "0.1.0"

__all__ = [
    "HtmlTableWriter",
    "TableBodyRenderer",
    "CellStruct",
    # Model
    "TableModel",
    "HeaderCell",
    "Row",
    "Cell",
    "TableProperties",
    "ExportFormat",
    # Grouping
    "Grouping",
    "GroupTracker",
    "classify",
    # Decorators
    "TableDecorator",
    "NullDecorator",
    "TotalsDecorator",
    "RowContext",
    # Splitting
    "split_table_model",
    "resolve_split_points",
    "compute_partition_widths",
    # Navigation
    "PageNavigator",
    "PaginatedList",
    # Errors
    "DisplayGridError",
    "ConfigurationError",
    "ModelInconsistencyError",
    "SinkWriteError",
    "DecoratorError",
    "TableRenderError",
]
