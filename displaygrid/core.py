"""HtmlTableWriter - main entry point for writing tables."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TextIO

from displaygrid.body import TableBodyRenderer
from displaygrid.exceptions import TableRenderError
from displaygrid.output import HtmlSink
from displaygrid.panes import SplitTableRenderer
from displaygrid.splitter import resolve_split_points
from displaygrid.utils.href import Href
from displaygrid.utils.html import (
    TABLE_CLOSE,
    TBODY_CLOSE,
    TBODY_OPEN,
    TFOOT_CLOSE,
    TFOOT_OPEN,
    TH_CLOSE,
    TH_OPEN,
    THEAD_CLOSE,
    THEAD_OPEN,
    TR_CLOSE,
    TR_OPEN,
    anchor,
    hidden_field,
    join_classes,
    open_tag,
)
from displaygrid.utils.params import (
    PARAMETER_EXPORTING,
    PARAMETER_EXPORTTYPE,
    PARAMETER_ORDER,
    PARAMETER_PAGE,
    PARAMETER_SORT,
    PARAMETER_SORTUSINGNAME,
    SORT_ASCENDING,
    SORT_DESCENDING,
    ParamEncoder,
)

if TYPE_CHECKING:
    from displaygrid.decorators.base import TableDecorator
    from displaygrid.models import HeaderCell, TableModel
    from displaygrid.navigation import PageNavigator, PaginatedList

logger = logging.getLogger(__name__)

# Table attribute holding the "left,rightOffset" split specification
SPLIT_AT_ATTRIBUTE = "split_at"

# Copies link parameters into the host form fields, then submits the form
FORM_SCRIPT = """<script type="text/javascript">
function displaytagform(formname, fields){
    var objfrm = document.forms[formname];
    for (j=fields.length-1;j>=0;j--){var f= objfrm.elements[fields[j].f];if (f){f.value=fields[j].v};}
    objfrm.submit();
}
</script>"""


class HtmlTableWriter:
    """Writes a table model as HTML to a text stream.

    Besides the table itself the writer produces the paging banners, the
    export links and, for tables bound to a form, the hidden fields that
    carry the current request parameters.

    Example:
        >>> import io
        >>> from displaygrid import HtmlTableWriter, TableModel
        >>>
        >>> model = TableModel.from_objects(
        ...     [{"city": "Oslo"}, {"city": "Rome"}],
        ...     columns=[{"title": "City", "property_name": "city"}],
        ... )
        >>> out = io.StringIO()
        >>> HtmlTableWriter(out).write_table(model)
        >>> print(out.getvalue())
    """

    def __init__(
        self,
        out: TextIO,
        base_href: Href | str = "",
        export: bool = False,
        navigator: PageNavigator | None = None,
        pagesize: int = 0,
        paginated_list: PaginatedList | None = None,
        attributes: dict[str, Any] | None = None,
        uid: str | None = None,
        decorator: TableDecorator | None = None,
    ):
        """Initialize the writer.

        Args:
            out: Text stream the HTML is written to
            base_href: Link target of the current page, with its request parameters
            export: Whether to write export links below the table
            navigator: Page navigation provider for the paging banners
            pagesize: Page size (0 = table is not paginated)
            paginated_list: Set when sorting and paging happen externally
            attributes: Html attributes of the table tag; ``split_at`` switches
                to split mode (e.g. ``{"split_at": "2,-1"}``)
            uid: Html id of the table when ``attributes`` has none
            decorator: Table decorator applied to the body
        """
        self.sink = HtmlSink(out)
        self.base_href = base_href if isinstance(base_href, Href) else Href(base_href)
        self.export = export
        self.navigator = navigator
        self.pagesize = pagesize
        self.paginated_list = paginated_list
        self.attributes = dict(attributes or {})
        self.uid = uid
        self.decorator = decorator
        self._body = TableBodyRenderer(self.sink, decorator)

    def write_table(self, model: TableModel) -> None:
        """Write ``model`` with its banners.

        Args:
            model: Sorted and paginated table model

        Raises:
            TableRenderError: If anything fails; the specific error
                (ConfigurationError, ModelInconsistencyError, SinkWriteError,
                DecoratorError, ...) is the ``__cause__``
        """
        logger.debug(f"[{model.id}] write_table called")
        try:
            raw_spec = self.attributes.get(SPLIT_AT_ATTRIBUTE)
            if raw_spec is not None:
                split_at = resolve_split_points(model, raw_spec)
                SplitTableRenderer(self).render(model, split_at)
            else:
                self._write_single_table(model)
        except Exception as e:
            raise TableRenderError(model.id, e) from e
        logger.debug(f"[{model.id}] write_table end")

    def _write_single_table(self, model: TableModel) -> None:
        properties = model.properties

        if not model.rows and not properties.empty_list_show_table:
            self.write_empty_list_message(model)
            return

        if properties.add_paging_banner_top:
            self.write_top_banner(model)

        self.write_table_fragment(model)
        self.write_bottom_banner(model)

    def table_id(self, model: TableModel) -> str:
        """Html id of the table: the id attribute, else uid, else the model id."""
        return self.attributes.get("id") or self.uid or model.id

    def table_open_tag(self, style: str | None = None, table_id: str | None = None) -> str:
        attributes = {k: v for k, v in self.attributes.items() if k != SPLIT_AT_ATTRIBUTE}
        if table_id is not None:
            attributes["id"] = table_id
        elif "id" not in attributes and self.uid is not None:
            attributes["id"] = self.uid
        if style is not None:
            attributes["style"] = style
        return open_tag("table", attributes)

    def write_table_fragment(
        self,
        model: TableModel,
        style: str | None = None,
        table_id: str | None = None,
        column_offset: int = 0,
        group_columns: Sequence[HeaderCell] | None = None,
    ) -> None:
        """Write the table element: caption, header, footer and body.

        Args:
            model: Table model or a column partition of one
            style: Style attribute of the table tag
            table_id: Html id overriding the writer's
            column_offset: Position of the model's first column in the full table
            group_columns: Grouped header cells of the full table (split mode)
        """
        sink = self.sink
        sink.write(self.table_open_tag(style, table_id))

        if model.caption is not None:
            sink.write("<caption>" + model.caption + "</caption>")

        if model.properties.show_header:
            self.write_table_header(model, column_offset)

        # tfoot goes before tbody
        if model.footer is not None:
            sink.write(TFOOT_OPEN)
            sink.write(model.footer)
            sink.write(TFOOT_CLOSE)

        sink.write(TBODY_OPEN)
        self._body.render(model, column_offset, group_columns)
        sink.write(TBODY_CLOSE)
        sink.write(TABLE_CLOSE)

        if self.decorator is not None:
            self._body.finish()

    def write_table_header(self, model: TableModel, column_offset: int = 0) -> None:
        """Write the thead row, with sorting links on sortable columns."""
        logger.debug(f"[{model.id}] writing table header")
        sink = self.sink
        properties = model.properties

        sink.write(THEAD_OPEN)
        sink.write(TR_OPEN)

        if model.is_empty():
            sink.write(TH_OPEN)
            sink.write(TH_CLOSE)

        for header in model.header_cells:
            classes = join_classes(
                header.header_attributes.get("class"),
                header.header_classes,
                properties.css_sortable if header.sortable else None,
                properties.css_sorted if header.already_sorted else None,
                properties.css_order(model.sort_order_ascending)
                if header.already_sorted
                else None,
            )
            sink.write(open_tag("th", {**header.header_attributes, "class": classes}))

            title = header.title
            if header.sortable:
                title = anchor(str(self.sorting_href(model, header, column_offset)), title)
            sink.write(title)
            sink.write(TH_CLOSE)

        sink.write(TR_CLOSE)
        sink.write(THEAD_CLOSE)

    def sorting_href(
        self, model: TableModel, header: HeaderCell, column_offset: int = 0
    ) -> Href:
        """Build the link that sorts the table by ``header``.

        Args:
            model: Table model
            header: Sortable header cell
            column_offset: Position of the model's first column in the full table

        Returns:
            Href preserving the current request parameters
        """
        properties = model.properties
        href = self.base_href.with_form(model.form)

        if self.paginated_list is None:
            encoder = ParamEncoder(model.id)
            if not model.local_sort and header.sort_name is not None:
                href = href.with_param(encoder.encode(PARAMETER_SORT), header.sort_name)
                href = href.with_param(encoder.encode(PARAMETER_SORTUSINGNAME), 1)
            else:
                href = href.with_param(
                    encoder.encode(PARAMETER_SORT), header.column_number + column_offset
                )

            if header.default_sort_order is not None:
                default_ascending = header.default_sort_order == "ascending"
                if header.already_sorted:
                    ascending = not model.sort_order_ascending
                else:
                    ascending = default_ascending
            else:
                ascending = not (header.already_sorted and model.sort_order_ascending)

            order = SORT_ASCENDING if ascending else SORT_DESCENDING
            href = href.with_param(encoder.encode(PARAMETER_ORDER), order)

            # A new sort order over the whole list starts again from page 1
            if model.sort_full_table or not model.local_sort:
                href = href.with_param(encoder.encode(PARAMETER_PAGE), 1)
        else:
            if properties.pagination_skip_page_number_in_sort:
                href = href.without_param(properties.pagination_page_number_param)

            sort_property = header.sort_property or header.property_name or ""
            href = href.with_param(properties.pagination_sort_param, sort_property)

            if header.already_sorted and model.sort_order_ascending:
                direction = properties.pagination_desc_value
            else:
                direction = properties.pagination_asc_value
            href = href.with_param(properties.pagination_sort_direction_param, direction)

            if self.paginated_list.search_id is not None:
                href = href.with_param(
                    properties.pagination_search_id_param, self.paginated_list.search_id
                )

        return href

    def write_top_banner(self, model: TableModel) -> None:
        """Write form fields (for form-bound tables) and the paging banner."""
        if model.form is not None:
            self._write_form_fields(model)
            self.sink.write(FORM_SCRIPT)
        self.write_search_result_and_navigation(model)

    def write_bottom_banner(self, model: TableModel) -> None:
        """Write the paging banner (if configured) and the export links."""
        if model.properties.add_paging_banner_bottom:
            self.write_search_result_and_navigation(model)

        if self.export and model.rows:
            self._write_export_links(model)

    def write_empty_list_message(self, model: TableModel) -> None:
        self.sink.write(model.properties.empty_list_message)

    def write_search_result_and_navigation(self, model: TableModel) -> None:
        """Write the search results summary and the page links.

        Nothing is written unless a navigator is set and the table is
        paginated (internally, with a page size, or externally).
        """
        if self.navigator is None:
            return
        if self.paginated_list is None and self.pagesize == 0:
            return

        properties = model.properties
        href = self.base_href.with_form(model.form)

        self.sink.write(self.navigator.search_results_summary())

        if self.paginated_list is None:
            page_parameter = ParamEncoder(model.id).encode(PARAMETER_PAGE)
        else:
            page_parameter = properties.pagination_page_number_param
            search_id = self.paginated_list.search_id
            search_id_param = properties.pagination_search_id_param
            if search_id is not None and search_id_param not in href.parameters:
                href = href.with_param(search_id_param, search_id)

        self.sink.write(self.navigator.page_navigation_bar(href, page_parameter))

    def _write_form_fields(self, model: TableModel) -> None:
        encoder = ParamEncoder(model.id)
        parameters = self.base_href.parameters
        for name in (PARAMETER_ORDER, PARAMETER_PAGE, PARAMETER_SORT):
            parameters.setdefault(encoder.encode(name), [""])

        for name, values in parameters.items():
            for value in values:
                self.sink.write(hidden_field(name, value))

    def _write_export_links(self, model: TableModel) -> None:
        properties = model.properties
        encoder = ParamEncoder(model.id)

        links = []
        for export_format in properties.export_formats:
            if not export_format.enabled:
                continue
            href = self.base_href.with_param(encoder.encode(PARAMETER_EXPORTTYPE), export_format.code)
            href = href.with_param(PARAMETER_EXPORTING, 1)
            links.append(anchor(str(href), export_format.label))

        self.sink.write(
            properties.export_banner.replace(
                "{0}", properties.export_banner_separator.join(links)
            )
        )
