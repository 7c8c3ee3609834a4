"""Split-table rendering: three scrollable panes side by side."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from displaygrid.splitter import compute_partition_widths, split_table_model

if TYPE_CHECKING:
    from displaygrid.core import HtmlTableWriter
    from displaygrid.models import TableModel

logger = logging.getLogger(__name__)

# Stretches the center pane over the space left between the fixed panes
SPLIT_TABLE_SCRIPT = """<script type="text/javascript">
(function() {
  function fitCenterPane() {
    var container = document.getElementById('div_split');
    var left = document.getElementById('div_left');
    var center = document.getElementById('div_center');
    var right = document.getElementById('div_right');
    if (!container || !left || !center || !right) return;
    var width = container.clientWidth - left.clientWidth - right.clientWidth;
    center.style.width = Math.max(width, 0) + 'px';
  }
  if (window.addEventListener) {
    window.addEventListener('load', fitCenterPane, false);
  } else if (window.attachEvent) {
    window.attachEvent('onload', fitCenterPane);
  }
})();
</script>"""

CONTAINER_OPEN = "<div id='div_split' style='position:absolute; width:100%;'>"
DIV_CLOSE = "</div>"

PANES = ("left", "center", "right")


def _pane_open_tag(pane: str, left_width: int) -> str:
    if pane == "left":
        position = "left:0px; top:0px; overflow-x:hidden;"
    elif pane == "center":
        position = f"top:0px; left:{left_width}px; overflow-x:scroll;"
    else:
        position = "top:0px; right:0px; overflow-x:scroll;"
    return f"<div id='div_{pane}' style='position:absolute; {position} overflow-y:hidden;'>"


def _pane_table_style(pane: str, width: int) -> str:
    border = "border-right:0px;" if pane == "left" else "border-left:0px;"
    return f"{border}width:{width}px;"


class SplitTableRenderer:
    """Renders a table as left, center and right panes.

    Each pane is a complete table (caption, header, footer, body) over a
    column partition of the model, placed in its own absolutely positioned
    container. The center and right panes scroll horizontally.
    """

    def __init__(self, writer: HtmlTableWriter):
        """Initialize the renderer.

        Args:
            writer: Writer providing the sink, banners and table fragments
        """
        self.writer = writer

    def render(self, model: TableModel, split_at: Sequence[int]) -> None:
        """Write ``model`` split at the given cut points.

        Args:
            model: Table model to split
            split_at: Cut points ``(left, right)``, see resolve_split_points

        Raises:
            ConfigurationError: If the cut points fall outside the table
        """
        writer = self.writer
        sink = writer.sink
        properties = model.properties

        panes = split_table_model(model, split_at)
        widths = compute_partition_widths(model, split_at)
        offsets = (0, split_at[0], split_at[1])
        table_id = writer.table_id(model)
        # Every pane groups its rows on the grouped columns of the whole table
        group_columns = [h for h in model.header_cells if h.is_grouped]
        logger.debug(f"[{model.id}] split table at {tuple(split_at)}, pane widths {widths}")

        if not model.rows and not properties.empty_list_show_table:
            writer.write_empty_list_message(model)
            return

        sink.write(SPLIT_TABLE_SCRIPT)

        if properties.add_paging_banner_top:
            writer.write_top_banner(model)

        sink.write(CONTAINER_OPEN)
        for pane, pane_model, width, offset in zip(PANES, panes, widths, offsets):
            sink.write(_pane_open_tag(pane, widths[0]))
            writer.write_table_fragment(
                pane_model,
                style=_pane_table_style(pane, width),
                table_id=f"{table_id}_{pane}",
                column_offset=offset,
                group_columns=group_columns,
            )
            sink.write(DIV_CLOSE)

        writer.write_bottom_banner(model)
        sink.write(DIV_CLOSE)
