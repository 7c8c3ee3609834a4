"""HTML fragments and helpers shared by the table writers."""

from __future__ import annotations

import html
from collections.abc import Iterable, Mapping

TABLE_OPEN = "<table"
TABLE_CLOSE = "</table>"
THEAD_OPEN = "<thead>"
THEAD_CLOSE = "</thead>"
TBODY_OPEN = "<tbody>"
TBODY_CLOSE = "</tbody>"
TFOOT_OPEN = "<tfoot>"
TFOOT_CLOSE = "</tfoot>"
TR_OPEN = "<tr>"
TR_CLOSE = "</tr>"
TH_OPEN = "<th>"
TH_CLOSE = "</th>"
TD_OPEN = "<td>"
TD_CLOSE = "</td>"


def escape(value: object) -> str:
    """Escape a value for use in HTML text or a double-quoted attribute."""
    return html.escape("" if value is None else str(value), quote=True)


def render_attributes(attributes: Mapping[str, object] | None) -> str:
    """Render ``{"class": "odd", "id": "x"}`` as `` class="odd" id="x"``.

    Attributes with a ``None`` value are skipped. Order follows the mapping.
    """
    if not attributes:
        return ""
    return "".join(
        f' {name}="{escape(value)}"' for name, value in attributes.items() if value is not None
    )


def join_classes(*groups: Iterable[str | None] | str | None) -> str | None:
    """Merge css class names, dropping blanks and duplicates.

    Returns None when nothing is left so that the attribute is omitted.
    """
    classes: list[str] = []
    for group in groups:
        if group is None:
            continue
        names = group.split() if isinstance(group, str) else group
        for name in names:
            if name and name not in classes:
                classes.append(name)
    return " ".join(classes) if classes else None


def open_tag(name: str, attributes: Mapping[str, object] | None = None) -> str:
    """Build an opening tag such as ``<td class="x">``."""
    return f"<{name}{render_attributes(attributes)}>"


def anchor(href: str, text: str) -> str:
    """Build a link. ``text`` is inserted as-is; ``href`` is escaped."""
    return f'<a href="{escape(href)}">{text}</a>'


def hidden_field(name: str, value: object) -> str:
    """Build a hidden form input."""
    return f'<input type="hidden" name="{escape(name)}" value="{escape(value)}"/>'
