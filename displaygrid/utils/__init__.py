"""Utility functions for displaygrid.

Provides HTML fragment helpers, page-unique parameter names and link targets.
"""

from displaygrid.utils.href import Href
from displaygrid.utils.html import (
    anchor,
    escape,
    hidden_field,
    join_classes,
    open_tag,
    render_attributes,
)
from displaygrid.utils.params import ParamEncoder

__all__ = [
    # HTML helpers
    "anchor",
    "escape",
    "hidden_field",
    "join_classes",
    "open_tag",
    "render_attributes",
    # Links and parameters
    "Href",
    "ParamEncoder",
]
