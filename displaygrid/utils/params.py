"""Page-unique request parameter names for table links."""

from __future__ import annotations

# Short parameter names, made unique per table by ParamEncoder
PARAMETER_SORT = "s"
PARAMETER_PAGE = "p"
PARAMETER_ORDER = "o"
PARAMETER_EXPORTTYPE = "e"
PARAMETER_SORTUSINGNAME = "n"

# Marker added to every export link; not table specific ("export" in hex)
PARAMETER_EXPORTING = "6578706f7274"

# Sort order codes used in the order parameter
SORT_DESCENDING = 1
SORT_ASCENDING = 2


class ParamEncoder:
    """Encode parameter names so that several tables can share a page.

    Every name is prefixed with ``d-<checksum>-`` where the checksum is
    derived from the table id.

    Example:
        >>> ParamEncoder("row").encode("p")
        'd-16544-p'
    """

    def __init__(self, table_id: str):
        checksum = 17
        for char in f"x-{table_id}":
            # Wrap like a signed 32 bit int; only the low bits survive the mask
            checksum = (3 * checksum + ord(char)) & 0xFFFFFFFF
        checksum &= 0x7FFFFF
        self.prefix = f"d-{checksum}-"

    def encode(self, parameter_name: str) -> str:
        """Return the page-unique form of ``parameter_name``."""
        return f"{self.prefix}{parameter_name}"
