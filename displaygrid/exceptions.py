"""Exception types raised while rendering tables."""

from __future__ import annotations


class DisplayGridError(Exception):
    """Base class for all displaygrid errors."""


class ConfigurationError(DisplayGridError):
    """Raised when a table attribute (e.g. a split specification) is malformed."""


class ModelInconsistencyError(DisplayGridError):
    """Raised when a row's cells disagree with the table's header cells."""


class SinkWriteError(DisplayGridError):
    """Raised when the output sink rejects a write.

    Whatever was written before the failure stays written.
    """


class DecoratorError(DisplayGridError):
    """Raised when a table decorator hook fails."""

    def __init__(self, hook: str, cause: BaseException):
        self.hook = hook
        super().__init__(f"Decorator hook '{hook}' failed: {cause}")


class TableRenderError(DisplayGridError):
    """Single reportable failure raised at the render-call boundary.

    The specific error is available as ``__cause__``.
    """

    def __init__(self, table_id: str, cause: BaseException):
        self.table_id = table_id
        super().__init__(f"[{table_id}] table rendering failed: {cause}")
