"""Output sink wrapping the caller's text stream."""

from __future__ import annotations

from typing import TextIO

from displaygrid.exceptions import SinkWriteError


class HtmlSink:
    """Writes HTML fragments to a text stream, in order and unbuffered.

    ``None`` and empty fragments are skipped. A failing write raises
    SinkWriteError; nothing is retried.
    """

    def __init__(self, out: TextIO):
        self.out = out

    def write(self, fragment: object) -> None:
        if fragment is None:
            return
        text = str(fragment)
        if not text:
            return
        try:
            self.out.write(text)
        except (OSError, ValueError) as e:
            # ValueError: write to a closed stream
            raise SinkWriteError(f"Failed to write to output: {e}") from e
