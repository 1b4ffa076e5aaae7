"""Reassembles complete lines from arbitrarily split text fragments."""

from __future__ import annotations


class ChunkReassembler:
    """Buffers the trailing partial line between incremental feeds.

    Feeding one stream as N fragments yields exactly the same ordered line
    sequence as feeding it whole. Blank lines are passed through; skipping
    them is the dispatcher's job.
    """

    def __init__(self) -> None:
        self._pending = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline, not yet a complete line."""
        return self._pending

    def feed(self, fragment: str) -> list[str]:
        """Return the newline-terminated lines completed by this fragment."""
        text = self._pending + fragment
        # The last element is the unterminated remainder ("" after a newline)
        *lines, self._pending = text.split("\n")
        return lines

    def flush(self) -> list[str]:
        """Release the buffered partial line as a final line."""
        if not self._pending:
            return []
        remainder = self._pending
        self._pending = ""
        return [remainder]

    def clear(self) -> None:
        self._pending = ""
