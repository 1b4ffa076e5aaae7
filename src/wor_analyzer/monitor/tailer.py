"""Polling tailer that feeds a growing log file into an interpreter."""

from __future__ import annotations

import codecs
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from wor_analyzer.engine.interpreter import ChunkResult, LogInterpreter

logger = logging.getLogger(__name__)


class LogTailer:
    """Follows one log file and submits appended text as chunks.

    Uses polling for maximum Windows compatibility. A shrinking file is
    treated as truncated or replaced: the interpreter is reset and the
    file is replayed from the start.
    """

    def __init__(
        self,
        path: str,
        interpreter: LogInterpreter,
        from_start: bool = True,
    ) -> None:
        self.path = Path(path)
        self.interpreter = interpreter
        self._from_start = from_start
        self._position: Optional[int] = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._running = False

    @property
    def position(self) -> int:
        return self._position or 0

    def start(self) -> None:
        """Reset the interpreter and choose the initial read position."""
        self.interpreter.reset()
        self._decoder.reset()
        if self._from_start or not self.path.exists():
            self._position = 0
        else:
            self._position = self.path.stat().st_size
        logger.info("Tailing %s from byte %d", self.path, self._position)

    def poll_once(self) -> Optional[ChunkResult]:
        """Submit any newly appended text. Returns None when nothing was read."""
        if self._position is None:
            self.start()
        if not self.path.exists():
            return None

        size = self.path.stat().st_size
        if size < self._position:
            logger.info("%s was truncated or replaced, replaying from start", self.path)
            self.interpreter.reset()
            self._decoder.reset()
            self._position = 0
        if size == self._position:
            return None

        with open(self.path, "rb") as f:
            f.seek(self._position)
            data = f.read(size - self._position)
        self._position += len(data)

        text = self._decoder.decode(data)
        if not text:
            return None
        return self.interpreter.process_chunk(text)

    def run(
        self,
        on_update: Callable[[ChunkResult], None],
        poll_interval: float = 1.0,
    ) -> None:
        """Run the polling loop. Calls on_update for every non-empty read."""
        self._running = True
        if self._position is None:
            self.start()

        while self._running:
            try:
                result = self.poll_once()
                if result is not None:
                    on_update(result)
            except OSError as e:
                logger.error("Error reading %s: %s", self.path, e)

            time.sleep(poll_interval)

    def stop(self) -> None:
        self._running = False
