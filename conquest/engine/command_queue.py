"""Bounded command inbox between request handlers and the game loop."""

from __future__ import annotations

import logging
import queue
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from conquest.core.commands import Command

logger = logging.getLogger(__name__)


class CommandQueue:
    """Holds at most *maxsize* pending commands.

    When the loop falls behind, new commands are refused rather than
    buffered without limit; the caller learns this from ``push``.
    """

    __slots__ = ("_queue", "_dropped")

    def __init__(self, maxsize: int = 256) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self._queue: queue.Queue[Command] = queue.Queue(maxsize=maxsize)
        self._dropped = 0

    def push(self, command: Command) -> bool:
        try:
            self._queue.put_nowait(command)
        except queue.Full:
            self._dropped += 1
            logger.warning("Command queue full (%d pending); dropped %s from %s",
                           self._queue.maxsize, command.type.value, command.empire_id)
            return False
        return True

    def drain(self) -> list[Command]:
        """Everything pending, oldest first."""
        commands: list[Command] = []
        while True:
            try:
                commands.append(self._queue.get_nowait())
            except queue.Empty:
                return commands

    @property
    def empty(self) -> bool:
        return self._queue.empty()

    @property
    def dropped(self) -> int:
        return self._dropped
