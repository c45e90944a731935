"""
Line-oriented input/output channels used by the session controller.

A channel reads one line of user input at a time and writes one line of
output at a time. Coloring and transcript capture are chosen when the
channel is built, so the controller never deals with either.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console

from .exceptions import InputExhaustedError
from .transcript import SessionTranscript

logger = logging.getLogger(__name__)


class LineChannel(ABC):
    """
    Abstract base class for the session's line input and output.
    """

    @abstractmethod
    def read_line(self) -> str:
        """
        Block until the user enters a line and return it without the line terminator.

        Raises:
            InputExhaustedError: If the input reached end of file.
        """
        pass

    @abstractmethod
    def write_line(self, text: str, style: Optional[str] = None) -> None:
        """
        Show one line of output.

        Args:
            text: The message, without a trailing newline.
            style: Optional rich style name; channels without color ignore it.
        """
        pass


class ConsoleChannel(LineChannel):
    """Reads from and writes to a rich Console."""

    def __init__(self, console: Optional[Console] = None, color: bool = True):
        self.console = console if console is not None else Console()
        self.color = color

    def read_line(self) -> str:
        try:
            return self.console.input()
        except EOFError as e:
            logger.debug("End of input reached on console")
            raise InputExhaustedError("End of input.", e) from e

    def write_line(self, text: str, style: Optional[str] = None) -> None:
        # markup/highlight off: user text must be printed literally
        self.console.print(
            text,
            style=style if self.color else None,
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


class TranscriptChannel(LineChannel):
    """Wraps another channel and copies all traffic into a SessionTranscript."""

    def __init__(self, inner: LineChannel, transcript: SessionTranscript):
        self.inner = inner
        self.transcript = transcript

    def read_line(self) -> str:
        line = self.inner.read_line()
        self.transcript.record_input(line)
        return line

    def write_line(self, text: str, style: Optional[str] = None) -> None:
        self.transcript.record_output(f"{text}\n")
        self.inner.write_line(text, style=style)
