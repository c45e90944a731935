"""
Session transcript: a verbatim record of everything shown and typed during
one session, saved on request by the `log` action.
"""

import logging
from pathlib import Path
from typing import List

from .constants import FILE_ENCODING, INPUT_LOG_PREFIX
from .exceptions import CardFileError

logger = logging.getLogger(__name__)


class SessionTranscript:
    """Append-only text buffer bound to a single session."""

    def __init__(self) -> None:
        self._chunks: List[str] = []

    def record_input(self, line: str) -> None:
        """Append a line typed by the user, marked with the input prefix."""
        self._chunks.append(f"{INPUT_LOG_PREFIX}{line}\n")

    def record_output(self, text: str) -> None:
        self._chunks.append(text)

    def export(self) -> str:
        return "".join(self._chunks)

    def save(self, path: Path) -> None:
        """
        Write the whole transcript to `path`, replacing any existing content.

        Raises:
            CardFileError: If the file cannot be written.
        """
        try:
            with open(path, "w", encoding=FILE_ENCODING) as f:
                f.write(self.export())
        except OSError as e:
            logger.error(f"Could not write transcript to {path}: {e}")
            raise CardFileError(f"Could not write file: {e}", e) from e
        logger.info(f"Saved session transcript to {path}")
