"""
Reading and writing card files.

A card file is plain UTF-8 text: one header line followed by one
comma-separated record per card. Fields are not quoted, so a term or
definition containing a comma cannot be stored.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Tuple

from .constants import (
    BASIC_HEADER,
    FIELD_SEPARATOR,
    FILE_ENCODING,
    WITH_MISTAKES_HEADER,
)
from .exceptions import (
    CardFileError,
    CardFileNotFoundError,
    MalformedRecordError,
)
from .models import ImportSummary
from .store import CardStore

logger = logging.getLogger(__name__)


class CardFileFormat(Enum):
    """Record layouts understood by the importer and exporter."""

    BASIC = BASIC_HEADER
    WITH_MISTAKES = WITH_MISTAKES_HEADER

    @property
    def header(self) -> str:
        return self.value

    @property
    def field_count(self) -> int:
        return len(self.value.split(FIELD_SEPARATOR))


def parse_record(
    line: str, fmt: CardFileFormat, line_number: int
) -> Tuple[str, str, int]:
    """
    Split one data line into (term, definition, mistakes).

    Parameters:
        line (str): The line without its trailing newline.
        fmt (CardFileFormat): Expected layout.
        line_number (int): 1-based position in the file, used in errors.

    Returns:
        Tuple[str, str, int]: The record fields. Mistakes is 0 for BASIC files.

    Raises:
        MalformedRecordError: If the field count is wrong, a text field is
            empty, or the mistake count is not a non-negative integer.
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != fmt.field_count:
        raise MalformedRecordError(
            line_number,
            f"expected {fmt.field_count} fields, found {len(fields)}",
        )

    term, definition = fields[0], fields[1]
    if not term or not definition:
        raise MalformedRecordError(
            line_number, "term and definition must not be empty"
        )

    mistakes = 0
    if fmt is CardFileFormat.WITH_MISTAKES:
        raw_mistakes = fields[2].strip()
        try:
            mistakes = int(raw_mistakes)
        except ValueError:
            raise MalformedRecordError(
                line_number, f"invalid mistake count '{raw_mistakes}'"
            ) from None
        if mistakes < 0:
            raise MalformedRecordError(
                line_number, f"mistake count must not be negative, got {mistakes}"
            )
    return term, definition, mistakes


def import_cards(
    store: CardStore, path: Path, fmt: CardFileFormat
) -> ImportSummary:
    """
    Load every record of a card file into `store`.

    The first line is skipped as a header and blank lines are ignored. Each
    valid record replaces any card with the same term. Malformed lines are
    logged and skipped; the rest of the file is still imported.

    Returns:
        ImportSummary: Number of cards loaded and line numbers skipped.

    Raises:
        CardFileNotFoundError: If `path` does not exist.
        CardFileError: If the file cannot be opened or read.
    """
    logger.info(f"Importing cards from {path}")
    summary = ImportSummary()

    try:
        with open(path, "r", encoding=FILE_ENCODING) as f:
            lines = f.read().split("\n")
    except FileNotFoundError as e:
        logger.error(f"Card file not found: {path}")
        raise CardFileNotFoundError("File not found.", e) from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read card file {path}: {e}")
        raise CardFileError(f"Could not read file: {e}", e) from e

    # the store is only touched once the whole file has been decoded
    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        try:
            term, definition, mistakes = parse_record(line, fmt, line_number)
        except MalformedRecordError as e:
            logger.warning(f"Skipping malformed record in {path}: {e}")
            summary.skipped.append(line_number)
            continue
        store.upsert_from_record(term, definition, mistakes)
        summary.loaded += 1

    logger.info(
        f"Imported {summary.loaded} card(s) from {path}, "
        f"skipped {summary.skipped_count} line(s)"
    )
    return summary


def export_cards(store: CardStore, path: Path, fmt: CardFileFormat) -> int:
    """
    Write the header and every card of `store`, in store order, to `path`.

    The file is created or truncated.

    Returns:
        int: Number of card records written.

    Raises:
        CardFileError: If the file cannot be opened or written.
    """
    logger.info(f"Exporting {len(store)} card(s) to {path}")
    written = 0
    try:
        with open(path, "w", encoding=FILE_ENCODING) as f:
            f.write(f"{fmt.header}\n")
            for card in store:
                fields = [card.term, card.definition]
                if fmt is CardFileFormat.WITH_MISTAKES:
                    fields.append(str(card.mistakes))
                f.write(FIELD_SEPARATOR.join(fields) + "\n")
                written += 1
    except OSError as e:
        logger.error(f"Could not write card file {path}: {e}")
        raise CardFileError(f"Could not write file: {e}", e) from e

    logger.info(f"Exported {written} card(s) to {path}")
    return written
