"""
Action tokens, prompts and file format constants.
"""
from typing import Tuple

# Actions available in every session.
ACTION_ADD = "add"
ACTION_REMOVE = "remove"
ACTION_IMPORT = "import"
ACTION_EXPORT = "export"
ACTION_ASK = "ask"
ACTION_EXIT = "exit"

# Actions added by the extended session.
ACTION_LOG = "log"
ACTION_HARDEST = "hardest card"
ACTION_RESET = "reset stats"

BASIC_ACTIONS: Tuple[str, ...] = (
    ACTION_ADD,
    ACTION_REMOVE,
    ACTION_IMPORT,
    ACTION_EXPORT,
    ACTION_ASK,
    ACTION_EXIT,
)

EXTENDED_ACTIONS: Tuple[str, ...] = BASIC_ACTIONS + (
    ACTION_LOG,
    ACTION_HARDEST,
    ACTION_RESET,
)

# Card file layout. No quoting: a comma inside a field breaks the record.
FIELD_SEPARATOR = ","
BASIC_HEADER = "term,definition"
WITH_MISTAKES_HEADER = "term,definition,mistakes"
FILE_ENCODING = "utf-8"

# Prefix marking user input inside a session transcript.
INPUT_LOG_PREFIX = "> "
