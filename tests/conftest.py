import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pytest

from flashquiz.channel import LineChannel
from flashquiz.exceptions import InputExhaustedError
from flashquiz.store import CardStore


class ScriptedChannel(LineChannel):
    """
    LineChannel fed from a fixed list of input lines.

    Every written line is kept in `lines` (text only) and `styled` (text and
    style). Reading past the last scripted line raises InputExhaustedError,
    like a console at end of file.
    """

    def __init__(self, inputs: Iterable[str] = ()):
        self.inputs: List[str] = list(inputs)
        self.lines: List[str] = []
        self.styled: List[Tuple[str, Optional[str]]] = []

    def read_line(self) -> str:
        if not self.inputs:
            raise InputExhaustedError("End of input.")
        return self.inputs.pop(0)

    def write_line(self, text: str, style: Optional[str] = None) -> None:
        self.lines.append(text)
        self.styled.append((text, style))

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


# each test runs on cwd to its temp dir
@pytest.fixture(autouse=True)
def go_to_tmpdir(request):
    """
    Temporarily change the process working directory to the test's tmpdir.

    Keeps relative card file names and any stray .env lookups inside the
    per-test directory.
    """
    tmpdir = request.getfixturevalue("tmpdir")
    with tmpdir.as_cwd():
        yield


@pytest.fixture(autouse=True)
def clean_flashquiz_env(monkeypatch):
    """Remove FLASHQUIZ_* variables so settings start from their defaults."""
    for name in list(os.environ):
        if name.startswith("FLASHQUIZ_"):
            monkeypatch.delenv(name)


@pytest.fixture
def empty_store() -> CardStore:
    return CardStore()


@pytest.fixture
def two_card_store() -> CardStore:
    """
    Create a store holding A -> "1" and B -> "2", in that order.
    """
    store = CardStore()
    store.add("A", "1")
    store.add("B", "2")
    return store


@pytest.fixture
def capitals_store() -> CardStore:
    """
    Create a store of three capitals with distinct mistake counts.

    Returns:
        CardStore: France/Paris (3 mistakes), Japan/Tokyo (3), Peru/Lima (1).
    """
    store = CardStore()
    store.upsert_from_record("France", "Paris", 3)
    store.upsert_from_record("Japan", "Tokyo", 3)
    store.upsert_from_record("Peru", "Lima", 1)
    return store


@pytest.fixture
def card_file(tmp_path: Path) -> Path:
    """
    Write a three-field card file with two records.
    """
    path = tmp_path / "capitals.txt"
    path.write_text(
        "term,definition,mistakes\nFrance,Paris,2\nJapan,Tokyo,0\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def scripted_channel():
    """Factory fixture building a ScriptedChannel from input lines."""

    def _make(*inputs: str) -> ScriptedChannel:
        return ScriptedChannel(inputs)

    return _make
