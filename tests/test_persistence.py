"""
Tests for reading and writing card files.
"""

import logging
from pathlib import Path

import pytest

from flashquiz.exceptions import (
    CardFileError,
    CardFileNotFoundError,
    MalformedRecordError,
)
from flashquiz.persistence import (
    CardFileFormat,
    export_cards,
    import_cards,
    parse_record,
)
from flashquiz.store import CardStore


def _as_set(store: CardStore, with_mistakes: bool = True):
    if with_mistakes:
        return {(c.term, c.definition, c.mistakes) for c in store}
    return {(c.term, c.definition) for c in store}


class TestCardFileFormat:
    def test_headers_and_field_counts(self):
        assert CardFileFormat.BASIC.header == "term,definition"
        assert CardFileFormat.BASIC.field_count == 2
        assert CardFileFormat.WITH_MISTAKES.header == "term,definition,mistakes"
        assert CardFileFormat.WITH_MISTAKES.field_count == 3


class TestParseRecord:
    def test_three_field_record(self):
        assert parse_record(
            "France,Paris,2", CardFileFormat.WITH_MISTAKES, 2
        ) == ("France", "Paris", 2)

    def test_basic_record_has_zero_mistakes(self):
        assert parse_record("France,Paris", CardFileFormat.BASIC, 2) == (
            "France",
            "Paris",
            0,
        )

    @pytest.mark.parametrize(
        "line, fmt",
        [
            ("France", CardFileFormat.BASIC),
            ("France,Paris", CardFileFormat.WITH_MISTAKES),
            ("France,Paris,2", CardFileFormat.BASIC),
            ("France,Paris,2,extra", CardFileFormat.WITH_MISTAKES),
            (",Paris,2", CardFileFormat.WITH_MISTAKES),
            ("France,,2", CardFileFormat.WITH_MISTAKES),
            ("France,Paris,many", CardFileFormat.WITH_MISTAKES),
            ("France,Paris,-1", CardFileFormat.WITH_MISTAKES),
        ],
    )
    def test_malformed_records(self, line, fmt):
        with pytest.raises(MalformedRecordError) as excinfo:
            parse_record(line, fmt, 7)
        assert excinfo.value.line_number == 7
        assert "Line 7" in str(excinfo.value)


class TestRoundTrip:
    def test_with_mistakes(self, capitals_store, tmp_path):
        path = tmp_path / "cards.txt"

        written = export_cards(capitals_store, path, CardFileFormat.WITH_MISTAKES)
        restored = CardStore()
        summary = import_cards(restored, path, CardFileFormat.WITH_MISTAKES)

        assert written == 3
        assert summary.loaded == 3
        assert summary.skipped == []
        assert _as_set(restored) == _as_set(capitals_store)

    def test_basic(self, capitals_store, tmp_path):
        path = tmp_path / "cards.txt"

        export_cards(capitals_store, path, CardFileFormat.BASIC)
        restored = CardStore()
        import_cards(restored, path, CardFileFormat.BASIC)

        assert _as_set(restored, with_mistakes=False) == _as_set(
            capitals_store, with_mistakes=False
        )
        assert all(c.mistakes == 0 for c in restored)


class TestExport:
    def test_writes_header_and_records_in_store_order(
        self, capitals_store, tmp_path
    ):
        path = tmp_path / "out.txt"

        export_cards(capitals_store, path, CardFileFormat.WITH_MISTAKES)

        assert path.read_text(encoding="utf-8") == (
            "term,definition,mistakes\n"
            "France,Paris,3\n"
            "Japan,Tokyo,3\n"
            "Peru,Lima,1\n"
        )

    def test_truncates_existing_file(self, two_card_store, tmp_path):
        path = tmp_path / "out.txt"
        path.write_text("old content\n" * 50, encoding="utf-8")

        export_cards(two_card_store, path, CardFileFormat.BASIC)

        assert path.read_text(encoding="utf-8") == "term,definition\nA,1\nB,2\n"

    def test_empty_store_writes_only_header(self, empty_store, tmp_path):
        path = tmp_path / "out.txt"
        assert export_cards(empty_store, path, CardFileFormat.BASIC) == 0
        assert path.read_text(encoding="utf-8") == "term,definition\n"

    def test_unwritable_path_raises(self, two_card_store, tmp_path, caplog):
        path = tmp_path / "missing-dir" / "out.txt"

        with caplog.at_level(logging.ERROR):
            with pytest.raises(CardFileError, match="Could not write file"):
                export_cards(two_card_store, path, CardFileFormat.BASIC)

        assert "Could not write card file" in caplog.text


class TestImport:
    def test_loads_records_and_skips_header(self, card_file, empty_store):
        summary = import_cards(
            empty_store, card_file, CardFileFormat.WITH_MISTAKES
        )

        assert summary.loaded == 2
        assert [c.term for c in empty_store] == ["France", "Japan"]
        assert empty_store.get("France").mistakes == 2
        assert "term" not in empty_store

    def test_header_line_is_skipped_whatever_it_says(
        self, tmp_path, empty_store
    ):
        path = tmp_path / "cards.txt"
        path.write_text("dog,perro\ncat,gato\n", encoding="utf-8")

        import_cards(empty_store, path, CardFileFormat.BASIC)

        assert [c.term for c in empty_store] == ["cat"]

    def test_imported_record_replaces_existing_term(
        self, card_file, two_card_store
    ):
        two_card_store.add("France", "Lyon")
        two_card_store.get("France").record_mistake()

        import_cards(two_card_store, card_file, CardFileFormat.WITH_MISTAKES)

        france = two_card_store.get("France")
        assert france.definition == "Paris"
        assert france.mistakes == 2
        assert [c.term for c in two_card_store] == ["A", "B", "France", "Japan"]

    def test_malformed_lines_are_skipped(self, tmp_path, empty_store, caplog):
        path = tmp_path / "cards.txt"
        path.write_text(
            "term,definition,mistakes\n"
            "France\n"
            "Japan,Tokyo,1\n"
            "Peru,Lima,lots\n"
            "Chile,Santiago,0\n",
            encoding="utf-8",
        )

        with caplog.at_level(logging.WARNING):
            summary = import_cards(
                empty_store, path, CardFileFormat.WITH_MISTAKES
            )

        assert summary.loaded == 2
        assert summary.skipped == [2, 4]
        assert [c.term for c in empty_store] == ["Japan", "Chile"]
        assert "Skipping malformed record" in caplog.text

    def test_blank_lines_are_ignored(self, tmp_path, empty_store):
        path = tmp_path / "cards.txt"
        path.write_text(
            "term,definition\n\nA,1\n   \nB,2\n", encoding="utf-8"
        )

        summary = import_cards(empty_store, path, CardFileFormat.BASIC)

        assert summary.loaded == 2
        assert summary.skipped == []

    def test_windows_line_endings(self, tmp_path, empty_store):
        path = tmp_path / "cards.txt"
        path.write_bytes(b"term,definition,mistakes\r\nA,1,4\r\n")

        import_cards(empty_store, path, CardFileFormat.WITH_MISTAKES)

        assert empty_store.get("A").definition == "1"
        assert empty_store.get("A").mistakes == 4

    def test_missing_file_raises_not_found(self, tmp_path, empty_store):
        with pytest.raises(CardFileNotFoundError, match="File not found."):
            import_cards(
                empty_store, tmp_path / "nope.txt", CardFileFormat.BASIC
            )
        assert empty_store.is_empty()

    def test_unreadable_file_raises(self, tmp_path, empty_store, mocker):
        mocker.patch("builtins.open", side_effect=PermissionError("denied"))

        with pytest.raises(CardFileError, match="Could not read file"):
            import_cards(
                empty_store, Path("cards.txt"), CardFileFormat.BASIC
            )

    def test_decode_error_late_in_file_leaves_store_untouched(
        self, tmp_path, two_card_store
    ):
        path = tmp_path / "cards.txt"
        records = "".join(f"term{i},def{i},0\n" for i in range(2000))
        path.write_bytes(
            b"term,definition,mistakes\n"
            + records.encode("utf-8")
            + b"bad,\xff\xfe,0\n"
        )

        with pytest.raises(CardFileError, match="Could not read file"):
            import_cards(two_card_store, path, CardFileFormat.WITH_MISTAKES)

        assert [c.term for c in two_card_store] == ["A", "B"]

    def test_empty_file_loads_nothing(self, tmp_path, empty_store):
        path = tmp_path / "cards.txt"
        path.write_text("", encoding="utf-8")

        summary = import_cards(empty_store, path, CardFileFormat.BASIC)

        assert summary.loaded == 0
        assert empty_store.is_empty()
