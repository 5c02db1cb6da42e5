"""Tests for the append-only student log."""

import os

import pytest

from pace_registry_api.app.core.errors import PersistenceError
from pace_registry_api.app.core.storage import (
    StudentLog,
    decode_record,
    encode_record,
    split_line,
)
from pace_registry_api.app.schemas.student import StudentRecord


ASHA = StudentRecord("4PA21CS001", "Asha", "4pa21cs001@pace.edu.in", "go,rust")
RAVI = StudentRecord("4PA21CS002", "Ravi", "4pa21cs002@pace.edu.in", "java")


class TestReplay:

    def test_missing_file_is_an_empty_log(self, student_log, db_path):
        assert list(student_log.replay()) == []
        assert not db_path.exists()

    def test_records_come_back_in_file_order(self, student_log):
        student_log.append(ASHA)
        student_log.append(RAVI)
        assert list(student_log.replay()) == [ASHA, RAVI]

    def test_reads_plain_pipe_separated_lines(self, db_path):
        db_path.write_text(
            "4PA21CS001|Asha|4pa21cs001@pace.edu.in|go,rust\n"
            "4PA21CS002|Ravi|4pa21cs002@pace.edu.in|java\n",
            encoding="utf-8",
        )
        assert list(StudentLog(str(db_path)).replay()) == [ASHA, RAVI]

    def test_malformed_and_blank_lines_are_skipped(self, db_path):
        db_path.write_text(
            "4PA21CS001|Asha|4pa21cs001@pace.edu.in|go,rust\n"
            "only|three|fields\n"
            "\n"
            "a|b|c|d|e\n"
            "4PA21CS002|Ravi|4pa21cs002@pace.edu.in|java\n",
            encoding="utf-8",
        )
        log = StudentLog(str(db_path))
        assert list(log.replay()) == [ASHA, RAVI]
        assert log.skipped == 2

    def test_crlf_line_endings(self, db_path):
        db_path.write_bytes(b"4PA21CS001|Asha|4pa21cs001@pace.edu.in|go,rust\r\n")
        assert list(StudentLog(str(db_path)).replay()) == [ASHA]

    def test_replay_does_not_write(self, student_log, db_path):
        student_log.append(ASHA)
        before = db_path.read_bytes()
        list(student_log.replay())
        list(student_log.replay())
        assert db_path.read_bytes() == before


class TestEncoding:

    def test_line_format(self):
        assert encode_record(ASHA) == "4PA21CS001|Asha|4pa21cs001@pace.edu.in|go,rust"

    def test_empty_skills_keeps_four_fields(self, student_log):
        record = StudentRecord("4PA21CS003", "Meera", "4pa21cs003@pace.edu.in", "")
        student_log.append(record)
        assert list(student_log.replay()) == [record]

    def test_delimiter_and_newlines_in_values_are_escaped(self, student_log, db_path):
        record = StudentRecord(
            "4PA21CS004",
            "Kiran | K",
            "4pa21cs004@pace.edu.in",
            "c\\c++\nrust\rgo",
        )
        student_log.append(record)
        raw = db_path.read_text(encoding="utf-8")
        assert raw.count("\n") == 1
        assert list(student_log.replay()) == [record]

    def test_unknown_escape_is_kept(self):
        assert split_line("a\\xb|c\\") == ["a\\xb", "c\\"]

    def test_decode_rejects_wrong_field_count(self):
        assert decode_record("a|b|c") is None
        assert decode_record("a|b|c|d|e") is None


class TestAppend:

    def test_append_creates_the_file(self, student_log, db_path):
        student_log.append(ASHA)
        assert db_path.read_text(encoding="utf-8") == encode_record(ASHA) + "\n"

    def test_append_to_unwritable_location_raises(self, tmp_path):
        log = StudentLog(str(tmp_path / "missing-dir" / "db.txt"))
        with pytest.raises(PersistenceError):
            log.append(ASHA)

    def test_failed_sync_leaves_no_partial_line(self, db_path, monkeypatch):
        log = StudentLog(str(db_path), fsync=True)
        log.append(ASHA)
        before = db_path.read_bytes()

        def broken_fsync(fd):
            raise OSError(5, "Input/output error")

        monkeypatch.setattr(os, "fsync", broken_fsync)
        with pytest.raises(PersistenceError):
            log.append(RAVI)
        assert db_path.read_bytes() == before
        assert list(log.replay()) == [ASHA]

    def test_unencodable_text_raises_and_writes_nothing(self, student_log, db_path):
        student_log.append(ASHA)
        before = db_path.read_bytes()
        with pytest.raises(PersistenceError):
            student_log.append(StudentRecord("4PA21CS009", "A\ud800", "4pa21cs009@pace.edu.in", ""))
        assert db_path.read_bytes() == before

    def test_torn_tail_does_not_swallow_next_record(self, student_log, db_path):
        db_path.write_bytes((encode_record(ASHA) + "\n4PA21CS0").encode("utf-8"))
        student_log.append(RAVI)
        assert list(student_log.replay()) == [ASHA, RAVI]
        assert student_log.skipped == 1


class TestInvalidBytes:

    def test_undecodable_bytes_are_replaced(self, db_path):
        db_path.write_bytes(
            b"4PA21CS001|Asha \xff|4pa21cs001@pace.edu.in|go\n"
            b"4PA21CS002|Ravi|4pa21cs002@pace.edu.in|java\n"
        )
        log = StudentLog(str(db_path))
        first, second = list(log.replay())
        assert first.usn == "4PA21CS001"
        assert first.name == "Asha \ufffd"
        assert second == RAVI
        assert log.skipped == 0
