"""Tests for the record line codec."""

from datetime import date

import pytest
from task_tracker.codec import decode, encode, parse_deadline
from task_tracker.exceptions import DecodeError
from task_tracker.models import Priority, Task

# 2024-01-01 written with Arabic-Indic digits
ARABIC_INDIC_DATE = "\u0662\u0660\u0662\u0664-\u0660\u0661-\u0660\u0661"


class TestEncode:
    """Tests for encode."""

    def test_encode_full_task(self, sample_task):
        assert encode(sample_task) == "1|Test Task|A test task|HIGH|2026-12-31|false"

    def test_encode_no_deadline_uses_sentinel(self):
        task = Task(id=7, title="Call", priority=Priority.LOW, completed=True)
        assert encode(task) == "7|Call||LOW|null|true"

    @pytest.mark.parametrize(
        "fields",
        [{"title": "first\nsecond"}, {"title": "T", "description": "line\r\nbreak"}],
    )
    def test_line_break_in_text_raises(self, fields):
        task = Task(id=3, **fields)
        with pytest.raises(ValueError, match="line break"):
            encode(task)


class TestDecode:
    """Tests for decode."""

    def test_decode_valid_line(self):
        task = decode("3|Write report|Quarterly|MEDIUM|2024-05-01|true")
        assert task == Task(
            id=3,
            title="Write report",
            description="Quarterly",
            priority=Priority.MEDIUM,
            deadline=date(2024, 5, 1),
            completed=True,
        )

    def test_decode_sentinel_deadline(self):
        assert decode("3|Write report||LOW|null|false").deadline is None

    def test_decode_strips_line_ending(self):
        assert decode("3|T||LOW|null|false\n").completed is False
        assert decode("3|T||LOW|null|true\r\n").completed is True

    def test_round_trip(self, sample_task):
        assert decode(encode(sample_task)) == sample_task

    def test_round_trip_empty_description_and_no_deadline(self):
        task = Task(id=12, title="Plain", priority=Priority.LOW, completed=True)
        assert decode(encode(task)) == task

    @pytest.mark.parametrize(
        "line",
        [
            "1|only|three",
            "1|a|b|LOW|null|false|extra",
            "",
        ],
    )
    def test_wrong_field_count(self, line):
        with pytest.raises(DecodeError, match="Expected 6 fields"):
            decode(line)

    @pytest.mark.parametrize(
        "raw_id", ["abc", "0", "-4", " 5", "1.5", "", "\u0661\u0662", "\uff17"]
    )
    def test_invalid_id(self, raw_id):
        with pytest.raises(DecodeError, match="Invalid task id"):
            decode(f"{raw_id}|T||LOW|null|false")

    def test_unknown_priority(self):
        with pytest.raises(DecodeError, match="Unknown priority") as exc_info:
            decode("1|T||URGENT|null|false")
        assert exc_info.value.line == "1|T||URGENT|null|false"

    def test_priority_name_is_case_sensitive(self):
        with pytest.raises(DecodeError, match="Unknown priority"):
            decode("1|T||high|null|false")

    @pytest.mark.parametrize("raw", ["2024-13-01", "2024-02-30", "01/05/2024", "2024-5-1", ""])
    def test_invalid_deadline(self, raw):
        with pytest.raises(DecodeError):
            decode(f"1|T||LOW|{raw}|false")

    def test_non_ascii_digits_in_deadline(self):
        with pytest.raises(DecodeError, match="Invalid deadline"):
            decode(f"1|T||LOW|{ARABIC_INDIC_DATE}|false")

    def test_delimiter_in_title_does_not_round_trip(self):
        task = Task(id=1, title="a|b")
        with pytest.raises(DecodeError):
            decode(encode(task))

    def test_decode_error_carries_reason(self):
        with pytest.raises(DecodeError) as exc_info:
            decode("1|T")
        assert exc_info.value.reason == "Expected 6 fields, got 2"


class TestParseDeadline:
    """Tests for parse_deadline."""

    def test_valid(self):
        assert parse_deadline("2024-01-31") == date(2024, 1, 31)

    def test_empty_is_none(self):
        assert parse_deadline("") is None
        assert parse_deadline("   ") is None

    def test_surrounding_whitespace(self):
        assert parse_deadline(" 2024-01-31 ") == date(2024, 1, 31)

    @pytest.mark.parametrize(
        "raw", ["tomorrow", "2024/01/31", "20240131", "2023-02-29", ARABIC_INDIC_DATE]
    )
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_deadline(raw)
