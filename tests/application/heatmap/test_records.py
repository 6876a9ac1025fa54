from datetime import date, datetime

from studymap.application.heatmap.records import (
    coerce_date,
    coerce_record,
    coerce_records,
    coerce_sessions,
)
from studymap.domain.activity.models import DailyActivityRecord, StudySession


def test_coerce_date_variants():
    assert coerce_date("2024-06-15") == date(2024, 6, 15)
    assert coerce_date(" 2024-06-15 ") == date(2024, 6, 15)
    assert coerce_date(date(2024, 6, 15)) == date(2024, 6, 15)
    assert coerce_date(datetime(2024, 6, 15, 8, 30)) == date(2024, 6, 15)
    assert coerce_date("15/06/2024") is None
    assert coerce_date(20240615) is None
    assert coerce_date(None) is None


def test_camel_and_snake_case_keys():
    camel = coerce_record(
        {"date": "2024-06-15", "cardsStudied": 5, "sessionCount": 2, "totalDuration": 1000}
    )
    snake = coerce_record(
        {"date": "2024-06-15", "cards_studied": 5, "session_count": 2, "total_duration": 1000}
    )
    assert camel == snake == DailyActivityRecord(date(2024, 6, 15), 5, 2, 1000)


def test_missing_fields_default():
    record = coerce_record({"date": "2024-06-15"})
    assert record == DailyActivityRecord(date(2024, 6, 15), 0, 0, None)


def test_integral_floats_accepted():
    record = coerce_record({"date": "2024-06-15", "cardsStudied": 5.0})
    assert record.cards_studied == 5


def test_invalid_counts_drop_the_row():
    assert coerce_record({"date": "2024-06-15", "cardsStudied": -1}) is None
    assert coerce_record({"date": "2024-06-15", "cardsStudied": "five"}) is None
    assert coerce_record({"date": "2024-06-15", "sessionCount": True}) is None
    assert coerce_record({"date": "2024-06-15", "cardsStudied": 2.5}) is None


def test_invalid_duration_is_ignored_not_fatal():
    record = coerce_record({"date": "2024-06-15", "cardsStudied": 3, "totalDuration": -50})
    assert record.cards_studied == 3
    assert record.total_duration is None


def test_records_pass_through():
    record = DailyActivityRecord(date(2024, 6, 15), 1, 1)
    assert coerce_record(record) is record


def test_coerce_records_filters():
    rows = [{"date": "2024-06-15"}, {"date": "bad"}, 42, None]
    assert [r.date for r in coerce_records(rows)] == [date(2024, 6, 15)]
    assert coerce_records(None) == []


def test_coerce_sessions():
    sessions = coerce_sessions(
        [
            {
                "sessionDate": "2024-06-15",
                "cardsStudied": 4,
                "sessionDuration": 60000,
                "deckId": "deck-1",
                "studyMode": "basic",
            },
            {"session_date": "2024-06-14", "cards_studied": 2},
            {"sessionDate": "2024-06-13"},
            {"sessionDate": "oops", "cardsStudied": 1},
        ]
    )
    assert sessions == [
        StudySession(date(2024, 6, 15), 4, 60000, "deck-1", "basic"),
        StudySession(date(2024, 6, 14), 2),
    ]
