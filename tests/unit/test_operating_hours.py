"""Tests for normalizing venue hours payloads."""

from backend.app.models.hours import (
    NoHoursData,
    OpenNowFlag,
    StructuredPeriods,
    parse_operating_hours,
)


def test_none_payload_has_no_data() -> None:
    """None -> NoHoursData."""
    assert isinstance(parse_operating_hours(None), NoHoursData)


def test_non_dict_payload_has_no_data() -> None:
    """Garbage types degrade instead of raising."""
    assert isinstance(parse_operating_hours("open late"), NoHoursData)
    assert isinstance(parse_operating_hours([1, 2, 3]), NoHoursData)


def test_structured_periods_parsed() -> None:
    """Periods, open_now and weekday_text are kept."""
    parsed = parse_operating_hours(
        {
            "open_now": True,
            "periods": [
                {"open": {"day": 2, "time": "1100"}, "close": {"day": 2, "time": "2200"}},
                {"open": {"day": 3, "time": "1100"}, "close": {"day": 3, "time": "2200"}},
            ],
            "weekday_text": ["Tuesday: 11:00 AM - 10:00 PM"],
        }
    )

    assert isinstance(parsed, StructuredPeriods)
    assert parsed.open_now is True
    assert len(parsed.periods_for_day(2)) == 1
    assert parsed.periods_for_day(5) == []
    assert parsed.weekday_text == ["Tuesday: 11:00 AM - 10:00 PM"]


def test_period_without_close_is_kept() -> None:
    """A period with no close (open around the clock) is valid."""
    parsed = parse_operating_hours({"periods": [{"open": {"day": 0, "time": "0000"}}]})

    assert isinstance(parsed, StructuredPeriods)
    assert parsed.periods[0].close is None


def test_malformed_periods_dropped() -> None:
    """Bad entries are dropped and good ones survive."""
    parsed = parse_operating_hours(
        {
            "periods": [
                {"open": {"day": 9, "time": "1100"}},
                {"open": {"day": 1, "time": "11:00"}},
                "nonsense",
                {"open": {"day": 1, "time": "1700"}, "close": {"day": 1, "time": "2300"}},
            ]
        }
    )

    assert isinstance(parsed, StructuredPeriods)
    assert len(parsed.periods) == 1
    assert parsed.periods[0].open.time == "1700"


def test_all_periods_malformed_falls_back_to_flag() -> None:
    """Nothing usable in periods -> open_now flag if present."""
    parsed = parse_operating_hours({"periods": ["bad"], "open_now": False})

    assert isinstance(parsed, OpenNowFlag)
    assert parsed.open_now is False


def test_all_periods_malformed_without_flag_has_no_data() -> None:
    """Nothing usable at all -> NoHoursData."""
    assert isinstance(parse_operating_hours({"periods": [{"open": {}}]}), NoHoursData)


def test_explicit_empty_periods_stay_structured() -> None:
    """An empty list means structured hours with no openings."""
    parsed = parse_operating_hours({"periods": []})

    assert isinstance(parsed, StructuredPeriods)
    assert parsed.periods == []


def test_open_now_only() -> None:
    """Only a flag -> OpenNowFlag."""
    parsed = parse_operating_hours({"open_now": True, "weekday_text": ["Mon: open"]})

    assert isinstance(parsed, OpenNowFlag)
    assert parsed.weekday_text == ["Mon: open"]


def test_parsed_model_passes_through() -> None:
    """Already-normalized input is returned unchanged."""
    flag = OpenNowFlag(open_now=True)

    assert parse_operating_hours(flag) is flag
