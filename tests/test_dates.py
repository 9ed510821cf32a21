"""Tests for date parsing helpers."""

from datetime import date, datetime, time

from dates import format_backup_date, parse_backup_date, parse_date, parse_time_of_day


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_string(self):
        assert parse_date("2024-10-01") == date(2024, 10, 1)

    def test_date_and_datetime(self):
        assert parse_date(date(2024, 10, 1)) == date(2024, 10, 1)
        assert parse_date(datetime(2024, 10, 1, 9, 30)) == date(2024, 10, 1)

    def test_malformed_returns_none(self):
        """Test bad values never raise."""
        assert parse_date("2024-02-31") is None
        assert parse_date("garbage") is None
        assert parse_date("") is None
        assert parse_date(None) is None

    def test_custom_format(self):
        assert parse_date("01/10/2024", "%d/%m/%Y") == date(2024, 10, 1)


class TestBackupDates:
    """Tests for the dd/mm/YYYY backup format."""

    def test_parse(self):
        assert parse_backup_date("05/10/2024") == date(2024, 10, 5)
        assert parse_backup_date("2024-10-05") is None

    def test_format(self):
        assert format_backup_date(date(2024, 10, 5)) == "05/10/2024"
        assert format_backup_date(None) == ""


class TestParseTimeOfDay:
    """Tests for parse_time_of_day."""

    def test_valid(self):
        assert parse_time_of_day("08:00") == time(8, 0)
        assert parse_time_of_day(" 19:45 ") == time(19, 45)

    def test_invalid_uses_default(self):
        assert parse_time_of_day("24:00") is None
        assert parse_time_of_day(None, time(8, 0)) == time(8, 0)
