"""
Tests for the command line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from housekeepinghub.cli.app import app


runner = CliRunner()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "hub.yaml"
    path.write_text("data_file: roster.json\ntoday: 2024-06-01\n", encoding="utf-8")
    return path


def _invoke(config_path, *args):
    return runner.invoke(app, [*args, "--config", str(config_path)])


def test_book_and_list_housekeeper(config_path):
    """Bookings are saved to the roster file and listed in date order."""
    assert _invoke(config_path, "add-housekeeper", "Alice", "--area", "west").exit_code == 0
    assert _invoke(config_path, "book", "1", "2024-05-13", "am").exit_code == 0
    assert _invoke(config_path, "book", "1", "2024-05-12", "pm").exit_code == 0

    result = _invoke(config_path, "bookings", "1")

    assert result.exit_code == 0
    assert "1. 2024-05-12 pm" in result.output
    assert "2. 2024-05-13 am" in result.output

    data = json.loads((config_path.parent / "roster.json").read_text(encoding="utf-8"))
    assert data["housekeepers"][0]["bookings"] == ["2024-05-13 am", "2024-05-12 pm"]


def test_duplicate_booking_fails(config_path):
    _invoke(config_path, "add-housekeeper", "Alice")
    _invoke(config_path, "book", "1", "2024-05-12", "am")

    result = _invoke(config_path, "book", "1", "2024-05-12", "am")

    assert result.exit_code == 1
    assert "unavailable" in result.output


def test_invalid_booking_index_fails(config_path):
    _invoke(config_path, "add-housekeeper", "Alice")

    result = _invoke(config_path, "unbook", "1", "0")

    assert result.exit_code == 1
    assert "invalid" in result.output


def test_leads(config_path):
    _invoke(config_path, "add-client", "Bernice", "--details", "2024-01-01 1 months")
    _invoke(config_path, "add-client", "Charlotte")

    result = _invoke(config_path, "leads")

    assert result.exit_code == 0
    assert "Bernice" in result.output
    assert "Charlotte" not in result.output
    assert "1 client(s) listed!" in result.output


def test_defer_removes_lead(config_path):
    _invoke(config_path, "add-client", "Bernice", "--details", "2024-05-01 1 months")

    result = _invoke(config_path, "defer", "1", "1", "weeks")

    assert result.exit_code == 0
    assert "7 days" in result.output
    assert "No leads today" in _invoke(config_path, "leads").output


def test_unbook_uses_listed_position(config_path):
    _invoke(config_path, "add-housekeeper", "Alice")
    _invoke(config_path, "book", "1", "2024-06-01", "am")
    _invoke(config_path, "book", "1", "2024-05-01", "am")

    result = _invoke(config_path, "unbook", "1", "1")

    assert result.exit_code == 0
    assert "deleted: 2024-05-01 am" in result.output
    assert "2024-06-01 am" in _invoke(config_path, "bookings", "1").output


def test_negative_defer_is_rejected(config_path):
    """A refused deferment leaves a roster file that still loads."""
    _invoke(config_path, "add-client", "Alex", "--details", "2024-01-01 1 months")

    result = runner.invoke(app, ["defer", "--config", str(config_path), "1", "--", "-3", "days"])

    assert result.exit_code == 1
    assert "negative" in result.output
    assert _invoke(config_path, "list-clients").exit_code == 0


def test_set_details_rejects_bad_unit(config_path):
    _invoke(config_path, "add-client", "Bernice")

    result = _invoke(config_path, "set-details", "1", "2024-01-01", "2", "fortnights")

    assert result.exit_code == 1
    assert "Error" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "housekeepinghub" in result.output
