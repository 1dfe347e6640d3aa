"""
Tests for date parser
"""

import pytest
from datetime import date
from study_tracker.utils.date_parser import parse_date

TODAY = date(2026, 10, 19)


def test_parse_today():
    """Test parsing 'today'"""
    assert parse_date("today", today=TODAY) == TODAY


def test_parse_tomorrow():
    """Test parsing 'tomorrow'"""
    assert parse_date("Tomorrow", today=TODAY) == date(2026, 10, 20)


def test_parse_yesterday():
    """Test parsing 'yesterday'"""
    assert parse_date("yesterday", today=TODAY) == date(2026, 10, 18)


def test_parse_iso_timestamp():
    """Test parsing ISO timestamp keeps the calendar date"""
    assert parse_date("2024-11-05T00:00:00+00:00") == date(2024, 11, 5)
    assert parse_date("2024-11-05T10:30:00Z") == date(2024, 11, 5)


@pytest.mark.parametrize("text", ["2024-11-05", "05.11.2024", "05/11/2024"])
def test_parse_date_formats(text):
    """Test parsing supported date-only formats"""
    assert parse_date(text) == date(2024, 11, 5)


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_empty(text):
    assert parse_date(text) is None


def test_parse_invalid_date():
    """Test parsing invalid date returns None"""
    assert parse_date("invalid date") is None
    assert parse_date("2024-13-45") is None
