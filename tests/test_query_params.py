"""Unit tests for query-string helpers — no HTTP, no I/O."""

import pytest

from app.services.query_params import parse_page, parse_query_string, required_id


class TestParseQueryString:
    def test_empty(self):
        assert parse_query_string("") == {}
        assert parse_query_string(None) == {}

    def test_simple_pairs(self):
        assert parse_query_string("query=matrix&page=2") == {"query": "matrix", "page": "2"}

    def test_first_occurrence_wins(self):
        assert parse_query_string("id=1&id=2")["id"] == "1"

    def test_percent_and_plus_decoded(self):
        params = parse_query_string("query=star+wars%3A%20episode")
        assert params["query"] == "star wars: episode"

    def test_blank_values_kept(self):
        assert parse_query_string("id=&query=") == {"id": "", "query": ""}

    def test_key_without_value(self):
        assert parse_query_string("id") == {"id": ""}

    def test_leading_question_mark(self):
        assert parse_query_string("?page=3") == {"page": "3"}


class TestParsePage:
    @pytest.mark.parametrize("raw, expected", [
        (None, 0),
        ("", 0),
        ("0", 0),
        ("4", 4),
        (" 2 ", 2),
        ("-3", 0),
        ("two", 0),
        ("1.5", 0),
        ("1_000", 0),
        ("+3", 0),
        ("\u0663", 0),
    ])
    def test_values(self, raw, expected):
        assert parse_page(raw) == expected


class TestRequiredId:
    def test_present(self):
        assert required_id({"id": "42"}) == "42"

    def test_missing(self):
        assert required_id({}) is None

    def test_blank(self):
        assert required_id({"id": "  "}) is None
