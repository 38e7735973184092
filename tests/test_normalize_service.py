import pytest

from services.normalize_service import build_headers, is_blank, normalize_column_name


def test_normalize_replaces_spaces_and_symbols():
    assert normalize_column_name("Total Sales") == "total_sales"
    assert normalize_column_name(" Revenue ($) ") == "revenue_"
    assert normalize_column_name("Unit--Price") == "unit_price"
    assert normalize_column_name("a   b") == "a_b"


def test_normalize_stringifies_numbers():
    assert normalize_column_name(2024) == "2024"


@pytest.mark.parametrize("raw", [None, "", "   ", float("nan")])
def test_normalize_blank_uses_positional_fallback(raw):
    assert normalize_column_name(raw, 3) == "column_3"


@pytest.mark.parametrize(
    "raw",
    ["Total Sales", " Revenue ($) ", "__a__b__", "Q1/Q2 %", "Ünïcode Name", "İstanbul", "x\ty\nz", "already_clean"],
)
def test_normalize_is_idempotent(raw):
    once = normalize_column_name(raw)
    assert normalize_column_name(once) == once


def test_build_headers_disambiguates_duplicates():
    headers = build_headers(["Name", "", "name", "Name", "Column 2"])
    assert headers == ["name", "column_2", "name_2", "name_3", "column_2_2"]
    assert len(set(headers)) == len(headers)


def test_is_blank():
    assert is_blank(" ")
    assert not is_blank(0)
    assert not is_blank("x")
