# tests/test_scanner.py
from __future__ import annotations

import pytest

from pow2shift.scanner import MIN_DIGITS, TokenSpan, scan


def _texts(text: str) -> list[str]:
    return [s.text for s in scan(text)]


@pytest.mark.parametrize("text", ["abc123", "123abc", "12", "1a23", "x_", "", "a1234b", "Z999", "999z"])
def test_no_standalone_literal(text):
    assert list(scan(text)) == []


def test_single_span_with_spaces():
    spans = list(scan(" 1048575 "))
    assert spans == [TokenSpan(1, 8, "1048575")]


def test_span_at_text_edges():
    assert list(scan("1048575")) == [TokenSpan(0, 7, "1048575")]


def test_minimum_length():
    assert MIN_DIGITS == 3
    assert _texts("12 123 1234") == ["123", "1234"]


def test_punctuation_is_a_boundary():
    text = "x=255;y=(65537)+[131074],0x100,_777_,-999"
    assert _texts(text) == ["255", "65537", "131074", "777", "999"]


def test_hex_literal_digits_are_not_standalone():
    # 0x100: the run '100' follows the letter 'x'
    assert _texts("0x100 0xFFF123") == []


def test_underscore_is_not_a_letter():
    assert _texts("MAX_1024_SIZE") == ["1024"]


def test_unicode_neighbours_do_not_block():
    assert _texts("é1048575é") == ["1048575"]
    assert _texts("→65537←") == ["65537"]


def test_non_ascii_digits_are_boundaries():
    # Arabic-Indic digit before, full-width digit after
    assert _texts("١255１") == ["255"]


def test_offsets_match_source():
    text = "a = 255; b = 1023;\nc = 4096"
    spans = list(scan(text))
    assert [s.text for s in spans] == ["255", "1023", "4096"]
    for s in spans:
        assert text[s.start:s.end] == s.text
        assert len(s) == len(s.text)


def test_spans_ordered_and_disjoint():
    text = " ".join(str(n) for n in range(100, 400, 7))
    spans = list(scan(text))
    assert len(spans) == len(range(100, 400, 7))
    for a, b in zip(spans, spans[1:]):
        assert a.end <= b.start


def test_restartable():
    text = "255 abc123 65537 12 1048575"
    first = list(scan(text))
    second = list(scan(text))
    assert first == second
    assert [s.text for s in first] == ["255", "65537", "1048575"]


def test_lazy():
    it = scan("100 200 300")
    assert next(it).text == "100"
    assert next(it).text == "200"


def test_leading_zeros_kept_in_text():
    assert _texts("007 0065537") == ["007", "0065537"]
