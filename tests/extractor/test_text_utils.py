"""Tests for text decoding and normalisation helpers."""

import logging

from quizdoc.extractor.utils.text import decode_text, normalise_text


class TestDecodeText:

    def test_decode_when_utf8_then_unchanged(self):
        assert decode_text("Énergie = mc²".encode("utf-8")) == "Énergie = mc²"

    def test_decode_when_bom_then_dropped(self):
        assert decode_text(b"\xef\xbb\xbf1. Question") == "1. Question"

    def test_decode_when_invalid_bytes_then_replaced_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            text = decode_text(b"abc\xffdef")

        assert text == "abc\ufffddef"
        assert "not valid UTF-8" in caplog.text


class TestNormaliseText:

    def test_normalise_when_dashes_then_ascii_hyphen(self):
        assert normalise_text("5 − 3 – 1 — 0") == "5 - 3 - 1 - 0"

    def test_normalise_when_division_sign_then_slash(self):
        assert normalise_text("6 ÷ 2") == "6 / 2"

    def test_normalise_when_plain_ascii_then_unchanged(self):
        assert normalise_text("A) 10  B) 12") == "A) 10  B) 12"
