"""Tests for reading summary text out of provider responses."""

import pytest

from ainotes.core.modules.summary.utils import extract_summary
from ainotes.errors import NoSummaryExtractedError


class TestExtractSummary:
    def test_chat_completion_shape(self):
        payload = {"choices": [{"message": {"role": "assistant", "content": "  A summary.\n"}}]}
        assert extract_summary(payload) == "A summary."

    def test_flat_summary_field(self):
        assert extract_summary({"summary": "Flat summary."}) == "Flat summary."

    def test_flat_content_field(self):
        assert extract_summary({"content": "Flat content."}) == "Flat content."

    def test_chat_shape_wins_over_flat_fields(self):
        payload = {"choices": [{"message": {"content": "Chat."}}], "summary": "Flat.", "content": "Content."}
        assert extract_summary(payload) == "Chat."

    def test_summary_wins_over_content(self):
        assert extract_summary({"summary": "Summary.", "content": "Content."}) == "Summary."

    def test_empty_chat_content_falls_through(self):
        payload = {"choices": [{"message": {"content": "   "}}], "content": "Content."}
        assert extract_summary(payload) == "Content."

    def test_null_chat_content_falls_through(self):
        payload = {"choices": [{"message": {"content": None}}], "summary": "Summary."}
        assert extract_summary(payload) == "Summary."

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"choices": []},
            {"choices": [{"message": "not a dict"}]},
            {"summary": 42},
            {"content": ""},
            ["a list"],
            "a string",
        ],
    )
    def test_nothing_extractable_raises(self, payload):
        with pytest.raises(NoSummaryExtractedError):
            extract_summary(payload)
