"""Unit tests for token counting utilities."""

from unittest.mock import patch

import pytest

from agent_skills.utils import tokens
from agent_skills.utils.tokens import count_tokens, format_token_count


@pytest.fixture(autouse=True)
def clear_encoding_cache():
    tokens._encodings.clear()
    yield
    tokens._encodings.clear()


@pytest.mark.unit
class TestCountTokens:
    """Test count_tokens."""

    def test_empty_text(self):
        """Empty text costs nothing and loads no encoding."""
        with patch("agent_skills.utils.tokens.tiktoken.get_encoding") as mock_get:
            assert count_tokens("") == 0
        mock_get.assert_not_called()

    def test_uses_encoding(self):
        """Token count comes from the encoder."""
        with patch("agent_skills.utils.tokens.tiktoken.get_encoding") as mock_get:
            mock_get.return_value.encode.return_value = [1, 2, 3]

            assert count_tokens("Hello world!") == 3
            assert count_tokens("Again") == 3

        # Encoding is loaded once and cached
        mock_get.assert_called_once_with("cl100k_base")

    def test_falls_back_to_word_estimate(self):
        """A failing encoding load falls back to ~1.3 tokens per word."""
        with patch(
            "agent_skills.utils.tokens.tiktoken.get_encoding",
            side_effect=RuntimeError("no network"),
        ):
            assert count_tokens("one two three four five six seven eight nine ten") == 13


@pytest.mark.unit
class TestFormatTokenCount:
    """Test format_token_count."""

    @pytest.mark.parametrize(
        "count,expected",
        [(0, "0"), (500, "500"), (999, "999"), (1500, "1.5k"), (1_000_000, "1.0M")],
    )
    def test_format(self, count, expected):
        """Counts are abbreviated above a thousand."""
        assert format_token_count(count) == expected
