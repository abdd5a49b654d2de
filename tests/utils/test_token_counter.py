"""
Tests for the token estimates.
"""

from src.utils.token_counter import count_tokens, estimate_total_tokens


class TestTokenCounter:
    """Test cases for count_tokens and estimate_total_tokens."""

    def test_empty_text(self):
        assert count_tokens("") == 0
        assert count_tokens(None) == 0

    def test_rounds_up(self):
        assert count_tokens("abc") == 1
        assert count_tokens("abcd") == 1
        assert count_tokens("abcde") == 2

    def test_total_adds_per_message_overhead(self):
        messages = [
            {"role": "user", "content": "abcdefgh"},
            {"role": "assistant", "content": None, "tool_calls": []},
        ]

        assert estimate_total_tokens(messages) == 2 + 5 + 0 + 5

    def test_total_of_empty_history(self):
        assert estimate_total_tokens([]) == 0
