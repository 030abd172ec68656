"""Tests for guardrail modules."""

import pytest

from restaurant_booking.guardrails import check_user_input, find_sensitive_content, redact
from restaurant_booking.guardrails.input_validator import latest_user_message


class TestInputValidation:
    """Tests for check_user_input."""

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_input(self, text):
        is_valid, error = check_user_input(text)
        assert is_valid is False
        assert "empty" in error.lower()

    def test_too_long_input(self):
        """Test validation of excessively long input."""
        is_valid, error = check_user_input("x" * 2000)
        assert is_valid is False
        assert "too long" in error.lower()

    @pytest.mark.parametrize(
        "text",
        [
            "<script>alert('xss')</script>",
            "javascript:void(0)",
            "onclick='malicious()'",
            "eval(open('x'))",
        ],
    )
    def test_suspicious_patterns(self, text):
        is_valid, error = check_user_input(text)
        assert is_valid is False
        assert "suspicious" in error.lower()

    def test_normal_input(self):
        """Test validation of a normal request."""
        is_valid, error = check_user_input(
            "Find a quiet Japanese place for a business dinner for 4 near Taipei 101"
        )
        assert is_valid is True
        assert error is None

    def test_latest_user_message_from_history(self):
        """Test that only the newest user turn is inspected."""
        history = [
            {"role": "user", "content": "Find ramen"},
            {"role": "assistant", "content": "Here are some places"},
            {"role": "user", "content": "Book the first one"},
        ]

        assert latest_user_message(history) == "Book the first one"
        assert latest_user_message("plain text") == "plain text"
        assert latest_user_message([]) == ""


class TestOutputValidation:
    """Tests for sensitive content detection."""

    def test_detects_api_keys(self):
        google_key = "AIza" + "B" * 35
        openai_key = "sk-" + "c" * 40

        found = find_sensitive_content(f"keys: {google_key} and {openai_key}")

        assert "Google API key" in found
        assert "OpenAI API key" in found

    def test_detects_credit_card(self):
        assert find_sensitive_content("Card 4111 1111 1111 1111") == ["Credit card"]

    def test_reservation_output_is_clean(self):
        """Test that a normal confirmation is not flagged."""
        text = (
            "Reservation confirmed at Golden Lantern for 2 people on Friday, "
            "January 10, 2030 at 07:00 PM. Confirmation code: RES-1A2B3C4D. "
            "Call +886 2 1234 5678 with questions."
        )
        assert find_sensitive_content(text) == []

    def test_redact(self):
        """Test that keys are masked and other text kept."""
        text = f"Places API error 403: key {'AIza' + 'x' * 35} rejected"

        redacted = redact(text)

        assert redacted == "Places API error 403: key AIza***REDACTED*** rejected"
