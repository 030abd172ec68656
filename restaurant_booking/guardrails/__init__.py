"""Guardrails for the restaurant booking agent using OpenAI Agents SDK."""

from restaurant_booking.guardrails.input_validator import (
    check_user_input,
    input_validation_guardrail,
)
from restaurant_booking.guardrails.output_validator import (
    find_sensitive_content,
    output_validation_guardrail,
    redact,
)

__all__ = [
    "check_user_input",
    "find_sensitive_content",
    "input_validation_guardrail",
    "output_validation_guardrail",
    "redact",
]
