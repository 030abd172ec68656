"""Input validation guardrail using OpenAI Agents SDK."""

import logging
import re

from agents import (
    Agent,
    GuardrailFunctionOutput,
    RunContextWrapper,
    TResponseInputItem,
    input_guardrail,
)

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 1000

# Patterns that indicate potential abuse or injected markup
BLOCKED_PATTERNS = [
    r"<script",
    r"javascript:",
    r"onclick",
    r"onerror",
    r"eval\(",
    r"exec\(",
]


def latest_user_message(input: str | list[TResponseInputItem]) -> str:
    """Extract the latest user message from agent input.

    Earlier turns were already validated, so only the last one is checked.
    """
    if not isinstance(input, list):
        return str(input)

    for msg in reversed(input):
        if isinstance(msg, dict) and msg.get("role") == "user":
            return str(msg.get("content", ""))
        if hasattr(msg, "role") and msg.role == "user":
            return str(msg.content)
    return ""


def check_user_input(text: str) -> tuple[bool, str | None]:
    """Validate a user message.

    Args:
        text: The user's message

    Returns:
        Tuple of (is_valid, error message or None)
    """
    if not text or not text.strip():
        return False, "Input cannot be empty. Please describe what you are looking for."

    if len(text) > MAX_INPUT_LENGTH:
        return (
            False,
            f"Input too long (max {MAX_INPUT_LENGTH} characters). Please shorten your request.",
        )

    lowered = text.lower()
    for pattern in BLOCKED_PATTERNS:
        if re.search(pattern, lowered):
            logger.warning(f"Suspicious pattern detected ({pattern})")
            return False, "Input contains suspicious content. Please rephrase your request."

    return True, None


@input_guardrail
async def input_validation_guardrail(
    context: RunContextWrapper[None],
    agent: Agent,
    input: str | list[TResponseInputItem],
) -> GuardrailFunctionOutput:
    """Reject empty, oversized or suspicious user input."""
    is_valid, error = check_user_input(latest_user_message(input))

    if not is_valid:
        logger.warning(f"Guardrail triggered: {error}")
        return GuardrailFunctionOutput(output_info=error, tripwire_triggered=True)

    return GuardrailFunctionOutput(
        output_info="Input validation passed",
        tripwire_triggered=False,
    )
