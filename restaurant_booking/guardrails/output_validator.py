"""Output validation guardrail using OpenAI Agents SDK."""

import logging
import re

from agents import GuardrailFunctionOutput, output_guardrail

logger = logging.getLogger(__name__)

# Credentials that must never reach the user
SENSITIVE_PATTERNS = [
    (r"AIza[0-9A-Za-z_\-]{35}", "Google API key"),
    (r"sk-[a-zA-Z0-9_\-]{32,}", "OpenAI API key"),
    (r"password\s*[:=]\s*\S+", "Password"),
    (r"secret\s*[:=]\s*\S+", "Secret"),
    (r"\b(?:\d{4}[-\s]?){3}\d{4}\b", "Credit card"),
]


def find_sensitive_content(text: str) -> list[str]:
    """List the kinds of sensitive information found in ``text``."""
    return [
        description
        for pattern, description in SENSITIVE_PATTERNS
        if re.search(pattern, text, re.IGNORECASE)
    ]


def redact(text: str) -> str:
    """Mask API keys in ``text``."""
    text = re.sub(r"AIza[0-9A-Za-z_\-]{35}", "AIza***REDACTED***", text)
    return re.sub(r"sk-[a-zA-Z0-9_\-]{32,}", "sk-***REDACTED***", text)


@output_guardrail(name="output_validation_guardrail")
def output_validation_guardrail(_context, _agent, output) -> GuardrailFunctionOutput:
    """Block agent output that leaks credentials."""
    warnings = find_sensitive_content(str(output) if output else "")

    if warnings:
        logger.warning(
            f"Guardrail triggered: Sensitive information detected ({'; '.join(warnings)})"
        )
        return GuardrailFunctionOutput(
            output_info=f"Security warning: {'; '.join(warnings)}. Output blocked.",
            tripwire_triggered=True,
        )

    return GuardrailFunctionOutput(
        output_info="Output validation passed",
        tripwire_triggered=False,
    )
