"""
Keystroke validation and display substitution.

Front ends filter characters with ``validate`` before they reach the
evaluator, and show ×, ÷ and − in place of the ASCII operators.
"""

VALID_CHARACTERS = frozenset("0123456789+-*/()%^.=!×÷−")

# ASCII operator -> display form
DISPLAY_SUBSTITUTIONS = {
    "*": "×",
    "/": "÷",
    "-": "−",
}


def validate(ch: str) -> bool:
    """True if the character is a digit or one of the calculator symbols."""
    return ch in VALID_CHARACTERS


def validate_text(text: str) -> bool:
    return all(validate(ch) for ch in text)


def invalid_characters(text: str) -> list[str]:
    """Characters of the text that ``validate`` rejects, in order of first use."""
    return list(dict.fromkeys(ch for ch in text if not validate(ch)))


def substitute(text: str) -> str:
    """Replace ASCII operators with their display form."""
    for ascii_op, display_op in DISPLAY_SUBSTITUTIONS.items():
        text = text.replace(ascii_op, display_op)
    return text


def unsubstitute(text: str) -> str:
    """Replace display operators with the ASCII form the evaluator expects."""
    for ascii_op, display_op in DISPLAY_SUBSTITUTIONS.items():
        text = text.replace(display_op, ascii_op)
    return text
