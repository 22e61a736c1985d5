"""Text tokenization for nextword"""

import re
from typing import Optional

# Anything that is not an ASCII letter, digit, apostrophe or space separates tokens
NON_TOKEN_CHARS = re.compile(r"[^A-Za-z0-9' ]")


def tokenize(text: Optional[str]) -> list[str]:
    """Split text into normalized word tokens.

    Characters other than ASCII letters, digits, apostrophes and spaces are
    replaced by spaces, the text is lower-cased and split on whitespace.

    Args:
        text: Input text (None and empty strings are allowed)

    Returns:
        List of lowercase tokens, empty if the text holds no words

    Examples:
        >>> tokenize("Hello, World!")
        ['hello', 'world']
        >>> tokenize("don't stop")
        ["don't", 'stop']
    """
    if not text:
        return []

    return NON_TOKEN_CHARS.sub(" ", text).lower().split()


def clean_text(text: Optional[str]) -> str:
    """Normalize text to its tokens joined by single spaces.

    Args:
        text: Input text

    Returns:
        Cleaned text string
    """
    return " ".join(tokenize(text))
