"""
Value Normalization
===================

Turns the raw right-hand side of a ``KEY=VALUE`` line into the value stored
in the environment.
"""

QUOTE_CHARS = ('"', "'")
COMMENT_CHAR = "#"


def normalize(raw: str) -> str:
    """
    Strip quoting and trailing comments from a raw value.

    A value opening with a quote returns everything up to the next matching
    quote verbatim. An unterminated quote is dropped and the rest is handled
    like an unquoted value: cut at the first ``#`` and trimmed.

    Args:
        raw: Text after the first ``=`` of a line

    Returns:
        Normalized value
    """
    if not raw:
        return ""

    quote = raw[0]
    if quote in QUOTE_CHARS:
        content, found, _ = raw[1:].partition(quote)
        if found:
            return content
        raw = raw[1:]

    value, _, _ = raw.partition(COMMENT_CHAR)
    return value.strip()
