"""Parser for the merchant handler's ``key:value`` response bodies.

The gateway answers every command with plain text, one field per line::

    TRANSACTION_ID: rFB3MagMOvfD7Ob2nWaj4IwYLWw=
    RESULT: OK
    RESULT_CODE: 000

Field names come back upper-cased with underscores (and occasionally in other
casings), so they are normalized to camel case: ``transactionId``, ``result``,
``resultCode``.
"""

from __future__ import annotations

import re

from ..domain.errors import ParseError

# Acronym followed by a capitalized word, capitalized/lower word, bare acronym, digits.
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def camel_case(key: str) -> str:
    """Convert ``key`` to camel case.

    Words are split on separators, on lower-to-upper transitions, on acronym
    boundaries and between letters and digits; the first word is lower-cased
    and every following word capitalized.

    >>> camel_case("TRANSACTION_ID")
    'transactionId'
    >>> camel_case("3DSECURE")
    '3Dsecure'
    """
    words = _WORD.findall(key)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(word.capitalize() for word in tail)


def parse_response(text: str) -> dict[str, str]:
    """Parse a raw response body into a camel-cased mapping.

    Blank lines are ignored. Each remaining line is split at its first colon,
    so values may contain colons themselves; values are stripped of
    surrounding whitespace and may be empty. Duplicate keys keep the last value.

    Raises:
        ParseError: If a non-blank line has no colon or an empty key.
    """
    parsed: dict[str, str] = {}
    for line_number, raw_line in enumerate(text.strip().split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue
        key, sep, value = line.partition(":")
        name = camel_case(key)
        if not sep or not name:
            raise ParseError(line_number, line)
        parsed[name] = value.strip()
    return parsed
