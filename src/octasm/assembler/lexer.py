"""
Statement Lexer
===============

Splits statement text into tokens. A token is either a run of word
characters (letters, digits, underscore) or a single non-space character.
Whitespace only separates tokens and is otherwise ignored.

The same rules apply to instruction formats in definitions, to the
sub-statement references inside encodings, and to source lines, so a
format and a statement written with different spacing tokenize alike.

Example
-------
>>> tokenize("ld r6, [r7 + 10]")
['ld', 'r6', ',', '[', 'r7', '+', '10', ']']
"""

import re


_TOKEN_RE = re.compile(r"\w+|\S", re.ASCII)
_WORD_RE = re.compile(r"\w+", re.ASCII)


def tokenize(text: str) -> list[str]:
    """Split statement text into word and punctuation tokens."""
    return _TOKEN_RE.findall(text)


def is_word(token: str) -> bool:
    """Return True if the token is a word rather than punctuation."""
    return _WORD_RE.fullmatch(token) is not None
