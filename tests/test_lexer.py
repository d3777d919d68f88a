# =============================================================================
# test_lexer.py - Statement Lexer Tests
# =============================================================================
# Tests for splitting statements, formats and sub-statements into tokens.
# =============================================================================

import pytest

from octasm.assembler.lexer import is_word, tokenize


class TestTokenize:
    """Test statement tokenization."""

    def test_empty(self):
        assert tokenize("") == []

    def test_whitespace_only(self):
        assert tokenize("   \t  ") == []

    def test_bare_mnemonic(self):
        assert tokenize("rtn") == ["rtn"]

    def test_operands_and_punctuation(self):
        """Punctuation characters are tokens of their own."""
        assert tokenize("ld r6, [r7 + 10]") == [
            "ld", "r6", ",", "[", "r7", "+", "10", "]",
        ]

    def test_spacing_is_irrelevant(self):
        """Statements written with different spacing tokenize alike."""
        assert tokenize("  add   r5,4  ") == tokenize("add r5, 4")

    def test_underscore_words(self):
        assert tokenize("_imm n") == ["_imm", "n"]

    def test_adjacent_punctuation(self):
        assert tokenize("st [n], c") == ["st", "[", "n", "]", ",", "c"]


class TestIsWord:
    """Test word/punctuation classification."""

    @pytest.mark.parametrize("token", ["add", "_imm", "r7", "10"])
    def test_words(self, token):
        assert is_word(token)

    @pytest.mark.parametrize("token", [",", "[", "+", "#", ""])
    def test_punctuation(self, token):
        assert not is_word(token)
