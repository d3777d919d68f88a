# =============================================================================
# test_definitions.py - Instruction Definition Parser Tests
# =============================================================================
# Tests for parsing "FORMAT ; ENCODING" lines into Instructions.
#
# Test coverage includes:
#   - Format tokens and mnemonics
#   - Bit patterns and sub-statement references
#   - Operand map derivation
#   - Every kind of malformed definition
# =============================================================================

import pytest

from octasm.assembler.definitions import (
    BitPattern,
    SubStatement,
    parse_definition,
)
from octasm.assembler.operands import OperandKind
from octasm.errors import DefinitionParseError


# =============================================================================
# Well-Formed Definitions
# =============================================================================

class TestParseDefinition:
    """Test parsing of valid definitions."""

    def test_single_register_pattern(self):
        instr = parse_definition("add  R ; #000000RR")
        assert instr.mnemonic == "add"
        assert instr.operand_kinds == (OperandKind.REGISTER2,)
        assert instr.template == (BitPattern("000000RR", OperandKind.REGISTER2),)
        assert instr.arg_map == (0,)
        assert not instr.is_composite

    def test_constant_pattern(self):
        """A pattern without placeholders consumes no operand."""
        instr = parse_definition("rtn ; #01101010")
        assert instr.format_text == "rtn"
        assert instr.encoding_text == "#01101010"
        assert instr.template == (BitPattern("01101010"),)
        assert instr.arg_map == ()
        assert str(instr) == "Instruction(rtn, #01101010)"

    def test_literal_format_tokens(self):
        instr = parse_definition("ld c, [r7 + n] ; _imm n + #0101011c")
        texts = [t.text for t in instr.format]
        assert texts == ["ld", "c", ",", "[", "r7", "+", "n", "]"]
        assert instr.operand_kinds == (OperandKind.REGISTER1, OperandKind.NUMBER)

    def test_arg_map_follows_template_order(self):
        """Each operand-bearing segment maps to its operand's position."""
        instr = parse_definition("ld c, [r7 + n] ; _imm n + #0101011c")
        assert instr.template == (
            SubStatement(("_imm", "n"), OperandKind.NUMBER),
            BitPattern("0101011c", OperandKind.REGISTER1),
        )
        assert instr.arg_map == (1, 0)

    def test_no_space_before_separator(self):
        instr = parse_definition("li r, n; _imm n + #01000rrr")
        assert instr.mnemonic == "li"
        assert instr.arg_map == (1, 0)

    def test_composite_with_flag_statement(self):
        """A sub-statement without 'n' consumes no operand."""
        instr = parse_definition("jz  n ; _imm n + prdifz + #01101000")
        assert instr.is_composite
        assert instr.template[1] == SubStatement(("prdifz",), None)
        assert instr.arg_map == (0,)

    def test_accumulator_not_encoded(self):
        """The accumulator operand is matched but never encoded."""
        instr = parse_definition("mov A, r ; #00101rrr")
        assert instr.operand_kinds == (OperandKind.ACCUMULATOR, OperandKind.REGISTER3)
        assert instr.arg_map == (1,)

    def test_repeated_field_is_one_operand(self):
        """Two runs of the same placeholder take the same operand."""
        instr = parse_definition("dup R ; #0RR00RR0")
        assert instr.arg_map == (0,)

    def test_same_operand_in_two_segments(self):
        """Every operand-bearing segment gets its own operand map entry."""
        instr = parse_definition("twice n ; #1nnnnnnn + #1nnnnnnn")
        assert instr.arg_map == (0, 0)

    def test_line_number_kept(self):
        assert parse_definition("rtn ; #01101010", line=7).line == 7


class TestSubStatement:
    """Test sub-statement substitution."""

    def test_substitute_number(self):
        sub = SubStatement(("_imm", "n"), OperandKind.NUMBER)
        assert sub.substitute(10) == ["_imm", "10"]
        assert sub.mnemonic == "_imm"

    def test_substitute_none_keeps_tokens(self):
        sub = SubStatement(("_imm", "n"), OperandKind.NUMBER)
        assert sub.substitute(None) == ["_imm", "n"]

    def test_no_operand_ignores_value(self):
        sub = SubStatement(("prdifz",), None)
        assert sub.substitute(10) == ["prdifz"]

    def test_str(self):
        assert str(SubStatement(("_imm", "n"), OperandKind.NUMBER)) == "_imm n"


# =============================================================================
# Malformed Definitions
# =============================================================================

class TestMalformedDefinitions:
    """Malformed definitions must fail loudly."""

    @pytest.mark.parametrize("text,message", [
        ("add R #000000RR", "missing ';'"),
        (" ; #00000000", "empty instruction format"),
        ("add R ;", "empty encoding"),
        ("add R ; #00000RR", "has 7 characters"),
        ("add R ; #0000000RR", "has 9 characters"),
        ("add x ; #000000xx", "unknown placeholder 'x'"),
        ("mov A, r ; #000000AA", "unknown placeholder 'A'"),
        ("add R ; #0000000R", "1 bits wide"),
        ("add c ; #000000cc", "2 bits wide"),
        ("mov c, R ; #0000cRR0", "mixes"),
        ("add R ; #00000rrr", "does not have"),
        ("jmp ; _imm n + #01101000", "does not have"),
        ("add R ; #000000RR +", "empty encoding segment"),
        ("add R ; + #000000RR", "empty encoding segment"),
        ("R ; #000000RR", "must start with a mnemonic"),
        (", x ; #00000000", "must start with a mnemonic"),
        ("foo n ; [n]", "must start with a mnemonic"),
    ])
    def test_rejected(self, text, message):
        with pytest.raises(DefinitionParseError) as exc_info:
            parse_definition(text)
        assert message in str(exc_info.value)

    def test_error_has_location(self):
        with pytest.raises(DefinitionParseError) as exc_info:
            parse_definition("add x ; #000000xx", line=12, filename="cpu.def")
        error = exc_info.value
        assert error.location.line == 12
        assert "cpu.def:12: error:" in str(error)
        assert "add x ; #000000xx" in str(error)
