"""
Table-Driven Assembler for the octasm 8-bit CPU
===============================================

This package turns assembly statements into machine code. The whole
instruction set is described by "FORMAT ; ENCODING" definitions; nothing
about individual instructions is hard-coded.

Main Components
---------------
- **definitions**: parses one definition into an Instruction
- **InstructionTable**: ordered, read-only registry of instructions
- **Matcher**: finds the first instruction whose format accepts a statement
- **Encoder**: evaluates an encoding template into bytes, recursing into
  sub-statement references
- **Assembler**: assembles statements, strings and files, and collects
  diagnostics

Assembly Process
----------------
1. The table is built once; every definition is parsed and every
   sub-statement reference is checked.
2. Each statement is tokenized and matched against the table in
   declaration order, resolving register names and numbers.
3. The matched instruction's template is encoded into one or more bytes.

Example Usage
-------------
>>> from octasm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_statement("add r5, 4")
[132, 72]
>>> str(asm.lookup("mov acc, sp", instruction=True))
'Instruction(mov A, r, #00101rrr)'
"""

from octasm.assembler.assembler import (
    Assembler,
    assemble,
    assemble_file,
    format_bits,
    format_hex,
)
from octasm.assembler.definitions import (
    BitPattern,
    EncodingSegment,
    Instruction,
    SubStatement,
    parse_definition,
)
from octasm.assembler.encoder import DEFAULT_MAX_DEPTH, Encoder
from octasm.assembler.lexer import tokenize
from octasm.assembler.matcher import Matcher, MatchResult, match_instruction
from octasm.assembler.opcodes import DEFAULT_DEFINITIONS
from octasm.assembler.operands import (
    OPERAND_CLASSES,
    REGISTER_ALIASES,
    FormatToken,
    OperandClass,
    OperandKind,
    resolve_operand,
    resolve_register,
)
from octasm.assembler.selftest import SELF_TEST_CASES, CheckResult, run_self_test
from octasm.assembler.table import InstructionTable, default_table

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    "format_bits",
    "format_hex",
    # Definitions
    "BitPattern",
    "EncodingSegment",
    "Instruction",
    "SubStatement",
    "parse_definition",
    "DEFAULT_DEFINITIONS",
    # Table
    "InstructionTable",
    "default_table",
    # Matching and encoding
    "Matcher",
    "MatchResult",
    "match_instruction",
    "Encoder",
    "DEFAULT_MAX_DEPTH",
    "tokenize",
    # Operands
    "OPERAND_CLASSES",
    "REGISTER_ALIASES",
    "FormatToken",
    "OperandClass",
    "OperandKind",
    "resolve_operand",
    "resolve_register",
    # Self test
    "SELF_TEST_CASES",
    "CheckResult",
    "run_self_test",
]
