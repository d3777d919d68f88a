"""
octasm - Table-Driven Assembler for a Small 8-bit CPU
=====================================================

This package assembles source text for a custom 8-bit CPU with eight
registers (r0..r7) into machine code. The instruction set is not
hard-coded: it is a table of "FORMAT ; ENCODING" definitions such as

    add  R    ; #000000RR
    _imm n    ; #1nnnnnnn
    jz   n    ; _imm n + prdifz + #01101000

which the assembler parses once and then matches every statement against.

Main Components
---------------
- **assembler**: definition parser, instruction table, matcher, encoder
  and the Assembler front end
- **config**: AssemblerConfig (defaults and environment overrides)
- **errors**: exception hierarchy and error collection
- **cli**: the ``octasm`` command

Quick Start
-----------
    >>> from octasm import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_statement("jz 10")
    [138, 120, 104]

Or from the command line:
    $ octasm program.asm
    $ octasm --test
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from octasm.assembler import (
    Assembler,
    Encoder,
    Instruction,
    InstructionTable,
    Matcher,
    MatchResult,
    assemble,
    assemble_file,
    default_table,
    parse_definition,
)
from octasm.config import AssemblerConfig
from octasm.errors import (
    OctasmError,
    AssemblerError,
    DefinitionParseError,
    TemplateRecursionError,
    EncodingError,
    NoMatchError,
    TooManyErrors,
    ErrorCollector,
    SourceLocation,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "Encoder",
    "Instruction",
    "InstructionTable",
    "Matcher",
    "MatchResult",
    "assemble",
    "assemble_file",
    "default_table",
    "parse_definition",
    # Configuration
    "AssemblerConfig",
    # Exception hierarchy
    "OctasmError",
    "AssemblerError",
    "DefinitionParseError",
    "TemplateRecursionError",
    "EncodingError",
    "NoMatchError",
    "TooManyErrors",
    "ErrorCollector",
    "SourceLocation",
]
