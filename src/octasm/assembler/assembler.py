"""
octasm Assembler - Main Interface
=================================

This module provides the Assembler class, the main interface for turning
source text into machine code. It ties together the instruction table,
the matcher and the encoder, and collects diagnostics for a whole run.

Each source line holds one statement. Lines are stripped, blank lines are
skipped, and the bytes of every statement are concatenated in file order
with no padding. A statement that matches no instruction contributes no
bytes and is reported, but assembly carries on with the next line.

Example Usage
-------------
>>> from octasm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_statement("jz 10")
[138, 120, 104]
>>> code = asm.assemble_string('''
...     li r3, 5
...     mov acc, r3
...     rtn
... ''')
>>> format_hex(code)
'85 43 2b 6a'

Command-Line Usage
------------------
    $ octasm program.asm              # print hex bytes
    $ octasm program.asm -o prog.bin  # write raw binary
    $ octasm --test                   # run the built-in self test
"""

from pathlib import Path
from typing import Optional, Union
import logging

from octasm.assembler.definitions import Instruction
from octasm.assembler.encoder import Encoder
from octasm.assembler.matcher import Matcher
from octasm.assembler.table import InstructionTable, default_table
from octasm.config import AssemblerConfig
from octasm.errors import EncodingError, ErrorCollector, SourceLocation


logger = logging.getLogger(__name__)


# =============================================================================
# Output Formatting
# =============================================================================

def format_hex(code: Union[bytes, list[int]]) -> str:
    """Format bytes as two-digit lowercase hex separated by spaces."""
    return " ".join(f"{b:02x}" for b in code)


def format_bits(code: Union[bytes, list[int]]) -> list[str]:
    """Format bytes as 8-digit binary strings."""
    return [f"{b:08b}" for b in code]


# =============================================================================
# Assembler
# =============================================================================

class Assembler:
    """
    Main assembler class.

    Attributes:
        config: The configuration of this assembler
        table: The instruction table statements are matched against
    """

    def __init__(
        self,
        config: Optional[AssemblerConfig] = None,
        table: Optional[InstructionTable] = None,
        verbose: bool = False,
    ):
        """
        Initialize the assembler.

        Args:
            config: Assembler configuration (defaults to AssemblerConfig())
            table: Instruction table. If None, the table is loaded from
                config.definitions_path, or the built-in table is used.
            verbose: Log progress at INFO level
        """
        self.config = config or AssemblerConfig()
        self._verbose = verbose

        if table is None:
            if self.config.definitions_path is not None:
                table = InstructionTable.from_file(
                    self.config.definitions_path,
                    max_depth=self.config.max_depth,
                )
            else:
                table = default_table()
        self.table = table

        self._encoder = Encoder(table, max_depth=self.config.max_depth)
        self._matcher: Matcher = self._encoder.matcher
        self._errors = ErrorCollector(max_errors=self.config.max_errors)
        self._code = bytearray()
        self._statement_count = 0

    # =========================================================================
    # Single Statements
    # =========================================================================

    def assemble_statement(self, statement: str) -> list[int]:
        """
        Assemble one statement.

        Returns:
            The encoded bytes, or an empty list if no instruction matches
            (a warning naming the statement is logged)

        Raises:
            EncodingError: If the statement matches but cannot be encoded
        """
        code = self._assemble_line(statement.strip())
        return code if code is not None else []

    def _assemble_line(self, statement: str) -> Optional[list[int]]:
        """Encode a statement, or return None if no instruction matches."""
        result = self._matcher.match(statement)
        if result is None:
            return None
        return self._encoder.encode(result.instruction, result.operands)

    def find_instruction(self, statement: str) -> Optional[Instruction]:
        """Return the instruction a statement matches, or None (no warning)."""
        result = self._matcher.find(statement.strip())
        return result.instruction if result else None

    def lookup(
        self,
        statement: str,
        instruction: bool = False,
    ) -> Union[list[int], Optional[Instruction]]:
        """
        Resolve a statement to its encoded bytes or to its instruction.

        Args:
            statement: The statement text
            instruction: If True, return the winning Instruction (or None)
                instead of the bytes

        Returns:
            The encoded bytes (default), or the matching Instruction
        """
        if instruction:
            return self.find_instruction(statement)
        return self.assemble_statement(statement)

    # =========================================================================
    # Source Text and Files
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> bytes:
        """
        Assemble source text, one statement per line.

        Unmatched statements are recorded as warnings, or as NoMatchError
        errors when config.strict is set; either way they contribute no
        bytes and the remaining lines are still assembled. A statement that
        matches but cannot be encoded is recorded as an EncodingError.

        Args:
            source: Assembly source text
            filename: Name used in diagnostics

        Returns:
            The machine code of all statements, in file order

        Raises:
            TooManyErrors: If more than config.max_errors errors occur
        """
        self._errors.clear()
        self._code = bytearray()
        self._statement_count = 0

        for lineno, line in enumerate(source.splitlines(), start=1):
            statement = line.strip()
            if not statement:
                continue
            self._statement_count += 1

            location = SourceLocation(filename, lineno)

            try:
                code = self._assemble_line(statement)
            except EncodingError as e:
                self._errors.add(EncodingError(
                    e.message, location=location, hint=e.hint, source_line=statement,
                ))
                continue

            if code is None:
                self._errors.add_no_match(statement, location, strict=self.config.strict)
                continue
            self._code.extend(code)

        if self._verbose:
            logger.info(
                f"Assembled {self._statement_count} statements into "
                f"{len(self._code)} bytes"
            )
        return bytes(self._code)

    def assemble_file(self, filepath: str | Path) -> bytes:
        """
        Assemble a source file.

        Raises:
            FileNotFoundError: If the source file does not exist
        """
        filepath = Path(filepath)
        if self._verbose:
            logger.info(f"Assembling {filepath}...")
        return self.assemble_string(filepath.read_text(), str(filepath))

    # =========================================================================
    # Results and Diagnostics
    # =========================================================================

    def get_code(self) -> bytes:
        """Return the machine code of the last assembly."""
        return bytes(self._code)

    def get_statement_count(self) -> int:
        """Return the number of statements seen by the last assembly."""
        return self._statement_count

    def has_errors(self) -> bool:
        return self._errors.has_errors()

    def has_warnings(self) -> bool:
        return self._errors.has_warnings()

    def get_errors(self) -> ErrorCollector:
        return self._errors

    def get_error_report(self) -> str:
        """Return all errors and warnings of the last assembly, formatted."""
        return self._errors.report()

    # =========================================================================
    # Output Methods
    # =========================================================================

    def format_code(self, output_format: Optional[str] = None) -> str:
        """
        Format the machine code for display.

        Args:
            output_format: "hex" or "bits" (default: config.output_format)
        """
        output_format = output_format or self.config.output_format
        if output_format == "bits":
            return " ".join(format_bits(self._code))
        return format_hex(self._code)

    def write_binary(self, filepath: str | Path) -> None:
        """Write the raw machine code to a file."""
        Path(filepath).write_bytes(self.get_code())

    def write_hex(self, filepath: str | Path) -> None:
        """Write the machine code as a line of hex bytes."""
        Path(filepath).write_text(format_hex(self._code) + "\n")


def assemble(source: str, config: Optional[AssemblerConfig] = None) -> bytes:
    """Assemble source text with a fresh assembler."""
    return Assembler(config).assemble_string(source)


def assemble_file(filepath: str | Path, config: Optional[AssemblerConfig] = None) -> bytes:
    """Assemble a source file with a fresh assembler."""
    return Assembler(config).assemble_file(filepath)
