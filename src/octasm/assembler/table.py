"""
Instruction Table
=================

Ordered, read-only registry of instruction definitions.

The table is built once from definition text and never changes afterwards,
so one table can be shared freely, including between threads. Building a
table parses every definition and then checks that every sub-statement
reference resolves to an instruction and that no reference chain loops;
a table with a broken definition is never returned.

Example
-------
>>> table = InstructionTable.from_text('''
... _imm n ; #1nnnnnnn
... jmp n  ; _imm n + #01101000
... ''')
>>> len(table), table.mnemonics
(2, ('_imm', 'jmp'))
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional
import logging

from octasm.assembler.definitions import Instruction, SubStatement, parse_definition
from octasm.assembler.encoder import DEFAULT_MAX_DEPTH, Encoder
from octasm.assembler.opcodes import DEFAULT_DEFINITIONS
from octasm.errors import (
    DefinitionParseError,
    EncodingError,
    SourceLocation,
    TemplateRecursionError,
)


logger = logging.getLogger(__name__)


class InstructionTable:
    """
    Instruction definitions in declaration order, grouped by mnemonic.

    Iterating the table yields every instruction in declaration order,
    which is the order the matcher tries them in.
    """

    def __init__(self, instructions: Iterable[Instruction]):
        self._instructions = tuple(instructions)

        by_mnemonic: dict[str, list[Instruction]] = {}
        for instruction in self._instructions:
            by_mnemonic.setdefault(instruction.mnemonic, []).append(instruction)
        self._by_mnemonic = {m: tuple(group) for m, group in by_mnemonic.items()}

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_text(
        cls,
        text: str,
        filename: str = "<definitions>",
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> "InstructionTable":
        """
        Build a table from "FORMAT ; ENCODING" lines. Blank lines are skipped.

        Args:
            text: Definition text
            filename: Source name for error messages
            max_depth: Nesting limit used to check sub-statement references

        Raises:
            DefinitionParseError: If any definition is malformed or a
                sub-statement reference does not resolve
        """
        instructions = [
            parse_definition(line, lineno, filename)
            for lineno, line in enumerate(text.splitlines(), start=1)
            if line.strip()
        ]
        table = cls(instructions)
        table.validate(max_depth=max_depth, filename=filename)

        logger.debug(
            f"Loaded {len(table)} instructions "
            f"({len(table.mnemonics)} mnemonics) from {filename}"
        )
        return table

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> "InstructionTable":
        """Build a table from a definition file."""
        path = Path(path)
        return cls.from_text(path.read_text(), str(path), max_depth=max_depth)

    def validate(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        filename: str = "<definitions>",
    ) -> None:
        """
        Check every sub-statement reference by encoding it with ``n = 0``.

        Raises:
            DefinitionParseError: If a reference, or one it leads to, matches
                no instruction
            TemplateRecursionError: If references nest deeper than max_depth
        """
        encoder = Encoder(self, max_depth=max_depth)

        for instruction in self._instructions:
            location = SourceLocation(filename, instruction.line)
            source_line = f"{instruction.format_text} ; {instruction.encoding_text}"

            for segment in instruction.template:
                if not isinstance(segment, SubStatement):
                    continue

                tokens = segment.substitute(0)
                result = encoder.matcher.find(tokens)
                if result is None:
                    raise DefinitionParseError(
                        f"sub-statement '{segment}' matches no instruction",
                        location=location,
                        hint="referenced statements must be defined in the same table",
                        source_line=source_line,
                    )

                try:
                    encoder.encode(result.instruction, result.operands, depth=1)
                except TemplateRecursionError as e:
                    raise TemplateRecursionError(
                        e.statement, e.depth,
                        location=location,
                        source_line=source_line,
                    ) from e
                except EncodingError as e:
                    raise DefinitionParseError(
                        e.message,
                        location=location,
                        hint=e.hint,
                        source_line=source_line,
                    ) from e

    # =========================================================================
    # Lookup
    # =========================================================================

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        """All instructions in declaration order."""
        return self._instructions

    @property
    def mnemonics(self) -> tuple[str, ...]:
        """Distinct mnemonics in order of first declaration."""
        return tuple(self._by_mnemonic)

    def get(self, mnemonic: str) -> tuple[Instruction, ...]:
        """Return the instructions declared for a mnemonic (empty if none)."""
        return self._by_mnemonic.get(mnemonic, ())

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def __contains__(self, mnemonic: object) -> bool:
        return mnemonic in self._by_mnemonic

    def __repr__(self) -> str:
        return f"InstructionTable({len(self)} instructions)"


_default_table: Optional[InstructionTable] = None


def default_table() -> InstructionTable:
    """
    Get the table of the built-in instruction set.

    Built from DEFAULT_DEFINITIONS on first access and shared afterwards.
    """
    global _default_table
    if _default_table is None:
        _default_table = InstructionTable.from_text(DEFAULT_DEFINITIONS, "<builtin>")
    return _default_table
