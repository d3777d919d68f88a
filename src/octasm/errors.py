"""
octasm Error Hierarchy
======================

This module defines the exception hierarchy for the whole assembler.
All exceptions inherit from OctasmError, allowing callers to catch all
assembler-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
OctasmError (base)
└── AssemblerError (carries location, hint and source text)
    ├── DefinitionParseError - malformed "FORMAT ; ENCODING" definition
    │   └── TemplateRecursionError - sub-statement nesting too deep
    ├── EncodingError - operand does not fit its bit field, or a
    │                   sub-statement reference matches nothing
    ├── NoMatchError - statement matched no instruction (strict mode)
    └── TooManyErrors - error collector limit reached

Definition errors are fatal: they are raised while the instruction table
is built and no table is produced. Statement errors are local to one
source line; outside strict mode an unmatched statement is only a warning.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class OctasmError(Exception):
    """
    Base exception for all octasm errors.

        try:
            table = InstructionTable.from_text(text)
        except OctasmError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source or definition text for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        """Format as 'filename:line:column' (or 'filename:line')."""
        if self.column > 0:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(OctasmError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            <definitions>:12: error: unknown placeholder 'x' in bit pattern
                add x ; #000000xx
            hint: placeholders are A, c, R, r and n
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None:
            parts.append(f"    {self.source_line}")
            if self.location is not None and self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class DefinitionParseError(AssemblerError):
    """
    Malformed instruction definition.

    Raised while building the instruction table. Examples:
        - missing ';' between FORMAT and ENCODING
        - bit pattern that is not 8 characters long
        - placeholder in the encoding with no matching operand in the format
        - placeholder run whose width differs from its operand class
        - sub-statement reference that matches no instruction
    """
    pass


class TemplateRecursionError(DefinitionParseError):
    """
    Sub-statement references nest deeper than the configured limit.

    This almost always means a definition refers to itself, directly or
    through another definition, e.g. ``foo n ; foo n``.
    """

    def __init__(
        self,
        statement: str,
        depth: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.statement = statement
        self.depth = depth
        super().__init__(
            f"sub-statement '{statement}' exceeds nesting depth {depth}",
            location=location,
            hint="check the encoding templates for a self-referencing definition",
            source_line=source_line,
        )


class EncodingError(AssemblerError):
    """
    A matched statement could not be encoded.

    Either an operand value does not fit the bit field it is encoded into
    (only possible when an encoder is driven directly with values that
    never went through matching), or a sub-statement reference such as
    ``foo n`` matches no instruction once its operand is filled in. The
    table is only checked with ``n = 0``, so ``foo 5`` can still fail here.
    """
    pass


class NoMatchError(AssemblerError):
    """
    A statement matched no instruction definition.

    Wrong operand names or out-of-range values are reported the same way as
    statements with an unknown shape.
    """

    def __init__(
        self,
        statement: str,
        location: Optional[SourceLocation] = None,
    ):
        self.statement = statement
        super().__init__(
            f"{statement} is not a valid instruction / encoding",
            location=location,
        )


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects the diagnostics of one assembly run.

    Assembly never stops at a bad line. Statements that match no instruction
    are recorded with add_no_match(): as warnings normally, or as
    NoMatchError errors in strict mode. Encoding errors of lines that did
    match are always errors. Any error fails the build; warnings alone do
    not.

    Example:
        collector = ErrorCollector(max_errors=100)
        collector.add_no_match("add r12", SourceLocation("prog.asm", 3))

        collector.unmatched_count()    # 1
        collector.has_errors()         # False, only a warning
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.warnings: list[str] = []
        self.unmatched: list[str] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"Too many errors ({self.max_errors}), stopping")

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def add_no_match(
        self,
        statement: str,
        location: SourceLocation,
        strict: bool = False,
    ) -> None:
        """
        Record a statement that matched no instruction.

        Raises:
            TooManyErrors: In strict mode, if max_errors has been reached
        """
        self.unmatched.append(statement)
        if strict:
            self.add(NoMatchError(statement, location=location))
        else:
            self.add_warning(
                f"{location}: {statement} is not a valid instruction / encoding"
            )

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def error_count(self) -> int:
        return len(self.errors)

    def warning_count(self) -> int:
        return len(self.warnings)

    def unmatched_count(self) -> int:
        return len(self.unmatched)

    def report(self) -> str:
        """
        Format all errors and warnings for display.

        Errors come first, each with its source context, then the warnings
        and a summary line, e.g.::

            Warnings:
              prog.asm:2: add r12 is not a valid instruction / encoding

            0 errors, 1 warning (1 statement skipped)
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  {warning}")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        summary = f"{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        if self.unmatched:
            statement_word = "statement" if len(self.unmatched) == 1 else "statements"
            summary += f" ({len(self.unmatched)} {statement_word} skipped)"
        lines.append(f"\n{summary}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected diagnostics."""
        self.errors.clear()
        self.warnings.clear()
        self.unmatched.clear()


class TooManyErrors(AssemblerError):
    """Raised when the error collector reaches its limit."""

    def __init__(self, message: str = "Too many errors"):
        super().__init__(message)
