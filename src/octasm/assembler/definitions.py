"""
Instruction Definition Parser
=============================

Compiles one "FORMAT ; ENCODING" definition line into an Instruction.

Definition Grammar
------------------
    definition := FORMAT ";" ENCODING
    FORMAT     := mnemonic token*
    ENCODING   := segment ("+" segment)*
    segment    := "#" pattern          ; 8-bit pattern
                | statement            ; sub-statement reference

FORMAT is tokenized like a source statement. Tokens equal to a placeholder
code (A, c, R, r, n) are operand classes; everything else must appear
verbatim in a matching statement.

A bit pattern has exactly 8 characters. '0' and '1' are constant bits; a
run of one placeholder character is the binary field of an operand, and
the run must be as wide as the operand class's field:

    c        1-bit register     (r5..r6 -> 0..1)
    RR       2-bit register     (r4..r7 -> 0..3)
    rrr      3-bit register     (r0..r7)
    nnnnnnn  7-bit number       (0..127)

A sub-statement reference is the text of another statement. A standalone
word "n" is replaced by the current Number operand before the statement is
matched and encoded in turn, so composite instructions are built from
simpler ones:

    _imm n ; #1nnnnnnn
    jz  n  ; _imm n + prdifz + #01101000

Operand Map
-----------
Each operand-bearing segment consumes one entry of the instruction's
``arg_map``: the position (among the format's operand tokens) of the first
operand of the segment's class. Segments without operands consume nothing.

Example
-------
>>> instr = parse_definition("ld c, [r7 + n] ; _imm n + #0101011c")
>>> instr.mnemonic
'ld'
>>> instr.arg_map
(1, 0)
"""

from dataclasses import dataclass
from typing import Optional, Union

from octasm.assembler.lexer import tokenize, is_word
from octasm.assembler.operands import (
    FIELD_PLACEHOLDERS,
    OPERAND_CLASSES,
    PLACEHOLDERS,
    FormatToken,
    OperandKind,
)
from octasm.errors import DefinitionParseError, SourceLocation


# Marker that starts a bit pattern segment
PATTERN_MARKER = "#"

# Number of characters in a bit pattern
PATTERN_WIDTH = 8

# Standalone word replaced by the Number operand in sub-statements
NUMBER_WORD = "n"


# =============================================================================
# Encoding Segments
# =============================================================================

@dataclass(frozen=True)
class BitPattern:
    """
    An 8-bit pattern segment.

    Attributes:
        pattern: The 8 pattern characters (without the '#' marker)
        operand: Operand class of the placeholder fields, None if constant
    """
    pattern: str
    operand: Optional[OperandKind] = None

    def __str__(self) -> str:
        return f"{PATTERN_MARKER}{self.pattern}"


@dataclass(frozen=True)
class SubStatement:
    """
    A reference to another statement, pre-tokenized.

    Attributes:
        tokens: Statement tokens; NUMBER_WORD tokens are substituted
        operand: OperandKind.NUMBER if the statement takes the Number
            operand, None otherwise
    """
    tokens: tuple[str, ...]
    operand: Optional[OperandKind] = None

    @property
    def mnemonic(self) -> str:
        return self.tokens[0]

    def substitute(self, value: Optional[int]) -> list[str]:
        """
        Return the statement tokens with the Number operand filled in.

        Args:
            value: Operand value, or None to keep the tokens unchanged
        """
        if value is None or self.operand is None:
            return list(self.tokens)
        head, *rest = self.tokens
        return [head] + [str(value) if t == NUMBER_WORD else t for t in rest]

    def __str__(self) -> str:
        return " ".join(self.tokens)


EncodingSegment = Union[BitPattern, SubStatement]


# =============================================================================
# Instruction
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    A parsed instruction definition.

    Attributes:
        mnemonic: Leading word of the format
        format: Format tokens, one per statement token
        template: Encoding segments in output order
        arg_map: Operand index consumed by each operand-bearing segment
        format_text: The format as written
        encoding_text: The encoding as written
        line: Line number in the definition text (0 if unknown)
    """
    mnemonic: str
    format: tuple[FormatToken, ...]
    template: tuple[EncodingSegment, ...]
    arg_map: tuple[int, ...]
    format_text: str
    encoding_text: str
    line: int = 0

    @property
    def operand_kinds(self) -> tuple[OperandKind, ...]:
        """Operand classes of the format, in statement order."""
        return tuple(t.kind for t in self.format if t.is_operand)

    @property
    def is_composite(self) -> bool:
        """True if any segment refers to another statement."""
        return any(isinstance(s, SubStatement) for s in self.template)

    def __str__(self) -> str:
        return f"Instruction({self.format_text}, {self.encoding_text})"


# =============================================================================
# Parser
# =============================================================================

def parse_definition(
    text: str,
    line: int = 0,
    filename: str = "<definitions>",
) -> Instruction:
    """
    Parse one "FORMAT ; ENCODING" definition.

    Args:
        text: The definition line
        line: Line number for error messages
        filename: Source name for error messages

    Returns:
        The parsed Instruction

    Raises:
        DefinitionParseError: If the definition is malformed
    """
    parser = _DefinitionParser(text.strip(), SourceLocation(filename, line))
    return parser.parse()


class _DefinitionParser:
    """Parses a single definition; holds the context for error messages."""

    def __init__(self, text: str, location: SourceLocation):
        self.text = text
        self.location = location

    def error(self, message: str, hint: Optional[str] = None) -> DefinitionParseError:
        return DefinitionParseError(
            message,
            location=self.location,
            hint=hint,
            source_line=self.text,
        )

    def parse(self) -> Instruction:
        format_text, sep, encoding_text = self.text.partition(";")
        format_text = format_text.strip()
        encoding_text = encoding_text.strip()

        if not sep:
            raise self.error(
                "missing ';' between format and encoding",
                hint="definitions are written as 'FORMAT ; ENCODING'",
            )
        if not format_text:
            raise self.error("empty instruction format")
        if not encoding_text:
            raise self.error("empty encoding")

        fmt = self._parse_format(format_text)
        template = tuple(
            self._parse_segment(piece.strip())
            for piece in encoding_text.split("+")
        )
        arg_map = self._build_arg_map(fmt, template)

        return Instruction(
            mnemonic=fmt[0].text,
            format=fmt,
            template=template,
            arg_map=arg_map,
            format_text=format_text,
            encoding_text=encoding_text,
            line=self.location.line,
        )

    def _parse_format(self, format_text: str) -> tuple[FormatToken, ...]:
        fmt = tuple(FormatToken.from_text(t) for t in tokenize(format_text))
        first = fmt[0]
        if first.is_operand or not is_word(first.text):
            raise self.error(
                f"format must start with a mnemonic, not '{first.text}'"
            )
        return fmt

    def _parse_segment(self, piece: str) -> EncodingSegment:
        if not piece:
            raise self.error("empty encoding segment", hint="check for a stray '+'")
        if piece.startswith(PATTERN_MARKER):
            return self._parse_pattern(piece[len(PATTERN_MARKER):])
        return self._parse_sub_statement(piece)

    def _parse_pattern(self, pattern: str) -> BitPattern:
        if len(pattern) != PATTERN_WIDTH:
            raise self.error(
                f"bit pattern '{pattern}' has {len(pattern)} characters, "
                f"expected {PATTERN_WIDTH}"
            )

        operand: Optional[OperandKind] = None
        for start, end in _placeholder_runs(pattern):
            code = pattern[start]
            if code not in FIELD_PLACEHOLDERS:
                raise self.error(
                    f"unknown placeholder '{code}' in bit pattern '{pattern}'",
                    hint="bit patterns use 0, 1, c, R, r and n",
                )
            kind = PLACEHOLDERS[code]
            width = OPERAND_CLASSES[kind].width
            if end - start != width:
                raise self.error(
                    f"field '{pattern[start:end]}' is {end - start} bits wide, "
                    f"{kind} fields are {width} bits",
                )
            if operand is not None and operand is not kind:
                raise self.error(
                    f"bit pattern '{pattern}' mixes {operand} and {kind} fields",
                )
            operand = kind

        return BitPattern(pattern, operand)

    def _parse_sub_statement(self, piece: str) -> SubStatement:
        tokens = tuple(tokenize(piece))
        if not is_word(tokens[0]):
            raise self.error(f"sub-statement '{piece}' must start with a mnemonic")
        operand = OperandKind.NUMBER if NUMBER_WORD in tokens[1:] else None
        return SubStatement(tokens, operand)

    def _build_arg_map(
        self,
        fmt: tuple[FormatToken, ...],
        template: tuple[EncodingSegment, ...],
    ) -> tuple[int, ...]:
        operand_kinds = [t.kind for t in fmt if t.is_operand]
        arg_map = []
        for segment in template:
            if segment.operand is None:
                continue
            if segment.operand not in operand_kinds:
                raise self.error(
                    f"encoding segment '{segment}' uses a {segment.operand} "
                    f"operand that the format does not have",
                    hint=f"add '{OPERAND_CLASSES[segment.operand].code}' to the format",
                )
            arg_map.append(operand_kinds.index(segment.operand))
        return tuple(arg_map)


def _placeholder_runs(pattern: str) -> list[tuple[int, int]]:
    """Return (start, end) of each maximal run of a non-bit character."""
    runs = []
    i = 0
    while i < len(pattern):
        if pattern[i] in "01":
            i += 1
            continue
        start = i
        while i < len(pattern) and pattern[i] == pattern[start]:
            i += 1
        runs.append((start, i))
    return runs
