"""
Operand Classes and Register Naming
===================================

Every token of an instruction format is either a literal (a word or a
punctuation character that must appear verbatim) or one of five operand
classes. Each operand class has a one-character placeholder code used in
definitions, a legal value range checked while matching, and the width
and bias of the bit field it occupies in an encoding.

| Class       | Code | Legal values | Field width | Bias |
|-------------|------|--------------|-------------|------|
| Accumulator | A    | 6            | -           | -    |
| Register1   | c    | 5..6         | 1           | -5   |
| Register2   | R    | 4..7         | 2           | -4   |
| Register3   | r    | 0..7         | 3           | 0    |
| Number      | n    | 0..127       | 7           | 0    |

Register Layout
---------------
    r0  zero register
    r1  config
    r2  PC lower
    r3, r4  general purpose
    r5  tos (top of stack)
    r6  acc (accumulator)
    r7  sp (stack pointer)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import re


# =============================================================================
# Operand Kind Enumeration
# =============================================================================

class OperandKind(Enum):
    """Kind of a format token: a literal or one of the operand classes."""
    LITERAL = auto()
    ACCUMULATOR = auto()   # A
    REGISTER1 = auto()     # c
    REGISTER2 = auto()     # R
    REGISTER3 = auto()     # r
    NUMBER = auto()        # n

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return {
            OperandKind.LITERAL: "literal",
            OperandKind.ACCUMULATOR: "accumulator",
            OperandKind.REGISTER1: "1-bit register",
            OperandKind.REGISTER2: "2-bit register",
            OperandKind.REGISTER3: "3-bit register",
            OperandKind.NUMBER: "number",
        }[self]

    @property
    def is_register(self) -> bool:
        return self in (
            OperandKind.ACCUMULATOR,
            OperandKind.REGISTER1,
            OperandKind.REGISTER2,
            OperandKind.REGISTER3,
        )


# =============================================================================
# Operand Class Properties
# =============================================================================

@dataclass(frozen=True)
class OperandClass:
    """
    Fixed properties of an operand class.

    Attributes:
        kind: The operand kind
        code: Placeholder character used in definitions
        minimum: Smallest legal value (inclusive)
        maximum: Largest legal value (inclusive)
        width: Bit field width in an encoding (0 if never encoded)
        bias: Added to the value before it is written to its field
    """
    kind: OperandKind
    code: str
    minimum: int
    maximum: int
    width: int
    bias: int = 0

    def accepts(self, value: int) -> bool:
        """Return True if value is in this class's legal range."""
        return self.minimum <= value <= self.maximum

    def field_bits(self, value: int) -> Optional[str]:
        """
        Return the biased value as a zero-padded binary field.

        Returns None if the biased value is negative or wider than the field.
        """
        biased = value + self.bias
        if biased < 0 or biased >= (1 << self.width):
            return None
        return format(biased, f"0{self.width}b")


OPERAND_CLASSES: dict[OperandKind, OperandClass] = {
    OperandKind.ACCUMULATOR: OperandClass(OperandKind.ACCUMULATOR, "A", 6, 6, 0),
    OperandKind.REGISTER1: OperandClass(OperandKind.REGISTER1, "c", 5, 6, 1, -5),
    OperandKind.REGISTER2: OperandClass(OperandKind.REGISTER2, "R", 4, 7, 2, -4),
    OperandKind.REGISTER3: OperandClass(OperandKind.REGISTER3, "r", 0, 7, 3),
    OperandKind.NUMBER: OperandClass(OperandKind.NUMBER, "n", 0, 127, 7),
}

# Placeholder code -> operand kind
PLACEHOLDERS: dict[str, OperandKind] = {
    cls.code: kind for kind, cls in OPERAND_CLASSES.items()
}

# Placeholders that may appear inside an 8-bit pattern
FIELD_PLACEHOLDERS = frozenset(
    cls.code for cls in OPERAND_CLASSES.values() if cls.width > 0
)


# =============================================================================
# Format Tokens
# =============================================================================

@dataclass(frozen=True)
class FormatToken:
    """
    One unit of an instruction's argument shape.

    Attributes:
        kind: LITERAL or an operand class
        text: The token text as written in the definition
    """
    kind: OperandKind
    text: str

    @classmethod
    def from_text(cls, text: str) -> "FormatToken":
        """Classify a format token: placeholder codes become operand classes."""
        return cls(PLACEHOLDERS.get(text, OperandKind.LITERAL), text)

    @property
    def is_operand(self) -> bool:
        return self.kind is not OperandKind.LITERAL

    def __str__(self) -> str:
        return self.text


# =============================================================================
# Register Naming
# =============================================================================

REGISTER_ALIASES: dict[str, int] = {
    "config": 1,
    "tos": 5,
    "acc": 6,
    "sp": 7,
}

_REGISTER_RE = re.compile(r"r([0-9]+)")
_NUMBER_RE = re.compile(r"[0-9]+")


def resolve_register(name: str) -> Optional[int]:
    """
    Resolve a register name to its index.

    Any ``r<digits>`` name resolves to its number, even past r7; range
    checks belong to the operand class. Aliases: config, tos, acc, sp.

    Returns:
        The register index, or None for an unknown name
    """
    if m := _REGISTER_RE.fullmatch(name):
        return int(m.group(1))
    return REGISTER_ALIASES.get(name)


def resolve_operand(kind: OperandKind, text: str) -> Optional[int]:
    """
    Resolve a statement token against an operand class.

    Registers resolve by name, numbers must be unsigned decimal. The value
    must also lie in the class's legal range.

    Returns:
        The operand value, or None if the token does not fit the class
    """
    if kind.is_register:
        value = resolve_register(text)
    elif kind is OperandKind.NUMBER:
        value = int(text) if _NUMBER_RE.fullmatch(text) else None
    else:
        return None

    if value is None or not OPERAND_CLASSES[kind].accepts(value):
        return None
    return value
