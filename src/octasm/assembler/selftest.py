"""
Built-in Self Test
==================

Known-answer checks for the built-in instruction set. ``octasm --test``
runs them and prints one line per statement.
"""

from dataclasses import dataclass
from typing import Optional

from octasm.assembler.assembler import Assembler, format_bits


# (statement, expected bytes)
SELF_TEST_CASES: list[tuple[str, list[int]]] = [
    ("add r5, 4",        [0b1000_0100, 0b0100_1000]),
    ("ld r6, [r7 + 10]", [0b1000_1010, 0b0101_0111]),
    ("add acc",          [0b0000_0010]),
    ("mov r5, acc",      [0b0010_0101]),
    ("mov acc, r2",      [0b0010_1010]),
    ("jmp 127",          [0b1111_1111, 0b0110_1000]),
    ("jmp r7",           [0b0110_1100]),
    ("rtn",              [0b0110_1010]),
    ("jz 10",            [0b1000_1010, 0b0111_1000, 0b0110_1000]),
    ("mov acc, sp",      [0b0010_1111]),
    ("add r12",          []),
]


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one known-answer check."""
    statement: str
    expected: list[int]
    actual: list[int]
    instruction: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.actual == self.expected

    def __str__(self) -> str:
        if self.passed:
            return f"{self.statement:<20} {str(format_bits(self.actual)):<40} ✓"
        return "\n".join([
            f"{self.statement} is wrong!",
            f"  matched: {self.instruction}",
            f"  got:     {format_bits(self.actual)}",
            f"  wanted:  {format_bits(self.expected)}",
        ])


def run_self_test(
    assembler: Optional[Assembler] = None,
    cases: Optional[list[tuple[str, list[int]]]] = None,
) -> list[CheckResult]:
    """
    Run known-answer checks.

    Args:
        assembler: Assembler to check (default: built-in table)
        cases: (statement, expected bytes) pairs (default: SELF_TEST_CASES)

    Returns:
        One CheckResult per case, in order
    """
    assembler = assembler or Assembler()
    results = []
    for statement, expected in cases if cases is not None else SELF_TEST_CASES:
        actual = assembler.assemble_statement(statement)
        instruction = None
        if actual != expected:
            found = assembler.find_instruction(statement)
            instruction = str(found) if found else None
        results.append(CheckResult(statement, expected, actual, instruction))
    return results
