"""
Statement Matcher
=================

Finds the instruction definition a statement belongs to and resolves its
operand values.

Candidates are tried across the whole table in declaration order, not only
among definitions sharing the statement's mnemonic; the first definition
whose format accepts every token wins. A candidate is rejected as a whole
when:

- the statement has a different number of tokens than the format,
- a literal token differs from the format text,
- an operand token does not resolve (unknown register name, non-decimal
  number) or lies outside its class's legal range.

Bad operands and statements of an unknown shape are therefore reported
the same way: nothing matched.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Union
import logging

from octasm.assembler.definitions import Instruction
from octasm.assembler.lexer import tokenize
from octasm.assembler.operands import OperandKind, resolve_operand

if TYPE_CHECKING:
    from octasm.assembler.table import InstructionTable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """
    A successful match.

    Attributes:
        instruction: The winning instruction definition
        operands: Resolved operand values, in statement order
    """
    instruction: Instruction
    operands: tuple[int, ...]


def match_instruction(
    instruction: Instruction,
    tokens: Sequence[str],
) -> Optional[tuple[int, ...]]:
    """
    Match statement tokens against one instruction's format.

    Returns:
        The operand values in statement order, or None if the format does
        not accept the tokens
    """
    if len(tokens) != len(instruction.format):
        return None

    operands = []
    for fmt, token in zip(instruction.format, tokens):
        if fmt.kind is OperandKind.LITERAL:
            if token != fmt.text:
                return None
            continue

        value = resolve_operand(fmt.kind, token)
        if value is None:
            return None
        operands.append(value)

    return tuple(operands)


class Matcher:
    """
    Matches statements against an instruction table.

    Example:
        >>> matcher = Matcher(default_table())
        >>> result = matcher.match("add r5, 4")
        >>> str(result.instruction), result.operands
        ('Instruction(add c, n, _imm n + #01001c00)', (5, 4))
    """

    def __init__(self, table: "InstructionTable"):
        self._table = table

    @property
    def table(self) -> "InstructionTable":
        return self._table

    def find(self, tokens: Union[str, Sequence[str]]) -> Optional[MatchResult]:
        """
        Find the first instruction accepting the statement, without warning.

        Args:
            tokens: Statement tokens, or statement text to tokenize
        """
        if isinstance(tokens, str):
            tokens = tokenize(tokens)

        for instruction in self._table:
            operands = match_instruction(instruction, tokens)
            if operands is not None:
                return MatchResult(instruction, operands)
        return None

    def match(
        self,
        tokens: Union[str, Sequence[str]],
        statement: Optional[str] = None,
    ) -> Optional[MatchResult]:
        """
        Find the first instruction accepting the statement.

        Logs a warning naming the statement when nothing matches.

        Args:
            tokens: Statement tokens, or statement text to tokenize
            statement: Text to name in the warning when tokens is a list
                (default: the tokens joined by spaces)

        Returns:
            The match, or None if no instruction accepts the statement
        """
        if statement is None:
            statement = tokens if isinstance(tokens, str) else " ".join(tokens)
        result = self.find(tokens)
        if result is None:
            logger.warning(f"{statement} is not a valid instruction / encoding")
        return result
