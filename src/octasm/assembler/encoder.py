"""
Template Encoder
================

Evaluates an instruction's encoding template into bytes.

The template is walked in order. Operand-bearing segments take the next
entry of the instruction's ``arg_map`` to pick the operand that feeds them:

- A bit pattern has each placeholder field replaced by the biased operand
  value in binary, then the 8 characters are read as one unsigned byte.
  ``add c, n`` with c = r5 gives ``01001c00`` -> ``01001000``.

- A sub-statement reference has its ``n`` word replaced by the decimal
  operand, is matched against the table again and encoded recursively;
  the resulting bytes are spliced in at that position. A reference that
  matches nothing for the operand given raises EncodingError.
  ``jz 10`` -> ``_imm 10`` + ``prdifz`` + ``01101000`` -> 3 bytes.

If a segment needs an operand and no operand is available, the operand
counts as zero: the field bits are all zero and ``n`` becomes ``0``.
Parsed tables never reach this, since every placeholder is checked against
the format when the definition is parsed.

Nesting of sub-statements is limited by ``max_depth`` so that a definition
referring to itself fails instead of recursing forever.
"""

from typing import TYPE_CHECKING, Optional, Sequence
import logging

from octasm.assembler.definitions import BitPattern, Instruction, SubStatement
from octasm.assembler.matcher import Matcher
from octasm.assembler.operands import OPERAND_CLASSES
from octasm.errors import EncodingError, TemplateRecursionError

if TYPE_CHECKING:
    from octasm.assembler.table import InstructionTable


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8


class Encoder:
    """
    Encodes matched instructions into bytes.

    Attributes:
        max_depth: Deepest allowed nesting of sub-statement references
    """

    def __init__(self, table: "InstructionTable", max_depth: int = DEFAULT_MAX_DEPTH):
        self._matcher = Matcher(table)
        self.max_depth = max_depth

    @property
    def matcher(self) -> Matcher:
        return self._matcher

    def encode(
        self,
        instruction: Instruction,
        operands: Sequence[int],
        depth: int = 0,
    ) -> list[int]:
        """
        Encode an instruction with resolved operands.

        Args:
            instruction: The instruction to encode
            operands: Operand values, in statement order
            depth: Current sub-statement nesting (0 at top level)

        Returns:
            The encoded bytes, in output order

        Raises:
            EncodingError: If an operand does not fit its bit field, or a
                sub-statement matches no instruction for the operand given
            TemplateRecursionError: If sub-statements nest too deeply
        """
        code: list[int] = []
        arg_map = iter(instruction.arg_map)

        for segment in instruction.template:
            value = None
            if segment.operand is not None:
                value = self._operand(instruction, operands, next(arg_map, None))

            if isinstance(segment, BitPattern):
                code.append(self._blit(instruction, segment, value))
            else:
                code.extend(self._encode_reference(segment, value, depth + 1))

        return code

    def _operand(
        self,
        instruction: Instruction,
        operands: Sequence[int],
        index: Optional[int],
    ) -> Optional[int]:
        """Return the operand at index, or None when there is none."""
        if index is None or index >= len(operands):
            logger.debug(f"{instruction}: no operand for index {index}, using zero")
            return None
        return operands[index]

    def _blit(
        self,
        instruction: Instruction,
        segment: BitPattern,
        value: Optional[int],
    ) -> int:
        pattern = segment.pattern
        if segment.operand is not None:
            cls = OPERAND_CLASSES[segment.operand]
            if value is None:
                bits = "0" * cls.width
            else:
                bits = cls.field_bits(value)
                if bits is None:
                    raise EncodingError(
                        f"{segment.operand} value {value} does not fit "
                        f"the {cls.width}-bit field of '{segment}'",
                        hint=f"legal values are {cls.minimum}..{cls.maximum}",
                        source_line=str(instruction),
                    )
            pattern = pattern.replace(cls.code * cls.width, bits)
        return int(pattern, 2)

    def _encode_reference(
        self,
        segment: SubStatement,
        value: Optional[int],
        depth: int,
    ) -> list[int]:
        if depth > self.max_depth:
            raise TemplateRecursionError(str(segment), self.max_depth)

        if segment.operand is not None and value is None:
            value = 0
        tokens = segment.substitute(value)

        result = self._matcher.find(tokens)
        if result is None:
            operand = "" if value is None else f" with n = {value}"
            raise EncodingError(
                f"sub-statement '{segment}'{operand} matches no instruction",
                hint="the referenced instruction must accept every value of n",
                source_line=str(segment),
            )

        logger.debug(f"{segment} (n = {value}) -> {result.instruction} (depth {depth})")
        return self.encode(result.instruction, result.operands, depth)
