from __future__ import annotations
from typing import List

from vm.instruction import ComparisonOp

from .instruction import AInstruction, CInstruction, HackLabel, HackNode
from .translator_base import HackTranslatorBase

TRUE = "-1"
FALSE = "0"


def translate_comparison(
    op: ComparisonOp,
    true_label: str,
    end_label: str,
) -> List[HackNode]:
    """
    Generate Hack instructions for a comparison: x <op> y

    Pops y, computes x - y and replaces x with true (-1, all bits set) or
    false (0) depending on how the difference compares against zero.

    Args:
        op: Comparison to perform
        true_label: Label jumped to when the predicate holds
        end_label: Label both paths meet at

    Returns:
        List of Hack instructions and label declarations

    Examples:
        translate_comparison(ComparisonOp.LT, "LT_TRUE_3", "LT_END_3")
        # [@SP, AM=M-1, D=M, A=A-1, D=M-D, @LT_TRUE_3, D;JLT,
        #  @SP, A=M-1, M=0, @LT_END_3, 0;JMP,
        #  (LT_TRUE_3), @SP, A=M-1, M=-1, (LT_END_3)]

    Note:
        The difference can overflow for operands of opposite sign whose
        distance exceeds 15 bits; the result then follows the wrapped value.
    """
    top = HackTranslatorBase.top_of_stack
    return [
        AInstruction("SP"),
        CInstruction("M-1", dest="AM"),
        CInstruction("M", dest="D"),
        CInstruction("A-1", dest="A"),
        CInstruction("M-D", dest="D"),
        AInstruction(true_label),
        CInstruction("D", jump=op.jump),
        *top(),
        CInstruction(FALSE, dest="M"),
        AInstruction(end_label),
        CInstruction("0", jump="JMP"),
        HackLabel(true_label),
        *top(),
        CInstruction(TRUE, dest="M"),
        HackLabel(end_label),
    ]
