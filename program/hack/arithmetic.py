from __future__ import annotations
from typing import Callable, Dict, List

from vm.instruction import ArithmeticOp

from .instruction import AInstruction, CInstruction, HackNode
from .translator_base import HackTranslatorBase


def _binary(comp: str) -> List[HackNode]:
    """
    Pop y, replace x (the element below it) with ``comp``.

    After ``AM=M-1; D=M`` D holds y and ``A=A-1`` points at x, so in comp
    ``M`` is the operand pushed earlier and ``D`` the one pushed later.
    """
    return [
        AInstruction("SP"),
        CInstruction("M-1", dest="AM"),
        CInstruction("M", dest="D"),
        CInstruction("A-1", dest="A"),
        CInstruction(comp, dest="M"),
    ]


def _unary(comp: str) -> List[HackNode]:
    """Rewrite the top of the stack in place with ``comp``."""
    instructions = HackTranslatorBase.top_of_stack()
    instructions.append(CInstruction(comp, dest="M"))
    return instructions


def translate_add() -> List[HackNode]:
    """
    Generate Hack instructions for addition: x + y

    Examples:
        translate_add()
        # [@SP, AM=M-1, D=M, A=A-1, M=D+M]
    """
    return _binary("D+M")


def translate_sub() -> List[HackNode]:
    """
    Generate Hack instructions for subtraction: x - y

    Note:
        x is the operand pushed first, so the result is M-D, not D-M.
    """
    return _binary("M-D")


def translate_and() -> List[HackNode]:
    """Bitwise and: x & y"""
    return _binary("D&M")


def translate_or() -> List[HackNode]:
    """Bitwise or: x | y"""
    return _binary("D|M")


def translate_neg() -> List[HackNode]:
    """Two's complement negation of the top element."""
    return _unary("-M")


def translate_not() -> List[HackNode]:
    """Bitwise not of the top element."""
    return _unary("!M")


ARITHMETIC_TRANSLATORS: Dict[ArithmeticOp, Callable[[], List[HackNode]]] = {
    ArithmeticOp.ADD: translate_add,
    ArithmeticOp.SUB: translate_sub,
    ArithmeticOp.AND: translate_and,
    ArithmeticOp.OR: translate_or,
    ArithmeticOp.NEG: translate_neg,
    ArithmeticOp.NOT: translate_not,
}
