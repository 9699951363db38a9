"""
Command model for the stack VM language.

Every source line that is not blank or a comment becomes exactly one of the
command classes below.  The classes carry the operands and render back to
canonical VM text, nothing else.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ArithmeticOp(Enum):
    """Arithmetic and bitwise operations."""

    ADD = "add"
    SUB = "sub"
    NEG = "neg"
    AND = "and"
    OR = "or"
    NOT = "not"

    @property
    def is_unary(self) -> bool:
        return self in (ArithmeticOp.NEG, ArithmeticOp.NOT)


class ComparisonOp(Enum):
    """Comparison operations, each mapped to the jump that tests it."""

    EQ = "eq"
    LT = "lt"
    GT = "gt"

    @property
    def jump(self) -> str:
        return {"eq": "JEQ", "lt": "JLT", "gt": "JGT"}[self.value]


class Direction(Enum):
    PUSH = "push"
    POP = "pop"


class Segment(Enum):
    """Virtual memory segments addressed by push/pop."""

    CONSTANT = "constant"
    LOCAL = "local"
    ARGUMENT = "argument"
    THIS = "this"
    THAT = "that"
    STATIC = "static"
    TEMP = "temp"
    POINTER = "pointer"


class BranchKind(Enum):
    LABEL = "label"
    GOTO = "goto"
    IF_GOTO = "if-goto"


class FunctionKind(Enum):
    FUNCTION = "function"
    CALL = "call"
    RETURN = "return"


class VMCommand(ABC):
    """Base class for VM commands."""

    @abstractmethod
    def __str__(self) -> str:
        """Return the command as VM source text."""
        pass


@dataclass(frozen=True)
class ArithmeticCommand(VMCommand):
    """add, sub, neg, and, or, not"""

    op: ArithmeticOp

    def __str__(self) -> str:
        return self.op.value


@dataclass(frozen=True)
class ComparisonCommand(VMCommand):
    """eq, lt, gt"""

    op: ComparisonOp

    def __str__(self) -> str:
        return self.op.value


@dataclass(frozen=True)
class MemoryAccessCommand(VMCommand):
    """push segment index / pop segment index"""

    direction: Direction
    segment: Segment
    index: int

    def __str__(self) -> str:
        return f"{self.direction.value} {self.segment.value} {self.index}"


@dataclass(frozen=True)
class BranchCommand(VMCommand):
    """label L / goto L / if-goto L"""

    kind: BranchKind
    label: str

    def __str__(self) -> str:
        return f"{self.kind.value} {self.label}"


@dataclass(frozen=True)
class FunctionCommand(VMCommand):
    """function f k / call f n / return"""

    kind: FunctionKind
    name: Optional[str] = None
    count: int = 0

    def __str__(self) -> str:
        if self.kind is FunctionKind.RETURN:
            return "return"
        return f"{self.kind.value} {self.name} {self.count}"


COMMAND_TYPES = (
    ArithmeticCommand,
    ComparisonCommand,
    MemoryAccessCommand,
    BranchCommand,
    FunctionCommand,
)
