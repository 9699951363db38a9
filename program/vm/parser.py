"""Line parser for the stack VM language."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional, Tuple

from .instruction import (
    ArithmeticCommand,
    ArithmeticOp,
    BranchCommand,
    BranchKind,
    ComparisonCommand,
    ComparisonOp,
    Direction,
    FunctionCommand,
    FunctionKind,
    MemoryAccessCommand,
    Segment,
    VMCommand,
)

COMMENT_MARKER = "//"

_NON_NEGATIVE_INT = re.compile(r"^\d+$")

_ARITHMETIC = {op.value: op for op in ArithmeticOp}
_COMPARISON = {op.value: op for op in ComparisonOp}
_DIRECTIONS = {d.value: d for d in Direction}
_SEGMENTS = {s.value: s for s in Segment}
_BRANCHES = {k.value: k for k in BranchKind}


class VMSyntaxError(Exception):
    """Exception for malformed VM source lines."""

    def __init__(self, message: str, line: Optional[int] = None, text: Optional[str] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
        self.text = text


def strip_comment(text: str) -> str:
    """Drop everything from the first comment marker on and trim whitespace."""
    return text.split(COMMENT_MARKER, 1)[0].strip()


def _expect_operands(opcode: str, operands, expected: int, cmd: str) -> None:
    if len(operands) != expected:
        raise VMSyntaxError(
            f"'{opcode}' expects {expected} operand(s), got {len(operands)}: {cmd}"
        )


def _parse_count(opcode: str, token: str, what: str) -> int:
    if not _NON_NEGATIVE_INT.match(token):
        raise VMSyntaxError(f"invalid {what} for {opcode}: {token!r} is not a non-negative integer")
    return int(token)


def parse_command(text: str) -> Optional[VMCommand]:
    """
    Classify one raw source line.

    Returns None for blank and comment-only lines.

    Raises:
        VMSyntaxError: Unknown opcode, wrong operand count, unknown segment
            or a non-integer where an integer is required.
    """
    cmd = strip_comment(text)
    if not cmd:
        return None

    opcode, *operands = cmd.split()

    if opcode in _ARITHMETIC:
        _expect_operands(opcode, operands, 0, cmd)
        return ArithmeticCommand(_ARITHMETIC[opcode])

    if opcode in _COMPARISON:
        _expect_operands(opcode, operands, 0, cmd)
        return ComparisonCommand(_COMPARISON[opcode])

    if opcode in _DIRECTIONS:
        _expect_operands(opcode, operands, 2, cmd)
        segment_name, index = operands
        segment = _SEGMENTS.get(segment_name)
        if segment is None:
            raise VMSyntaxError(f"unknown segment for {opcode}: {segment_name!r}")
        return MemoryAccessCommand(
            _DIRECTIONS[opcode], segment, _parse_count(opcode, index, "index")
        )

    if opcode in _BRANCHES:
        _expect_operands(opcode, operands, 1, cmd)
        return BranchCommand(_BRANCHES[opcode], operands[0])

    if opcode in ("function", "call"):
        _expect_operands(opcode, operands, 2, cmd)
        name, count = operands
        what = "local count" if opcode == "function" else "argument count"
        return FunctionCommand(FunctionKind(opcode), name, _parse_count(opcode, count, what))

    if opcode == "return":
        _expect_operands(opcode, operands, 0, cmd)
        return FunctionCommand(FunctionKind.RETURN)

    raise VMSyntaxError(f"unsupported command: {cmd}")


def parse_line(text: str, line: Optional[int] = None) -> Optional[VMCommand]:
    """Parse one line, attaching the line number to any syntax error."""
    try:
        return parse_command(text)
    except VMSyntaxError as exc:
        if line is None:
            raise
        raise VMSyntaxError(str(exc), line=line, text=strip_comment(text)) from exc


def parse_lines(lines: Iterable[str]) -> Iterator[Tuple[int, str, VMCommand]]:
    """
    Yield (line_number, command_text, command) for every command in order.

    Parsing is lazy: a syntax error surfaces only when the generator reaches
    the offending line, after every earlier command has been yielded.
    """
    for number, raw in enumerate(lines, start=1):
        command = parse_line(raw, line=number)
        if command is not None:
            yield number, strip_comment(raw), command
