"""
Stack VM front matter: the command model, the line parser and source units.

The translation engine in the ``hack`` package consumes what this package
produces one command at a time.
"""

from .instruction import (
    VMCommand,
    ArithmeticCommand,
    ArithmeticOp,
    ComparisonCommand,
    ComparisonOp,
    MemoryAccessCommand,
    Direction,
    Segment,
    BranchCommand,
    BranchKind,
    FunctionCommand,
    FunctionKind,
    COMMAND_TYPES,
)

from .parser import (
    VMSyntaxError,
    parse_command,
    parse_line,
    parse_lines,
    strip_comment,
)

from .source_unit import (
    SourceUnit,
    UnitFailure,
    load_source_units,
)

__all__ = [
    'VMCommand',
    'ArithmeticCommand',
    'ArithmeticOp',
    'ComparisonCommand',
    'ComparisonOp',
    'MemoryAccessCommand',
    'Direction',
    'Segment',
    'BranchCommand',
    'BranchKind',
    'FunctionCommand',
    'FunctionKind',
    'COMMAND_TYPES',
    'VMSyntaxError',
    'parse_command',
    'parse_line',
    'parse_lines',
    'strip_comment',
    'SourceUnit',
    'UnitFailure',
    'load_source_units',
]
