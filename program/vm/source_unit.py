"""Source units and the loader that collects them from disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".vm"


@dataclass
class SourceUnit:
    """One translation unit: a logical name plus its raw lines."""

    name: str
    lines: Sequence[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, name: str, text: str) -> "SourceUnit":
        return cls(name, text.splitlines())


@dataclass(frozen=True)
class UnitFailure:
    """
    A unit that could not be (fully) translated.

    kind is "io" for unreadable units, "syntax" for parse failures and
    "semantic" for commands that parse but cannot be addressed.
    """

    unit_name: str
    message: str
    command_text: str = ""
    line: Optional[int] = None
    kind: str = "syntax"

    def __str__(self) -> str:
        where = self.unit_name
        if self.command_text:
            where = f"{where}: '{self.command_text}'"
        return f"{where}: {self.message}"


def unit_name_for(path: Union[str, Path]) -> str:
    """Logical unit name: the file name minus its extension."""
    return Path(path).stem


def read_source_unit(path: Union[str, Path]) -> SourceUnit:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()
    return SourceUnit(unit_name_for(path), lines)


def discover_source_files(path: Union[str, Path]) -> List[Path]:
    """
    Return the .vm files a path stands for.

    A .vm file stands for itself and any other file for nothing; a directory
    for its .vm entries (not recursive), sorted by file name.

    Raises:
        FileNotFoundError: If the path does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"no such file or directory: {path}")
    if path.is_file():
        return [path] if path.suffix == SOURCE_SUFFIX else []
    return sorted(
        (entry for entry in path.iterdir() if entry.is_file() and entry.suffix == SOURCE_SUFFIX),
        key=lambda entry: entry.name,
    )


def load_source_units(path: Union[str, Path]) -> Tuple[List[SourceUnit], List[UnitFailure]]:
    """
    Read every unit a path stands for.

    Unreadable units are skipped and reported, never raised.
    """
    units: List[SourceUnit] = []
    failures: List[UnitFailure] = []

    for source in discover_source_files(path):
        try:
            units.append(read_source_unit(source))
        except (OSError, UnicodeDecodeError) as exc:
            failure = UnitFailure(unit_name_for(source), f"cannot read {source}: {exc}", kind="io")
            logger.warning("skipping unit %s", failure)
            failures.append(failure)
        else:
            logger.debug("loaded unit %s from %s", units[-1].name, source)

    return units, failures
