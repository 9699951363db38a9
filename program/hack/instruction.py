from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class AInstruction:
    """
    Representation of a Hack A-instruction (``@value``).

    The value is kept textual: a decimal constant, a predefined register
    name (``SP``, ``R13``) or a symbol the assembler resolves later.
    """

    value: str

    def __str__(self) -> str:
        return f"@{self.value}"


@dataclass(frozen=True)
class CInstruction:
    """
    Representation of a Hack C-instruction (``dest=comp;jump``).

    dest and jump are optional; comp is always present.
    """

    comp: str
    dest: Optional[str] = None
    jump: Optional[str] = None

    def __str__(self) -> str:
        text = self.comp
        if self.dest:
            text = f"{self.dest}={text}"
        if self.jump:
            text = f"{text};{self.jump}"
        return text


@dataclass(frozen=True)
class HackLabel:
    """Represents a label declaration."""

    name: str

    def __str__(self) -> str:
        return f"({self.name})"


@dataclass(frozen=True)
class HackComment:
    """Represents a standalone comment line."""

    text: str

    def __str__(self) -> str:
        return f"// {self.text}"


HackNode = Union[AInstruction, CInstruction, HackLabel, HackComment]
