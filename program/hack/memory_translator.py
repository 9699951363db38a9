"""
Push/pop translation from VM memory segments to Hack assembly.

Addressing rules per segment:
- constant: immediate literal, push only
- local/argument/this/that: base pointer register + index
- static: one assembler symbol per unit and index (``Unit.i``)
- temp: fixed registers R5..R12, index added to the base directly
- pointer: THIS (0) or THAT (1) themselves
"""

from __future__ import annotations

from typing import Dict, List

from vm.instruction import Direction, MemoryAccessCommand, Segment

from .calling_convention import SCRATCH_REGISTER, TEMP_BASE
from .instruction import AInstruction, CInstruction, HackNode
from .translator_base import HackTranslatorBase, TranslationError

BASE_POINTERS: Dict[Segment, str] = {
    Segment.LOCAL: "LCL",
    Segment.ARGUMENT: "ARG",
    Segment.THIS: "THIS",
    Segment.THAT: "THAT",
}

POINTER_REGISTERS = ("THIS", "THAT")


class MemoryTranslator:
    """
    Translates VM push and pop commands to Hack assembly.

    push: the addressed value is loaded into D and pushed (stack +1).
    pop: the top of stack is popped into the addressed location (stack -1).

    Indirect segments compute the target address into the scratch register
    before popping, because the pop itself needs A and D.
    """

    def __init__(self, translator_base: HackTranslatorBase):
        self.base = translator_base

    def translate(self, command: MemoryAccessCommand) -> None:
        if command.direction is Direction.PUSH:
            self.translate_push(command)
        else:
            self.translate_pop(command)

    def translate_push(self, command: MemoryAccessCommand) -> None:
        """
        Translate ``push segment index``.

        Args:
            command: push command to translate
        """
        instructions = self._load_into_d(command.segment, command.index)
        instructions.extend(self.base.push_d())
        self.base.emit_text_many(instructions)

    def translate_pop(self, command: MemoryAccessCommand) -> None:
        """
        Translate ``pop segment index``.

        Raises:
            TranslationError: For ``pop constant`` and invalid pointer indices.
        """
        segment, index = command.segment, command.index

        if segment is Segment.CONSTANT:
            raise TranslationError(f"cannot pop into the constant segment: {command}")

        if segment in BASE_POINTERS:
            instructions: List[HackNode] = [
                AInstruction(BASE_POINTERS[segment]),
                CInstruction("M", dest="D"),
                AInstruction(str(index)),
                CInstruction("D+A", dest="D"),
                AInstruction(SCRATCH_REGISTER),
                CInstruction("D", dest="M"),
            ]
            instructions.extend(self.base.pop_to_d())
            instructions.extend([
                AInstruction(SCRATCH_REGISTER),
                CInstruction("M", dest="A"),
                CInstruction("D", dest="M"),
            ])
        else:
            instructions = self.base.pop_to_d()
            instructions.extend([
                AInstruction(self._direct_address(segment, index)),
                CInstruction("D", dest="M"),
            ])

        self.base.emit_text_many(instructions)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _load_into_d(self, segment: Segment, index: int) -> List[HackNode]:
        if segment is Segment.CONSTANT:
            return [AInstruction(str(index)), CInstruction("A", dest="D")]

        if segment in BASE_POINTERS:
            return [
                AInstruction(BASE_POINTERS[segment]),
                CInstruction("M", dest="D"),
                AInstruction(str(index)),
                CInstruction("D+A", dest="A"),
                CInstruction("M", dest="D"),
            ]

        return [
            AInstruction(self._direct_address(segment, index)),
            CInstruction("M", dest="D"),
        ]

    def _direct_address(self, segment: Segment, index: int) -> str:
        """Symbol for segments whose slots have a fixed address."""
        if segment is Segment.STATIC:
            return self.base.label_manager.static_symbol(index)

        if segment is Segment.TEMP:
            # No range check; indices past 7 land outside the temp window.
            return f"R{TEMP_BASE + index}"

        if segment is Segment.POINTER:
            if index not in (0, 1):
                raise TranslationError(f"invalid pointer index {index}: expected 0 or 1")
            return POINTER_REGISTERS[index]

        raise TranslationError(f"unsupported segment: {segment.value}")
