"""
Control flow translation from VM commands to Hack assembly.

This module handles the translation of:
- Label declarations (label L)
- Unconditional jumps (goto L)
- Conditional jumps (if-goto L)
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from vm.instruction import BranchCommand, BranchKind

from .instruction import AInstruction, CInstruction

if TYPE_CHECKING:
    from .translator_base import HackTranslatorBase


class ControlFlowTranslator:
    """
    Translates VM branching commands to Hack assembly.

    This class handles:
    - Label emission: label L → (F$L)
    - Unconditional jumps: goto L → @F$L, 0;JMP
    - Conditional branches: if-goto L → pop into D, @F$L, D;JNE

    F is the function the label is declared in, so the same bare label in
    two functions never collides.  Targets are not checked for existence;
    forward references are the normal case.
    """

    def __init__(self, translator_base: HackTranslatorBase):
        """
        Initialize the control flow translator.

        Args:
            translator_base: Base translator providing the label manager
                           and instruction emission facilities
        """
        self.base = translator_base

    def translate(self, command: BranchCommand) -> None:
        if command.kind is BranchKind.LABEL:
            self.translate_label(command)
        elif command.kind is BranchKind.GOTO:
            self.translate_goto(command)
        else:
            self.translate_if_goto(command)

    def translate_label(self, command: BranchCommand) -> None:
        """
        Emit a function-scoped label declaration.

        VM: label LOOP   (inside Main.run)
        Hack: (Main.run$LOOP)
        """
        self.base.emit_label(self.base.label_manager.scoped_label(command.label))

    def translate_goto(self, command: BranchCommand) -> None:
        """
        Translate unconditional goto to a Hack jump.

        VM: goto LOOP
        Hack: @F$LOOP
              0;JMP
        """
        target = self.base.label_manager.scoped_label(command.label)
        self.base.emit_text_many([
            AInstruction(target),
            CInstruction("0", jump="JMP"),
        ])

    def translate_if_goto(self, command: BranchCommand) -> None:
        """
        Translate if-goto: pop the condition, jump when it is nonzero.

        Any nonzero value counts as true, not only -1.
        """
        target = self.base.label_manager.scoped_label(command.label)
        instructions = self.base.pop_to_d()
        instructions.extend([
            AInstruction(target),
            CInstruction("D", jump="JNE"),
        ])
        self.base.emit_text_many(instructions)
