"""
Hack VM Calling Convention Implementation

This module fixes the register usage and the stack frame layout shared by
call, function and return.

Hack Register Usage Convention:
┌──────────────┬─────────────────┬────────────────────────────────────┐
│ Address      │ Name            │ Usage                              │
├──────────────┼─────────────────┼────────────────────────────────────┤
│ 0            │ SP              │ Stack pointer (next free slot)     │
│ 1            │ LCL             │ Base of the current local segment  │
│ 2            │ ARG             │ Base of the current argument seg.  │
│ 3            │ THIS            │ Base of this (pointer 0)           │
│ 4            │ THAT            │ Base of that (pointer 1)           │
│ 5-12         │ R5-R12          │ temp segment                       │
│ 13-15        │ R13-R15         │ Translator scratch registers       │
│ 16-255       │                 │ static variables                   │
│ 256-2047     │                 │ stack                              │
└──────────────┴─────────────────┴────────────────────────────────────┘

Frame pushed by ``call f n`` (stack grows upward):

    ARG ->  argument 0 .. argument n-1
            return address
            saved LCL
            saved ARG
            saved THIS
            saved THAT
    LCL ->  local 0 .. local k-1      (pushed by ``function f k``)

Calling Convention Rules:
1. The caller pushes n arguments, then the 5-word frame.
2. Callee ARG = SP - n - 5, callee LCL = SP.
3. ``return`` copies the top of stack into argument 0, sets SP = ARG + 1,
   restores THAT, THIS, ARG, LCL from the frame and jumps to the saved
   return address.  Net effect of a call: SP moves by 1 - n.
"""

from typing import List

from .instruction import AInstruction, CInstruction, HackLabel, HackNode
from .translator_base import HackTranslatorBase

STACK_BASE = 256
TEMP_BASE = 5
SCRATCH_REGISTER = "R13"

# Caller state saved on call, in push order.
SAVED_POINTERS = ["LCL", "ARG", "THIS", "THAT"]
FRAME_SIZE = 1 + len(SAVED_POINTERS)
RETURN_ADDRESS_OFFSET = FRAME_SIZE


class CallingConvention:
    """
    Generates the Hack sequences implementing the VM calling convention.

    Each generator returns a list of nodes; the function translator decides
    where they go.
    """

    @staticmethod
    def generate_bootstrap(stack_base: int = STACK_BASE) -> List[HackNode]:
        """Point SP at the stack base before any translated code runs."""
        return [
            AInstruction(str(stack_base)),
            CInstruction("A", dest="D"),
            AInstruction("SP"),
            CInstruction("D", dest="M"),
        ]

    @staticmethod
    def generate_local_initialisation(local_count: int) -> List[HackNode]:
        """
        Push the literal 0 once per local slot.

        Args:
            local_count: Number of locals the function declares (may be 0)
        """
        instructions: List[HackNode] = []
        for _ in range(local_count):
            instructions.extend([
                AInstruction("SP"),
                CInstruction("M", dest="A"),
                CInstruction("0", dest="M"),
                AInstruction("SP"),
                CInstruction("M+1", dest="M"),
            ])
        return instructions

    @staticmethod
    def generate_save_frame(return_label: str) -> List[HackNode]:
        """Push the return address followed by the caller's base pointers."""
        instructions: List[HackNode] = [AInstruction(return_label), CInstruction("A", dest="D")]
        instructions.extend(HackTranslatorBase.push_d())
        for pointer in SAVED_POINTERS:
            instructions.append(AInstruction(pointer))
            instructions.append(CInstruction("M", dest="D"))
            instructions.extend(HackTranslatorBase.push_d())
        return instructions

    @staticmethod
    def generate_reposition_pointers(arg_count: int) -> List[HackNode]:
        """
        Set the callee's ARG = SP - n - 5 and LCL = SP.

        Args:
            arg_count: Number of arguments the caller pushed
        """
        return [
            AInstruction("SP"),
            CInstruction("M", dest="D"),
            AInstruction(str(arg_count)),
            CInstruction("D-A", dest="D"),
            AInstruction(str(FRAME_SIZE)),
            CInstruction("D-A", dest="D"),
            AInstruction("ARG"),
            CInstruction("D", dest="M"),
            AInstruction("SP"),
            CInstruction("M", dest="D"),
            AInstruction("LCL"),
            CInstruction("D", dest="M"),
        ]

    @staticmethod
    def generate_function_call(function_name: str, return_label: str) -> List[HackNode]:
        """Jump to the callee and declare the label it comes back to."""
        return [
            AInstruction(function_name),
            CInstruction("0", jump="JMP"),
            HackLabel(return_label),
        ]

    @staticmethod
    def generate_return_sequence() -> List[HackNode]:
        """
        Tear down the current frame and resume the caller.

        The return address is read into the scratch register first: with no
        arguments, argument 0 and the saved return address share a slot and
        the copy of the return value would overwrite it.  LCL itself walks
        down the frame while the caller's pointers are restored and is
        restored last.
        """
        instructions: List[HackNode] = [
            # R13 = *(LCL - 5)
            AInstruction("LCL"),
            CInstruction("M", dest="D"),
            AInstruction(str(RETURN_ADDRESS_OFFSET)),
            CInstruction("D-A", dest="A"),
            CInstruction("M", dest="D"),
            AInstruction(SCRATCH_REGISTER),
            CInstruction("D", dest="M"),
            # *ARG = top of stack
            AInstruction("SP"),
            CInstruction("M-1", dest="A"),
            CInstruction("M", dest="D"),
            AInstruction("ARG"),
            CInstruction("M", dest="A"),
            CInstruction("D", dest="M"),
            # SP = ARG + 1
            CInstruction("A+1", dest="D"),
            AInstruction("SP"),
            CInstruction("D", dest="M"),
        ]

        for pointer in reversed(SAVED_POINTERS[1:]):
            instructions.extend([
                AInstruction("LCL"),
                CInstruction("M-1", dest="AM"),
                CInstruction("M", dest="D"),
                AInstruction(pointer),
                CInstruction("D", dest="M"),
            ])

        instructions.extend([
            AInstruction("LCL"),
            CInstruction("M-1", dest="A"),
            CInstruction("M", dest="D"),
            AInstruction("LCL"),
            CInstruction("D", dest="M"),
            # goto R13
            AInstruction(SCRATCH_REGISTER),
            CInstruction("M", dest="A"),
            CInstruction("0", jump="JMP"),
        ])
        return instructions
