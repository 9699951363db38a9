"""
Function, Call and Return Translation for Hack

This module translates the VM function protocol to Hack assembly:
- function f k: entry label plus k zero-initialised locals
- call f n: save the caller frame, reposition ARG/LCL, jump, resume label
- return: hand back the top of stack and restore the caller frame

VM Function Call Pattern:
    function Main.main 0
        push constant 3
        push constant 4
        call Math.add 2       // stack: ... 7
        ...
    function Math.add 0
        push argument 0
        push argument 1
        add
        return
"""

from typing import Optional, Set

from vm.instruction import FunctionCommand, FunctionKind

from .calling_convention import CallingConvention
from .translator_base import HackTranslatorBase, TranslationError


class FunctionTranslator(HackTranslatorBase):
    """
    Translates VM function commands to Hack assembly.

    Handles:
    - Function entry points and local initialisation
    - Call sites with unique return labels
    - Frame teardown on return

    Translation is single pass: entering a function only updates the
    context so later labels are scoped to it.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Entry labels emitted so far, for statistics
        self.defined_functions: Set[str] = set()

    def translate(self, command: FunctionCommand) -> None:
        if command.kind is FunctionKind.FUNCTION:
            self.translate_function(command)
        elif command.kind is FunctionKind.CALL:
            self.translate_call(command)
        elif command.kind is FunctionKind.RETURN:
            self.translate_return(command)
        else:
            raise TranslationError(f"Unsupported function command: {command}")

    def translate_function(self, command: FunctionCommand) -> None:
        """
        Translate ``function name k``.

        Emits the bare function name as entry label (no further
        qualification), then pushes 0 once per local.  k may be 0.

        Args:
            command: function command with name and local count
        """
        self.context.enter_function(command.name)
        self.defined_functions.add(command.name)

        self.emit_label(command.name)
        self.emit_text_many(CallingConvention.generate_local_initialisation(command.count))

    def translate_call(self, command: FunctionCommand) -> None:
        """
        Translate ``call name n``.

        Steps:
        1. Push the return address (a fresh ``name$ret.i`` label)
        2. Push LCL, ARG, THIS, THAT
        3. ARG = SP - n - 5
        4. LCL = SP
        5. Jump to the callee
        6. Declare the return label right after the jump

        Args:
            command: call command with callee name and argument count
        """
        return_label = self.label_manager.return_label(command.name)

        self.emit_text_many(CallingConvention.generate_save_frame(return_label))
        self.emit_text_many(CallingConvention.generate_reposition_pointers(command.count))
        self.emit_text_many(CallingConvention.generate_function_call(command.name, return_label))

    def translate_return(self, command: Optional[FunctionCommand] = None) -> None:
        """
        Translate ``return``.

        The caller observes SP = (SP at the call) - n + 1 with the return
        value on top, whatever the argument and local counts were.
        """
        self.emit_text_many(CallingConvention.generate_return_sequence())

    def is_function_defined(self, name: str) -> bool:
        """Check if an entry label has been emitted for a function."""
        return name in self.defined_functions
