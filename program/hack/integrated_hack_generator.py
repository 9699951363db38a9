"""
Integrated Hack Generator

This module orchestrates the complete VM to Hack translation process,
integrating the parser and all the translator components (expressions,
memory access, control flow, functions) behind one entry point.

Usage:
    generator = IntegratedHackGenerator()
    asm = generator.generate([SourceUnit.from_text("Main", source)])

    # Save to file
    with open("Main.asm", "w") as f:
        f.write(asm)
"""

import logging
from typing import Dict, Iterable, List, Optional

from vm.instruction import (
    ArithmeticCommand,
    BranchCommand,
    ComparisonCommand,
    FunctionCommand,
    MemoryAccessCommand,
    VMCommand,
)
from vm.parser import VMSyntaxError, parse_lines
from vm.source_unit import SourceUnit, UnitFailure

from .calling_convention import STACK_BASE, CallingConvention
from .control_flow_translator import ControlFlowTranslator
from .expression_translator import ExpressionTranslator
from .function_translator import FunctionTranslator
from .instruction import HackComment, HackNode
from .memory_translator import MemoryTranslator
from .translation_context import TranslationContext
from .translator_base import TranslationError

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_UNIT = "Sys"


class IntegratedHackGenerator:
    """
    Main Hack code generator that integrates all translation phases.

    Architecture:
    1. Emit the bootstrap (SP = stack base)
    2. Order units so the entry unit comes first
    3. Parse each unit line by line and translate every command in order
    4. Render the emitted nodes as assembly text

    A failing command abandons the rest of its unit only.  Whatever that
    unit emitted before the failure stays in the output; the failure is
    recorded in ``failures`` and the next unit is translated as usual.
    """

    def __init__(
        self,
        *,
        context: Optional[TranslationContext] = None,
        entry_unit: str = DEFAULT_ENTRY_UNIT,
        stack_base: int = STACK_BASE,
        annotate: bool = False,
    ):
        """
        Initialize the Hack generator.

        Args:
            context: Translation state to continue from (fresh one if None)
            entry_unit: Name of the unit translated before all others
            stack_base: Address the bootstrap points SP at
            annotate: Precede every block with a comment holding its command
        """
        self.entry_unit = entry_unit
        self.stack_base = stack_base
        self.annotate = annotate

        # Create function translator (base translator)
        self.function_translator = FunctionTranslator(context=context)

        # Create other translators, passing function_translator as the base
        self.expression_translator = ExpressionTranslator(self.function_translator)
        self.memory_translator = MemoryTranslator(self.function_translator)
        self.control_flow_translator = ControlFlowTranslator(self.function_translator)

        self.failures: List[UnitFailure] = []
        self.units_translated = 0
        self.commands_translated = 0

    @property
    def context(self) -> TranslationContext:
        return self.function_translator.context

    def generate(self, units: Iterable[SourceUnit]) -> str:
        """
        Translate a whole program.

        Args:
            units: Source units in enumeration order

        Returns:
            Complete Hack assembly, bootstrap first
        """
        self.function_translator.clear()
        self.function_translator.defined_functions.clear()
        self.failures = []
        self.units_translated = 0
        self.commands_translated = 0

        self._generate_bootstrap()

        for unit in self.order_units(units):
            self.translate_unit(unit)

        return self.function_translator.program_as_string()

    def order_units(self, units: Iterable[SourceUnit]) -> List[SourceUnit]:
        """Move the entry unit to the front, keeping the others' order."""
        units = list(units)
        entry = [unit for unit in units if unit.name == self.entry_unit]
        others = [unit for unit in units if unit.name != self.entry_unit]
        return entry + others

    def translate_unit(self, unit: SourceUnit) -> Optional[UnitFailure]:
        """
        Translate one unit, appending its blocks to the output.

        Returns:
            The failure that stopped the unit, or None if it translated fully
        """
        self.context.enter_unit(unit.name)
        logger.debug("translating unit %s", unit.name)

        translated = 0
        line: Optional[int] = None
        command_text = ""
        failure: Optional[UnitFailure] = None

        try:
            for line, command_text, command in parse_lines(unit.lines):
                self.translate_command(command, command_text)
                translated += 1
        except VMSyntaxError as exc:
            failure = UnitFailure(unit.name, str(exc), exc.text or "", exc.line, kind="syntax")
        except TranslationError as exc:
            failure = UnitFailure(unit.name, str(exc), command_text, line, kind="semantic")

        self.commands_translated += translated

        if failure is None:
            self.units_translated += 1
            logger.debug("translated unit %s (%d commands)", unit.name, translated)
        else:
            self.failures.append(failure)
            logger.warning("abandoning rest of unit %s", failure)

        return failure

    def translate_command(self, command: VMCommand, command_text: Optional[str] = None) -> List[HackNode]:
        """
        Translate a single command and return the block it produced.

        The block is also appended to the output.  Nothing is appended when
        translation fails.
        """
        text_section = self.function_translator.text_section
        start = len(text_section)

        self._translate_instruction(command)

        if self.annotate:
            text_section.insert(start, HackComment(command_text or str(command)))

        return text_section[start:]

    def _translate_instruction(self, command: VMCommand) -> None:
        """Translate a single VM command to Hack."""
        if isinstance(command, ArithmeticCommand):
            self.expression_translator.translate_arithmetic(command)

        elif isinstance(command, ComparisonCommand):
            self.expression_translator.translate_comparison(command)

        elif isinstance(command, MemoryAccessCommand):
            self.memory_translator.translate(command)

        elif isinstance(command, BranchCommand):
            self.control_flow_translator.translate(command)

        elif isinstance(command, FunctionCommand):
            self.function_translator.translate(command)

        else:
            raise TranslationError(f"Unsupported command: {command!r}")

    def _generate_bootstrap(self) -> None:
        if self.annotate:
            self.function_translator.emit_comment(f"bootstrap: SP = {self.stack_base}")
        self.function_translator.emit_text_many(CallingConvention.generate_bootstrap(self.stack_base))

    def get_statistics(self) -> Dict:
        """Get comprehensive statistics about code generation."""
        return {
            "units_translated": self.units_translated,
            "units_failed": len(self.failures),
            "commands_translated": self.commands_translated,
            "comparison_labels": self.context.comparison_counter,
            "call_sites": self.context.call_counter,
            "functions_defined": len(self.function_translator.defined_functions),
            "lines_emitted": len(self.function_translator.text_section),
        }


# Convenience function for standalone usage
def translate_command(command: VMCommand, context: TranslationContext) -> List[HackNode]:
    """
    Translate one command against an existing context.

    The context is updated in place (counters, current function), so
    successive calls with the same context keep labels unique.
    """
    return IntegratedHackGenerator(context=context).translate_command(command)
