from __future__ import annotations

from vm.instruction import ArithmeticCommand, ComparisonCommand

from .arithmetic import ARITHMETIC_TRANSLATORS
from .comparison import translate_comparison
from .translator_base import HackTranslatorBase, TranslationError


class ExpressionTranslator:
    """
    Translates VM arithmetic, logical and comparison commands to Hack.

    This class handles:
    - Binary operations (add, sub, and, or): pop two, push one
    - Unary operations (neg, not): rewrite the top element in place
    - Comparisons (eq, lt, gt): pop two, push -1 or 0

    Comparisons draw their label pair from the shared label manager, so two
    comparisons anywhere in a run never share labels.
    """

    def __init__(self, translator_base: HackTranslatorBase):
        """
        Initialize the expression translator.

        Args:
            translator_base: Base translator providing the context and
                            instruction emission facilities
        """
        self.base = translator_base

    def translate_arithmetic(self, command: ArithmeticCommand) -> None:
        translate = ARITHMETIC_TRANSLATORS.get(command.op)
        if translate is None:
            raise TranslationError(f"Unsupported arithmetic operation: {command.op}")
        self.base.emit_text_many(translate())

    def translate_comparison(self, command: ComparisonCommand) -> None:
        true_label, end_label = self.base.label_manager.comparison_labels(command.op.value)
        self.base.emit_text_many(translate_comparison(command.op, true_label, end_label))
