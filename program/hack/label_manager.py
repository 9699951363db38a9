"""
Label and symbol naming for Hack code generation.

Every name the translator synthesizes goes through the LabelManager so the
scoping rules live in one place:

- comparison labels ``<OP>_TRUE_<n>`` / ``<OP>_END_<n>``, one pair per
  comparison, numbered by a run-wide counter
- return labels ``<callee>$ret.<n>``, numbered by a second run-wide counter
- user labels ``<function>$<label>``, scoped by the enclosing function
- static slots ``<unit>.<index>``, scoped by the source unit

Whether a referenced label is ever declared is left to the assembler.
"""

from typing import Tuple

from .translation_context import TranslationContext


class LabelManager:
    """Derives globally unique names from a TranslationContext."""

    def __init__(self, context: TranslationContext) -> None:
        self.context = context

    def comparison_labels(self, op_name: str) -> Tuple[str, str]:
        """
        Generate the (true, end) label pair for one comparison.

        Args:
            op_name: Comparison mnemonic, e.g. "eq"

        Returns:
            Labels like ("EQ_TRUE_0", "EQ_END_0")
        """
        index = self.context.next_comparison_index()
        prefix = op_name.upper()
        return f"{prefix}_TRUE_{index}", f"{prefix}_END_{index}"

    def return_label(self, function_name: str) -> str:
        """Generate the resumption label of one call site."""
        return f"{function_name}$ret.{self.context.next_call_index()}"

    def scope(self) -> str:
        """
        Name user labels are qualified with.

        The enclosing function when there is one, otherwise the unit name
        (code outside any function), otherwise empty.

        Unit and function scopes share one namespace: ``label L`` outside
        any function in unit ``Main`` and ``label L`` inside a function
        named ``Main`` both become ``Main$L``.
        """
        if self.context.current_function:
            return self.context.current_function
        return self.context.current_unit or ""

    def scoped_label(self, label: str) -> str:
        return f"{self.scope()}${label}"

    def static_symbol(self, index: int) -> str:
        return f"{self.context.current_unit or ''}.{index}"

    def __repr__(self) -> str:
        return (
            f"LabelManager("
            f"scope={self.scope()!r}, "
            f"comparisons={self.context.comparison_counter}, "
            f"calls={self.context.call_counter})"
        )
