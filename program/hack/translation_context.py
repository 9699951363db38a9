"""
Run-wide translation state.

One context is created per translation run and threaded through every
translator.  Nothing in here is module-global, so independent runs in the
same process never share counters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class TranslationContext:
    """
    Mutable state shared by all translators of one run.

    Attributes:
        comparison_counter: Suffix for the next comparison's label pair.
        call_counter: Suffix for the next call site's return label.
        current_function: Function whose body is being emitted; scopes labels.
        current_unit: Logical name of the unit being translated; scopes statics.

    Both counters only ever grow and are never reset between units, which is
    what keeps synthesized labels unique across the whole output.  Access is
    single-threaded; a parallel translator would have to serialize it.
    """

    comparison_counter: int = 0
    call_counter: int = 0
    current_function: Optional[str] = None
    current_unit: Optional[str] = None

    def next_comparison_index(self) -> int:
        index = self.comparison_counter
        self.comparison_counter += 1
        return index

    def next_call_index(self) -> int:
        index = self.call_counter
        self.call_counter += 1
        return index

    def enter_unit(self, name: str) -> None:
        """Start a new unit; no function body carries over from the last one."""
        self.current_unit = name
        self.current_function = None

    def enter_function(self, name: str) -> None:
        self.current_function = name
