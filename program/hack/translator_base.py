from __future__ import annotations

from typing import Iterable, List, Optional

from .instruction import AInstruction, CInstruction, HackComment, HackLabel, HackNode
from .label_manager import LabelManager
from .translation_context import TranslationContext


class TranslationError(Exception):
    """Exception raised when a well-formed command cannot be translated."""
    pass


class HackTranslatorBase:
    """
    Shared infrastructure for concrete VM -> Hack translators.

    The class owns the translation context and the label manager built on
    it, keeps track of emitted nodes, and exposes the stack idioms every
    command category is assembled from.
    """

    def __init__(self, *, context: Optional[TranslationContext] = None) -> None:
        self.context = context if context is not None else TranslationContext()
        self.label_manager = LabelManager(self.context)
        self.text_section: List[HackNode] = []

    # ------------------------------------------------------------------ #
    # Instruction emission helpers
    # ------------------------------------------------------------------ #

    def emit_text(self, node: HackNode) -> None:
        self.text_section.append(node)

    def emit_text_many(self, nodes: Iterable[HackNode]) -> None:
        for node in nodes:
            self.emit_text(node)

    def emit_label(self, name: str) -> None:
        self.emit_text(HackLabel(name))

    def emit_comment(self, comment: str) -> None:
        self.emit_text(HackComment(comment))

    def clear(self) -> None:
        self.text_section.clear()

    def program_as_string(self) -> str:
        """Render the emitted program, one node per line."""
        if not self.text_section:
            return ""
        return "\n".join(str(node) for node in self.text_section) + "\n"

    # ------------------------------------------------------------------ #
    # Stack idioms
    # ------------------------------------------------------------------ #

    @staticmethod
    def push_d() -> List[HackNode]:
        """*SP = D; SP++"""
        return [
            AInstruction("SP"),
            CInstruction("M", dest="A"),
            CInstruction("D", dest="M"),
            AInstruction("SP"),
            CInstruction("M+1", dest="M"),
        ]

    @staticmethod
    def pop_to_d() -> List[HackNode]:
        """SP--; D = *SP"""
        return [
            AInstruction("SP"),
            CInstruction("M-1", dest="AM"),
            CInstruction("M", dest="D"),
        ]

    @staticmethod
    def top_of_stack() -> List[HackNode]:
        """Point A at the topmost stack element without popping it."""
        return [
            AInstruction("SP"),
            CInstruction("M-1", dest="A"),
        ]
