"""
Core infrastructure for translating stack VM commands into Hack assembly.

This package provides the building blocks of the Hack backend: instruction
representations, the run-wide translation context, label naming, the
per-category translators and the generator that orchestrates them.
"""

from .instruction import (
    AInstruction,
    CInstruction,
    HackLabel,
    HackComment,
    HackNode,
)
from .translation_context import TranslationContext
from .label_manager import LabelManager
from .translator_base import HackTranslatorBase, TranslationError
from .expression_translator import ExpressionTranslator
from .memory_translator import MemoryTranslator
from .control_flow_translator import ControlFlowTranslator
from .calling_convention import CallingConvention
from .function_translator import FunctionTranslator
from .integrated_hack_generator import IntegratedHackGenerator, translate_command

__all__ = [
    "AInstruction",
    "CInstruction",
    "HackLabel",
    "HackComment",
    "HackNode",
    "TranslationContext",
    "LabelManager",
    "HackTranslatorBase",
    "TranslationError",
    "ExpressionTranslator",
    "MemoryTranslator",
    "ControlFlowTranslator",
    "CallingConvention",
    "FunctionTranslator",
    "IntegratedHackGenerator",
    "translate_command",
]
