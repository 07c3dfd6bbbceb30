"""
Modular template processor.

Plugin-based lexer/parser/processor; syntax plugins add constructs,
engine capabilities supply the functions and filters templates call.
"""

from __future__ import annotations

from .processor import TemplateProcessor, TemplateProcessingError, create_template_processor
from .scope import RenderScope
from .tokens import ParserError

__all__ = [
    "TemplateProcessor",
    "TemplateProcessingError",
    "ParserError",
    "RenderScope",
    "create_template_processor",
]
