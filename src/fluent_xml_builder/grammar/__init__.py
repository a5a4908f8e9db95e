"""XML 1.0 grammar table and input validation.

Key Components:
    GRAMMAR: Process-wide table of compiled productions, built once at import
    GrammarValidator: Checks names and content before they enter a tree
    escape: Replaces the five XML special characters with entity references
"""

from .productions import GRAMMAR, Grammar, compile_grammar
from .validator import GrammarValidator, coerce, escape

__all__ = [
    "GRAMMAR",
    "Grammar",
    "GrammarValidator",
    "coerce",
    "compile_grammar",
    "escape",
]
