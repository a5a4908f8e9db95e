"""Exception hierarchy for fluent XML building.

Every builder operation validates its input before touching the tree, so any
of these exceptions leaves the document exactly as it was before the call.
"""

from typing import Any, Optional


class XMLBuilderError(Exception):
    """Base exception for all XML builder errors."""


class MissingArgumentError(XMLBuilderError):
    """Raised when a required name or value argument is ``None``."""

    def __init__(self, argument: str, operation: Optional[str] = None):
        where = f" for {operation}()" if operation else ""
        super().__init__(f"Missing {argument}{where}")
        self.argument = argument
        self.operation = operation


class GrammarError(XMLBuilderError):
    """Raised when a candidate string does not match its XML 1.0 production."""

    kind = "value"

    def __init__(self, literal: Any, production: str, message: Optional[str] = None):
        super().__init__(
            message or f"Invalid {self.kind} {literal!r} (does not match {production})"
        )
        self.literal = literal
        self.production = production


class InvalidNameError(GrammarError):
    """Raised when an element or attribute name fails the Name production."""

    kind = "name"


class InvalidValueError(GrammarError):
    """Raised when text, attribute, comment, CDATA or prolog content is invalid."""

    kind = "value"


class NoParentError(XMLBuilderError):
    """Raised when navigating up from a node that has no parent."""

    def __init__(self, name: str = ""):
        super().__init__(f"Node {name!r} has no parent" if name else "Node has no parent")
        self.name = name
