"""Grammar validation for every string that enters a document tree.

Each ``validate_*`` method checks one kind of constituent against its XML 1.0
production and raises a typed error naming the offending literal. Methods for
escaped constituents return the escaped form, which is what the tree stores.
"""

from typing import Any, NoReturn, Optional, Type, Union

from fluent_xml_builder.grammar.productions import GRAMMAR, Grammar
from fluent_xml_builder.shared import (
    GrammarError,
    InvalidNameError,
    InvalidValueError,
    MissingArgumentError,
    get_logger,
)

# Order matters: '&' first so the other references are not escaped again.
_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ("'", "&apos;"),
    ('"', "&quot;"),
)


def escape(value: str) -> str:
    """Replace the five XML special characters with entity references."""
    for char, reference in _ESCAPES:
        value = value.replace(char, reference)
    return value


def coerce(value: Any, argument: str, operation: Optional[str] = None) -> str:
    """Coerce a builder argument to the string that will be validated.

    ``None`` is rejected; any other falsy value becomes the empty string.
    """
    if value is None:
        raise MissingArgumentError(argument, operation)
    return str(value) if value else ""


class GrammarValidator:
    """Validates names and content against the compiled XML 1.0 grammar."""

    def __init__(
        self,
        grammar: Grammar = GRAMMAR,
        correlation_id: Optional[str] = None
    ) -> None:
        self.grammar = grammar
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "grammar_validator")

    def _reject(
        self,
        error: Type[GrammarError],
        literal: str,
        production: str,
    ) -> NoReturn:
        self.logger.debug(
            "Rejected input",
            extra={"production": production, "literal": literal}
        )
        raise error(literal, production)

    def validate_name(self, name: str) -> str:
        """Validate an element or attribute name against ``Name``."""
        if not self.grammar.matches("Name", name):
            self._reject(InvalidNameError, name, "Name")
        return name

    def validate_attribute_value(self, value: str) -> str:
        """Escape an attribute value and validate it against ``AttValue``."""
        escaped = escape(value)
        if not self.grammar.matches("AttValue", escaped):
            self._reject(InvalidValueError, value, "AttValue")
        return escaped

    def validate_text(self, value: str) -> str:
        """Escape character data and validate it against ``CharData``."""
        escaped = escape(value)
        if (
            self.grammar.contains("CharDataExclusion", escaped)
            or not self.grammar.matches("CharData", escaped)
        ):
            self._reject(InvalidValueError, value, "CharData")
        return escaped

    def validate_comment(self, value: str) -> str:
        """Escape comment content and validate it against ``CommentContent``."""
        escaped = escape(value)
        if not self.grammar.matches("CommentContent", escaped):
            self._reject(InvalidValueError, value, "CommentContent")
        return escaped

    def validate_cdata(self, value: str) -> str:
        """Validate CDATA section content; it is never escaped."""
        if (
            self.grammar.contains("CDATAExclusion", value)
            or not self.grammar.matches("CDATA", value)
        ):
            self._reject(InvalidValueError, value, "CDATA")
        return value

    def validate_version(self, value: str) -> str:
        if not self.grammar.matches("VersionNum", value):
            self._reject(InvalidValueError, value, "VersionNum")
        return value

    def validate_encoding(self, value: str) -> str:
        if not self.grammar.matches("EncName", value):
            self._reject(InvalidValueError, value, "EncName")
        return value

    def validate_standalone(self, value: Union[bool, str]) -> str:
        """Validate the standalone declaration, accepting booleans."""
        if isinstance(value, bool):
            return "yes" if value else "no"
        if not isinstance(value, str) or not self.grammar.matches("SDDecl", value):
            self._reject(InvalidValueError, str(value), "SDDecl")
        return value

    def validate_external_id(self, value: str) -> str:
        """Validate a doctype external identifier (SYSTEM or PUBLIC form)."""
        if not self.grammar.matches("ExternalID", value):
            self._reject(InvalidValueError, value, "ExternalID")
        return value
