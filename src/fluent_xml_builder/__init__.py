"""Fluent XML Builder.

Builds well-formed XML documents through a chainable API. Every name and
piece of content is checked against the XML 1.0 grammar before it enters the
tree, so rendering never produces malformed markup.

    >>> from fluent_xml_builder import begin
    >>> root = begin("root")
    >>> root.element("a", {"k": "v"}).text("hi").up().element("b").up().to_string()
    '<root><a k="v">hi</a><b/></root>'
"""

__version__ = "0.1.0"
__author__ = "Fluent XML Builder Team"

from .shared.config import BuilderConfig, RenderConfig
from .shared.errors import (
    GrammarError,
    InvalidNameError,
    InvalidValueError,
    MissingArgumentError,
    NoParentError,
    XMLBuilderError,
)
from .tree import NodeKind, XMLBuilder, XMLNode, XMLSerializer, begin, create

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Entry points
    "begin",
    "create",

    # Tree and rendering
    "NodeKind",
    "XMLBuilder",
    "XMLNode",
    "XMLSerializer",

    # Configuration
    "BuilderConfig",
    "RenderConfig",

    # Errors
    "GrammarError",
    "InvalidNameError",
    "InvalidValueError",
    "MissingArgumentError",
    "NoParentError",
    "XMLBuilderError",
]
