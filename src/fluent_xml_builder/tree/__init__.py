"""Document tree, fluent builder and serializer.

Key Components:
    XMLNode: Tree node exposing the fluent construction and navigation API
    XMLBuilder: Document container holding the prolog and the root element
    XMLSerializer: Depth-first markup renderer with optional pretty-printing
"""

from .node import NodeKind, XMLNode
from .serializer import XMLSerializer, render
from .builder import XMLBuilder, begin, create

__all__ = [
    "NodeKind",
    "XMLBuilder",
    "XMLNode",
    "XMLSerializer",
    "begin",
    "create",
    "render",
]
