"""Document builder for fluent XML construction.

This module provides the document object that owns a tree: it creates the
root element, holds the optional prolog (XML declaration and document type
declaration) and renders the complete document.
"""

from typing import Any, Dict, List, Mapping, Optional

from fluent_xml_builder.grammar import GrammarValidator, coerce
from fluent_xml_builder.shared import (
    BuilderConfig,
    RenderConfig,
    XMLBuilderError,
    get_logger,
    new_correlation_id,
)
from fluent_xml_builder.tree.node import XMLNode
from fluent_xml_builder.tree.serializer import (
    DECLARATION_NAME,
    DOCTYPE_NAME,
    XMLSerializer,
)

_DECLARATION_FIELDS = ("version", "encoding", "standalone")
_DOCTYPE_FIELDS = ("name", "ext")


class XMLBuilder:
    """Root document container.

    Top-level nodes are kept in document order: the ``?xml`` declaration,
    the ``!DOCTYPE`` declaration and finally the root element. Only the root
    element is handed to callers; the prolog nodes are created from plain
    mappings and validated like everything else.
    """

    def __init__(self, config: Optional[BuilderConfig] = None) -> None:
        """Initialize an empty document.

        Args:
            config: Optional builder configuration
        """
        self.config = config or BuilderConfig()
        self.correlation_id = self.config.correlation_id or new_correlation_id()
        self.logger = get_logger(__name__, self.correlation_id, "xml_builder")
        self.validator = GrammarValidator(correlation_id=self.correlation_id)
        self.serializer = XMLSerializer(self.correlation_id)
        self.children: List[XMLNode] = []
        self._root: Optional[XMLNode] = None

    @property
    def root(self) -> Optional[XMLNode]:
        return self._root

    def begin(
        self,
        name: Any,
        xmldec: Optional[Mapping[str, Any]] = None,
        doctype: Optional[Mapping[str, Any]] = None
    ) -> XMLNode:
        """Start a new document and return its root element.

        Any previous content of this builder is discarded.

        Args:
            name: Root element name
            xmldec: Optional XML declaration fields: ``version`` (default
                "1.0"), ``encoding`` and ``standalone``
            doctype: Optional document type fields: ``name`` (defaults to the
                root name) and ``ext`` (an external identifier such as
                ``SYSTEM "doc.dtd"``)

        Returns:
            The root element
        """
        tag = self.validator.validate_name(coerce(name, "name", "begin"))

        prolog: List[XMLNode] = []
        if xmldec is not None:
            prolog.append(self._create_declaration(xmldec))
        if doctype is not None:
            prolog.append(self._create_doctype(doctype, tag))

        root = XMLNode(name=tag, document=self)
        self.children = prolog + [root]
        self._root = root

        self.logger.info(
            "Started document",
            extra={
                "element": tag,
                "has_declaration": xmldec is not None,
                "has_doctype": doctype is not None,
            }
        )
        return root

    def _check_fields(self, data: Mapping[str, Any], allowed: tuple, what: str) -> None:
        unknown = sorted(set(data) - set(allowed))
        if unknown:
            raise XMLBuilderError(
                f"Unknown {what} field(s): {', '.join(unknown)}"
            )

    def _create_declaration(self, xmldec: Mapping[str, Any]) -> XMLNode:
        self._check_fields(xmldec, _DECLARATION_FIELDS, "declaration")

        version = xmldec.get("version")
        if version is None:
            version = "1.0"
        attributes: Dict[str, str] = {
            "version": self.validator.validate_version(
                coerce(version, "version", "begin")
            )
        }
        if xmldec.get("encoding") is not None:
            attributes["encoding"] = self.validator.validate_encoding(
                coerce(xmldec["encoding"], "encoding", "begin")
            )
        if xmldec.get("standalone") is not None:
            attributes["standalone"] = self.validator.validate_standalone(
                xmldec["standalone"]
            )

        return XMLNode(name=DECLARATION_NAME, attributes=attributes, document=self)

    def _create_doctype(self, doctype: Mapping[str, Any], root_name: str) -> XMLNode:
        self._check_fields(doctype, _DOCTYPE_FIELDS, "doctype")

        attributes: Dict[str, str] = {
            "name": self.validator.validate_name(
                coerce(doctype.get("name", root_name), "name", "begin")
            )
        }
        if doctype.get("ext") is not None:
            attributes["ext"] = self.validator.validate_external_id(
                coerce(doctype["ext"], "ext", "begin")
            )

        return XMLNode(name=DOCTYPE_NAME, attributes=attributes, document=self)

    def render_node(self, node: XMLNode, config: Any = None, **options: Any) -> str:
        """Render a single node of this document."""
        render_config = RenderConfig.coerce(config, default=self.config.render, **options)
        return self.serializer.render(node, render_config)

    def to_string(self, config: Any = None, **options: Any) -> str:
        """Render the complete document, prolog included.

        Args:
            config: RenderConfig, options mapping such as ``{"pretty": True}``,
                or None for the builder's default
            **options: Individual render options overriding ``config``

        Returns:
            The markup string

        Raises:
            XMLBuilderError: If ``begin()`` has not been called
        """
        if self._root is None:
            raise XMLBuilderError("Document has no root element; call begin() first")

        render_config = RenderConfig.coerce(config, default=self.config.render, **options)
        return self.serializer.render_all(self.children, render_config)

    def __str__(self) -> str:
        return self.to_string()


def create(config: Optional[BuilderConfig] = None) -> XMLBuilder:
    """Create a new, empty document builder."""
    return XMLBuilder(config)


def begin(
    name: Any,
    xmldec: Optional[Mapping[str, Any]] = None,
    doctype: Optional[Mapping[str, Any]] = None
) -> XMLNode:
    """Start a document in a new builder and return its root element.

    The builder stays reachable as ``root.document``.
    """
    return XMLBuilder().begin(name, xmldec, doctype)
