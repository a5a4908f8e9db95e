"""Document tree nodes with the fluent construction API.

Every construction method validates its input against the XML 1.0 grammar
before the tree is touched, so a rejected call leaves the tree exactly as it
was. ``element`` descends into the new child; ``text``, ``cdata``,
``comment`` and ``attribute`` return the node they were called on so that
siblings can be chained; ``up`` climbs back to the parent.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from fluent_xml_builder.grammar import GrammarValidator, coerce
from fluent_xml_builder.shared import (
    CorrelationLogger,
    NoParentError,
    RenderConfig,
    XMLBuilderError,
    get_logger,
)

if TYPE_CHECKING:
    from fluent_xml_builder.tree.builder import XMLBuilder

_DEFAULT_VALIDATOR = GrammarValidator()
_DEFAULT_LOGGER = get_logger(__name__, component="tree_node")


class NodeKind(Enum):
    """Node variants in a document tree."""

    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    CDATA = "cdata"


@dataclass(eq=False)
class XMLNode:
    """A single node of a document tree.

    Element nodes carry a tag name, attributes and children. Text, comment
    and CDATA nodes are leaves with an empty name whose ``value`` already
    holds complete markup. Attribute values and leaf values are stored in
    their escaped, validated form.
    """

    name: str = ""
    kind: NodeKind = NodeKind.ELEMENT
    attributes: Dict[str, str] = field(default_factory=dict)
    value: Optional[str] = None
    children: List["XMLNode"] = field(default_factory=list)
    parent: Optional["XMLNode"] = field(default=None, repr=False)
    document: Optional["XMLBuilder"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate the node shape for its kind."""
        if self.kind is NodeKind.ELEMENT:
            if not self.name:
                raise ValueError("Element name cannot be empty")
            if self.value is not None:
                raise ValueError("Element nodes cannot carry a value")
        else:
            if self.name:
                raise ValueError(f"{self.kind.value} nodes cannot have a name")
            if self.value is None:
                raise ValueError(f"{self.kind.value} nodes require a value")
            if self.attributes or self.children:
                raise ValueError(f"{self.kind.value} nodes cannot have attributes or children")

    @property
    def validator(self) -> GrammarValidator:
        if self.document is not None:
            return self.document.validator
        return _DEFAULT_VALIDATOR

    @property
    def logger(self) -> CorrelationLogger:
        if self.document is not None:
            return self.document.logger
        return _DEFAULT_LOGGER

    @property
    def is_leaf(self) -> bool:
        """Check if this is a text, comment or CDATA node."""
        return self.kind is not NodeKind.ELEMENT

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        """Number of ancestors (root = 0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def root(self) -> "XMLNode":
        """Return the topmost node of this tree."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def _require_element(self, operation: str) -> None:
        if self.is_leaf:
            raise XMLBuilderError(f"Cannot call {operation}() on a {self.kind.value} node")

    def _append_leaf(self, kind: NodeKind, value: str) -> "XMLNode":
        self.children.append(
            XMLNode(kind=kind, value=value, parent=self, document=self.document)
        )
        self.logger.debug(
            "Appended leaf node",
            extra={"kind": kind.value, "parent": self.name}
        )
        return self

    def element(
        self,
        name: Any,
        attributes: Optional[Mapping[Any, Any]] = None
    ) -> "XMLNode":
        """Append a child element and return it.

        Args:
            name: Tag name, must match the ``Name`` production
            attributes: Optional mapping of attribute names to values

        Returns:
            The new child element

        Raises:
            MissingArgumentError: If ``name`` or an attribute value is None
            InvalidNameError: If the tag or an attribute name is invalid
            InvalidValueError: If an attribute value is invalid
        """
        self._require_element("element")
        validator = self.validator
        tag = validator.validate_name(coerce(name, "name", "element"))

        validated: Dict[str, str] = {}
        for att_name, att_value in (attributes or {}).items():
            key = validator.validate_name(coerce(att_name, "attribute name", "element"))
            validated[key] = validator.validate_attribute_value(
                coerce(att_value, "attribute value", "element")
            )

        child = XMLNode(name=tag, attributes=validated, parent=self, document=self.document)
        self.children.append(child)
        self.logger.debug(
            "Appended element",
            extra={"element": tag, "parent": self.name, "attributes": len(validated)}
        )
        return child

    def attribute(self, name: Any, value: Any) -> "XMLNode":
        """Set an attribute on this element, replacing any previous value."""
        self._require_element("attribute")
        validator = self.validator
        key = validator.validate_name(coerce(name, "name", "attribute"))
        escaped = validator.validate_attribute_value(coerce(value, "value", "attribute"))
        self.attributes[key] = escaped
        return self

    def text(self, value: Any) -> "XMLNode":
        """Append escaped character data and return this element."""
        self._require_element("text")
        escaped = self.validator.validate_text(coerce(value, "value", "text"))
        return self._append_leaf(NodeKind.TEXT, escaped)

    def cdata(self, value: Any) -> "XMLNode":
        """Append a CDATA section holding ``value`` verbatim and return this element."""
        self._require_element("cdata")
        content = self.validator.validate_cdata(coerce(value, "value", "cdata"))
        return self._append_leaf(NodeKind.CDATA, f"<![CDATA[{content}]]>")

    def comment(self, value: Any) -> "XMLNode":
        """Append a comment and return this element."""
        self._require_element("comment")
        escaped = self.validator.validate_comment(coerce(value, "value", "comment"))
        return self._append_leaf(NodeKind.COMMENT, f"<!-- {escaped} -->")

    def up(self) -> "XMLNode":
        """Return the parent node."""
        if self.parent is None:
            raise NoParentError(self.name)
        return self.parent

    def to_string(self, config: Any = None, **options: Any) -> str:
        """Render this node and its descendants as markup.

        Args:
            config: RenderConfig, options mapping such as ``{"pretty": True}``,
                or None for the document's default
            **options: Individual render options overriding ``config``

        Returns:
            The markup string
        """
        if self.document is not None:
            return self.document.render_node(self, config, **options)

        from fluent_xml_builder.tree.serializer import render

        return render(self, RenderConfig.coerce(config, **options))

    def __str__(self) -> str:
        return self.to_string()

    # Short aliases
    ele = e = element
    att = a = attribute
    txt = t = text
    dat = d = cdata
    com = c = comment
    u = up
