"""Markup serialization for document trees.

The serializer walks a tree depth-first and emits markup exactly as stored:
names, attribute values and leaf values were validated and escaped when they
entered the tree, so nothing is escaped here. ``?xml`` declarations and
``!DOCTYPE`` nodes are ordinary element nodes with their own closing rules.
"""

import time
from typing import List, Optional

from fluent_xml_builder.shared import RenderConfig, get_logger
from fluent_xml_builder.tree.node import NodeKind, XMLNode

DECLARATION_NAME = "?xml"
DOCTYPE_NAME = "!DOCTYPE"


class XMLSerializer:
    """Renders XMLNode trees to markup strings.

    In pretty mode every node starts on its own line, indented by
    ``config.indent`` once per level, and every line ends with
    ``config.newline``.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize serializer.

        Args:
            correlation_id: Optional correlation ID of the owning builder
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_serializer")

    def render(
        self,
        node: XMLNode,
        config: Optional[RenderConfig] = None,
        depth: int = 0
    ) -> str:
        """Render ``node`` and its descendants.

        Args:
            node: Node to render
            config: Render options, defaults to compact output
            depth: Nesting level of ``node`` used for indentation

        Returns:
            The markup string
        """
        start_time = time.time()
        if config is None:
            config = RenderConfig()
        if depth < 0:
            raise ValueError("depth must be >= 0")

        parts: List[str] = []
        self._render_node(node, config, depth, parts)
        markup = "".join(parts)

        self.logger.debug(
            "Rendered node",
            extra={
                "element": node.name or node.kind.value,
                "pretty": config.pretty,
                "output_size": len(markup),
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return markup

    def render_all(
        self,
        nodes: List[XMLNode],
        config: Optional[RenderConfig] = None
    ) -> str:
        """Render a sequence of top-level nodes one after another."""
        return "".join(self.render(node, config) for node in nodes)

    def _render_node(
        self,
        node: XMLNode,
        config: RenderConfig,
        depth: int,
        parts: List[str]
    ) -> None:
        if config.pretty:
            parts.append(config.indent * depth)

        if node.kind is NodeKind.ELEMENT:
            self._render_element(node, config, depth, parts)
        else:
            # Text, comment and CDATA values are complete markup.
            parts.append(node.value or "")
            if config.pretty:
                parts.append(config.newline)

    def _render_element(
        self,
        node: XMLNode,
        config: RenderConfig,
        depth: int,
        parts: List[str]
    ) -> None:
        parts.append(f"<{node.name}")

        if node.name == DOCTYPE_NAME:
            for value in node.attributes.values():
                parts.append(f" {value}")
        else:
            for name, value in node.attributes.items():
                parts.append(f' {name}="{value}"')

        if not node.children:
            if node.name == DECLARATION_NAME:
                parts.append("?>")
            elif node.name == DOCTYPE_NAME:
                parts.append(">")
            else:
                parts.append("/>")
            if config.pretty:
                parts.append(config.newline)
            return

        parts.append(">")
        if config.pretty:
            parts.append(config.newline)

        for child in node.children:
            self._render_node(child, config, depth + 1, parts)

        if config.pretty:
            parts.append(config.indent * depth)
        parts.append(f"</{node.name}>")
        if config.pretty:
            parts.append(config.newline)


def render(node: XMLNode, config: Optional[RenderConfig] = None, depth: int = 0) -> str:
    """Render ``node`` with a one-off serializer."""
    return XMLSerializer().render(node, config, depth)
