"""Tests for XMLNode construction, validation and navigation."""

import pytest

from fluent_xml_builder import begin
from fluent_xml_builder.shared import (
    InvalidNameError,
    InvalidValueError,
    MissingArgumentError,
    NoParentError,
    XMLBuilderError,
)
from fluent_xml_builder.tree import NodeKind, XMLNode


class TestXMLNodeShape:
    """Test node creation rules."""

    def test_element_requires_name(self) -> None:
        with pytest.raises(ValueError, match="Element name cannot be empty"):
            XMLNode()

    def test_element_cannot_carry_value(self) -> None:
        with pytest.raises(ValueError, match="cannot carry a value"):
            XMLNode(name="a", value="x")

    def test_leaf_requires_value_and_no_name(self) -> None:
        with pytest.raises(ValueError, match="text nodes require a value"):
            XMLNode(kind=NodeKind.TEXT)
        with pytest.raises(ValueError, match="comment nodes cannot have a name"):
            XMLNode(name="a", kind=NodeKind.COMMENT, value="<!-- x -->")

    def test_repr_does_not_recurse_through_parent(self) -> None:
        child = begin("root").element("child")

        assert "child" in repr(child)
        assert "root" not in repr(child)


class TestFluentReturns:
    """Test which node each fluent operation returns."""

    def test_leaf_operations_return_current_node(self) -> None:
        root = begin("root")

        assert root.text("x") is root
        assert root.cdata("y") is root
        assert root.comment("z") is root
        assert root.attribute("k", "v") is root

    def test_element_returns_new_child(self) -> None:
        root = begin("root")

        child = root.element("child")

        assert child is not root
        assert child.up() is root
        assert root.children == [child]
        assert child.parent is root
        assert child.document is root.document

    def test_root_has_no_parent(self) -> None:
        root = begin("root")

        with pytest.raises(NoParentError, match="has no parent"):
            root.up()

    def test_aliases_are_synonyms(self) -> None:
        assert XMLNode.ele is XMLNode.element
        assert XMLNode.e is XMLNode.element
        assert XMLNode.txt is XMLNode.text
        assert XMLNode.t is XMLNode.text
        assert XMLNode.dat is XMLNode.cdata
        assert XMLNode.d is XMLNode.cdata
        assert XMLNode.att is XMLNode.attribute
        assert XMLNode.a is XMLNode.attribute
        assert XMLNode.com is XMLNode.comment
        assert XMLNode.c is XMLNode.comment
        assert XMLNode.u is XMLNode.up

    def test_alias_chain(self) -> None:
        root = begin("r")
        root.e("x").a("k", "v").t("hi").u().c("note").d("raw")

        assert root.to_string() == '<r><x k="v">hi</x><!-- note --><![CDATA[raw]]></r>'


class TestValidationBeforeMutation:
    """Test that rejected calls leave the tree unchanged."""

    def test_invalid_element_name(self) -> None:
        root = begin("root")
        root.element("a")

        with pytest.raises(InvalidNameError) as exc_info:
            root.element("1bad")

        assert exc_info.value.literal == "1bad"
        assert len(root.children) == 1
        assert root.to_string() == "<root><a/></root>"

    def test_invalid_attribute_in_element_call(self) -> None:
        root = begin("root")

        with pytest.raises(InvalidValueError):
            root.element("x", {"ok": "1", "bad": "nul\x00"})
        with pytest.raises(InvalidNameError):
            root.element("x", {"1a": "v"})

        assert root.children == []

    def test_invalid_attribute_call(self) -> None:
        root = begin("root").attribute("k", "v")

        with pytest.raises(InvalidNameError):
            root.attribute("bad name", "x")

        assert root.attributes == {"k": "v"}

    def test_invalid_leaf_content(self) -> None:
        root = begin("root")

        with pytest.raises(InvalidValueError):
            root.cdata("a]]>b")
        with pytest.raises(InvalidValueError):
            root.comment("a--b")
        with pytest.raises(InvalidValueError):
            root.text("esc\x1b")

        assert root.children == []

    @pytest.mark.parametrize(
        "call",
        [
            lambda node: node.element(None),
            lambda node: node.element("x", {"k": None}),
            lambda node: node.text(None),
            lambda node: node.cdata(None),
            lambda node: node.comment(None),
            lambda node: node.attribute(None, "v"),
            lambda node: node.attribute("k", None),
        ],
    )
    def test_missing_arguments(self, call) -> None:
        root = begin("root")

        with pytest.raises(MissingArgumentError):
            call(root)

        assert root.children == []
        assert root.attributes == {}


class TestCoercion:
    """Test falsy-to-empty coercion of arguments."""

    def test_empty_element_name_is_invalid(self) -> None:
        with pytest.raises(InvalidNameError):
            begin("root").element("")

    def test_falsy_text_becomes_empty(self) -> None:
        root = begin("root").text(0)

        assert root.children[0].kind is NodeKind.TEXT
        assert root.children[0].value == ""

    def test_non_string_values_are_stringified(self) -> None:
        root = begin("root").attribute("count", 3).attribute("zero", 0)

        assert root.to_string() == '<root count="3" zero=""/>'


class TestAttributes:
    """Test attribute storage."""

    def test_values_are_stored_escaped(self) -> None:
        root = begin("root").attribute("escaped", "chars <>'\"&")

        assert root.attributes["escaped"] == "chars &lt;&gt;&apos;&quot;&amp;"

    def test_overwrite_keeps_position(self) -> None:
        root = begin("r").attribute("x", "1").attribute("y", "y").attribute("x", "2")

        assert list(root.attributes) == ["x", "y"]
        assert root.to_string() == '<r x="2" y="y"/>'


class TestLeafNodes:
    """Test text, comment and CDATA leaves."""

    def test_leaf_values(self) -> None:
        root = begin("root").text("a&b").comment("hi").cdata("<raw>")

        kinds = [child.kind for child in root.children]
        values = [child.value for child in root.children]

        assert kinds == [NodeKind.TEXT, NodeKind.COMMENT, NodeKind.CDATA]
        assert values == ["a&amp;b", "<!-- hi -->", "<![CDATA[<raw>]]>"]
        assert all(child.is_leaf and child.name == "" for child in root.children)

    def test_leaf_nodes_reject_construction(self) -> None:
        leaf = XMLNode(kind=NodeKind.TEXT, value="x")

        with pytest.raises(XMLBuilderError, match="text node"):
            leaf.element("a")
        with pytest.raises(XMLBuilderError, match="text node"):
            leaf.attribute("a", "b")


class TestNavigation:
    """Test navigation helpers."""

    def test_depth_root_and_flags(self) -> None:
        root = begin("root")
        grandchild = root.element("a").element("b")

        assert root.depth == 0
        assert grandchild.depth == 2
        assert grandchild.root() is root
        assert root.is_root
        assert not grandchild.is_root
        assert not grandchild.is_leaf

    def test_detached_nodes_render(self) -> None:
        node = XMLNode(name="x").element("y").text("z").up()

        assert node.to_string() == "<x><y>z</y></x>"
        assert str(node) == node.to_string()
