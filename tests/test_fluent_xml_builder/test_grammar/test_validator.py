"""Tests for escaping, argument coercion and grammar validation."""

import logging

import pytest

from fluent_xml_builder.grammar import GrammarValidator, coerce, escape
from fluent_xml_builder.shared import (
    InvalidNameError,
    InvalidValueError,
    MissingArgumentError,
)


class TestEscape:
    """Test the five-character escaping pass."""

    def test_escapes_all_special_characters(self) -> None:
        assert escape("&<>'\"") == "&amp;&lt;&gt;&apos;&quot;"

    def test_ampersand_escaped_first(self) -> None:
        """Test that generated references are not escaped again."""
        assert escape("<") == "&lt;"
        assert escape("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self) -> None:
        assert escape("complete 100%") == "complete 100%"


class TestCoerce:
    """Test argument coercion before validation."""

    def test_none_is_missing(self) -> None:
        with pytest.raises(MissingArgumentError, match="Missing value for text"):
            coerce(None, "value", "text")

    @pytest.mark.parametrize("value", ["", 0, False, [], {}])
    def test_falsy_values_become_empty_string(self, value: object) -> None:
        assert coerce(value, "value") == ""

    def test_truthy_values_become_strings(self) -> None:
        assert coerce(42, "value") == "42"
        assert coerce("text", "value") == "text"


class TestGrammarValidator:
    """Test GrammarValidator checks."""

    @pytest.fixture
    def validator(self) -> GrammarValidator:
        return GrammarValidator(correlation_id="test")

    def test_validate_name(self, validator: GrammarValidator) -> None:
        assert validator.validate_name("xmlbuilder") == "xmlbuilder"

        with pytest.raises(InvalidNameError) as exc_info:
            validator.validate_name("1bad")

        assert exc_info.value.literal == "1bad"
        assert exc_info.value.production == "Name"

    def test_validate_attribute_value_returns_escaped(self, validator: GrammarValidator) -> None:
        assert (
            validator.validate_attribute_value("chars <>'\"&")
            == "chars &lt;&gt;&apos;&quot;&amp;"
        )

    def test_validate_attribute_value_rejects_non_chars(self, validator: GrammarValidator) -> None:
        with pytest.raises(InvalidValueError) as exc_info:
            validator.validate_attribute_value("bad\x00value")

        assert exc_info.value.production == "AttValue"

    def test_validate_text(self, validator: GrammarValidator) -> None:
        assert validator.validate_text("a < b & c") == "a &lt; b &amp; c"
        # Escaping turns the closing '>' into a reference.
        assert validator.validate_text("x]]>y") == "x]]&gt;y"

        with pytest.raises(InvalidValueError, match="CharData"):
            validator.validate_text("bell\x07")

    def test_validate_comment(self, validator: GrammarValidator) -> None:
        assert validator.validate_comment("a<b") == "a&lt;b"

        with pytest.raises(InvalidValueError, match="CommentContent"):
            validator.validate_comment("a--b")
        with pytest.raises(InvalidValueError, match="CommentContent"):
            validator.validate_comment("ends with-")

    def test_validate_cdata_is_verbatim(self, validator: GrammarValidator) -> None:
        content = '<test att="val">this is a test</test>'

        assert validator.validate_cdata(content) == content

        with pytest.raises(InvalidValueError, match="CDATA"):
            validator.validate_cdata("a]]>b")

    def test_validate_prolog_values(self, validator: GrammarValidator) -> None:
        assert validator.validate_version("1.0") == "1.0"
        assert validator.validate_encoding("UTF-8") == "UTF-8"
        assert validator.validate_standalone(True) == "yes"
        assert validator.validate_standalone(False) == "no"
        assert validator.validate_standalone("no") == "no"
        assert validator.validate_external_id('SYSTEM "a.dtd"') == 'SYSTEM "a.dtd"'

        with pytest.raises(InvalidValueError, match="VersionNum"):
            validator.validate_version("2.0")
        with pytest.raises(InvalidValueError, match="EncName"):
            validator.validate_encoding("utf 8")
        with pytest.raises(InvalidValueError, match="SDDecl"):
            validator.validate_standalone("maybe")
        with pytest.raises(InvalidValueError, match="SDDecl"):
            validator.validate_standalone(1)  # type: ignore
        with pytest.raises(InvalidValueError, match="ExternalID"):
            validator.validate_external_id("SYSTEM a.dtd")

    def test_rejection_is_logged(
        self, validator: GrammarValidator, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="fluent_xml_builder"):
            with pytest.raises(InvalidNameError):
                validator.validate_name("-x")

        record = caplog.records[-1]
        assert record.production == "Name"
        assert record.literal == "-x"
        assert record.correlation_id == "test"
