"""XML 1.0 grammar productions used to validate builder input.

The productions mirror the EBNF of the XML 1.0 (Fifth Edition)
recommendation. They are compiled exactly once, at import time, into the
immutable ``GRAMMAR`` table; validation code only ever reads from it.

Only Basic Multilingual Plane code points are accepted. Supplementary plane
characters are outside every character class below.
"""

import re
from dataclasses import dataclass, fields
from typing import Dict, Pattern

# Character ranges without the surrounding brackets, so they can be combined.
_CHAR_RANGES = r"\t\n\r\u0020-\ud7ff\ue000-\ufffd"
_NAME_START_RANGES = (
    r":A-Z_a-z"
    r"\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff"
    r"\u0370-\u037d\u037f-\u1fff\u200c-\u200d"
    r"\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff"
    r"\uf900-\ufdcf\ufdf0-\ufffd"
)
_NAME_RANGES = _NAME_START_RANGES + r"\-.0-9\u00b7\u0300-\u036f\u203f-\u2040"

CHAR = f"[{_CHAR_RANGES}]"
SPACE = r"[\x20\x09\x0d\x0a]+"
NAME_START_CHAR = f"[{_NAME_START_RANGES}]"
NAME_CHAR = f"[{_NAME_RANGES}]"
NAME = f"{NAME_START_CHAR}{NAME_CHAR}*"

CHAR_REF = r"(?:&#[0-9]+;|&#x[0-9a-fA-F]+;)"
ENTITY_REF = f"(?:&{NAME};)"
REFERENCE = f"(?:{ENTITY_REF}|{CHAR_REF})"

# Attribute values and character data are validated after escaping and
# without their delimiting quotes, so references are the only legal '&'.
ATT_VALUE = f'(?:(?![<&"]){CHAR}|{REFERENCE})*'
CHAR_DATA = f"(?:(?![<&]){CHAR}|{REFERENCE})*"
CHAR_DATA_EXCLUSION = r"\]\]>"

COMMENT_CONTENT = f"(?:(?!-){CHAR}|-(?!-){CHAR})*"

CDATA = f"{CHAR}*"
CDATA_EXCLUSION = r"\]\]>"

PUBID_CHAR = r"[\x20\x0d\x0aa-zA-Z0-9\-'()+,./:=?;!*#@$_%]"
PUBID_LITERAL = f"""(?:"{PUBID_CHAR}*"|'(?:(?!'){PUBID_CHAR})*')"""
SYSTEM_LITERAL = f"""(?:"(?:(?!"){CHAR})*"|'(?:(?!'){CHAR})*')"""
EXTERNAL_ID = (
    f"(?:SYSTEM{SPACE}{SYSTEM_LITERAL}"
    f"|PUBLIC{SPACE}{PUBID_LITERAL}{SPACE}{SYSTEM_LITERAL})"
)

VERSION_NUM = r"1\.[0-9]+"
ENC_NAME = r"[A-Za-z][A-Za-z0-9._\-]*"
SD_DECL = r"(?:yes|no)"


@dataclass(frozen=True)
class Grammar:
    """Compiled XML 1.0 productions, keyed by their EBNF names."""

    Char: Pattern[str]
    Space: Pattern[str]
    NameStartChar: Pattern[str]
    NameChar: Pattern[str]
    Name: Pattern[str]
    CharRef: Pattern[str]
    EntityRef: Pattern[str]
    Reference: Pattern[str]
    AttValue: Pattern[str]
    CharData: Pattern[str]
    CharDataExclusion: Pattern[str]
    CommentContent: Pattern[str]
    CDATA: Pattern[str]
    CDATAExclusion: Pattern[str]
    PubIDLiteral: Pattern[str]
    SystemLiteral: Pattern[str]
    ExternalID: Pattern[str]
    VersionNum: Pattern[str]
    EncName: Pattern[str]
    SDDecl: Pattern[str]

    @property
    def productions(self) -> Dict[str, Pattern[str]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def production(self, name: str) -> Pattern[str]:
        """Look up a compiled production by EBNF name."""
        try:
            return getattr(self, name)
        except AttributeError:
            raise KeyError(f"Unknown production: {name!r}") from None

    def matches(self, name: str, candidate: str) -> bool:
        """Check that ``candidate`` matches production ``name`` in full."""
        return self.production(name).fullmatch(candidate) is not None

    def contains(self, name: str, candidate: str) -> bool:
        """Check whether production ``name`` occurs anywhere in ``candidate``."""
        return self.production(name).search(candidate) is not None


def compile_grammar() -> Grammar:
    """Compile every production into a new Grammar table."""
    return Grammar(
        Char=re.compile(CHAR),
        Space=re.compile(SPACE),
        NameStartChar=re.compile(NAME_START_CHAR),
        NameChar=re.compile(NAME_CHAR),
        Name=re.compile(NAME),
        CharRef=re.compile(CHAR_REF),
        EntityRef=re.compile(ENTITY_REF),
        Reference=re.compile(REFERENCE),
        AttValue=re.compile(ATT_VALUE),
        CharData=re.compile(CHAR_DATA),
        CharDataExclusion=re.compile(CHAR_DATA_EXCLUSION),
        CommentContent=re.compile(COMMENT_CONTENT),
        CDATA=re.compile(CDATA),
        CDATAExclusion=re.compile(CDATA_EXCLUSION),
        PubIDLiteral=re.compile(PUBID_LITERAL),
        SystemLiteral=re.compile(SYSTEM_LITERAL),
        ExternalID=re.compile(EXTERNAL_ID),
        VersionNum=re.compile(VERSION_NUM),
        EncName=re.compile(ENC_NAME),
        SDDecl=re.compile(SD_DECL),
    )


GRAMMAR = compile_grammar()
