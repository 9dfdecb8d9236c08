"""
Entry fragment transcoding: XML -> Entry -> compact JSON line.

Each <entry>...</entry> fragment is parsed on its own with ElementTree.
JMdict references its custom entities (&n;, &arch;, ...) everywhere, and a
fragment carries no DTD, so the parser needs to be told about them. Every
fragment is prefixed with a document type declaration whose internal subset
declares each decoder entity with its own key as replacement text:

    <!DOCTYPE entry [<!ENTITY n "n"><!ENTITY adj-na "adj-na">...]>

Expat then expands them the same way in element text and attribute values,
and rejects any reference it has no declaration for.

An entity missing from the table fails to decode. Nothing is skipped: one
bad fragment stops the run.
"""

import re
from typing import Mapping, Optional
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Element

import orjson

from entrypack.config import DEFAULT_ENTRY_TAG
from entrypack.errors import DecodeError
from entrypack.model import (
    Entry,
    Gloss,
    KanjiElement,
    LoanSource,
    ReadingElement,
    Sense,
    entry_to_dict,
)

XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"

UINT64_MAX = 2**64 - 1

PREDEFINED_ENTITIES = frozenset(["lt", "gt", "amp", "apos", "quot"])
ENTITY_REF_PATTERN = re.compile(r"&([^\s&;#]+);")


def _chardata(elem: Element) -> str:
    """Character data directly inside elem, without child elements' text."""
    parts = [elem.text or ""]
    for child in elem:
        parts.append(child.tail or "")
    return "".join(parts)


def _texts(elem: Element, tag: str) -> list[str]:
    return [_chardata(child) for child in elem.iterfind(tag)]


def _text(elem: Element, tag: str) -> str:
    child = elem.find(tag)
    return _chardata(child) if child is not None else ""


def _attr(elem: Element, name: str) -> str:
    """Attribute by local name; xml:lang is stored under its namespace URI."""
    if name == "lang":
        return elem.get(XML_LANG, elem.get("lang", ""))
    return elem.get(name, "")


def build_prolog(decoder_entities: Mapping[str, str], entry_tag: str = DEFAULT_ENTRY_TAG) -> str:
    """Document type declaration with one internal entity per decoder entry."""
    # replacement texts are entity names, which never contain '"', '%' or '&'
    declarations = "".join(
        f'<!ENTITY {key} "{value}">' for key, value in decoder_entities.items()
    )
    return f"<!DOCTYPE {entry_tag} [{declarations}]>"


def decode_presence_flag(parent: Element, tag: str) -> bool:
    """True iff a <tag> child exists. Its content is never looked at."""
    return parent.find(tag) is not None


# =============================================================================
# Element -> record
# =============================================================================


def _decode_ent_seq(entry_elem: Element, fragment: str) -> int:
    seq_elem = entry_elem.find("ent_seq")
    if seq_elem is None:
        raise DecodeError("missing <ent_seq>", fragment)

    raw = _chardata(seq_elem).strip()
    if not raw.isascii() or not raw.isdigit():
        raise DecodeError(f"invalid <ent_seq> {raw!r}", fragment)

    seq = int(raw)
    if seq == 0 or seq > UINT64_MAX:
        raise DecodeError(f"<ent_seq> out of range: {raw}", fragment)
    return seq


def _decode_kanji(elem: Element) -> KanjiElement:
    return KanjiElement(
        keb=_text(elem, "keb"),
        ke_inf=_texts(elem, "ke_inf"),
        ke_pri=_texts(elem, "ke_pri"),
    )


def _decode_reading(elem: Element) -> ReadingElement:
    return ReadingElement(
        reb=_text(elem, "reb"),
        re_nokanji=decode_presence_flag(elem, "re_nokanji"),
        re_restr=_texts(elem, "re_restr"),
        re_inf=_texts(elem, "re_inf"),
        re_pri=_texts(elem, "re_pri"),
    )


def _decode_lsource(elem: Element) -> LoanSource:
    return LoanSource(
        text=_chardata(elem),
        lang=_attr(elem, "lang"),
        ls_type=_attr(elem, "ls_type"),
        ls_wasei=_attr(elem, "ls_wasei"),
    )


def _decode_gloss(elem: Element) -> Gloss:
    return Gloss(
        text=_chardata(elem),
        lang=_attr(elem, "lang"),
        g_gend=_attr(elem, "g_gend"),
        g_type=_attr(elem, "g_type"),
        pri=_texts(elem, "pri"),
    )


def _decode_sense(elem: Element) -> Sense:
    return Sense(
        stagk=_texts(elem, "stagk"),
        stagr=_texts(elem, "stagr"),
        pos=_texts(elem, "pos"),
        xref=_texts(elem, "xref"),
        ant=_texts(elem, "ant"),
        field_=_texts(elem, "field"),
        misc=_texts(elem, "misc"),
        s_inf=_texts(elem, "s_inf"),
        lsource=[_decode_lsource(child) for child in elem.iterfind("lsource")],
        dial=_texts(elem, "dial"),
        gloss=[_decode_gloss(child) for child in elem.iterfind("gloss")],
    )


# =============================================================================
# Transcoder
# =============================================================================


class EntryTranscoder:
    """
    Decodes entry fragments and encodes them as compact JSON lines.

    Args:
        decoder_entities: Entity key -> replacement text (the key itself)
        entry_tag: Name of the entry element
    """

    def __init__(self, decoder_entities: Mapping[str, str], entry_tag: str = DEFAULT_ENTRY_TAG):
        self.decoder_entities = dict(decoder_entities)
        self.entry_tag = entry_tag
        self.prolog = build_prolog(self.decoder_entities, entry_tag)

    def parse(self, fragment: str) -> Element:
        """Parse a fragment into an element tree, resolving custom entities."""
        parser = ET.XMLParser()
        try:
            parser.feed(self.prolog)
            parser.feed(fragment)
            return parser.close()
        except ET.ParseError as e:
            name = self._undeclared_entity(fragment)
            if name is not None:
                raise DecodeError(f"unknown entity &{name};", fragment) from e
            raise DecodeError(f"malformed XML ({e})", fragment) from e

    def _undeclared_entity(self, fragment: str) -> Optional[str]:
        # expat's "undefined entity" error does not say which one
        for match in ENTITY_REF_PATTERN.finditer(fragment):
            name = match.group(1)
            if name not in self.decoder_entities and name not in PREDEFINED_ENTITIES:
                return name
        return None

    def decode(self, fragment: str) -> Entry:
        """Decode one <entry> fragment into an Entry."""
        root = self.parse(fragment)
        if root.tag != self.entry_tag:
            raise DecodeError(f"expected <{self.entry_tag}>, got <{root.tag}>", fragment)

        return Entry(
            ent_seq=_decode_ent_seq(root, fragment),
            k_ele=[_decode_kanji(child) for child in root.iterfind("k_ele")],
            r_ele=[_decode_reading(child) for child in root.iterfind("r_ele")],
            sense=[_decode_sense(child) for child in root.iterfind("sense")],
        )

    @staticmethod
    def encode(entry: Entry) -> bytes:
        """Serialize an Entry as one compact JSON line."""
        return orjson.dumps(entry_to_dict(entry)) + b"\n"

    def transcode(self, fragment: str) -> bytes:
        return self.encode(self.decode(fragment))
