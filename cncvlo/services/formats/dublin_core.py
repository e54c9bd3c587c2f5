from dataclasses import dataclass, field
from typing import ClassVar

from lxml import etree

from cncvlo.constants import DC_NS, DUBLIN_CORE_PREFIX, OAI_DC_NS, OAI_DC_SCHEMA, XSI_NS
from cncvlo.services.authors import parse_authors
from cncvlo.services.formats.base import (
    ConversionContext,
    LangValue,
    MetadataDocument,
    MetadataFormat,
    append_lang_values,
    multilang,
    resolve_language,
)
from cncvlo.services.records import Record
from cncvlo.services.utils import format_datestamp

DC_ELEMENTS = ("title", "creator", "description", "publisher", "date", "type", "identifier", "language", "rights")


@dataclass
class DublinCoreDocument(MetadataDocument):
    prefix: ClassVar[str] = DUBLIN_CORE_PREFIX

    title: list[LangValue] = field(default_factory=list)
    creator: list[LangValue] = field(default_factory=list)
    description: list[LangValue] = field(default_factory=list)
    publisher: list[LangValue] = field(default_factory=list)
    date: list[LangValue] = field(default_factory=list)
    type: list[LangValue] = field(default_factory=list)
    identifier: list[LangValue] = field(default_factory=list)
    language: list[LangValue] = field(default_factory=list)
    rights: list[LangValue] = field(default_factory=list)

    def add(self, element: str, value: str | None, lang: str | None = None) -> None:
        if value:
            getattr(self, element).append(LangValue(value=value, lang=lang))

    def to_xml(self) -> etree._Element:
        root = etree.Element(f"{{{OAI_DC_NS}}}dc", nsmap={"oai_dc": OAI_DC_NS, "dc": DC_NS, "xsi": XSI_NS})
        root.set(f"{{{XSI_NS}}}schemaLocation", f"{OAI_DC_NS} {OAI_DC_SCHEMA}")
        for element in DC_ELEMENTS:
            append_lang_values(root, f"{{{DC_NS}}}{element}", getattr(self, element))
        return root


def to_dublin_core(record: Record, context: ConversionContext) -> DublinCoreDocument:
    document = DublinCoreDocument(
        title=multilang(record.titles),
        description=multilang(record.descriptions),
    )
    for author in parse_authors(record.authors):
        document.add("creator", author.display_name)
    document.add("publisher", context.publisher)
    document.add("date", format_datestamp(record.modified_at))
    document.add("identifier", record.name)
    document.add("type", record.type)
    document.add("rights", record.license)

    language = resolve_language(record)
    if language is not None:
        document.add("language", language.base)
    return document


DUBLIN_CORE_FORMAT = MetadataFormat(
    prefix=DUBLIN_CORE_PREFIX,
    schema=OAI_DC_SCHEMA,
    namespace=OAI_DC_NS,
    converter=to_dublin_core,
)
