from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from lxml import etree

from cncvlo.constants import XML_NS
from cncvlo.enums import RecordType
from cncvlo.services.locale import LanguageTag, LocaleParseError, parse_locale
from cncvlo.services.records import Record

XML_LANG = f"{{{XML_NS}}}lang"


@dataclass(frozen=True)
class LangValue:
    value: str
    lang: str | None = None


def multilang(values: Mapping[str, str | None]) -> list[LangValue]:
    return [LangValue(value=text, lang=lang) for lang, text in values.items() if text]


def append_text(parent: etree._Element, tag: str, text: str | None = None, **attrib: str) -> etree._Element:
    element = etree.SubElement(parent, tag, attrib)
    if text is not None:
        element.text = text
    return element


def append_lang_values(parent: etree._Element, tag: str, values: Iterable[LangValue]) -> None:
    for item in values:
        element = append_text(parent, tag, item.value)
        if item.lang:
            element.set(XML_LANG, item.lang)


class MetadataDocument(ABC):
    prefix: ClassVar[str]

    @abstractmethod
    def to_xml(self) -> etree._Element:
        raise NotImplementedError


@dataclass(frozen=True)
class ConversionContext:
    """Deployment values shared by every converted record."""

    base_url: str
    publisher: str = ""
    search_page_url: str = ""


@dataclass(frozen=True)
class RecordHeader:
    identifier: str
    datestamp: datetime


@dataclass(frozen=True)
class HarvestedRecord:
    header: RecordHeader
    metadata: MetadataDocument


Converter = Callable[[Record, ConversionContext], MetadataDocument]


@dataclass(frozen=True)
class MetadataFormat:
    prefix: str
    schema: str
    namespace: str
    converter: Converter

    def harvest(self, record: Record, context: ConversionContext) -> HarvestedRecord:
        return HarvestedRecord(
            header=RecordHeader(identifier=record.record_id, datestamp=record.modified_at),
            metadata=self.converter(record, context),
        )


def resolve_language(record: Record) -> LanguageTag | None:
    if record.type != RecordType.corpus.value or record.corpus is None or not record.corpus.locale:
        return None
    try:
        return parse_locale(record.corpus.locale)
    except LocaleParseError:
        return None
