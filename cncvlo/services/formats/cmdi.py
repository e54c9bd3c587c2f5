"""CMDI rendering of catalogue records using the CNC_Resource profile.

The profile is derived from the LINDAT/CLARIN one. CLARIN harvesters drop
records without at least one resource proxy, so corpora always get a search
page proxy and any record with an external link gets a resource proxy.
"""

from dataclasses import dataclass, field
from typing import ClassVar

from lxml import etree

from cncvlo.constants import (
    CMDI_ENVELOPE_SCHEMA,
    CMDI_METADATA_NAMESPACE,
    CMDI_NS,
    CMDI_PREFIX,
    CMDI_VERSION,
    CNC_RESOURCE_PROFILE_ID,
    CNC_RESOURCE_PROFILE_NS,
    CNC_RESOURCE_PROFILE_XSD,
    CORPUS_SIZE_UNIT,
    WIKI_ENGLISH_PAGE_SEGMENT,
    WIKI_HOST,
    WIKI_PAGE_SEGMENT,
    XSI_NS,
)
from cncvlo.enums import RecordType, ResourceType
from cncvlo.services.authors import Author, parse_authors
from cncvlo.services.formats.base import (
    ConversionContext,
    LangValue,
    MetadataDocument,
    MetadataFormat,
    append_lang_values,
    append_text,
    multilang,
    resolve_language,
)
from cncvlo.services.records import ContactPerson, Record


def _cmd(tag: str) -> str:
    return f"{{{CMDI_NS}}}{tag}"


def _cmdp(tag: str) -> str:
    return f"{{{CNC_RESOURCE_PROFILE_NS}}}{tag}"


@dataclass(frozen=True)
class LanguageInfo:
    name: str
    code: str


@dataclass(frozen=True)
class SizeInfo:
    size: int
    unit: str = CORPUS_SIZE_UNIT


@dataclass
class BibliographicInfo:
    titles: list[LangValue]
    identifiers: list[str]
    authors: list[Author]
    contact_person: ContactPerson
    publishers: list[str] = field(default_factory=list)
    date_issued: str | None = None

    def to_xml(self, parent: etree._Element) -> None:
        info = append_text(parent, _cmdp("bibliographicInfo"))
        append_lang_values(append_text(info, _cmdp("titles")), _cmdp("title"), self.titles)

        authors = append_text(info, _cmdp("authors"))
        for author in self.authors:
            node = append_text(authors, _cmdp("author"))
            append_text(node, _cmdp("lastName"), author.last_name)
            if author.first_name:
                append_text(node, _cmdp("firstName"), author.first_name)

        if self.date_issued:
            dates = append_text(info, _cmdp("dates"))
            append_text(dates, _cmdp("dateIssued"), self.date_issued)

        identifiers = append_text(info, _cmdp("identifiers"))
        for identifier in self.identifiers:
            append_text(identifiers, _cmdp("identifier"), identifier)

        contact = append_text(info, _cmdp("contactPerson"))
        append_text(contact, _cmdp("lastName"), self.contact_person.last_name)
        append_text(contact, _cmdp("firstName"), self.contact_person.first_name)
        append_text(contact, _cmdp("email"), self.contact_person.email)
        append_text(contact, _cmdp("affiliation"), self.contact_person.affiliation or "")

        publishers = append_text(info, _cmdp("publishers"))
        for publisher in self.publishers:
            append_text(publishers, _cmdp("publisher"), publisher)


@dataclass
class DataInfo:
    type: str
    descriptions: list[LangValue]
    languages: list[LanguageInfo] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    sizes: list[SizeInfo] = field(default_factory=list)

    def to_xml(self, parent: etree._Element) -> None:
        info = append_text(parent, _cmdp("dataInfo"))
        append_text(info, _cmdp("type"), self.type)
        append_lang_values(info, _cmdp("description"), self.descriptions)
        if self.languages:
            languages = append_text(info, _cmdp("languages"))
            for language in self.languages:
                node = append_text(languages, _cmdp("language"))
                append_text(node, _cmdp("name"), language.name)
                append_text(node, _cmdp("code"), language.code)
        if self.keywords:
            keywords = append_text(info, _cmdp("keywords"))
            for keyword in self.keywords:
                append_text(keywords, _cmdp("keyword"), keyword)
        if self.sizes:
            sizes = append_text(info, _cmdp("sizeInfo"))
            for size in self.sizes:
                node = append_text(sizes, _cmdp("size"))
                append_text(node, _cmdp("size"), str(size.size))
                append_text(node, _cmdp("unit"), size.unit)


@dataclass
class CNCResourceProfile:
    bibliographic_info: BibliographicInfo
    data_info: DataInfo
    licenses: list[str] = field(default_factory=list)

    def to_xml(self, parent: etree._Element) -> None:
        resource = append_text(parent, _cmdp("CNC_Resource"))
        self.bibliographic_info.to_xml(resource)
        self.data_info.to_xml(resource)
        license_info = append_text(resource, _cmdp("licenseInfo"))
        for uri in self.licenses:
            license_node = append_text(license_info, _cmdp("license"))
            append_text(license_node, _cmdp("uri"), uri)


@dataclass(frozen=True)
class ResourceProxy:
    id: str
    resource_type: ResourceType
    ref: str
    mime_type: str | None = "text/html"


@dataclass
class CMDIDocument(MetadataDocument):
    prefix: ClassVar[str] = CMDI_PREFIX

    profile: CNCResourceProfile
    self_link: str
    resource_proxies: list[ResourceProxy] = field(default_factory=list)

    def to_xml(self) -> etree._Element:
        root = etree.Element(
            _cmd("CMD"),
            nsmap={"cmd": CMDI_NS, "cmdp": CNC_RESOURCE_PROFILE_NS, "xsi": XSI_NS},
        )
        root.set("CMDVersion", CMDI_VERSION)
        root.set(
            f"{{{XSI_NS}}}schemaLocation",
            " ".join([CMDI_NS, CMDI_ENVELOPE_SCHEMA, CNC_RESOURCE_PROFILE_NS, CNC_RESOURCE_PROFILE_XSD]),
        )

        header = append_text(root, _cmd("Header"))
        append_text(header, _cmd("MdSelfLink"), self.self_link)
        append_text(header, _cmd("MdProfile"), CNC_RESOURCE_PROFILE_ID)

        resources = append_text(root, _cmd("Resources"))
        proxies = append_text(resources, _cmd("ResourceProxyList"))
        for proxy in self.resource_proxies:
            node = append_text(proxies, _cmd("ResourceProxy"), id=proxy.id)
            resource_type = append_text(node, _cmd("ResourceType"), proxy.resource_type.value)
            if proxy.mime_type:
                resource_type.set("mimetype", proxy.mime_type)
            append_text(node, _cmd("ResourceRef"), proxy.ref)
        append_text(resources, _cmd("JournalFileProxyList"))
        append_text(resources, _cmd("ResourceRelationList"))

        self.profile.to_xml(append_text(root, _cmd("Components")))
        return root


def english_wiki_link(link: str) -> str:
    if WIKI_HOST in link:
        return link.replace(WIKI_PAGE_SEGMENT, WIKI_ENGLISH_PAGE_SEGMENT)
    return link


def split_keywords(value: str | None) -> list[str]:
    if not value:
        return []
    return [keyword.strip() for keyword in value.split(",") if keyword.strip()]


def to_cmdi(record: Record, context: ConversionContext) -> CMDIDocument:
    profile = CNCResourceProfile(
        bibliographic_info=BibliographicInfo(
            titles=multilang(record.titles),
            identifiers=[record.name],
            authors=parse_authors(record.authors),
            contact_person=record.contact_person,
            publishers=[context.publisher] if context.publisher else [],
            date_issued=record.date_issued or None,
        ),
        data_info=DataInfo(type=record.type, descriptions=multilang(record.descriptions)),
        licenses=[record.license],
    )
    document = CMDIDocument(
        profile=profile,
        self_link=f"{context.base_url}/record/{record.record_id}?format={CMDI_PREFIX}",
    )

    if record.type == RecordType.corpus.value:
        corpus = record.corpus
        if corpus is not None and corpus.size is not None:
            profile.data_info.sizes.append(SizeInfo(size=corpus.size))
        language = resolve_language(record)
        if language is not None:
            profile.data_info.languages.append(LanguageInfo(name=language.display_name, code=language.base))
        if corpus is not None:
            profile.data_info.keywords.extend(split_keywords(corpus.keywords))
        document.resource_proxies.append(
            ResourceProxy(
                id=f"sp_{record.record_id}",
                resource_type=ResourceType.search_page,
                ref=context.search_page_url.replace("{name}", record.name),
            )
        )

    if record.link:
        document.resource_proxies.append(
            ResourceProxy(
                id=f"uri_{record.record_id}",
                resource_type=ResourceType.resource,
                ref=english_wiki_link(record.link),
            )
        )
    return document


CMDI_FORMAT = MetadataFormat(
    prefix=CMDI_PREFIX,
    schema=CNC_RESOURCE_PROFILE_XSD,
    namespace=CMDI_METADATA_NAMESPACE,
    converter=to_cmdi,
)
