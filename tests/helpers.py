from datetime import UTC, datetime

from lxml import etree

from cncvlo.enums import RecordType
from cncvlo.models.catalog import KontextCorpus, KontextUser, MetadataCommon, MetadataCorpus, MetadataService
from cncvlo.services.formats import ConversionContext
from cncvlo.services.records import ContactPerson, CorpusData, Record

NAMESPACES = {
    "oai": "http://www.openarchives.org/OAI/2.0/",
    "oai_dc": "http://www.openarchives.org/OAI/2.0/oai_dc/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "cmd": "http://www.clarin.eu/cmd/1",
    "cmdp": "http://www.clarin.eu/cmd/1/profiles/clarin.eu:cr1:p_1712653174418",
}

CONTEXT = ConversionContext(
    base_url="http://vlo.test",
    publisher="Czech National Corpus",
    search_page_url="https://www.korpus.cz/kontext/query?corpname={name}",
)


def parse_xml(payload: bytes):
    return etree.fromstring(payload)


def xpath_texts(element, path: str) -> list[str]:
    return [node.text or "" for node in element.xpath(path, namespaces=NAMESPACES)]


def make_record(**overrides) -> Record:
    values = {
        "identifier": 7,
        "type": RecordType.corpus.value,
        "modified_at": datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
        "name": "syn2020",
        "license": "https://www.korpus.cz/licenses/res",
        "authors": "Jan Novák\r\nKřen",
        "contact_person": ContactPerson(
            first_name="Jana",
            last_name="Dvořáková",
            email="jana@korpus.test",
            affiliation="ÚČNK",
        ),
        "titles": {"en": "SYN2020 corpus", "cs": "Korpus SYN2020"},
        "descriptions": {"en": "Representative corpus of written Czech", "cs": "Reprezentativní korpus psané češtiny"},
        "link": "https://wiki.korpus.cz/doku.php/cnk:syn2020",
        "corpus": CorpusData(size=121_826_797, locale="cs_CZ.UTF-8", keywords="written, representative,fiction"),
    }
    values.update(overrides)
    return Record(**values)


def add_contact_user(db, *, username: str = "jdvorakova") -> KontextUser:
    user = KontextUser(
        username=username,
        firstname="Jana",
        lastname="Dvořáková",
        email=f"{username}@korpus.test",
        affiliation="ÚČNK",
    )
    db.add(user)
    db.flush()
    return user


def add_corpus_record(
    db,
    *,
    user: KontextUser,
    name: str = "syn2020",
    created: datetime = datetime(2024, 1, 15, 10, 0),
    updated: datetime | None = None,
    deleted: bool = False,
    locale: str | None = "cs_CZ.UTF-8",
    size: int | None = 100_000,
    keywords: str | None = "written,representative",
    web: str | None = None,
) -> MetadataCommon:
    corpus = KontextCorpus(name=name, web=web, size=size, locale=locale, keywords=keywords)
    db.add(corpus)
    db.flush()
    corpus_metadata = MetadataCorpus(corpus_name=name)
    db.add(corpus_metadata)
    db.flush()
    row = MetadataCommon(
        created=created,
        updated=updated,
        deleted=deleted,
        type=RecordType.corpus,
        title_en=f"{name} corpus",
        title_cs=f"Korpus {name}",
        desc_en=f"English description of {name}",
        desc_cs=None,
        license_info="RES",
        authors="Jan Novák\nKřen",
        contact_user_id=user.id,
        corpus_metadata_id=corpus_metadata.id,
    )
    db.add(row)
    db.flush()
    return row


def add_service_record(
    db,
    *,
    user: KontextUser,
    name: str = "KonText",
    link: str = "https://wiki.korpus.cz/doku.php/cnk:kontext",
    created: datetime = datetime(2024, 2, 1, 8, 0),
    updated: datetime | None = None,
    deleted: bool = False,
) -> MetadataCommon:
    service = MetadataService(name=name, link=link)
    db.add(service)
    db.flush()
    row = MetadataCommon(
        created=created,
        updated=updated,
        deleted=deleted,
        type=RecordType.service,
        title_en=f"{name} service",
        title_cs=f"Služba {name}",
        desc_en=f"{name} query interface",
        desc_cs=f"Rozhraní {name}",
        license_info="CC BY 4.0",
        authors="Tomáš Machálek",
        contact_user_id=user.id,
        service_metadata_id=service.id,
    )
    db.add(row)
    db.flush()
    return row


class FakeRepository:
    def __init__(self, records=(), *, error: Exception | None = None):
        self.records = sorted(records, key=lambda record: (record.modified_at, record.identifier))
        self.error = error
        self.range_calls: list[tuple] = []

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    def fetch_by_identifier(self, identifier):
        self._check()
        return next((record for record in self.records if record.record_id == identifier), None)

    def list_by_date_range(self, from_, until, *, until_exclusive=False):
        self._check()
        self.range_calls.append((from_, until, until_exclusive))
        matched = []
        for record in self.records:
            if from_ is not None and record.modified_at < from_:
                continue
            if until is not None and (record.modified_at >= until if until_exclusive else record.modified_at > until):
                continue
            matched.append(record)
        return matched

    def exists(self, identifier):
        return self.fetch_by_identifier(identifier) is not None

    def earliest_datestamp(self):
        self._check()
        return self.records[0].modified_at if self.records else None
