from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ContactPerson:
    first_name: str
    last_name: str
    email: str
    affiliation: str | None = None


@dataclass(frozen=True)
class CorpusData:
    size: int | None = None
    locale: str | None = None
    keywords: str | None = None


@dataclass(frozen=True)
class Record:
    """A catalogue entry as handed over to the metadata converters.

    ``titles`` and ``descriptions`` map a language code to its text. ``corpus``
    is filled by the repository only for corpus entries; converters still check
    ``type`` before using it.
    """

    identifier: int
    type: str
    modified_at: datetime
    name: str
    license: str
    authors: str
    contact_person: ContactPerson
    titles: dict[str, str] = field(default_factory=dict)
    descriptions: dict[str, str] = field(default_factory=dict)
    link: str | None = None
    date_issued: str | None = None
    corpus: CorpusData | None = None

    @property
    def record_id(self) -> str:
        return str(self.identifier)
