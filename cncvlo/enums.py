from enum import Enum


class RecordType(str, Enum):
    corpus = "corpus"
    service = "service"


class Verb(str, Enum):
    identify = "Identify"
    get_record = "GetRecord"
    list_identifiers = "ListIdentifiers"
    list_metadata_formats = "ListMetadataFormats"
    list_records = "ListRecords"
    list_sets = "ListSets"


class ResourceType(str, Enum):
    resource = "Resource"
    metadata = "Metadata"
    landing_page = "LandingPage"
    search_service = "SearchService"
    search_page = "SearchPage"
