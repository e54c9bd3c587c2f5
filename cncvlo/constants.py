OAI_PROTOCOL_VERSION = "2.0"
OAI_GRANULARITY = "YYYY-MM-DDThh:mm:ssZ"
OAI_DATESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
OAI_DELETED_RECORD_POLICY = "no"

OAI_NS = "http://www.openarchives.org/OAI/2.0/"
OAI_SCHEMA = "http://www.openarchives.org/OAI/2.0/OAI-PMH.xsd"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XML_NS = "http://www.w3.org/XML/1998/namespace"

DUBLIN_CORE_PREFIX = "oai_dc"
OAI_DC_NS = "http://www.openarchives.org/OAI/2.0/oai_dc/"
OAI_DC_SCHEMA = "http://www.openarchives.org/OAI/2.0/oai_dc.xsd"
DC_NS = "http://purl.org/dc/elements/1.1/"

CMDI_PREFIX = "cmdi"
CMDI_NS = "http://www.clarin.eu/cmd/1"
CMDI_METADATA_NAMESPACE = "http://www.clarin.eu/cmd/"
CMDI_ENVELOPE_SCHEMA = "http://www.clarin.eu/cmd/1/xsd/cmd-envelop.xsd"
CMDI_VERSION = "1.2"
CNC_RESOURCE_PROFILE_ID = "clarin.eu:cr1:p_1712653174418"
CNC_RESOURCE_PROFILE_NS = f"http://www.clarin.eu/cmd/1/profiles/{CNC_RESOURCE_PROFILE_ID}"
CNC_RESOURCE_PROFILE_XSD = (
    f"https://catalog.clarin.eu/ds/ComponentRegistry/rest/registry/1.x/profiles/{CNC_RESOURCE_PROFILE_ID}/xsd"
)

CORPUS_SIZE_UNIT = "words"
DEFAULT_SEARCH_PAGE_URL = "https://www.korpus.cz/kontext/query?corpname={name}"
WIKI_HOST = "wiki.korpus.cz"
WIKI_PAGE_SEGMENT = "/cnk:"
WIKI_ENGLISH_PAGE_SEGMENT = "/en:cnk:"
