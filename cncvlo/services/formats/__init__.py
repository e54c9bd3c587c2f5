"""Metadata formats offered by the endpoint, keyed by metadata prefix."""

from cncvlo.services.formats.base import (
    ConversionContext,
    HarvestedRecord,
    MetadataDocument,
    MetadataFormat,
    RecordHeader,
)
from cncvlo.services.formats.cmdi import CMDI_FORMAT
from cncvlo.services.formats.dublin_core import DUBLIN_CORE_FORMAT

FORMAT_REGISTRY: dict[str, MetadataFormat] = {fmt.prefix: fmt for fmt in (DUBLIN_CORE_FORMAT, CMDI_FORMAT)}

__all__ = [
    "FORMAT_REGISTRY",
    "ConversionContext",
    "HarvestedRecord",
    "MetadataDocument",
    "MetadataFormat",
    "RecordHeader",
]
