from cncvlo.models.catalog import (
    KontextCorpus,
    KontextUser,
    MetadataCommon,
    MetadataCorpus,
    MetadataService,
)

__all__ = [
    "KontextCorpus",
    "KontextUser",
    "MetadataCommon",
    "MetadataCorpus",
    "MetadataService",
]
