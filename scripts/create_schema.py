import argparse

from cncvlo.database import engine
from cncvlo.models.base import Base
from cncvlo.models.catalog import KontextCorpus, KontextUser, MetadataCommon, MetadataCorpus, MetadataService


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the VLO metadata tables")
    parser.add_argument(
        "--with-kontext",
        action="store_true",
        help="Also create the KonText corpus and user tables (development databases only)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    tables = [MetadataCorpus.__table__, MetadataService.__table__, MetadataCommon.__table__]
    if args.with_kontext:
        tables = [KontextUser.__table__, KontextCorpus.__table__, *tables]
    Base.metadata.create_all(bind=engine, tables=tables)
    for table in tables:
        print(f"created {table.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
