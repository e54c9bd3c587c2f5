from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cncvlo.config import get_settings
from cncvlo.enums import RecordType
from cncvlo.models.base import Base

# KonText tables are shared with a running KonText instance whose naming may differ
settings = get_settings()


class KontextUser(Base):
    __tablename__ = settings.user_table_name

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    firstname: Mapped[str] = mapped_column(settings.user_firstname_col, String(255), nullable=False)
    lastname: Mapped[str] = mapped_column(settings.user_lastname_col, String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    affiliation: Mapped[str | None] = mapped_column(String(255), nullable=True)


class KontextCorpus(Base):
    __tablename__ = settings.corpora_table_name

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(63), nullable=False, unique=True)
    web: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    locale: Mapped[str | None] = mapped_column(String(32), nullable=True)
    keywords: Mapped[str | None] = mapped_column(Text, nullable=True)


class MetadataCorpus(Base):
    __tablename__ = "vlo_metadata_corpus"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    corpus_name: Mapped[str] = mapped_column(
        ForeignKey(f"{settings.corpora_table_name}.name", onupdate="CASCADE", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
    )

    corpus: Mapped["KontextCorpus"] = relationship()


class MetadataService(Base):
    __tablename__ = "vlo_metadata_service"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    link: Mapped[str] = mapped_column(String(255), nullable=False)


class MetadataCommon(Base):
    __tablename__ = "vlo_metadata_common"
    __table_args__ = (
        Index("ix_metadata_common_deleted", "deleted"),
        Index("ix_metadata_common_created", "created"),
        Index("ix_metadata_common_updated", "updated"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated: Mapped[datetime | None] = mapped_column(DateTime, onupdate=func.now(), nullable=True)
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    type: Mapped[RecordType] = mapped_column(Enum(RecordType), nullable=False)
    title_en: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    title_cs: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    desc_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    desc_cs: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_issued: Mapped[str | None] = mapped_column(String(255), nullable=True)
    license_info: Mapped[str] = mapped_column(String(255), nullable=False)
    authors: Mapped[str] = mapped_column(Text, default="", nullable=False)
    contact_user_id: Mapped[int] = mapped_column(ForeignKey(f"{settings.user_table_name}.id"), nullable=False)
    corpus_metadata_id: Mapped[int | None] = mapped_column(ForeignKey("vlo_metadata_corpus.id"), nullable=True)
    service_metadata_id: Mapped[int | None] = mapped_column(ForeignKey("vlo_metadata_service.id"), nullable=True)

    contact_user: Mapped["KontextUser"] = relationship()
    corpus_metadata: Mapped["MetadataCorpus | None"] = relationship()
    service_metadata: Mapped["MetadataService | None"] = relationship()
