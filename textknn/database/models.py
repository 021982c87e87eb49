"""SQLAlchemy database models backing the TextKNN inverted index."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
    validates,
)
from sqlalchemy.sql import func

from ..exceptions import ValidationError


class Base(DeclarativeBase):
    """Declarative base class for ORM models."""

    pass


class Document(Base):
    """
    An indexed document.

    A document is only an identity; its content lives in stored fields
    and its searchable terms in postings.
    """

    __tablename__ = "documents"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), nullable=False
    )

    # Relationships
    stored_fields: Mapped[list["StoredField"]] = relationship(
        back_populates="document", cascade="all, delete-orphan"
    )
    postings: Mapped[list["Posting"]] = relationship(
        back_populates="document", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id})>"


class StoredField(Base):
    """Verbatim (un-analyzed) value of one field of a document."""

    __tablename__ = "stored_fields"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    document_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("documents.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    document: Mapped[Document] = relationship(back_populates="stored_fields")

    __table_args__ = (
        Index("idx_stored_fields_document_name", "document_id", "name"),
        Index("idx_stored_fields_name", "name"),
    )

    @validates("name")
    def validate_name(self, key: str, name: str) -> str:
        """Validate field name."""
        if not name or not name.strip():
            raise ValidationError("Field name cannot be empty", field="name", value=name)
        return name.strip()

    def __repr__(self) -> str:
        value_preview = self.value[:50] + "..." if len(self.value) > 50 else self.value
        return f"<StoredField(document_id={self.document_id}, name='{self.name}', value='{value_preview}')>"


class Posting(Base):
    """
    One entry of the inverted index: a term occurring in a field of a document.

    Frequency is the number of occurrences of the term in that field.
    """

    __tablename__ = "postings"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    document_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("documents.id"), nullable=False
    )
    field: Mapped[str] = mapped_column(String(255), nullable=False)
    term: Mapped[str] = mapped_column(Text, nullable=False)
    frequency: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    document: Mapped[Document] = relationship(back_populates="postings")

    __table_args__ = (
        # Term lookups drive both doc-freq statistics and query scoring
        Index("idx_postings_field_term", "field", "term"),
        Index("idx_postings_document_id", "document_id"),
        CheckConstraint("frequency > 0", name="positive_frequency"),
        CheckConstraint("length(term) > 0", name="non_empty_term"),
    )

    @validates("frequency")
    def validate_frequency(self, key: str, frequency: int) -> int:
        """Validate term frequency is positive."""
        if frequency <= 0:
            raise ValidationError(
                f"Term frequency must be positive, got {frequency}",
                field="frequency",
                value=frequency,
            )
        return frequency

    @validates("term")
    def validate_term(self, key: str, term: str) -> str:
        """Validate term is not empty."""
        if not term:
            raise ValidationError("Posting term cannot be empty", field="term", value=term)
        return term

    def __repr__(self) -> str:
        return (
            f"<Posting(document_id={self.document_id}, field='{self.field}', "
            f"term='{self.term}', frequency={self.frequency})>"
        )
