"""
SQL-backed inverted index for TextKNN.

IndexWriter analyzes and stores documents, IndexReader exposes term
statistics and stored fields, and IndexSearcher runs queries and returns
ranked hits.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from sqlalchemy import distinct, func, select

from ..database.engine import DatabaseManager
from ..database.models import Document, Posting, StoredField
from ..exceptions import DatabaseError, SearchError, ValidationError
from ..models import SearchHit
from ..text_processing.analyzer import Analyzer
from .query import Query

logger = logging.getLogger(__name__)


class IndexWriter:
    """
    Adds documents to the index.

    Every field value is stored verbatim. Text fields are analyzed into
    postings; keyword fields are indexed as a single un-analyzed term,
    which is what class label fields need.
    """

    def __init__(self, db_manager: DatabaseManager, analyzer: Analyzer) -> None:
        self.db_manager = db_manager
        self.analyzer = analyzer

    def add_document(
        self,
        fields: Mapping[str, str],
        keyword_fields: Iterable[str] = (),
    ) -> int:
        """
        Analyze and store a document.

        Args:
            fields: Field name to value mapping
            keyword_fields: Names of fields indexed without analysis

        Returns:
            The new document id
        """
        if not fields:
            raise ValidationError("A document needs at least one field", field="fields")

        keyword_fields = set(keyword_fields)
        stored: List[StoredField] = []
        postings: List[Posting] = []

        for name, value in fields.items():
            if not isinstance(value, str):
                raise ValidationError(
                    f"Field values must be strings, got {type(value).__name__}",
                    field=name,
                    value=value,
                )
            stored.append(StoredField(name=name, value=value))

            if name in keyword_fields:
                term_freqs = Counter([value]) if value else Counter()
            else:
                term_freqs = self.analyzer.term_frequencies(value)

            for term, frequency in term_freqs.items():
                postings.append(Posting(field=name, term=term, frequency=frequency))

        with self.db_manager.get_session() as session:
            document = Document(stored_fields=stored, postings=postings)
            session.add(document)
            session.flush()
            doc_id = document.id

        logger.debug(
            f"Indexed document {doc_id}: {len(stored)} fields, {len(postings)} postings"
        )
        return doc_id

    def add_documents(
        self,
        documents: Iterable[Mapping[str, str]],
        keyword_fields: Iterable[str] = (),
    ) -> List[int]:
        """Add several documents sharing the same keyword fields."""
        keyword_fields = list(keyword_fields)
        return [self.add_document(doc, keyword_fields) for doc in documents]


class IndexReader:
    """Read access to index statistics, postings and stored fields."""

    def __init__(self, db_manager: DatabaseManager) -> None:
        self.db_manager = db_manager

    def num_docs(self) -> int:
        """Number of documents in the index."""
        with self.db_manager.get_session() as session:
            return session.scalar(select(func.count(Document.id))) or 0

    def doc_freq(self, field: str, term: str) -> int:
        """Number of documents containing a term in a field."""
        with self.db_manager.get_session() as session:
            stmt = select(func.count(distinct(Posting.document_id))).where(
                Posting.field == field, Posting.term == term
            )
            return session.scalar(stmt) or 0

    def postings(self, field: str, term: str) -> List[Tuple[int, int]]:
        """(document id, frequency) pairs for a term, in document order."""
        with self.db_manager.get_session() as session:
            stmt = (
                select(Posting.document_id, Posting.frequency)
                .where(Posting.field == field, Posting.term == term)
                .order_by(Posting.document_id)
            )
            return [(row.document_id, row.frequency) for row in session.execute(stmt)]

    def docs_with_field(self, field: str) -> Set[int]:
        """Ids of documents holding at least one term in a field."""
        with self.db_manager.get_session() as session:
            stmt = select(Posting.document_id).where(Posting.field == field).distinct()
            return set(session.scalars(stmt))

    def document(self, doc_id: int) -> Dict[str, str]:
        """Stored fields of a document (first value wins for repeated names)."""
        with self.db_manager.get_session() as session:
            stmt = (
                select(StoredField.name, StoredField.value)
                .where(StoredField.document_id == doc_id)
                .order_by(StoredField.id)
            )
            stored: Dict[str, str] = {}
            for row in session.execute(stmt):
                stored.setdefault(row.name, row.value)
            return stored

    def get_field_value(self, doc_id: int, field: str) -> Optional[str]:
        """Stored value of one field of a document, or None."""
        with self.db_manager.get_session() as session:
            stmt = (
                select(StoredField.value)
                .where(StoredField.document_id == doc_id, StoredField.name == field)
                .order_by(StoredField.id)
                .limit(1)
            )
            return session.scalar(stmt)


class IndexSearcher:
    """
    Runs queries against an IndexReader.

    Hits are ordered by descending score, ties by ascending document id.
    Storage failures surface as SearchError.
    """

    def __init__(self, reader: IndexReader) -> None:
        self.reader = reader

    def search(self, query: Query, limit: int) -> List[SearchHit]:
        """
        Return the top ``limit`` hits for a query.

        Args:
            query: Query to execute
            limit: Maximum number of hits

        Returns:
            Ranked hits, possibly fewer than limit
        """
        if limit < 1:
            raise ValidationError(
                f"Search limit must be positive, got {limit}", field="limit", value=limit
            )

        try:
            scores = query.score_documents(self.reader)
        except DatabaseError as e:
            logger.error(f"Query execution failed: {e}")
            raise SearchError(f"Failed to execute query: {str(e)}", query=query) from e

        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        hits = [SearchHit(doc_id=doc_id, score=score) for doc_id, score in ranked[:limit]]

        logger.debug(f"Search matched {len(scores)} documents, returning {len(hits)}")
        return hits

    def doc(self, doc_id: int) -> Dict[str, str]:
        """Stored fields of a document."""
        try:
            return self.reader.document(doc_id)
        except DatabaseError as e:
            raise SearchError(f"Failed to load document: {str(e)}", doc_id=doc_id) from e

    def get_field_value(self, doc_id: int, field: str) -> str:
        """Stored value of a field; raises SearchError if the document has none."""
        try:
            value = self.reader.get_field_value(doc_id, field)
        except DatabaseError as e:
            raise SearchError(f"Failed to load field '{field}': {str(e)}", doc_id=doc_id) from e

        if value is None:
            raise SearchError(f"Document has no stored value for field '{field}'", doc_id=doc_id)
        return value
