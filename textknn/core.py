"""
Core TextKNN class providing the main public API.

This module wires configuration, the SQL-backed index, the analyzer and the
kNN classifier together behind a single object.
"""

import logging
from types import TracebackType
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Type, Union

from .classification.knn_classifier import KNearestNeighborClassifier
from .config import TextKNNConfig
from .database.engine import DatabaseManager
from .models import ClassificationResult
from .search.index import IndexReader, IndexWriter
from .search.query import Query
from .text_processing.analyzer import ENGLISH_STOP_WORDS, Analyzer

logger = logging.getLogger(__name__)


class TextKNN:
    """
    Main TextKNN class: index labelled documents, train, classify.

    Example:
        with TextKNN(k=3, min_doc_freq=1, min_term_freq=1) as knn:
            knn.add_document({"body": "goal scored late", "topic": "sport"},
                             keyword_fields=["topic"])
            knn.train("body", "topic")
            knn.classify("a late goal")
    """

    def __init__(
        self,
        config: Optional[TextKNNConfig] = None,
        analyzer: Optional[Analyzer] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize TextKNN.

        Args:
            config: Full configuration; built from kwargs when omitted
            analyzer: Analyzer for indexing and queries (default English)
            **kwargs: TextKNNConfig fields (database_url, k, min_doc_freq, ...)
        """
        self.config = config or TextKNNConfig(**kwargs)
        self.analyzer = analyzer or Analyzer(
            stop_words=ENGLISH_STOP_WORDS if self.config.use_stopwords else None
        )

        self.db_manager = DatabaseManager(self.config)
        self.db_manager.create_tables()

        self.writer = IndexWriter(self.db_manager, self.analyzer)
        self.reader = IndexReader(self.db_manager)
        self.classifier = KNearestNeighborClassifier(
            k=self.config.k,
            min_docs_freq=self.config.min_doc_freq,
            min_term_freq=self.config.min_term_freq,
            max_query_terms=self.config.max_query_terms,
        )

        logger.info(f"TextKNN initialized with k={self.config.k}")

    def add_document(
        self, fields: Mapping[str, str], keyword_fields: Iterable[str] = ()
    ) -> int:
        """Index one document and return its id."""
        return self.writer.add_document(fields, keyword_fields)

    def add_documents(
        self, documents: Iterable[Mapping[str, str]], keyword_fields: Iterable[str] = ()
    ) -> List[int]:
        """Index several documents and return their ids."""
        return self.writer.add_documents(documents, keyword_fields)

    def train(
        self,
        text_field_names: Union[str, Sequence[str]],
        class_field_name: str,
        query: Optional[Query] = None,
    ) -> None:
        """Train the classifier on the documents indexed so far."""
        self.classifier.train(
            self.reader, text_field_names, class_field_name, self.analyzer, query
        )

    def classify(self, text: str) -> Optional[ClassificationResult]:
        """Most probable class for a text, or None."""
        return self.classifier.assign_class(text)

    def rank(
        self, text: str, max_results: Optional[int] = None
    ) -> List[ClassificationResult]:
        """Candidate classes for a text, best first."""
        return self.classifier.get_classes(text, max_results)

    def num_docs(self) -> int:
        return self.reader.num_docs()

    def close(self) -> None:
        """Release database resources."""
        self.db_manager.close()

    def __enter__(self) -> "TextKNN":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
