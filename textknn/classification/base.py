"""
Common interface for TextKNN classifiers.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from ..models import ClassificationResult
from ..search.index import IndexReader
from ..search.query import Query
from ..text_processing.analyzer import Analyzer


class Classifier(ABC):
    """
    A text classifier trained against an index.

    Implementations must refuse to classify until train() has been called.
    """

    @abstractmethod
    def train(
        self,
        index_reader: IndexReader,
        text_field_names: Union[str, Sequence[str]],
        class_field_name: str,
        analyzer: Analyzer,
        query: Optional[Query] = None,
    ) -> None:
        """
        Bind the classifier to an index.

        Args:
            index_reader: Reader over the indexed training documents
            text_field_names: Field(s) holding the document text
            class_field_name: Field holding the class label
            analyzer: Analyzer used when the documents were indexed
            query: Optional filter restricting the training documents
        """
        raise NotImplementedError

    @abstractmethod
    def assign_class(self, text: str) -> Optional[ClassificationResult]:
        """Most probable class for a text, or None when nothing matched."""
        raise NotImplementedError

    @abstractmethod
    def get_classes(
        self, text: str, max_results: Optional[int] = None
    ) -> List[ClassificationResult]:
        """All candidate classes for a text, best first."""
        raise NotImplementedError
