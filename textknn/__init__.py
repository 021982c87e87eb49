"""
TextKNN - k-Nearest-Neighbor text classification over a SQL-backed index.
"""

from .classification import Classifier, KNearestNeighborClassifier, TrainedModel
from .config import TextKNNConfig
from .core import TextKNN
from .database import DatabaseManager
from .exceptions import (
    ClassificationError,
    ConfigurationError,
    DatabaseError,
    NotTrainedError,
    SearchError,
    TextKNNError,
    ValidationError,
)
from .models import ClassificationResult, Occur, SearchHit
from .search import (
    BooleanClause,
    BooleanQuery,
    FieldExistsQuery,
    IndexReader,
    IndexSearcher,
    IndexWriter,
    MoreLikeThis,
    Query,
    TermQuery,
)
from .text_processing import Analyzer

__version__ = "0.1.0"
__all__ = [
    "TextKNN",
    "TextKNNConfig",
    # Classification
    "Classifier",
    "KNearestNeighborClassifier",
    "TrainedModel",
    "ClassificationResult",
    # Search
    "IndexWriter",
    "IndexReader",
    "IndexSearcher",
    "MoreLikeThis",
    "Query",
    "TermQuery",
    "FieldExistsQuery",
    "BooleanQuery",
    "BooleanClause",
    "Occur",
    "SearchHit",
    "Analyzer",
    "DatabaseManager",
    # Errors
    "TextKNNError",
    "ConfigurationError",
    "ClassificationError",
    "NotTrainedError",
    "DatabaseError",
    "SearchError",
    "ValidationError",
]
