"""
k-Nearest-Neighbor text classifier.

Finds the k indexed documents most similar to a text and votes over their
class labels. Each label scores ``votes / k``; when fewer than k neighbours
are found every score is rescaled by ``k / neighbours`` so that a small
result set is not penalised by the fixed denominator.
"""

import logging
from collections import Counter
from typing import List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import NotTrainedError, ValidationError
from ..models import ClassificationResult, Occur, SearchHit
from ..search.index import IndexReader, IndexSearcher
from ..search.more_like_this import MoreLikeThis
from ..search.query import BooleanQuery, FieldExistsQuery, Query
from ..text_processing.analyzer import Analyzer
from .base import Classifier

logger = logging.getLogger(__name__)


class TrainedModel(BaseModel):
    """Everything a trained classifier needs to answer queries."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    text_field_names: Tuple[str, ...] = Field(
        description="Fields searched for similar text", min_length=1
    )
    class_field_name: str = Field(description="Field holding the class label", min_length=1)
    query: Optional[Query] = Field(
        description="Filter every neighbour must also match", default=None
    )
    more_like_this: MoreLikeThis = Field(description="Similarity query builder")
    searcher: IndexSearcher = Field(description="Searcher bound to the training index")


class KNearestNeighborClassifier(Classifier):
    """
    A k-Nearest-Neighbor classifier based on "more like this" queries.

    The classifier starts untrained; train() produces a TrainedModel and
    swaps it in with a single assignment, replacing any previous model.
    Classification calls only read that model, so they may run
    concurrently. Training concurrently with classification is not
    synchronised here.
    """

    def __init__(
        self,
        k: int,
        min_docs_freq: int = 0,
        min_term_freq: int = 0,
        max_query_terms: int = 0,
    ) -> None:
        """
        Create a kNN classifier.

        Args:
            k: Number of neighbours to analyze
            min_docs_freq: Minimum document frequency for similarity query
                terms (0 keeps the query builder's default)
            min_term_freq: Minimum term frequency for similarity query
                terms (0 keeps the query builder's default)
            max_query_terms: Maximum terms per similarity query
                (0 keeps the query builder's default)
        """
        if isinstance(k, bool) or not isinstance(k, int) or k < 1:
            raise ValidationError(f"k must be a positive integer, got {k}", field="k", value=k)

        for name, value in (
            ("min_docs_freq", min_docs_freq),
            ("min_term_freq", min_term_freq),
            ("max_query_terms", max_query_terms),
        ):
            if value < 0:
                raise ValidationError(
                    f"{name} must be non-negative, got {value}", field=name, value=value
                )

        self.k = k
        self.min_docs_freq = min_docs_freq
        self.min_term_freq = min_term_freq
        self.max_query_terms = max_query_terms
        self._model: Optional[TrainedModel] = None

    @property
    def is_trained(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> Optional[TrainedModel]:
        return self._model

    def train(
        self,
        index_reader: IndexReader,
        text_field_names: Union[str, Sequence[str]],
        class_field_name: str,
        analyzer: Analyzer,
        query: Optional[Query] = None,
    ) -> None:
        if isinstance(text_field_names, str):
            text_field_names = (text_field_names,)
        field_names = tuple(text_field_names)

        if not field_names or not all(field_names):
            raise ValidationError(
                "At least one non-empty text field name is required",
                field="text_field_names",
                value=field_names,
            )

        mlt = MoreLikeThis(index_reader, analyzer)
        mlt.set_field_names(field_names)
        if self.min_docs_freq > 0:
            mlt.min_doc_freq = self.min_docs_freq
        if self.min_term_freq > 0:
            mlt.min_term_freq = self.min_term_freq
        if self.max_query_terms > 0:
            mlt.max_query_terms = self.max_query_terms

        try:
            model = TrainedModel(
                text_field_names=field_names,
                class_field_name=class_field_name,
                query=query,
                more_like_this=mlt,
                searcher=IndexSearcher(index_reader),
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid training parameters: {e}") from e

        self._model = model

        logger.info(
            f"Trained kNN classifier (k={self.k}) on fields {list(field_names)} "
            f"with class field '{class_field_name}'"
            + (" and a filter query" if query is not None else "")
        )

    def assign_class(self, text: str) -> Optional[ClassificationResult]:
        results = self._classify(text)

        best: Optional[ClassificationResult] = None
        max_score = float("-inf")
        # Results arrive in label order, so ties keep the smallest label
        for result in results:
            if result.score > max_score:
                best = result
                max_score = result.score
        return best

    def get_classes(
        self, text: str, max_results: Optional[int] = None
    ) -> List[ClassificationResult]:
        if max_results is not None and max_results < 0:
            raise ValidationError(
                f"max_results must be non-negative, got {max_results}",
                field="max_results",
                value=max_results,
            )

        results = self._classify(text)
        results.sort()

        if max_results is None:
            return results
        return results[:max_results]

    def _classify(self, text: str) -> List[ClassificationResult]:
        # Read the model once so a concurrent re-train cannot mix two models
        model = self._model
        if model is None:
            raise NotTrainedError(text=text)

        hits = model.searcher.search(self._build_query(model, text), self.k)
        return self._build_results(model, hits)

    def _build_query(self, model: TrainedModel, text: str) -> BooleanQuery:
        query = BooleanQuery()
        for field_name in model.text_field_names:
            query.add(model.more_like_this.like(field_name, text), Occur.SHOULD)

        query.add(FieldExistsQuery(model.class_field_name), Occur.MUST)
        if model.query is not None:
            query.add(model.query, Occur.MUST)
        return query

    def _build_results(
        self, model: TrainedModel, hits: List[SearchHit]
    ) -> List[ClassificationResult]:
        class_counts: Counter = Counter()
        for hit in hits:
            label = model.searcher.get_field_value(hit.doc_id, model.class_field_name)
            class_counts[label] += 1

        sumdoc = sum(class_counts.values())
        if sumdoc == 0:
            logger.warning("No neighbours found, no class can be assigned")
            return []

        results = [
            ClassificationResult(assigned_class=label, score=count / self.k)
            for label, count in sorted(class_counts.items())
        ]

        # Correction for fewer than k neighbours
        if sumdoc < self.k:
            for result in results:
                result.rescale(self.k / sumdoc)

        logger.debug(
            f"{sumdoc} neighbours voted for {len(results)} classes "
            f"(correction {'applied' if sumdoc < self.k else 'not needed'})"
        )
        return results
