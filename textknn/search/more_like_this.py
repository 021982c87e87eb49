"""
"More like this" similarity query builder.

Turns free text into a boolean query over its most characteristic terms,
selected by term frequency in the text and document frequency in the index.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from ..exceptions import DatabaseError, SearchError, ValidationError
from ..models import Occur
from ..text_processing.analyzer import Analyzer
from .index import IndexReader
from .query import BooleanQuery, TermQuery, classic_idf

logger = logging.getLogger(__name__)

DEFAULT_MIN_TERM_FREQ = 2
DEFAULT_MIN_DOC_FREQ = 5
DEFAULT_MAX_QUERY_TERMS = 25


@dataclass(frozen=True)
class ScoredTerm:
    """A candidate query term with the statistics used to rank it."""

    term: str
    field: str
    score: float
    idf: float
    doc_freq: int


class MoreLikeThis:
    """
    Builds similarity queries for a text against an index.

    Attributes:
        min_term_freq: Terms occurring fewer times in the text are ignored
        min_doc_freq: Terms found in fewer documents are ignored
        max_doc_freq: Terms found in more documents are ignored (None = no limit)
        max_query_terms: Maximum number of terms in a generated query
        min_word_len: Shorter words are ignored (0 = no limit)
        max_word_len: Longer words are ignored (0 = no limit)
        boost: Boost each term by its score relative to the best term
    """

    def __init__(self, reader: IndexReader, analyzer: Optional[Analyzer] = None) -> None:
        self.reader = reader
        self.analyzer = analyzer
        self.field_names: List[str] = []
        self.min_term_freq = DEFAULT_MIN_TERM_FREQ
        self.min_doc_freq = DEFAULT_MIN_DOC_FREQ
        self.max_doc_freq: Optional[int] = None
        self.max_query_terms = DEFAULT_MAX_QUERY_TERMS
        self.min_word_len = 0
        self.max_word_len = 0
        self.boost = False
        self.boost_factor = 1.0
        self.stop_words: frozenset = frozenset()

    def set_field_names(self, field_names: Sequence[str]) -> None:
        """Fields consulted for document frequencies."""
        if not field_names:
            raise ValidationError("At least one field name is required", field="field_names")
        self.field_names = list(field_names)

    def set_stop_words(self, stop_words: Iterable[str]) -> None:
        self.stop_words = frozenset(stop_words)

    def like(self, field_name: str, text: str) -> BooleanQuery:
        """
        Build a query for documents whose content resembles ``text``.

        Args:
            field_name: Field the text is analyzed as
            text: Free text to find similar documents for

        Returns:
            Boolean query of SHOULD term clauses (possibly empty)
        """
        field_names = self.field_names or [field_name]
        term_freqs = self._term_frequencies(text)

        scored = self._rank_terms(term_freqs, field_names)
        query = self._create_query(scored)

        logger.debug(
            f"Similarity query for field '{field_name}': {len(query)} of "
            f"{len(term_freqs)} distinct terms kept"
        )
        return query

    def retrieve_interesting_terms(self, text: str) -> List[str]:
        """Terms a similarity query for ``text`` would use, best first."""
        if not self.field_names:
            raise ValidationError("Field names must be set first", field="field_names")
        term_freqs = self._term_frequencies(text)
        return [st.term for st in self._rank_terms(term_freqs, self.field_names)]

    def _term_frequencies(self, text: str) -> Dict[str, int]:
        if self.analyzer is None:
            raise ValidationError(
                "An analyzer is required to build similarity queries", field="analyzer"
            )
        return {
            term: freq
            for term, freq in self.analyzer.term_frequencies(text).items()
            if not self._is_noise_word(term)
        }

    def _is_noise_word(self, term: str) -> bool:
        length = len(term)
        if self.min_word_len > 0 and length < self.min_word_len:
            return True
        if self.max_word_len > 0 and length > self.max_word_len:
            return True
        return term in self.stop_words

    def _rank_terms(
        self, term_freqs: Dict[str, int], field_names: List[str]
    ) -> List[ScoredTerm]:
        try:
            return self._score_terms(term_freqs, field_names)
        except DatabaseError as e:
            logger.error(f"Term statistics lookup failed: {e}")
            raise SearchError(f"Failed to read term statistics: {str(e)}") from e

    def _score_terms(
        self, term_freqs: Dict[str, int], field_names: List[str]
    ) -> List[ScoredTerm]:
        num_docs = self.reader.num_docs()
        candidates: List[ScoredTerm] = []

        for term, tf in term_freqs.items():
            if self.min_term_freq > 0 and tf < self.min_term_freq:
                continue

            # Use the field where the term is most common
            top_field = field_names[0]
            doc_freq = 0
            for name in field_names:
                freq = self.reader.doc_freq(name, term)
                if freq > doc_freq:
                    top_field = name
                    doc_freq = freq

            if self.max_doc_freq is not None and doc_freq > self.max_doc_freq:
                continue
            if self.min_doc_freq > 0 and doc_freq < self.min_doc_freq:
                continue
            if doc_freq == 0:
                continue

            idf = classic_idf(doc_freq, num_docs)
            candidates.append(
                ScoredTerm(
                    term=term, field=top_field, score=tf * idf, idf=idf, doc_freq=doc_freq
                )
            )

        candidates.sort(key=lambda st: (-st.score, st.term))
        return candidates[: self.max_query_terms]

    def _create_query(self, scored: List[ScoredTerm]) -> BooleanQuery:
        query = BooleanQuery()
        if not scored:
            return query

        best_score = scored[0].score
        for st in scored:
            boost = self.boost_factor * st.score / best_score if self.boost else 1.0
            query.add(TermQuery(st.field, st.term, boost=boost), Occur.SHOULD)
        return query
