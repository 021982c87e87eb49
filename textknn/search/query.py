"""
Query objects understood by the TextKNN index searcher.

Every query scores documents against an IndexReader and returns a mapping
of document id to score; documents absent from the mapping do not match.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List

from ..exceptions import ValidationError
from ..models import Occur

if TYPE_CHECKING:
    from .index import IndexReader


def classic_idf(doc_freq: int, num_docs: int) -> float:
    """Inverse document frequency, ``1 + ln(num_docs / (doc_freq + 1))``."""
    return 1.0 + math.log(num_docs / (doc_freq + 1))


class Query(ABC):
    """Base class for all queries."""

    @abstractmethod
    def score_documents(self, reader: "IndexReader") -> Dict[int, float]:
        """Return the score of every matching document."""


@dataclass(frozen=True)
class TermQuery(Query):
    """Matches documents containing a term in a field, scored by TF-IDF."""

    field: str
    term: str
    boost: float = 1.0

    def __post_init__(self) -> None:
        if not self.field:
            raise ValidationError("Term query field cannot be empty", field="field")
        if not self.term:
            raise ValidationError("Term query term cannot be empty", field="term")

    def score_documents(self, reader: "IndexReader") -> Dict[int, float]:
        postings = reader.postings(self.field, self.term)
        if not postings:
            return {}

        idf = classic_idf(len(postings), reader.num_docs())
        return {
            doc_id: math.sqrt(frequency) * idf * self.boost
            for doc_id, frequency in postings
        }


@dataclass(frozen=True)
class FieldExistsQuery(Query):
    """Matches every document holding at least one term in a field."""

    field: str
    boost: float = 1.0

    def __post_init__(self) -> None:
        if not self.field:
            raise ValidationError("Field exists query field cannot be empty", field="field")

    def score_documents(self, reader: "IndexReader") -> Dict[int, float]:
        return {doc_id: self.boost for doc_id in reader.docs_with_field(self.field)}


@dataclass(frozen=True)
class BooleanClause:
    """A sub-query and how it takes part in its parent boolean query."""

    query: Query
    occur: Occur = Occur.SHOULD


@dataclass
class BooleanQuery(Query):
    """
    Boolean composition of clauses.

    MUST clauses are all required. SHOULD clauses are optional once any
    MUST clause exists; otherwise at least one of them has to match.
    A matching document scores the sum of its matching clauses.
    """

    clauses: List[BooleanClause] = field(default_factory=list)

    def add(self, query: Query, occur: Occur = Occur.SHOULD) -> "BooleanQuery":
        """Append a clause (returns self for chaining)."""
        self.clauses.append(BooleanClause(query, occur))
        return self

    @property
    def required(self) -> List[Query]:
        return [c.query for c in self.clauses if c.occur is Occur.MUST]

    @property
    def optional(self) -> List[Query]:
        return [c.query for c in self.clauses if c.occur is Occur.SHOULD]

    def score_documents(self, reader: "IndexReader") -> Dict[int, float]:
        required = self.required
        optional = self.optional

        scores: Dict[int, float] = {}

        if required:
            for i, query in enumerate(required):
                matches = query.score_documents(reader)
                if i == 0:
                    scores = dict(matches)
                else:
                    scores = {
                        doc_id: score + matches[doc_id]
                        for doc_id, score in scores.items()
                        if doc_id in matches
                    }
                if not scores:
                    return {}

            for query in optional:
                for doc_id, score in query.score_documents(reader).items():
                    if doc_id in scores:
                        scores[doc_id] += score
            return scores

        for query in optional:
            for doc_id, score in query.score_documents(reader).items():
                scores[doc_id] = scores.get(doc_id, 0.0) + score
        return scores

    def __len__(self) -> int:
        return len(self.clauses)
