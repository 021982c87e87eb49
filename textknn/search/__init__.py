"""
Search module for TextKNN.

A small SQL-backed inverted index with term, field-exists and boolean
queries, plus the "more like this" similarity query builder.
"""

from .index import IndexReader, IndexSearcher, IndexWriter
from .more_like_this import MoreLikeThis, ScoredTerm
from .query import (
    BooleanClause,
    BooleanQuery,
    FieldExistsQuery,
    Query,
    TermQuery,
    classic_idf,
)

__all__ = [
    "IndexReader",
    "IndexSearcher",
    "IndexWriter",
    "MoreLikeThis",
    "ScoredTerm",
    "Query",
    "TermQuery",
    "FieldExistsQuery",
    "BooleanQuery",
    "BooleanClause",
    "classic_idf",
]
