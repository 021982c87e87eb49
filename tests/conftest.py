"""Shared test fixtures for TextKNN tests."""

from typing import Callable, Dict, List, Optional

import pytest

from textknn.config import TextKNNConfig
from textknn.database.engine import DatabaseManager
from textknn.search.index import IndexReader, IndexWriter
from textknn.text_processing.analyzer import Analyzer

SPORT_AND_ECONOMY = [
    ("The striker scored a late goal to win the match", "sport"),
    ("The goalkeeper saved a penalty in the final match", "sport"),
    ("Fans cheered as the team won the league match", "sport"),
    ("The central bank raised interest rates again", "economy"),
    ("Inflation and interest rates worry the markets", "economy"),
    ("Markets fell after the bank rates announcement", "economy"),
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch) -> None:
    """Keep TEXTKNN_* variables from the host out of the tests."""
    for name in (
        "TEXTKNN_DATABASE_URL",
        "TEXTKNN_K",
        "TEXTKNN_MIN_DOC_FREQ",
        "TEXTKNN_MIN_TERM_FREQ",
        "TEXTKNN_MAX_QUERY_TERMS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def db_manager() -> DatabaseManager:
    """In-memory SQLite index database."""
    manager = DatabaseManager(TextKNNConfig(database_url="sqlite:///:memory:"))
    manager.create_tables()

    yield manager

    manager.close()


@pytest.fixture
def analyzer() -> Analyzer:
    return Analyzer()


@pytest.fixture
def writer(db_manager, analyzer) -> IndexWriter:
    return IndexWriter(db_manager, analyzer)


@pytest.fixture
def reader(db_manager) -> IndexReader:
    return IndexReader(db_manager)


@pytest.fixture
def index_labelled(writer) -> Callable[..., List[int]]:
    """Index one document per label; texts default to a shared sentence."""

    def _index(labels: List[str], texts: Optional[List[str]] = None) -> List[int]:
        texts = texts or ["some shared training text"] * len(labels)
        return [
            writer.add_document({"body": text, "label": label}, keyword_fields=["label"])
            for text, label in zip(texts, labels)
        ]

    return _index


@pytest.fixture
def news_documents() -> List[Dict[str, str]]:
    """Six labelled English news snippets, three per topic."""
    return [{"body": text, "topic": topic, "lang": "en"} for text, topic in SPORT_AND_ECONOMY]


@pytest.fixture
def sport_and_economy_index(writer, news_documents) -> List[int]:
    return writer.add_documents(news_documents, keyword_fields=["topic", "lang"])
