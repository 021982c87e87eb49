"""
Database engine and connection management for TextKNN.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import TextKNNConfig
from ..exceptions import DatabaseError
from .models import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Database connection and session management.

    Handles database initialization, connection pooling and session scoping
    for the inverted index tables.
    """

    def __init__(self, config: TextKNNConfig):
        """Initialize database manager with configuration."""
        self.config = config
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

        self._initialize_engine()

    def _initialize_engine(self):
        """Initialize SQLAlchemy engine with appropriate settings."""
        try:
            engine_kwargs = self._get_engine_kwargs()

            self.engine = create_engine(self.config.database_url, **engine_kwargs)

            self.SessionLocal = sessionmaker(
                autocommit=False, autoflush=False, bind=self.engine
            )

            self._test_connection()

        except Exception as e:
            raise DatabaseError(
                f"Failed to initialize database engine: {str(e)}",
                operation="initialize_engine",
            )

    def _get_engine_kwargs(self) -> Dict[str, Any]:
        """Get engine configuration based on database type."""
        url_lower = self.config.database_url.lower()

        if url_lower.startswith("sqlite"):
            return {
                "echo": False,
                # A single shared connection keeps in-memory indexes alive
                "poolclass": StaticPool,
                "connect_args": {
                    "check_same_thread": False,
                    "timeout": 30,
                },
                "pool_pre_ping": True,
            }

        elif url_lower.startswith("postgresql"):
            return {
                "echo": False,
                "pool_size": 10,
                "max_overflow": 20,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
                "connect_args": {
                    "connect_timeout": 30,
                    "application_name": "textknn",
                },
            }

        elif url_lower.startswith("mysql"):
            return {
                "echo": False,
                "pool_size": 10,
                "max_overflow": 20,
                "pool_pre_ping": True,
                "pool_recycle": 3600,
                "connect_args": {
                    "connect_timeout": 30,
                    "charset": "utf8mb4",
                },
            }

        else:
            return {
                "echo": False,
                "pool_pre_ping": True,
            }

    def _test_connection(self):
        """Test database connection."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            raise DatabaseError(
                f"Database connection test failed: {str(e)}",
                operation="test_connection",
            )

    def create_tables(self):
        """Create all index tables and indexes."""
        try:
            Base.metadata.create_all(bind=self.engine)
            logger.debug("Index tables created")
        except Exception as e:
            raise DatabaseError(
                f"Failed to create database tables: {str(e)}", operation="create_tables"
            )

    def drop_tables(self):
        """Drop all index tables (for testing/cleanup)."""
        try:
            Base.metadata.drop_all(bind=self.engine)
        except Exception as e:
            raise DatabaseError(
                f"Failed to drop database tables: {str(e)}", operation="drop_tables"
            )

    @contextmanager
    def get_session(self):
        """
        Get a database session with automatic cleanup and error handling.

        Usage:
            with db_manager.get_session() as session:
                # Use session here
                pass
        """
        if not self.SessionLocal:
            raise DatabaseError("Database not initialized", operation="get_session")

        session: Session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            raise DatabaseError(
                f"Database session error: {str(e)}", operation="session_operation"
            )
        finally:
            session.close()

    def get_table_info(self) -> Dict[str, Any]:
        """Get information about database tables and their row counts."""
        try:
            with self.get_session() as session:
                info = {}

                for table_name in Base.metadata.tables.keys():
                    result = session.execute(text(f"SELECT COUNT(*) FROM {table_name}"))
                    info[table_name] = {"row_count": result.scalar()}

                return info

        except Exception as e:
            raise DatabaseError(
                f"Failed to get table information: {str(e)}", operation="get_table_info"
            )

    def close(self):
        """Close database connections and cleanup resources."""
        if self.engine:
            self.engine.dispose()
            self.engine = None
            self.SessionLocal = None
