#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the mediameta reconciliation engine.

Provides the MediaMetaDB class owning the SQLite engine, the session
factory and the shared resources of reconciliation cycles (record locks
and the event hub).

Key Features:
    - Transaction management with automatic rollback
    - Entity managers bound to the active session (media, keywords, labels)
    - Thread-safe single-cycle helper (run_cycle)
    - Comprehensive logging with rotation

Usage:
    db = MediaMetaDB("data/metadata.db", log_dir="logs")
    db.initialize_schema()

    with db.session_scope():
        record = db.media.create({"uid": "m1"})
        db.media.reconcile(record, update, labels, location)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

# --- Third party imports ---
from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from mediameta.core.events import EventHub
from mediameta.core.exceptions import DatabaseError, ValidationError
from mediameta.core.logging_manager import MediaMetaLogger, safe_logger
from mediameta.dataclasses import ClassifierLabel, MediaUpdate, ResolvedLocation
from mediameta.reconcile.locks import RecordLocks
from mediameta.reconcile.quality import QualityScorer, default_quality_score
from .decorators import DatabaseOperation
from .managers import KeywordManager, LabelManager, MediaManager
from .managers.media_manager import ReconcileResult
from .models import Base


def _configure_sqlite(engine: Engine) -> None:
    """
    Enable foreign keys and let SQLAlchemy own transaction boundaries.

    pysqlite defers BEGIN on its own, which breaks SAVEPOINT handling;
    emitting BEGIN explicitly keeps nested transactions working.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


# ----- Main Database Manager -----
class MediaMetaDB:
    """
    Main database manager for the mediameta database.

    Attributes:
        db_path: Filesystem path to the SQLite database file
        engine: SQLAlchemy engine instance
        SessionLocal: SQLAlchemy session factory
        locks: Per-record locks shared by all sessions
        event_hub: Publish/subscribe hub for vocabulary events
        quality_scorer: Scorer applied at the end of every cycle
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        quality_scorer: QualityScorer = default_quality_score,
        logger: Optional[MediaMetaLogger] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path: Path to the SQLite file, ":memory:" for a private in-memory database
            log_dir: Directory for log files (optional)
            quality_scorer: Quality scorer for reconciliation cycles
            logger: Ready-made logger, takes precedence over log_dir
        """
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path).expanduser().resolve()

        if logger is not None:
            self.logger: Optional[MediaMetaLogger] = logger
        elif log_dir:
            self.logger = MediaMetaLogger(Path(log_dir).expanduser().resolve(), component_name="database")
        else:
            self.logger = None

        self.locks = RecordLocks()
        self.event_hub = EventHub(self.logger)
        self.quality_scorer = quality_scorer

        # Entity managers, bound in session_scope
        self._media_manager: Optional[MediaManager] = None
        self._keyword_manager: Optional[KeywordManager] = None
        self._label_manager: Optional[LabelManager] = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            safe_logger(self.logger).log_operation(
                "database_init_start", {"db_path": str(self.db_path)}
            )

            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                url = f"sqlite:///{self.db_path}"
            else:
                url = "sqlite://"

            self.engine: Engine = create_engine(url, echo=False, future=True)
            _configure_sqlite(self.engine)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
                future=True,
            )

            safe_logger(self.logger).log_operation("database_init_complete", {"success": True})

        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    def initialize_schema(self) -> None:
        """Create all tables that do not exist yet."""
        with DatabaseOperation(self.logger, "initialize_schema"):
            Base.metadata.create_all(bind=self.engine)

    def table_names(self) -> list:
        return sorted(inspect(self.engine).get_table_names())

    # ---- Session Management ----
    def _build_managers(self, session: Session) -> Tuple[MediaManager, KeywordManager, LabelManager]:
        keywords = KeywordManager(session, self.logger)
        labels = LabelManager(session, self.logger, events=self.event_hub)
        media = MediaManager(
            session,
            self.logger,
            keywords=keywords,
            labels=labels,
            locks=self.locks,
            quality_scorer=self.quality_scorer,
        )
        return media, keywords, labels

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """Session committed on success and rolled back on any exception."""
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        log = safe_logger(self.logger)

        log.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            log.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            log.log_error(e, {"operation": "session_rollback", "session_id": session_id})
            raise
        finally:
            session.close()
            log.log_debug("session_close", {"session_id": session_id})

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope and bind the entity managers to it.

        Usage:
            with db.session_scope() as session:
                record = db.media.get(uid="m1")
                db.media.save(record)
        """
        with self._transaction() as session:
            self._media_manager, self._keyword_manager, self._label_manager = (
                self._build_managers(session)
            )
            try:
                yield session
            finally:
                self._media_manager = None
                self._keyword_manager = None
                self._label_manager = None

    def run_cycle(
        self,
        uid: str,
        update: Optional[MediaUpdate] = None,
        labels: Optional[Iterable[ClassifierLabel]] = None,
        location: Optional[ResolvedLocation] = None,
    ) -> ReconcileResult:
        """
        Reconcile one record in its own transaction.

        The record lock is held until the transaction has been committed
        or rolled back. Safe to call from several threads.

        Raises:
            ValidationError: If no record exists for ``uid``
            PreconditionError: If the record cannot be reconciled
            DatabaseError: If storage fails; nothing of the cycle is kept
        """
        with self.locks.hold(uid):
            with self._transaction() as session:
                media, _, _ = self._build_managers(session)
                record = media.get(uid=uid)
                if record is None:
                    raise ValidationError(f"Media not found: {uid}")
                return media.reconcile(record, update, labels, location)

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @property
    def media(self) -> MediaManager:
        """
        Access MediaManager for records and reconciliation cycles.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._media_manager is None:
            raise DatabaseError(
                "MediaManager requires active session. "
                "Use within session_scope: "
                "with db.session_scope() as session: db.media.get(...)"
            )
        return self._media_manager

    @property
    def keywords(self) -> KeywordManager:
        """
        Access KeywordManager for the keyword vocabulary and index.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._keyword_manager is None:
            raise DatabaseError(
                "KeywordManager requires active session. "
                "Use within session_scope: "
                "with db.session_scope() as session: db.keywords.get(...)"
            )
        return self._keyword_manager

    @property
    def labels(self) -> LabelManager:
        """
        Access LabelManager for labels and label associations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._label_manager is None:
            raise DatabaseError(
                "LabelManager requires active session. "
                "Use within session_scope: "
                "with db.session_scope() as session: db.labels.get(...)"
            )
        return self._label_manager

    def close(self) -> None:
        """Dispose the engine and close log files."""
        self.engine.dispose()
        if self.logger is not None:
            self.logger.close()

    # ----- Context Manager Support -----
    def __enter__(self) -> "MediaMetaDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        del exc_type, exc_val, exc_tb
        self.close()
