#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common lookup and find-or-create utilities.
All entity managers inherit from this class.

Key Features:
    - Retry logic for database lock handling
    - Race-safe find-or-create for vocabulary and association rows
    - Lookup helpers honoring soft deletion

Usage:
    class KeywordManager(BaseManager):
        def get_or_create(self, word: str) -> Keyword:
            keyword, _ = self._get_or_create(Keyword, {"keyword": word})
            return keyword
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import time
from abc import ABC
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar

# --- Third party imports ---
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

# --- Local imports ---
from mediameta.core.exceptions import DatabaseError
from mediameta.core.logging_manager import MediaMetaLogger, safe_logger
from mediameta.core.validators import DataValidator

T = TypeVar("T")


class BaseManager(ABC):
    """
    Abstract base manager with helpers shared by all entity managers.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[MediaMetaLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _execute_with_retry(
        self,
        operation: Callable,
        max_retries: int = 3,
        retry_delay: float = 0.1,
    ) -> Any:
        """
        Execute database operation with retry on lock.

        Args:
            operation: Callable that performs the operation
            max_retries: Maximum number of retry attempts
            retry_delay: Base delay between retries (exponential backoff)

        Returns:
            Result of the operation

        Raises:
            OperationalError: If all retries exhausted
            DatabaseError: If retry loop completes without success
        """
        for attempt in range(max_retries):
            try:
                return operation()
            except OperationalError as e:
                error_msg = str(e).lower()

                if (
                    "locked" in error_msg or "busy" in error_msg
                ) and attempt < max_retries - 1:
                    wait_time = retry_delay * (2**attempt)

                    safe_logger(self.logger).log_debug(
                        f"Database locked, retrying in {wait_time}s",
                        {"attempt": attempt + 1, "max_retries": max_retries},
                    )

                    time.sleep(wait_time)
                    continue

                raise

        raise DatabaseError("Retry loop completed without success")

    def _get_or_create(
        self,
        model_class: Type[T],
        lookup_fields: Dict[str, Any],
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> Tuple[T, bool]:
        """
        Get a row matching ``lookup_fields`` or create it.

        The insert runs inside a savepoint: when a concurrent writer created
        the same row first, only the savepoint is rolled back and the
        existing row is returned. The surrounding cycle stays intact.

        Args:
            model_class: ORM model class to query or create
            lookup_fields: Natural key of the row
            extra_fields: Additional fields for new object creation only

        Returns:
            Tuple of (instance, created)

        Raises:
            DatabaseError: If creation fails and no row can be found
        """
        obj = self.session.query(model_class).filter_by(**lookup_fields).first()
        if obj is not None:
            return obj, False

        fields = lookup_fields.copy()
        if extra_fields:
            fields.update(extra_fields)

        try:
            with self.session.begin_nested():
                obj = model_class(**fields)
                self.session.add(obj)
            return obj, True
        except IntegrityError:
            obj = self.session.query(model_class).filter_by(**lookup_fields).first()
            if obj is not None:
                safe_logger(self.logger).log_debug(
                    f"{model_class.__name__} created concurrently", lookup_fields
                )
                return obj, False
            raise DatabaseError(
                f"Failed to create {model_class.__name__} even after handling race condition"
            )

    # -------------------------------------------------------------------------
    # Generic Lookup Helpers
    # -------------------------------------------------------------------------

    def _get_by_id(
        self,
        model_class: Type[T],
        entity_id: int,
        include_deleted: bool = False,
    ) -> Optional[T]:
        """
        Get entity by ID with optional soft-delete filtering.

        Args:
            model_class: ORM model class
            entity_id: The entity ID
            include_deleted: Include soft-deleted entities

        Returns:
            Entity if found, None otherwise
        """
        entity = self.session.get(model_class, entity_id)
        if entity is None:
            return None

        if not include_deleted and getattr(entity, "deleted_at", None) is not None:
            return None

        return entity

    def _get_by_field(
        self,
        model_class: Type[T],
        field_name: str,
        value: Any,
        normalize: bool = True,
        include_deleted: bool = False,
    ) -> Optional[T]:
        """
        Get entity by a specific field value.

        Args:
            model_class: ORM model class
            field_name: Field name to filter by
            value: Value to look up
            normalize: Whether to normalize string values
            include_deleted: Include soft-deleted entities

        Returns:
            Entity if found, None otherwise
        """
        if value is None:
            return None

        if normalize and isinstance(value, str):
            value = DataValidator.normalize_string(value)
            if not value:
                return None

        query = self.session.query(model_class).filter_by(**{field_name: value})

        if not include_deleted and hasattr(model_class, "deleted_at"):
            query = query.filter(model_class.deleted_at.is_(None))

        return query.first()

    def _get_all(
        self,
        model_class: Type[T],
        order_by: Optional[str] = None,
        include_deleted: bool = False,
        **filters: Any,
    ) -> List[T]:
        """
        Get all entities of a type with optional filtering and ordering.

        Args:
            model_class: ORM model class
            order_by: Column name to order by (optional)
            include_deleted: Include soft-deleted entities
            **filters: Additional filter conditions

        Returns:
            List of entities
        """
        query = self.session.query(model_class)

        if filters:
            query = query.filter_by(**filters)

        if not include_deleted and hasattr(model_class, "deleted_at"):
            query = query.filter(model_class.deleted_at.is_(None))

        if order_by and hasattr(model_class, order_by):
            query = query.order_by(getattr(model_class, order_by))

        return query.all()

    def _count(
        self,
        model_class: Type[T],
        include_deleted: bool = False,
        **filters: Any,
    ) -> int:
        """Count entities with optional filtering."""
        query = self.session.query(model_class)

        if filters:
            query = query.filter_by(**filters)

        if not include_deleted and hasattr(model_class, "deleted_at"):
            query = query.filter(model_class.deleted_at.is_(None))

        return query.count()
