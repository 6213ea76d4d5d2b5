#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the mediameta project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    └── MediaMetaError - Base for all project errors
        ├── DatabaseError - Storage and collaborator failures
        ├── ValidationError - Data validation failures
        └── PreconditionError - Operation attempted in an invalid state
            ├── DetailsNotLoadedError - Keyword index without loaded details
            └── MissingIdentityError - Update of a record without id/uid

Field reconciliation rejections (a candidate losing precedence or failing a
validity filter) are not errors and never raise.

Usage:
    from mediameta.core.exceptions import DatabaseError, ValidationError

    try:
        db.media.reconcile(record, update)
    except PreconditionError as e:
        logger.error(f"Cycle aborted: {e}")
    except DatabaseError as e:
        logger.error(f"Database operation failed: {e}")
"""


class MediaMetaError(Exception):
    """Base exception for all mediameta errors."""

    pass


class DatabaseError(MediaMetaError):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    query errors, integrity violations, or other storage problems.
    A reconciliation cycle that fails with this error has been rolled
    back and may be retried as a whole.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
        >>> raise DatabaseError("Data integrity violation: duplicate keyword")
    """

    pass


class ValidationError(MediaMetaError):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Unknown provenance tags
    - Missing required fields
    - Type mismatches
    - Malformed update files

    Examples:
        >>> raise ValidationError("Unknown provenance: 'exif'")
        >>> raise ValidationError("Required field 'uid' missing or empty")
    """

    pass


class PreconditionError(MediaMetaError):
    """
    Exception for operations attempted in an invalid state.

    Fails fast and aborts the current reconciliation cycle. Not retried
    automatically, since repeating the call cannot change the outcome.
    """

    pass


class DetailsNotLoadedError(PreconditionError):
    """
    Raised when keywords are indexed for a record whose details are missing.

    Examples:
        >>> raise DetailsNotLoadedError("can't index keywords, details not loaded (m1a2b3)")
    """

    pass


class MissingIdentityError(PreconditionError):
    """
    Raised when a record without database id or uid is saved or updated.

    Examples:
        >>> raise MissingIdentityError("can't save form, id is empty")
    """

    pass
