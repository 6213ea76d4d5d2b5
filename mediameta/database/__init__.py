#!/usr/bin/env python3
"""
mediameta Database Package
--------------------------
Persistence for reconciled media metadata.

- models: SQLAlchemy ORM models and the Provenance enum
- decorators: Logging and error translation for database operations
- managers: Entity managers (media, keywords, labels)
- manager: MediaMetaDB, engine and session scope

The package namespace stays free of the managers so the models can be
imported on their own:

    from mediameta.database.models import MediaRecord, Provenance
    from mediameta.database.manager import MediaMetaDB
"""
from mediameta.core.exceptions import DatabaseError, ValidationError
from .decorators import DatabaseOperation, handle_db_errors, log_database_operation

__all__ = [
    "DatabaseError",
    "ValidationError",
    "DatabaseOperation",
    "handle_db_errors",
    "log_database_operation",
]
