"""
Contact Store Bootstrap

Startup check that the database is reachable and holds the submissions table.
The service has no useful degraded mode, so callers treat a failure as fatal.
"""
import logging

from django.core.management import call_command
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections

from .models import ContactSubmission

logger = logging.getLogger(__name__)


class StoreUnavailable(Exception):
    """Raised when the submissions store cannot be used."""
    pass


def ensure_store_ready(using=DEFAULT_DB_ALIAS, migrate=False):
    """
    Connect to the database and make sure the submissions table exists.

    Args:
        using: database alias to check
        migrate: apply pending migrations before checking for the table

    Raises:
        StoreUnavailable: if the connection fails or the table is missing
    """
    connection = connections[using]
    table = ContactSubmission._meta.db_table

    try:
        connection.ensure_connection()
        if migrate:
            call_command('migrate', database=using, interactive=False, verbosity=0)
        with connection.cursor() as cursor:
            tables = connection.introspection.table_names(cursor)
    except DatabaseError as exc:
        raise StoreUnavailable(f"Cannot connect to database '{using}': {exc}") from exc

    if table not in tables:
        raise StoreUnavailable(
            f"Table '{table}' does not exist. Run 'python manage.py migrate'."
        )

    logger.info("Connected to %s database; '%s' table ready.", connection.vendor, table)
