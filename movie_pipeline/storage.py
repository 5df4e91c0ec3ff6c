import sqlite3
import os
import logging
from typing import Dict

from movie_pipeline.errors import StorageError

logger = logging.getLogger("movie_pipeline.storage")

TABLES = ("movies", "genres")


def create_movies_table(cursor):
    """
    Create the movies table if it doesn't already exist.

    id carries no PRIMARY KEY, so reloading a file duplicates movies and a
    non-numeric id is stored as text by column affinity instead of being
    rejected.
    """
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS movies (
            id INTEGER,
            title TEXT,
            year INTEGER,
            rating REAL
        )
    """)


def create_genres_table(cursor):
    """
    Create the genres table if it doesn't already exist.
    """
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS genres (
            movie_id INTEGER,
            genre TEXT,
            FOREIGN KEY(movie_id) REFERENCES movies(id)
        )
    """)


def connect(db_file: str) -> sqlite3.Connection:
    """
    Open the SQLite database in autocommit mode.

    Every INSERT issued on the returned connection is its own transaction,
    so rows written before a crash stay written.

    Args:
        db_file: Path to the SQLite database file

    Returns:
        SQLite connection object

    Raises:
        StorageError: if the directory cannot be created or the file opened
    """
    try:
        db_dir = os.path.dirname(db_file)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return sqlite3.connect(db_file, isolation_level=None)
    except (OSError, sqlite3.Error) as e:
        raise StorageError(f"Unable to open database {db_file}: {e}") from e


def create_tables(db_file: str) -> None:
    """
    Create the movies and genres tables in the SQLite database.

    Safe to call against an existing store; tables are never recreated.

    Args:
        db_file: Path to the SQLite database file

    Raises:
        StorageError: if the store cannot be opened or a table cannot be created
    """
    conn = connect(db_file)
    try:
        cursor = conn.cursor()
        create_movies_table(cursor)
        create_genres_table(cursor)
        logger.info(f"Database tables ready in {db_file}")
    except sqlite3.Error as e:
        raise StorageError(f"Error creating database tables: {e}") from e
    finally:
        conn.close()


def get_table_counts(db_file: str) -> Dict[str, int]:
    """
    Get record counts for each table.

    Returns:
        Dictionary mapping table name to its row count, -1 where unreadable
    """
    stats = {}
    conn = connect(db_file)
    try:
        cursor = conn.cursor()
        for table in TABLES:
            try:
                cursor.execute(f"SELECT COUNT(*) FROM {table}")
                stats[table] = cursor.fetchone()[0]
            except sqlite3.Error as e:
                logger.error(f"Error counting rows in {table}: {e}")
                stats[table] = -1
    finally:
        conn.close()
    return stats
