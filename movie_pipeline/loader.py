"""
CSV ingestion into the movies and genres tables.

Both files go through the same loader: the whole file is parsed up front,
the header row is dropped, and each remaining row is validated and inserted
on its own. Bad rows are logged and skipped, never fatal.
"""

import csv
import re
import sys
import sqlite3
import logging
from typing import Callable, List, Optional, Sequence, Tuple, Any

from movie_pipeline.errors import FatalIOError, RowSkipped
from movie_pipeline.storage import connect

logger = logging.getLogger("movie_pipeline.loader")

NULL_MARKER = "NULL"

# Bounds of an SQLite INTEGER
MIN_INTEGER = -2 ** 63
MAX_INTEGER = 2 ** 63 - 1

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

INSERT_MOVIE_SQL = "INSERT INTO movies (id, title, year, rating) VALUES (?, ?, ?, ?)"
INSERT_GENRE_SQL = "INSERT INTO genres (movie_id, genre) VALUES (?, ?)"

RowPreparer = Callable[[List[str]], Tuple[Any, ...]]


def raise_field_size_limit() -> None:
    """Lift the csv module's per-field size limit as far as the platform allows."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            limit //= 2


def read_csv_rows(csv_file: str) -> List[List[str]]:
    """
    Parse a CSV file into a list of rows, header included.

    Rows may have any number of fields and stray quote characters inside
    fields are kept as text. Blank lines are dropped. Bytes that are not
    valid UTF-8 are replaced rather than rejected, and fields of any length
    are accepted.

    Args:
        csv_file: Path to the CSV file

    Returns:
        Every non-blank row of the file, in order

    Raises:
        FatalIOError: if the file cannot be opened or parsed
    """
    raise_field_size_limit()
    try:
        with open(csv_file, newline='', encoding='utf-8', errors='replace') as f:
            reader = csv.reader(f, delimiter=',', strict=False)
            return [row for row in reader if row]
    except OSError as e:
        raise FatalIOError(f"Unable to open CSV file {csv_file}: {e}") from e
    except csv.Error as e:
        raise FatalIOError(f"Error reading CSV file {csv_file}: {e}") from e


def parse_rating(value: str) -> float:
    """Convert a rating field, treating the NULL-marker and empty text as 0.0."""
    if value == NULL_MARKER or value == "":
        return 0.0
    return float(value)


def parse_year(value: str) -> int:
    """Convert a year field to an integer that fits an SQLite INTEGER."""
    if not INTEGER_PATTERN.fullmatch(value):
        raise ValueError(f"invalid literal for year: {value!r}")
    year = int(value)
    if not MIN_INTEGER <= year <= MAX_INTEGER:
        raise ValueError(f"year out of range: {value!r}")
    return year


def prepare_movie_row(record: Sequence[str]) -> Tuple[str, str, int, float]:
    """
    Validate a movies CSV row and convert it to insert parameters.

    Raises:
        RowSkipped: if the row is short, the year is not an integer or
            the rating is not a number
    """
    if len(record) < 4:
        raise RowSkipped("not enough columns")

    try:
        year = parse_year(record[2])
    except ValueError as e:
        raise RowSkipped(f"invalid year format ({e})") from e

    try:
        rating = parse_rating(record[3])
    except ValueError as e:
        raise RowSkipped(f"invalid rating format ({e})") from e

    return record[0], record[1], year, rating


def prepare_genre_row(record: Sequence[str]) -> Tuple[str, str]:
    """
    Validate a genres CSV row and convert it to insert parameters.

    The movie id is not checked against the movies table.
    """
    if len(record) < 2:
        raise RowSkipped(f"not enough columns ({list(record)})")
    return record[0], record[1]


def load_rows(
    csv_file: str,
    db_file: str,
    table: str,
    insert_sql: str,
    prepare_row: RowPreparer,
    log: Optional[logging.Logger] = None
) -> int:
    """
    Load a CSV file into a table one row at a time.

    Row numbers in log messages are 1-based and count data rows only.

    Args:
        csv_file: Path to the CSV file
        db_file: Path to the SQLite database file
        table: Target table name, used in log messages
        insert_sql: Parameterized INSERT statement for the table
        prepare_row: Validates a row and returns its insert parameters,
            raising RowSkipped for rows that must not be inserted
        log: Sink for skip and failure messages, defaults to the module logger

    Returns:
        Number of rows inserted

    Raises:
        FatalIOError: if the CSV file cannot be opened or parsed
        StorageError: if the database cannot be opened
    """
    log = log or logger

    records = read_csv_rows(csv_file)
    if not records:
        log.warning(f"CSV file {csv_file} is empty, nothing to load into {table}.")
        return 0

    record_count = 0
    conn = connect(db_file)
    try:
        cursor = conn.cursor()
        for i, record in enumerate(records[1:], start=1):
            try:
                params = prepare_row(record)
            except RowSkipped as e:
                log.warning(f"Skipping row {i}: {e.reason}")
                continue

            try:
                cursor.execute(insert_sql, params)
                record_count += 1
            except (sqlite3.Error, OverflowError) as e:
                log.warning(f"Skipping row {i}: {e}")
    finally:
        conn.close()

    log.info(f"Successfully loaded {record_count} records into {table} from {csv_file}.")
    return record_count


def load_movies(csv_file: str, db_file: str, log: Optional[logging.Logger] = None) -> int:
    """Load the movies CSV (id, title, year, rating) into the movies table."""
    return load_rows(csv_file, db_file, "movies", INSERT_MOVIE_SQL, prepare_movie_row, log)


def load_genres(csv_file: str, db_file: str, log: Optional[logging.Logger] = None) -> int:
    """Load the genres CSV (movie_id, genre) into the genres table."""
    return load_rows(csv_file, db_file, "genres", INSERT_GENRE_SQL, prepare_genre_row, log)
