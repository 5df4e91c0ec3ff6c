import sqlite3
import logging
from typing import Iterable, List, NamedTuple, Sequence, Any

import pandas as pd
from pandas.errors import DatabaseError

from movie_pipeline.errors import ReportError
from movie_pipeline.storage import connect

logger = logging.getLogger("movie_pipeline.report")

REPORT_TITLE = "Top 10 Highest Rated Genres:"

TOP_GENRES_QUERY = """
    SELECT g.genre, AVG(m.rating) AS avg_rating
    FROM movies m
    JOIN genres g ON m.id = g.movie_id
    GROUP BY g.genre
    ORDER BY avg_rating DESC, g.genre
    LIMIT 10
"""


class GenreRating(NamedTuple):
    genre: str
    avg_rating: float


def decode_row(row: Sequence[Any]) -> GenreRating:
    """
    Convert a raw result row into a GenreRating.

    Raises:
        ReportError: if the genre is not text or the average is not a number
    """
    genre, avg_rating = row
    if not isinstance(genre, str):
        raise ReportError(f"Invalid genre value in report row: {genre!r}")
    if avg_rating is None or pd.isna(avg_rating):
        raise ReportError(f"Missing average rating for genre {genre!r}")
    try:
        return GenreRating(genre, float(avg_rating))
    except (TypeError, ValueError) as e:
        raise ReportError(f"Invalid average rating for genre {genre!r}: {e}") from e


def fetch_top_genres(db_file: str) -> List[GenreRating]:
    """
    Run the top rated genres query.

    Args:
        db_file: Path to the SQLite database file

    Returns:
        Up to ten genres ordered by average rating, highest first

    Raises:
        ReportError: if the query fails or a row cannot be decoded
    """
    conn = connect(db_file)
    try:
        df = pd.read_sql(TOP_GENRES_QUERY, conn)
    except (DatabaseError, sqlite3.Error) as e:
        raise ReportError(f"Error running top genres query: {e}") from e
    finally:
        conn.close()

    rows = [decode_row(row) for row in df.itertuples(index=False, name=None)]
    logger.info(f"Report query returned {len(rows)} genres.")
    return rows


def format_report(rows: Iterable[GenreRating]) -> List[str]:
    lines = [REPORT_TITLE]
    lines.extend(f"{row.genre}: {row.avg_rating:.2f}" for row in rows)
    return lines


def print_report(rows: Iterable[GenreRating]) -> None:
    for line in format_report(rows):
        print(line)
