"""Shared fixtures: temporary database paths and CSV files."""

import logging
import sqlite3

import pytest

from movie_pipeline.storage import create_tables


SAMPLE_MOVIES = (
    "id,title,year,rating\n"
    "1,A,2000,8.0\n"
    "2,B,2001,6.0\n"
)

SAMPLE_GENRES = (
    "movie_id,genre\n"
    "1,Drama\n"
    "2,Drama\n"
    "1,Comedy\n"
)


@pytest.fixture
def db_file(tmp_path):
    """Path to a database file that does not exist yet."""
    return str(tmp_path / "data" / "movies.db")


@pytest.fixture
def initialized_db(db_file):
    """Database file with both tables created."""
    create_tables(db_file)
    return db_file


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a CSV file under tmp_path and return its path."""
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def sample_files(write_csv):
    return write_csv("movies.csv", SAMPLE_MOVIES), write_csv("genres.csv", SAMPLE_GENRES)


@pytest.fixture
def query(db_file):
    """Run a read query against the test database and return all rows."""
    def _query(sql, params=()):
        conn = sqlite3.connect(db_file)
        try:
            return conn.execute(sql, params).fetchall()
        finally:
            conn.close()
    return _query


@pytest.fixture(autouse=True)
def reset_pipeline_logger():
    """Drop handlers that setup_logger attaches during CLI tests."""
    yield
    pipeline_logger = logging.getLogger("movie_pipeline")
    for handler in list(pipeline_logger.handlers):
        pipeline_logger.removeHandler(handler)
        handler.close()
    pipeline_logger.setLevel(logging.NOTSET)
