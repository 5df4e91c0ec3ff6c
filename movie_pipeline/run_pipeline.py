#!/usr/bin/env python3
"""
Movie Genre ETL Pipeline

Creates the SQLite tables, loads the movies and genre CSV files, and prints
the ten genres with the highest average rating. Stages run strictly in
order; a fatal error in any stage stops the run without undoing earlier
stages, and rerunning inserts every row again.
"""

import os
import sys
import logging
import argparse
from typing import List, Optional

from movie_pipeline import config
from movie_pipeline.errors import PipelineError
from movie_pipeline.export import export_outputs, upload_file_to_s3
from movie_pipeline.loader import load_genres, load_movies
from movie_pipeline.report import fetch_top_genres, print_report
from movie_pipeline.storage import create_tables, get_table_counts
from utils.logger import setup_logger

logger = logging.getLogger("movie_pipeline.run_pipeline")


def upload_outputs(files: List[str], bucket: str) -> int:
    """Upload exported files to S3, returning how many succeeded."""
    uploaded = 0
    for local_file in files:
        if upload_file_to_s3(local_file, bucket, os.path.basename(local_file)):
            uploaded += 1
    logger.info(f"Uploaded {uploaded} of {len(files)} files to s3://{bucket}")
    return uploaded


def run_pipeline(
    db_file: str = config.DEFAULT_DB_PATH,
    movies_csv: str = config.DEFAULT_MOVIES_CSV,
    genres_csv: str = config.DEFAULT_GENRES_CSV,
    export_dir: Optional[str] = None,
    s3_bucket: Optional[str] = None
) -> bool:
    """
    Run the full ETL pipeline.

    Args:
        db_file: Path to the SQLite database file
        movies_csv: Path to the movies CSV file
        genres_csv: Path to the genre assignments CSV file
        export_dir: Directory for Parquet exports (optional)
        s3_bucket: Bucket to upload exports to, requires export_dir (optional)

    Returns:
        True if the report was printed, False on a fatal error
    """
    logger.info("Starting movie genre pipeline...")
    try:
        create_tables(db_file)
        load_movies(movies_csv, db_file)
        load_genres(genres_csv, db_file)
        rows = fetch_top_genres(db_file)
        stats = get_table_counts(db_file)
    except PipelineError as e:
        logger.error(f"Pipeline aborted: {e}")
        return False

    print_report(rows)
    logger.info(f"Pipeline completed. Table statistics: {stats}")

    if export_dir:
        files = export_outputs(db_file, rows, export_dir)
        if s3_bucket:
            upload_outputs(files, s3_bucket)
    elif s3_bucket:
        logger.warning("An S3 bucket was given without an export directory; nothing to upload.")

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point for the pipeline."""
    parser = argparse.ArgumentParser(description='Load movie CSV files into SQLite and report top rated genres')
    parser.add_argument('--db', type=str, default=config.DEFAULT_DB_PATH, help='Path to SQLite database')
    parser.add_argument('--movies', type=str, default=config.DEFAULT_MOVIES_CSV, help='Path to movies CSV file')
    parser.add_argument('--genres', type=str, default=config.DEFAULT_GENRES_CSV, help='Path to genres CSV file')
    parser.add_argument('--export-dir', type=str, default=config.DEFAULT_EXPORT_DIR, help='Directory for Parquet exports')
    parser.add_argument('--s3-bucket', type=str, default=config.DEFAULT_S3_BUCKET, help='S3 bucket for exported files')
    parser.add_argument('--log-dir', type=str, default=config.DEFAULT_LOG_DIR, help='Directory for log files')
    parser.add_argument('--log-level', type=str, default=config.DEFAULT_LOG_LEVEL, help='Logging level')

    args = parser.parse_args(argv)

    setup_logger("movie_pipeline", log_file="movie_pipeline.log", level=args.log_level, log_dir=args.log_dir)

    success = run_pipeline(
        db_file=args.db,
        movies_csv=args.movies,
        genres_csv=args.genres,
        export_dir=args.export_dir,
        s3_bucket=args.s3_bucket,
    )
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
