"""
Parquet export and S3 upload of pipeline outputs.

Exports are a convenience on top of the report: every failure here is
logged and reported through the return value, never raised.
"""

import os
import sqlite3
import logging
import datetime
from typing import List, Optional, Sequence

import boto3
from boto3.exceptions import S3UploadFailedError
import pandas as pd
from botocore.exceptions import BotoCoreError, ClientError
from pandas.errors import DatabaseError

from movie_pipeline import config
from movie_pipeline.report import GenreRating
from movie_pipeline.storage import TABLES, connect

logger = logging.getLogger("movie_pipeline.export")

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def export_table_to_parquet(db_file: str, table_name: str, output_file: str) -> Optional[str]:
    """
    Write every row of a table to a Parquet file.

    Args:
        db_file: Path to the SQLite database file
        table_name: Either 'movies' or 'genres'
        output_file: Destination Parquet path

    Returns:
        The output path, or None if nothing was written
    """
    if table_name not in TABLES:
        logger.error(f"Invalid table: {table_name}")
        return None

    try:
        conn = connect(db_file)
        try:
            df = pd.read_sql(f"SELECT * FROM {table_name}", conn)
        finally:
            conn.close()

        if df.empty:
            logger.warning(f"Table '{table_name}' in {db_file} is empty. No data to export.")
            return None

        df.to_parquet(output_file, index=False)
        logger.info(f"Exported {len(df)} records from table '{table_name}' to {output_file}")
        return output_file

    except (DatabaseError, sqlite3.Error, OSError, ValueError) as e:
        logger.error(f"Error exporting table '{table_name}': {e}")
        return None


def export_report_to_parquet(rows: Sequence[GenreRating], output_file: str) -> Optional[str]:
    """Write the report rows to a Parquet file with columns genre and avg_rating."""
    if not rows:
        logger.warning("Report is empty. No data to export.")
        return None

    df = pd.DataFrame(list(rows), columns=list(GenreRating._fields))
    try:
        df.to_parquet(output_file, index=False)
    except (OSError, ValueError) as e:
        logger.error(f"Error exporting report: {e}")
        return None
    logger.info(f"Exported {len(df)} report rows to {output_file}")
    return output_file


def export_outputs(db_file: str, rows: Sequence[GenreRating], output_dir: str) -> List[str]:
    """
    Export both tables and the report into output_dir with timestamped names.

    Returns:
        Paths of the files actually written
    """
    os.makedirs(output_dir, exist_ok=True)
    ts = datetime.datetime.now().strftime(TIMESTAMP_FORMAT)

    written = []
    for table in TABLES:
        output_file = export_table_to_parquet(
            db_file, table, os.path.join(output_dir, f"{ts}_{table}.parquet")
        )
        if output_file:
            written.append(output_file)

    report_file = export_report_to_parquet(
        rows, os.path.join(output_dir, f"{ts}_top_genres.parquet")
    )
    if report_file:
        written.append(report_file)

    return written


def get_s3_client():
    return boto3.client('s3',
                        aws_access_key_id=config.AWS_ACCESS_KEY_ID,
                        aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
                        region_name=config.AWS_REGION)


def upload_file_to_s3(local_file: str, bucket: str, s3_key: str) -> bool:
    """
    Upload a local file to the given bucket and key.

    Returns:
        True if the upload succeeded, False otherwise
    """
    try:
        s3_client = get_s3_client()
        s3_client.upload_file(local_file, bucket, s3_key)
        logger.info(f"Uploaded {local_file} to s3://{bucket}/{s3_key}")
        return True
    except (BotoCoreError, ClientError, S3UploadFailedError, OSError) as e:
        logger.error(f"Failed to upload {local_file} to s3://{bucket}/{s3_key}: {e}")
        return False
