"""
Movie Genre ETL Package

Modules:
    config.py       - Environment-driven defaults for paths, logging and AWS.
    errors.py       - Fatal and per-row exception types.
    storage.py      - Creates the movies and genres tables in SQLite.
    loader.py       - Loads the movies and genre CSV files row by row.
    report.py       - Runs the top rated genres report.
    export.py       - Exports tables and the report to Parquet and S3.
    run_pipeline.py - Orchestrates the full ETL pipeline.

Version: 1.0.0
"""
