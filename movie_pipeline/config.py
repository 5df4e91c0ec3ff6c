"""
Pipeline configuration loaded from the environment or defaults.

Values are read once at import time after loading a `.env` file from the
working directory. Command-line flags in run_pipeline override them.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Storage and input files, relative to the working directory
DEFAULT_DB_PATH = os.environ.get("MOVIE_DB_PATH", "movies.db")
DEFAULT_MOVIES_CSV = os.environ.get("MOVIES_CSV_PATH", "IMDB-movies.csv")
DEFAULT_GENRES_CSV = os.environ.get("GENRES_CSV_PATH", "IMDB-movies_genres.csv")

# Logging
DEFAULT_LOG_DIR = os.environ.get("LOG_DIR", "logs")
DEFAULT_LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Optional export targets
DEFAULT_EXPORT_DIR = os.environ.get("EXPORT_DIR") or None
DEFAULT_S3_BUCKET = os.environ.get("S3_BUCKET") or None

# AWS credentials for S3 uploads
AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID")
AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY")
AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
