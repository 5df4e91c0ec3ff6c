import pandas as pd
import numpy as np
import os
from typing import Dict, List, Optional, Union

MOVIES_FILE = "IMDB-movies.csv"
GENRES_FILE = "IMDB-movies_genres.csv"

GENRES = [
    "Action", "Adventure", "Animation", "Comedy", "Crime", "Documentary",
    "Drama", "Family", "Fantasy", "Horror", "Musical", "Mystery",
    "Romance", "Sci-Fi", "Thriller", "War", "Western"
]

TITLE_WORDS = [
    "Night", "River", "Return", "Last", "City", "Shadow", "Summer",
    "Secret", "Road", "Empire", "Garden", "Storm", "Silent", "Golden"
]

# Share of movies whose rating is written as the NULL-marker
NULL_RATING_SHARE = 0.1


def generate_movie_data(num_movies: int = 1000, seed: Optional[int] = None) -> List[Dict[str, Union[int, str]]]:
    rng = np.random.default_rng(seed)
    records = []
    for movie_id in range(1, num_movies + 1):
        words = rng.choice(TITLE_WORDS, size=rng.integers(1, 4), replace=False)
        if rng.random() < NULL_RATING_SHARE:
            rating = "NULL"
        else:
            rating = f"{rng.uniform(1, 10):.1f}"
        records.append({
            "id": movie_id,
            "title": " ".join(words),
            "year": int(rng.integers(1920, 2025)),
            "rating": rating,
        })
    return records


def generate_genre_data(movie_ids: List[int], seed: Optional[int] = None) -> List[Dict[str, Union[int, str]]]:
    """Assign one to three distinct genres to each movie id."""
    rng = np.random.default_rng(seed)
    records = []
    for movie_id in movie_ids:
        for genre in rng.choice(GENRES, size=rng.integers(1, 4), replace=False):
            records.append({"movie_id": movie_id, "genre": str(genre)})
    return records


def write_sample_files(output_dir: str, num_movies: int = 1000, seed: Optional[int] = None) -> Dict[str, str]:
    os.makedirs(output_dir, exist_ok=True)
    movies = generate_movie_data(num_movies, seed)
    genres = generate_genre_data([m["id"] for m in movies], seed)

    paths = {
        "movies": os.path.join(output_dir, MOVIES_FILE),
        "genres": os.path.join(output_dir, GENRES_FILE),
    }
    pd.DataFrame(movies, columns=["id", "title", "year", "rating"]).to_csv(paths["movies"], index=False)
    pd.DataFrame(genres, columns=["movie_id", "genre"]).to_csv(paths["genres"], index=False)
    return paths


if __name__ == "__main__":
    BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__)))
    output_dir = os.path.join(BASE_DIR, "data", "sample")
    paths = write_sample_files(output_dir, 1000)
    print(f"Generated CSV files at: {paths['movies']} and {paths['genres']}")
