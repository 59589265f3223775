"""In-memory movie store and the FastAPI dependency that exposes it."""

from __future__ import annotations

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Iterable, Mapping

from app.core.config import Settings, get_settings
from app.models import Movie

logger = logging.getLogger(__name__)


class MovieNotFound(LookupError):
    """Raised when no record matches the requested identifier."""


def load_seed_movies(path: Path | str) -> list[Movie]:
    """Read the static JSON dataset used to populate the store at startup."""

    with open(path, encoding="utf-8") as handle:
        raw = json.load(handle)
    movies = [Movie.from_dict(item) for item in raw]
    seen: set[str] = set()
    for movie in movies:
        if movie.id in seen:
            raise ValueError(f"duplicate movie id in {path}: {movie.id}")
        seen.add(movie.id)
    return movies


class MovieStore:
    """Ordered collection of movies living only in process memory.

    Sync route handlers run in a thread pool, so every operation takes the
    lock to stay atomic for the duration of one request.
    """

    def __init__(self, movies: Iterable[Movie] = ()) -> None:
        self._lock = threading.Lock()
        self._movies: list[Movie] = list(movies)

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)

    def list_all(self) -> list[Movie]:
        with self._lock:
            return list(self._movies)

    def list_by_genre(self, genre: str) -> list[Movie]:
        wanted = genre.lower()
        with self._lock:
            return [
                movie
                for movie in self._movies
                if any(entry.lower() == wanted for entry in movie.genre)
            ]

    def find_by_id(self, movie_id: str) -> Movie | None:
        with self._lock:
            return next((movie for movie in self._movies if movie.id == movie_id), None)

    def append(self, movie: Movie) -> Movie:
        with self._lock:
            self._movies.append(movie)
        return movie

    def create(self, fields: Mapping[str, Any]) -> Movie:
        """Assign a fresh identifier to validated fields and append the record."""

        with self._lock:
            taken = {movie.id for movie in self._movies}
            movie_id = str(uuid.uuid4())
            while movie_id in taken:
                movie_id = str(uuid.uuid4())
            movie = Movie.from_dict({**fields, "id": movie_id})
            self._movies.append(movie)
        logger.info("Created movie %s (%s)", movie.id, movie.title)
        return movie

    def replace_at(self, movie_id: str, fields: Mapping[str, Any]) -> Movie:
        with self._lock:
            index = next(
                (i for i, movie in enumerate(self._movies) if movie.id == movie_id),
                None,
            )
            if index is None:
                raise MovieNotFound(movie_id)
            updated = self._movies[index].merged(fields)
            self._movies[index] = updated
        logger.info("Updated movie %s fields=%s", movie_id, sorted(fields))
        return updated


_store: MovieStore | None = None


def init_store(settings: Settings | None = None) -> MovieStore:
    """Build the process-wide store from the configured seed file."""

    global _store
    settings = settings or get_settings()
    movies = load_seed_movies(settings.movies_seed_path)
    _store = MovieStore(movies)
    logger.info("Loaded %d movies from %s", len(movies), settings.movies_seed_path)
    return _store


def get_store() -> MovieStore:
    """FastAPI dependency returning the shared store."""

    if _store is None:
        return init_store()
    return _store
