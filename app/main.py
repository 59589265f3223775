"""FastAPI entrypoint wiring the movie store, validation and origin policy."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, Depends, FastAPI, status
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.cors import install_origin_policy
from app.core.logging_config import configure_logging
from app.db import MovieNotFound, MovieStore, get_store, init_store
from app.schemas import MovieValidationError, validate_movie, validate_partial_movie

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Movie not found"


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Configure logging and load the seed dataset before serving."""

    configure_logging()
    init_store()
    yield


app = FastAPI(title="Movies API", lifespan=lifespan)
install_origin_policy(app, get_settings().allowed_origins)


def _not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": NOT_FOUND_MESSAGE},
    )


def _invalid(exc: MovieValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.errors},
    )


@app.get("/movies")
def list_movies(
    genre: str | None = None,
    store: MovieStore = Depends(get_store),
) -> list[dict[str, Any]]:
    movies = store.list_by_genre(genre) if genre else store.list_all()
    return [movie.to_dict() for movie in movies]


@app.get("/movies/{movie_id}")
def get_movie(movie_id: str, store: MovieStore = Depends(get_store)):
    movie = store.find_by_id(movie_id)
    if movie is None:
        logger.debug("Lookup miss for movie %s", movie_id)
        return _not_found()
    return movie.to_dict()


@app.post("/movies")
def create_movie(
    payload: Any = Body(default=None),
    store: MovieStore = Depends(get_store),
):
    """Validate a full movie payload and append it with a fresh id.

    Answers 200 rather than 201 to stay compatible with existing clients.
    """

    try:
        fields = validate_movie({} if payload is None else payload)
    except MovieValidationError as exc:
        return _invalid(exc)

    movie = store.create(fields)
    return movie.to_dict()


@app.patch("/movies/{movie_id}")
def update_movie(
    movie_id: str,
    payload: Any = Body(default=None),
    store: MovieStore = Depends(get_store),
):
    try:
        fields = validate_partial_movie({} if payload is None else payload)
    except MovieValidationError as exc:
        return _invalid(exc)

    try:
        movie = store.replace_at(movie_id, fields)
    except MovieNotFound:
        return _not_found()
    return movie.to_dict()
