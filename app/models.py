"""Movie record held by the in-memory store.

Records are immutable: an update builds a new ``Movie`` with
``dataclasses.replace`` and the store swaps it in at the same position.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class Movie:
    """A single movie entry served by the API."""

    id: str
    title: str
    year: int
    director: str
    duration: int
    poster: str
    genre: tuple[str, ...]
    rate: float = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Movie":
        return cls(
            id=str(data["id"]),
            title=data["title"],
            year=data["year"],
            director=data["director"],
            duration=data["duration"],
            poster=data["poster"],
            genre=tuple(data["genre"]),
            rate=data.get("rate", 0),
        )

    def merged(self, fields: Mapping[str, Any]) -> "Movie":
        """Return a copy with ``fields`` applied on top; the id never changes."""

        changes = {key: value for key, value in fields.items() if key != "id"}
        if "genre" in changes:
            changes["genre"] = tuple(changes["genre"])
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["genre"] = list(self.genre)
        return data

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Movie(id={self.id}, title={self.title}, year={self.year})"
