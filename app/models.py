"""Pydantic request/response schemas for the movies proxy."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Backend records

class Movie(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    title: str | None = None
    tagline: str | None = None
    popularity: float | int | None = None
    release_date: str | None = None


# Request bodies

class MovieInput(BaseModel):
    title: str
    tagline: str | None = None
    popularity: float | int | None = None
    release_date: str | None = None


class MovieUpdate(BaseModel):
    title: str | None = None
    tagline: str | None = None
    popularity: float | int | None = None
    release_date: str | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


# Envelopes

class MovieListResponse(BaseModel):
    movies: list[Movie] = Field(default_factory=list)
    total: int = 0


class MovieResponse(BaseModel):
    movie: Movie | None = None


class DeleteResponse(BaseModel):
    status: str = "deleted"


class ErrorResponse(BaseModel):
    error: str
    details: Any = None


class HealthResponse(BaseModel):
    status: str
    configured: bool
    supabase: dict


Envelope = MovieListResponse | MovieResponse | DeleteResponse | ErrorResponse
