"""Gif Schemas: JSON bodies returned by /api/gif/{category}."""

from pydantic import BaseModel, ConfigDict


class GifResponse(BaseModel):
    """A stored gif, as returned by a random fetch."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    category: str


class GifCreated(BaseModel):
    """Id of a freshly inserted gif."""
    id: int


class ErrorResponse(BaseModel):
    """Error envelope: code always equals the HTTP status."""
    code: int
    message: str
