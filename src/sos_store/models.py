"""Response models for the storage node API."""

from pydantic import BaseModel


class StoreResult(BaseModel):
    """Result of a successful blob upload to a storage node.

    Serializes as ``{"id": ..., "status": "OK", "size": ...}``.
    """
    id: str
    status: str = "OK"
    size: int
