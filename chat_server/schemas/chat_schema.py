from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class GeoLocation(BaseModel):
    latitude: float
    longitude: float


class ChatRequest(BaseModel):
    """
    Incoming user prompt with an optional geolocation.
    Empty prompt text is accepted; it simply produces a degenerate answer.
    """
    model_config = ConfigDict(frozen=True)

    prompt: str = ""
    location: Optional[GeoLocation] = None


class PlaceCandidate(BaseModel):
    """
    A point of interest extracted from an answer.
    """
    name: str = Field(..., min_length=1)     # Name of the place
    city: Optional[str] = None               # City or municipality
    department: Optional[str] = None         # Department / region


class BackendReply(BaseModel):
    """
    Parsed answer from the answering backend.
    `places` is only present when the backend already extracted them.
    """
    reply: str
    places: Optional[List[PlaceCandidate]] = None


class MapLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class ChatResult(BaseModel):
    """
    Final result returned to the caller. Degraded results share this shape,
    only the content differs.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    response_text: str = Field(..., alias="responseText")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    map_links: List[MapLink] = Field(default_factory=list, alias="mapLinks")
    # reserved for source attribution, always empty for now
    grounding_chunks: List[Any] = Field(default_factory=list, alias="groundingChunks")
