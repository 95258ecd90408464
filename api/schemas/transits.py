from pydantic import BaseModel
from typing import List, Optional, Dict, Any
from .charts import PlacementIn


class Location(BaseModel):
    latitude: float = 0.0
    longitude: float = 0.0


class TransitNatalRequest(BaseModel):
    natal: List[PlacementIn]
    transiting: Optional[List[PlacementIn]] = None  # None = fetch the current moment upstream
    location: Location = Location()
    orbs: Dict[str, float] = {}
    language: str = "en"


class TransitAspectOut(BaseModel):
    transit_body: str
    natal_body: str
    aspect: str
    separation_error: float


class TransitNatalResponse(BaseModel):
    meta: Dict[str, Any]
    aspects: List[TransitAspectOut]
    top: List[TransitAspectOut]
