from pydantic import BaseModel
from typing import Optional, List, Literal

from .charts import AspectOptions, PlacementIn


class BirthSummary(BaseModel):
    date_iso: Optional[str] = None  # YYYY-MM-DD
    time_hm: Optional[str] = None  # HH:MM
    timezone: Optional[float] = None
    city_state: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class InsightsRequest(BaseModel):
    placements: List[PlacementIn]
    transiting: Optional[List[PlacementIn]] = None
    birth: Optional[BirthSummary] = None
    language: str = "en"
    options: AspectOptions = AspectOptions()
    use_ai: bool = False


class InsightsResponse(BaseModel):
    source: Literal["local", "ai"]
    content: str
    warnings: Optional[List[str]] = None
