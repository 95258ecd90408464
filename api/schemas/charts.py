from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict, Any, Union


class ZodiacSignIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    number: Optional[Any] = None
    name: Optional[Dict[str, Any]] = None


class PlacementIn(BaseModel):
    """One body as returned by the upstream ``/western/planets`` endpoint."""

    model_config = ConfigDict(extra="allow")

    # Records without a usable label are skipped, not rejected.
    planet: Optional[Dict[str, Any]] = None
    # Left loose on purpose: unusable values are read as 0°.
    fullDegree: Optional[Any] = None
    isRetro: Optional[Union[bool, str]] = None
    zodiac_sign: Optional[ZodiacSignIn] = None


class ObservationConfig(BaseModel):
    observation_point: str = "topocentric"
    ayanamsha: str = "tropical"
    language: str = "en"


class BirthInput(BaseModel):
    year: int
    month: int
    date: int
    hours: int
    minutes: int
    seconds: int = 0
    latitude: float
    longitude: float
    timezone: float  # hours offset from UTC
    config: ObservationConfig = ObservationConfig()


class AspectOptions(BaseModel):
    allowed_aspects: Optional[List[str]] = None  # None = full catalog
    excluded_bodies: List[str] = []
    orb_overrides: Dict[str, float] = {}


class ComputeRequest(BaseModel):
    birth: BirthInput
    options: AspectOptions = AspectOptions()


class DeriveRequest(BaseModel):
    placements: List[PlacementIn]
    language: str = "en"
    options: AspectOptions = AspectOptions()


class PlacementOut(BaseModel):
    name: str
    canonical_name: str
    lon: float
    sign_index: Optional[int] = None
    sign: Optional[str] = None
    house: Optional[int] = None
    retro: bool = False


class HouseOut(BaseModel):
    num: int
    cusp_lon: float
    norm_degree: float = 0.0
    sign_index: int
    sign: str


class AspectOut(BaseModel):
    body_a: str
    body_b: str
    aspect: str
    separation_error: float


class MetaOut(BaseModel):
    engine: str = "natal-chart-api"
    engine_version: str
    zodiac: str = "tropical"
    house_system: str = "whole_sign"
    language: str = "en"
    warnings: Optional[List[str]] = None


class ChartResponse(BaseModel):
    meta: MetaOut
    placements: List[PlacementOut]
    houses: List[HouseOut]
    aspects: List[AspectOut]
