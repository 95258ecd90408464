from .charts import (
    PlacementIn,
    BirthInput,
    ObservationConfig,
    AspectOptions,
    ComputeRequest,
    DeriveRequest,
    PlacementOut,
    HouseOut,
    AspectOut,
    MetaOut,
    ChartResponse,
)

from .transits import Location, TransitNatalRequest, TransitNatalResponse, TransitAspectOut

from .insights import BirthSummary, InsightsRequest, InsightsResponse
