"""Path planning API endpoints."""

from fastapi import APIRouter, Depends, Request

from safepath.config import get_settings
from safepath.core.rate_limit import limiter, rate_limit_queries
from safepath.dependencies import get_dataset
from safepath.models.dataset import SpatialDataset
from safepath.schemas.route import PathRequest, RouteResult
from safepath.services.route_service import RouteSynthesizer

router = APIRouter()
settings = get_settings()


@router.post(
    "",
    response_model=RouteResult,
    summary="Get a risk-aware walking path",
    description="""
    Synthesize a walking path between two points.

    This is not road-network routing: the path is made of straight segments.
    Unless the `fastest` algorithm is requested, one waypoint is placed next to
    the midpoint and pushed further aside when the estimated risk there is high.

    **Algorithms:**
    - `fastest`: direct line, one segment
    - `safe-aware`: waypoint shifted north-west of the midpoint (default)
    - any other value: waypoint shifted south-east of the midpoint

    Each segment reports the inverse-distance weighted risk and the dominant
    incident category at its midpoint, its length in kilometres and the
    walking time in minutes at 5 km/h.
    """,
    responses={
        422: {
            "description": "Missing or non-finite start/end coordinates",
        },
    },
)
@limiter.limit(rate_limit_queries)
def create_path(
    request: Request,
    path_request: PathRequest,
    dataset: SpatialDataset = Depends(get_dataset),
):
    """Synthesize a risk-annotated path."""
    algorithm = path_request.algorithm
    if algorithm is None:
        algorithm = settings.DEFAULT_ALGORITHM

    synthesizer = RouteSynthesizer(dataset)
    return synthesizer.synthesize(
        start=path_request.start,
        end=path_request.end,
        algorithm=algorithm,
    )
