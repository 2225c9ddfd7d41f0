"""Cliente Python tipado para las APIs de Gatsbie.

- `SolverClient`: resolución de challenges anti-bot (`/v1/solve/*`).
- `TargetClient`: API retail de Target (tiendas, productos, carrito).
"""

__version__ = "0.1.0"

from gatsbie.adapters.retail import TargetAPIError, TargetClient, UnexpectedTargetResponseError  # noqa: E402
from gatsbie.adapters.solver import (  # noqa: E402
    OPERATIONS,
    SolverAPIError,
    SolverClient,
    UnexpectedSolverResponseError,
)
from gatsbie.core.config import GatsbieSettings  # noqa: E402
from gatsbie.core.domain.retail import (  # noqa: E402
    AddToCartRequest,
    FulfillmentType,
    GetProductRequest,
    NearbyStoresRequest,
)
from gatsbie.core.domain.solver import (  # noqa: E402
    AkamaiRequest,
    CaptchaFoxRequest,
    CastleConfig,
    CastleRequest,
    CloudflareWAFRequest,
    DatadomeRequest,
    DatadomeSliderRequest,
    ForterRequest,
    FuncaptchaRequest,
    PerimeterXRequest,
    RecaptchaV3Request,
    Reese84Request,
    SBSDRequest,
    ShapeRequest,
    ShapeV2Request,
    SolveResponse,
    TurnstileRequest,
    VercelRequest,
)
from gatsbie.core.errors import (  # noqa: E402
    APIError,
    DecodeError,
    GatsbieError,
    RequestTimeoutError,
    SerializationError,
    TransportError,
    UnexpectedResponseError,
)

__all__ = [
    "APIError",
    "AddToCartRequest",
    "AkamaiRequest",
    "CaptchaFoxRequest",
    "CastleConfig",
    "CastleRequest",
    "CloudflareWAFRequest",
    "DatadomeRequest",
    "DatadomeSliderRequest",
    "DecodeError",
    "ForterRequest",
    "FulfillmentType",
    "FuncaptchaRequest",
    "GatsbieError",
    "GatsbieSettings",
    "GetProductRequest",
    "NearbyStoresRequest",
    "OPERATIONS",
    "PerimeterXRequest",
    "RecaptchaV3Request",
    "Reese84Request",
    "RequestTimeoutError",
    "SBSDRequest",
    "SerializationError",
    "ShapeRequest",
    "ShapeV2Request",
    "SolveResponse",
    "SolverAPIError",
    "SolverClient",
    "TargetAPIError",
    "TargetClient",
    "TransportError",
    "TurnstileRequest",
    "UnexpectedResponseError",
    "UnexpectedSolverResponseError",
    "UnexpectedTargetResponseError",
    "VercelRequest",
    "__version__",
]
