"""GET /health: 200 while the database answers, 503 otherwise."""

import time
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from complaintdesk.core.config import APP_VERSION, settings
from complaintdesk.core.database import check_db_connected, get_db
from complaintdesk.schemas.health import HealthResponse

router = APIRouter()

_started_at = time.monotonic()


@router.get(
    "",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Database unreachable"}},
)
def get_health(db: Annotated[Session, Depends(get_db)]):
    """Report liveness for load balancers; the database must answer a trivial query."""
    connected = check_db_connected(db)
    payload = HealthResponse(
        status="healthy" if connected else "unhealthy",
        timestamp=datetime.now(timezone.utc),
        version=APP_VERSION,
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
        uptime=round(time.monotonic() - _started_at, 3),
        error=None if connected else "Database connection failed",
    )
    if not connected:
        return JSONResponse(status_code=503, content=payload.model_dump(mode="json"))
    return payload
