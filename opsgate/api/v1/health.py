"""Readiness check. Every authenticated request needs the credential store, so an
unreachable database means the gate is refusing traffic and the check says so."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from opsgate.core.config import settings
from opsgate.core.database import check_db_connected, get_db
from opsgate.schemas.envelope import Envelope
from opsgate.schemas.health import GateStatus

router = APIRouter()


@router.get("/", response_model=Envelope[GateStatus])
def get_health(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[GateStatus]:
    connected = check_db_connected(db)
    if not connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return Envelope(
        success=connected,
        message="ok" if connected else "Credential store unreachable.",
        data=GateStatus(
            environment=settings.APP_ENV,
            database="connected" if connected else "disconnected",
            database_timeout_sec=settings.DATABASE_TIMEOUT_SEC,
            jwt_secret_configured=not settings.uses_insecure_jwt_secret,
        ),
    )
