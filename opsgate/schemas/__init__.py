"""Pydantic request/response schemas."""

from opsgate.schemas.envelope import Envelope, ErrorEnvelope
from opsgate.schemas.health import GateStatus
from opsgate.schemas.roles import CoreRole, Membership, Partition, ServiceRole

__all__ = [
    "CoreRole",
    "Envelope",
    "ErrorEnvelope",
    "GateStatus",
    "Membership",
    "Partition",
    "ServiceRole",
]
