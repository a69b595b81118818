"""Service staff management (service admins only)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from opsgate.api.v1.deps import get_credential_store, require_service_admin
from opsgate.schemas.envelope import Envelope
from opsgate.schemas.service import CreateStaffRequest, StaffItem, UpdateStaffRequest
from opsgate.services.credential_store import CredentialStore
from opsgate.services.errors import NotFound
from opsgate.services.identity import ServiceIdentity

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/staff", response_model=Envelope[StaffItem], status_code=status.HTTP_201_CREATED)
def create_staff(
    body: CreateStaffRequest,
    admin: Annotated[ServiceIdentity, Depends(require_service_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[StaffItem]:
    """Create a service login (employee id as username) and its linked staff record."""
    staff = store.create_service_user(
        name=body.name,
        employee_id=body.employee_id,
        password=body.password,
        department=body.department,
        role=body.role,
    )
    logger.info("Staff id=%s created by service admin id=%s", staff.id, admin.id)
    return Envelope(
        message=f"Staff account created for {staff.name} ({staff.employee_id}).",
        data=StaffItem.from_record(staff),
    )


@router.get("/staff", response_model=Envelope[list[StaffItem]])
def list_staff(
    _admin: Annotated[ServiceIdentity, Depends(require_service_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[list[StaffItem]]:
    return Envelope(data=[StaffItem.from_record(s) for s in store.list_staff()])


@router.put("/staff/{staff_id}", response_model=Envelope[StaffItem])
def update_staff(
    staff_id: int,
    body: UpdateStaffRequest,
    admin: Annotated[ServiceIdentity, Depends(require_service_admin)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> Envelope[StaffItem]:
    """Update name, department and role; the password changes only when one is sent."""
    staff = store.find_staff(staff_id)
    if staff is None:
        raise NotFound("Staff record not found.")
    store.update_staff(staff, body.name, body.department, body.role, password=body.password)
    logger.info("Staff id=%s updated by service admin id=%s", staff.id, admin.id)
    return Envelope(message="Staff updated successfully.", data=StaffItem.from_record(staff))
