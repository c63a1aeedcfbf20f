"""Machine control API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from capnio.database import get_db
from capnio.errors import CapnioError
from capnio.routes._errors import http_error
from capnio.schemas import ConfiguredControl
from capnio.schemas.api import (
    AlertRaise,
    AlertResponse,
    ControlConfigurationResponse,
    MachineControlsResponse,
)
from capnio.services import control_service

router = APIRouter(prefix="/api/machines", tags=["machines"])


@router.get("/{machine_id}/controls", response_model=MachineControlsResponse)
async def list_controls(
    machine_id: str,
    session: AsyncSession = Depends(get_db),
) -> MachineControlsResponse:
    """Get the controls applicable to a machine with their state and candidate sensors."""
    try:
        return await control_service.list_machine_controls(session, machine_id)
    except CapnioError as e:
        raise http_error(e) from e


@router.put("/{machine_id}/controls/{control_id}", response_model=ControlConfigurationResponse)
async def save_control(
    machine_id: str,
    control_id: str,
    body: ConfiguredControl,
    session: AsyncSession = Depends(get_db),
) -> ControlConfigurationResponse:
    """Save a machine's configuration of a control.

    Activation (``isActive: true``) is refused with 400 unless every required
    parameter and variable mapping validates; the stored state is then unchanged.
    """
    try:
        return await control_service.save_configuration(session, machine_id, control_id, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.post("/{machine_id}/controls/{control_id}/alert", response_model=AlertResponse)
async def raise_alert(
    machine_id: str,
    control_id: str,
    body: AlertRaise,
    session: AsyncSession = Depends(get_db),
) -> AlertResponse:
    try:
        return await control_service.raise_machine_alert(session, machine_id, control_id, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.delete("/{machine_id}/alert", response_model=AlertResponse)
async def clear_alert(machine_id: str, session: AsyncSession = Depends(get_db)) -> AlertResponse:
    try:
        return await control_service.clear_machine_alert(session, machine_id)
    except CapnioError as e:
        raise http_error(e) from e
