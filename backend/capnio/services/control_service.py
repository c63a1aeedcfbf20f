"""Machine control service — applicable controls, configuration saves and alerts."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from capnio import models
from capnio.core.activation import (
    ACTIVE_STATES,
    apply_configuration,
    clear_alert,
    control_state,
    raise_alert,
    reconcile,
)
from capnio.core.formula import derived_variables, mapped_variables
from capnio.core.hierarchy import find_machine
from capnio.core.mapping import applicable_controls, compatible_sensors, with_candidate_sensors
from capnio.errors import ControlValidationError
from capnio.schemas import (
    ActiveControlInAlert,
    ConfiguredControl,
    ControlDefinition,
    Machine,
    Status,
)
from capnio.schemas.api import (
    AlertRaise,
    AlertResponse,
    ControlConfigurationResponse,
    MachineControlsResponse,
    MachineControlView,
)
from capnio.services.repository import AssetRepository, SqlAssetRepository

logger = logging.getLogger(__name__)


async def _load_machine(repo: AssetRepository, machine_id: str) -> Machine:
    """The machine with its zone fallback sensors applied."""
    located = await repo.get_machine(machine_id)
    return with_candidate_sensors(located.asset, located.zone)


async def list_machine_controls(session: AsyncSession, machine_id: str) -> MachineControlsResponse:
    """Controls applicable to a machine, each with its state and candidate sensors."""
    repo = SqlAssetRepository(session)
    machine = await _load_machine(repo, machine_id)
    definitions = applicable_controls(await repo.list_control_definitions(), machine)

    views = [
        MachineControlView(
            control=control,
            state=control_state(machine, control.id),
            configuration=machine.configured_controls.get(control.id),
            candidates={
                variable: compatible_sensors(machine, variable)
                for variable in mapped_variables(control)
            },
            derived_variables=sorted(derived_variables(control)),
        )
        for control in definitions
    ]
    return MachineControlsResponse(
        machine_id=machine.id,
        machine_name=machine.name,
        machine_type=machine.type,
        available_sensors=machine.available_sensors,
        alert=machine.active_control_in_alert,
        controls=views,
    )


async def save_configuration(
    session: AsyncSession,
    machine_id: str,
    control_id: str,
    configured: ConfiguredControl,
) -> ControlConfigurationResponse:
    """Store a machine's configuration of a control (PUT semantics).

    On refusal nothing is written, so the stored active flag is unchanged.
    """
    repo = SqlAssetRepository(session)
    machine = await _load_machine(repo, machine_id)
    control = await repo.get_control_definition(control_id)
    alert_before = machine.active_control_in_alert

    try:
        stored, _ = apply_configuration(machine, control, configured)
    except ControlValidationError as e:
        logger.warning(
            "Refused configuration of %s on %s: %s", control_id, machine_id, e.result.codes()
        )
        raise

    await repo.save_control(machine.id, control.id, stored)
    if alert_before is not None and machine.active_control_in_alert is None:
        await repo.save_alert(machine.id, None)
        await repo.save_machine_status(machine.id, Status.GREEN)
        logger.info("Cleared alert of %s on %s after deactivation", control_id, machine_id)
    await repo.commit()

    logger.info(
        "Saved configuration of %s on %s (active=%s)", control_id, machine_id, stored.is_active
    )
    return ControlConfigurationResponse(
        machine_id=machine.id,
        control_id=control.id,
        state=control_state(machine, control.id),
        configuration=stored,
    )


async def raise_machine_alert(
    session: AsyncSession, machine_id: str, control_id: str, body: AlertRaise
) -> AlertResponse:
    repo = SqlAssetRepository(session)
    machine = await _load_machine(repo, machine_id)
    control = await repo.get_control_definition(control_id)

    alert = ActiveControlInAlert(
        control_id=control.id,
        alert_details=body.alert_details,
        status=body.status,
        current_values=body.current_values,
        thresholds=body.thresholds,
        relevant_sensor_variable=body.relevant_sensor_variable,
    )
    evicted = raise_alert(machine, control, alert)
    current = machine.active_control_in_alert

    await repo.save_alert(machine.id, current)
    await repo.save_machine_status(machine.id, current.status)
    await repo.commit()

    if evicted is not None:
        logger.info("Alert of %s on %s replaced by %s", evicted.control_id, machine_id, control_id)
    logger.info("Raised %s alert for %s on %s", current.status.value, control_id, machine_id)
    return AlertResponse(machine_id=machine.id, alert=current, evicted=evicted)


async def clear_machine_alert(session: AsyncSession, machine_id: str) -> AlertResponse:
    repo = SqlAssetRepository(session)
    machine = await _load_machine(repo, machine_id)
    cleared = clear_alert(machine)
    if cleared is not None:
        await repo.save_alert(machine.id, None)
        await repo.save_machine_status(machine.id, Status.GREEN)
        await repo.commit()
        logger.info("Cleared alert of %s on %s", cleared.control_id, machine_id)
    return AlertResponse(machine_id=machine.id, alert=None, evicted=cleared)


async def reconcile_configurations(
    session: AsyncSession, control: ControlDefinition
) -> list[str]:
    """Re-check every machine configuration of an edited control definition.

    Does not commit. Returns the ids of machines whose control was switched off.
    """
    result = await session.execute(
        select(models.ConfiguredControl.machine_id).where(
            models.ConfiguredControl.control_id == control.id
        )
    )
    machine_ids = list(result.scalars().all())
    if not machine_ids:
        return []

    repo = SqlAssetRepository(session)
    forest = await repo.get_forest()
    deactivated = []
    for machine_id in machine_ids:
        located = find_machine(forest, machine_id)
        if located is None:
            continue
        machine = with_candidate_sensors(located.asset, located.zone)
        was_active = control_state(machine, control.id) in ACTIVE_STATES

        stored, cleared = reconcile(machine, control)
        await repo.save_control(machine.id, control.id, stored)
        if cleared is not None:
            await repo.save_alert(machine.id, None)
            await repo.save_machine_status(machine.id, Status.GREEN)
        if was_active and not stored.is_active:
            deactivated.append(machine.id)
            logger.warning("Deactivated %s on %s after a definition change", control.id, machine.id)
    return deactivated
