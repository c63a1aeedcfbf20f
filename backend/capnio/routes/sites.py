"""Site, zone and asset API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from capnio.database import get_db
from capnio.errors import CapnioError
from capnio.routes._errors import http_error
from capnio.schemas import Machine, Sensor, Site, Zone
from capnio.schemas.api import (
    AssetResponse,
    MachineCreate,
    ResolvedPathResponse,
    SensorCreate,
    SiteCreate,
    ZoneCreate,
)
from capnio.services import asset_service
from capnio.services.asset_service import breadcrumb_items

router = APIRouter(prefix="/api", tags=["sites"])


@router.get("/sites", response_model=list[Site])
async def list_sites(session: AsyncSession = Depends(get_db)) -> list[Site]:
    """Get the full site forest with derived site and zone statuses."""
    try:
        return await asset_service.get_forest(session)
    except CapnioError as e:
        raise http_error(e) from e


@router.get("/sites/resolve/{path:path}", response_model=ResolvedPathResponse)
async def resolve_site_path(
    path: str,
    session: AsyncSession = Depends(get_db),
) -> ResolvedPathResponse:
    """Resolve a slash-separated id path such as ``site-a/site-b/zone-c``."""
    segments = [segment for segment in path.split("/") if segment]
    try:
        result = await asset_service.resolve(session, segments)
    except CapnioError as e:
        raise http_error(e) from e

    if not result.found:
        raise HTTPException(
            status_code=404,
            detail={
                "error": "NotFound",
                "message": f"No site or zone {result.segment!r} at this level",
                "segment": result.segment,
                "breadcrumb": [b.model_dump() for b in breadcrumb_items(result.breadcrumb)],
            },
        )
    return ResolvedPathResponse(asset=result.asset, breadcrumb=breadcrumb_items(result.breadcrumb))


@router.post("/sites", response_model=Site, status_code=201)
async def create_site(body: SiteCreate, session: AsyncSession = Depends(get_db)) -> Site:
    try:
        return await asset_service.create_site(session, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.post("/sites/{site_id}/zones", response_model=Zone, status_code=201)
async def create_zone(
    site_id: str,
    body: ZoneCreate,
    session: AsyncSession = Depends(get_db),
) -> Zone:
    """Create a zone in a site, optionally nested under ``parentZoneId``."""
    try:
        return await asset_service.create_zone(session, site_id, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.post("/zones/{zone_id}/machines", response_model=Machine, status_code=201)
async def create_machine(
    zone_id: str,
    body: MachineCreate,
    session: AsyncSession = Depends(get_db),
) -> Machine:
    try:
        return await asset_service.create_machine(session, zone_id, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.post("/zones/{zone_id}/sensors", response_model=Sensor, status_code=201)
async def create_sensor(
    zone_id: str,
    body: SensorCreate,
    session: AsyncSession = Depends(get_db),
) -> Sensor:
    try:
        return await asset_service.create_sensor(session, zone_id, body)
    except CapnioError as e:
        raise http_error(e) from e


@router.get("/assets/{asset_id}", response_model=AssetResponse)
async def get_asset(asset_id: str, session: AsyncSession = Depends(get_db)) -> AssetResponse:
    """Get any site, zone, machine or sensor by id, with its breadcrumb."""
    try:
        return await asset_service.get_asset(session, asset_id)
    except CapnioError as e:
        raise http_error(e) from e


@router.delete("/assets/{asset_id}")
async def delete_asset(asset_id: str, session: AsyncSession = Depends(get_db)) -> dict:
    """Delete an asset and everything below it."""
    try:
        deleted = await asset_service.delete_asset(session, asset_id)
    except CapnioError as e:
        raise http_error(e) from e
    return {"deleted": deleted}
