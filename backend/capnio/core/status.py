"""Status combinators and read-side aggregation over the asset tree."""

from collections.abc import Iterable

from capnio.errors import CycleDetected
from capnio.schemas.assets import Machine, Sensor, Site, Status, Zone


def combine(statuses: Iterable[Status]) -> Status:
    """Combine statuses into one.

    Empty input is white. Otherwise red wins over orange, which wins over
    green; a set holding only green/white entries is green.
    """
    seen = False
    has_orange = False
    for status in statuses:
        seen = True
        if status == Status.RED:
            return Status.RED
        if status == Status.ORANGE:
            has_orange = True
    if not seen:
        return Status.WHITE
    return Status.ORANGE if has_orange else Status.GREEN


def machine_status(machine: Machine) -> Status:
    return machine.status


def sensor_status(sensor: Sensor) -> Status:
    """Sensors without a reported status count as white (no data)."""
    return sensor.status or Status.WHITE


def zone_status(zone: Zone) -> Status:
    """Status of a zone from its machines, sensors and sub-zones (recursively)."""
    return _zone_status(zone, set())


def _zone_status(zone: Zone, ancestors: set[int]) -> Status:
    if id(zone) in ancestors:
        raise CycleDetected(zone.id)
    ancestors.add(id(zone))
    try:
        statuses = [machine_status(m) for m in zone.machines]
        statuses.extend(sensor_status(s) for s in zone.sensors)
        statuses.extend(_zone_status(sz, ancestors) for sz in zone.sub_zones)
    finally:
        ancestors.discard(id(zone))
    return combine(statuses)


def site_status(site: Site) -> Status:
    """Status of a site from its zones and sub-sites (recursively)."""
    return _site_status(site, set())


def _site_status(site: Site, ancestors: set[int]) -> Status:
    if id(site) in ancestors:
        raise CycleDetected(site.id)
    ancestors.add(id(site))
    try:
        statuses = [zone_status(z) for z in site.zones]
        statuses.extend(_site_status(ss, ancestors) for ss in site.sub_sites)
    finally:
        ancestors.discard(id(site))
    return combine(statuses)


def annotate_statuses(forest: list[Site]) -> list[Site]:
    """Return a copy of the forest with derived site and zone statuses filled in."""
    return [_annotate_site(site) for site in forest]


def _annotate_site(site: Site) -> Site:
    zones = [_annotate_zone(z) for z in site.zones]
    sub_sites = [_annotate_site(ss) for ss in site.sub_sites]
    annotated = site.model_copy(update={"zones": zones, "sub_sites": sub_sites})
    annotated.status = site_status(annotated)
    return annotated


def _annotate_zone(zone: Zone) -> Zone:
    sub_zones = [_annotate_zone(sz) for sz in zone.sub_zones]
    annotated = zone.model_copy(update={"sub_zones": sub_zones})
    annotated.status = zone_status(annotated)
    return annotated
