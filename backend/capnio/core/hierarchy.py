"""Lookup and path resolution across the site/zone forest."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Literal

from capnio.errors import CycleDetected
from capnio.schemas.assets import Asset, Machine, Site, Zone

AssetKind = Literal["site", "zone", "machine", "sensor"]


@dataclass(frozen=True)
class BreadcrumbEntry:
    id: str
    name: str
    kind: AssetKind


@dataclass(frozen=True)
class ResolvedPath:
    asset: Site | Zone
    breadcrumb: list[BreadcrumbEntry] = field(default_factory=list)

    found = True


@dataclass(frozen=True)
class PathNotFound:
    """Resolution stopped at ``segment``; ``breadcrumb`` holds what did resolve."""

    segment: str
    breadcrumb: list[BreadcrumbEntry] = field(default_factory=list)

    found = False


@dataclass(frozen=True)
class Located:
    """An asset together with its chain of ancestors (root first)."""

    asset: Asset
    ancestors: tuple[Site | Zone, ...]

    @property
    def parent(self) -> Site | Zone | None:
        return self.ancestors[-1] if self.ancestors else None

    @property
    def site(self) -> Site | None:
        """Closest enclosing site."""
        return next((a for a in reversed(self.ancestors) if isinstance(a, Site)), None)

    @property
    def zone(self) -> Zone | None:
        """Closest enclosing zone."""
        return next((a for a in reversed(self.ancestors) if isinstance(a, Zone)), None)


def walk(forest: Sequence[Site]) -> Iterator[Located]:
    """Depth-first walk: site, its sub-sites, then its zones.

    Each zone yields itself, its machines, its sensors, then its sub-zones.
    Raises CycleDetected if a node is reached again from inside its own subtree.
    """
    for site in forest:
        yield from _walk_site(site, ())


def _walk_site(site: Site, ancestors: tuple[Site | Zone, ...]) -> Iterator[Located]:
    _guard(site, ancestors)
    yield Located(site, ancestors)
    path = ancestors + (site,)
    for sub_site in site.sub_sites:
        yield from _walk_site(sub_site, path)
    for zone in site.zones:
        yield from _walk_zone(zone, path)


def _walk_zone(zone: Zone, ancestors: tuple[Site | Zone, ...]) -> Iterator[Located]:
    _guard(zone, ancestors)
    yield Located(zone, ancestors)
    path = ancestors + (zone,)
    for machine in zone.machines:
        yield Located(machine, path)
    for sensor in zone.sensors:
        yield Located(sensor, path)
    for sub_zone in zone.sub_zones:
        yield from _walk_zone(sub_zone, path)


def _guard(node: Site | Zone, ancestors: tuple[Site | Zone, ...]) -> None:
    if any(a is node or a.id == node.id for a in ancestors):
        raise CycleDetected(node.id)


def locate(forest: Sequence[Site], asset_id: str) -> Located | None:
    for located in walk(forest):
        if located.asset.id == asset_id:
            return located
    return None


def find_by_id(forest: Sequence[Site], asset_id: str) -> Asset | None:
    """Find any site, zone, machine or sensor by id."""
    located = locate(forest, asset_id)
    return located.asset if located else None


def find_machine(forest: Sequence[Site], machine_id: str) -> Located | None:
    located = locate(forest, machine_id)
    if located is None or not isinstance(located.asset, Machine):
        return None
    return located


def resolve_path(forest: Sequence[Site], segments: Sequence[str]) -> ResolvedPath | PathNotFound:
    """Walk path segments as ids from the forest roots.

    The first segment names a top-level site. Each following segment is looked
    up among the current node's sub-sites, then its zones (for a site) or its
    sub-zones (for a zone); first match wins. Never raises on a missing segment.
    """
    breadcrumb: list[BreadcrumbEntry] = []
    if not segments:
        return PathNotFound(segment="", breadcrumb=breadcrumb)

    current: Site | Zone | None = next((s for s in forest if s.id == segments[0]), None)
    if current is None:
        return PathNotFound(segment=segments[0], breadcrumb=breadcrumb)
    breadcrumb.append(_crumb(current))

    for segment in segments[1:]:
        current = _child(current, segment)
        if current is None:
            return PathNotFound(segment=segment, breadcrumb=breadcrumb)
        breadcrumb.append(_crumb(current))

    return ResolvedPath(asset=current, breadcrumb=breadcrumb)


def _child(node: Site | Zone, child_id: str) -> Site | Zone | None:
    if isinstance(node, Site):
        candidates: list[Site | Zone] = [*node.sub_sites, *node.zones]
    else:
        candidates = list(node.sub_zones)
    return next((c for c in candidates if c.id == child_id), None)


def _crumb(node: Site | Zone) -> BreadcrumbEntry:
    return BreadcrumbEntry(id=node.id, name=node.name, kind=node.kind)
