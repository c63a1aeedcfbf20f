"""Pure asset-hierarchy and control logic, independent of storage and HTTP."""

from capnio.core.activation import (
    ControlState,
    apply_configuration,
    clear_alert,
    configure,
    control_state,
    raise_alert,
    reconcile,
    set_active,
)
from capnio.core.hierarchy import (
    BreadcrumbEntry,
    PathNotFound,
    ResolvedPath,
    find_by_id,
    resolve_path,
)
from capnio.core.mapping import (
    ValidationIssue,
    ValidationResult,
    applicable_controls,
    compatible_sensors,
    validate_configuration,
)
from capnio.core.status import combine, site_status, zone_status

__all__ = [
    # Status
    "combine",
    "zone_status",
    "site_status",
    # Hierarchy
    "BreadcrumbEntry",
    "ResolvedPath",
    "PathNotFound",
    "find_by_id",
    "resolve_path",
    # Mapping
    "ValidationIssue",
    "ValidationResult",
    "applicable_controls",
    "compatible_sensors",
    "validate_configuration",
    # Activation
    "ControlState",
    "apply_configuration",
    "clear_alert",
    "configure",
    "control_state",
    "raise_alert",
    "reconcile",
    "set_active",
]
