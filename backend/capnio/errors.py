"""Domain errors raised by the asset hierarchy and control lifecycle."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from capnio.core.mapping import ValidationResult


class CapnioError(Exception):
    """Base class for all domain errors. ``code`` is the machine-readable kind."""

    code = "CapnioError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict[str, Any]:
        """Payload used as the HTTP error detail."""
        return {"error": self.code, "message": self.message}


class AssetNotFound(CapnioError):
    code = "NotFound"

    def __init__(self, asset_id: str, kind: str = "asset"):
        super().__init__(f"{kind.capitalize()} not found: {asset_id}")
        self.asset_id = asset_id
        self.kind = kind


class CycleDetected(CapnioError):
    code = "CycleDetected"

    def __init__(self, asset_id: str):
        super().__init__(f"Cycle detected in asset hierarchy at {asset_id}")
        self.asset_id = asset_id


class DuplicateAssetId(CapnioError):
    code = "DuplicateAssetId"

    def __init__(self, asset_id: str):
        super().__init__(f"Asset id already in use: {asset_id}")
        self.asset_id = asset_id


class InvalidHierarchy(CapnioError):
    code = "InvalidHierarchy"


class ControlNotApplicable(CapnioError):
    code = "ControlNotApplicable"

    def __init__(self, control_id: str, machine_type: str):
        super().__init__(f"Control {control_id} does not apply to machine type {machine_type!r}")
        self.control_id = control_id
        self.machine_type = machine_type


class InvalidTransition(CapnioError):
    code = "InvalidTransition"


class ControlValidationError(CapnioError):
    """A configuration failed validation; the first issue names the error kind."""

    def __init__(self, result: "ValidationResult"):
        issues = result.issues
        super().__init__("; ".join(issue.message for issue in issues) or "Invalid configuration")
        self.result = result
        self.code = issues[0].code if issues else "InvalidConfiguration"

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        detail["issues"] = [issue.model_dump(mode="json") for issue in self.result.issues]
        return detail


class InvalidDefinition(CapnioError):
    """A catalog entry (control definition, sensor type) failed its authoring checks."""

    code = "InvalidDefinition"

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = problems

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        detail["problems"] = list(self.problems)
        return detail


class DuplicateCatalogEntry(CapnioError):
    code = "DuplicateEntry"

    def __init__(self, kind: str, value: str):
        super().__init__(f"{kind.capitalize()} already exists: {value}")
        self.kind = kind
        self.value = value
