"""Translation of domain errors into HTTP errors."""

from fastapi import HTTPException

from capnio.errors import (
    AssetNotFound,
    CapnioError,
    ControlNotApplicable,
    ControlValidationError,
    CycleDetected,
    DuplicateAssetId,
    DuplicateCatalogEntry,
    InvalidDefinition,
    InvalidHierarchy,
    InvalidTransition,
)

STATUS_CODES: dict[type[CapnioError], int] = {
    AssetNotFound: 404,
    ControlValidationError: 400,
    ControlNotApplicable: 400,
    DuplicateAssetId: 409,
    DuplicateCatalogEntry: 409,
    InvalidTransition: 409,
    InvalidHierarchy: 422,
    InvalidDefinition: 422,
    CycleDetected: 500,
}


def http_error(err: CapnioError) -> HTTPException:
    status_code = next(
        (code for kind, code in STATUS_CODES.items() if isinstance(err, kind)),
        400,
    )
    return HTTPException(status_code=status_code, detail=err.to_detail())
