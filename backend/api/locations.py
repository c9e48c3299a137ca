"""Location API routes: list stored locations and trigger a capture."""
from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_capture_flow
from capture_core.capture import CaptureFlow
from capture_core.errors import (
    CaptureError,
    CaptureInProgress,
    CaptureTimeout,
    PermissionDenied,
    ProviderError,
    StorageError,
)
from capture_core.record import LocationRecord
from schemas.locations import LocationResponse

router = APIRouter(prefix="/locations", tags=["locations"])

# Capture failures are shown to the user; each maps to one status code.
_CAPTURE_ERROR_STATUS: dict[type[CaptureError], int] = {
    PermissionDenied: status.HTTP_403_FORBIDDEN,
    CaptureInProgress: status.HTTP_409_CONFLICT,
    ProviderError: status.HTTP_503_SERVICE_UNAVAILABLE,
    CaptureTimeout: status.HTTP_504_GATEWAY_TIMEOUT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _to_response(record: LocationRecord) -> LocationResponse:
    return LocationResponse(
        id=record.id,
        latitude=record.latitude,
        longitude=record.longitude,
        accuracy=record.accuracy,
        altitude=record.altitude,
        captured_at=record.captured_at,
    )


@router.get("", response_model=list[LocationResponse])
def list_locations(flow: CaptureFlow = Depends(get_capture_flow)) -> list[LocationResponse]:
    """List all stored locations, oldest first."""
    try:
        records = flow.reload()
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
    return [_to_response(r) for r in records]


@router.post("/capture", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def capture_location(flow: CaptureFlow = Depends(get_capture_flow)) -> LocationResponse:
    """Capture the current location, store it, and return the stored record."""
    try:
        record = await flow.capture()
    except CaptureError as e:
        code = _CAPTURE_ERROR_STATUS.get(type(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
        raise HTTPException(status_code=code, detail=str(e)) from e
    return _to_response(record)
