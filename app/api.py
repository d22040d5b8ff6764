"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from app.schemas import DeviceSummary, IngestResponse, ReadingView, SensorDataPayload
from datastore.documents import SensorDataDocument
from datastore.repository import StorageError
from services.ingest import ReadingRejected, SensorIngestService, build_default_ingest_service

router = APIRouter()


def get_ingest_service() -> SensorIngestService:
    return build_default_ingest_service()


def _storage_unavailable(exc: StorageError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Sensor storage unavailable: {exc}",
    )


@router.post(
    "/readings",
    status_code=status.HTTP_201_CREATED,
    response_model=IngestResponse,
    response_model_exclude_none=True,
    summary="Validate and store one multi-metric sensor record.",
)
async def create_reading(
    payload: SensorDataPayload,
    service: SensorIngestService = Depends(get_ingest_service),
) -> IngestResponse:
    try:
        result = service.ingest(
            device_id=payload.device_id,
            timestamp=payload.timestamp,
            temperature=payload.temperature.to_measurement() if payload.temperature else None,
            humidity=payload.humidity.to_measurement() if payload.humidity else None,
            co2=payload.co2.to_measurement() if payload.co2 else None,
            additional_sensors={
                name: m.to_measurement() for name, m in payload.additional_sensors.items()
            },
        )
    except ReadingRejected as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"sensor": exc.sensor, "error": exc.code, "message": str(exc.error)},
        ) from exc
    except StorageError as exc:
        raise _storage_unavailable(exc) from exc
    return IngestResponse(
        record=SensorDataDocument.from_record(result.record),
        readings=[ReadingView.from_reading(reading) for reading in result.readings],
    )


@router.get(
    "/devices/{device_id}/readings",
    summary="List every stored record for a device.",
)
async def list_readings(
    device_id: str,
    service: SensorIngestService = Depends(get_ingest_service),
) -> JSONResponse:
    try:
        records = service.history(device_id)
    except StorageError as exc:
        raise _storage_unavailable(exc) from exc
    payload: List[Dict[str, Any]] = [
        SensorDataDocument.from_record(record).to_payload() for record in records
    ]
    return JSONResponse(content=payload)


@router.get(
    "/devices/{device_id}/summary",
    response_model=DeviceSummary,
    summary="Aggregate statistics for a device's stored readings.",
)
async def device_summary(
    device_id: str,
    service: SensorIngestService = Depends(get_ingest_service),
) -> DeviceSummary:
    try:
        summary = service.summarize(device_id)
    except StorageError as exc:
        raise _storage_unavailable(exc) from exc
    return DeviceSummary.from_summary(device_id, summary)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
    response_class=Response,
)
async def healthcheck() -> Response:
    return Response(status_code=status.HTTP_200_OK)
