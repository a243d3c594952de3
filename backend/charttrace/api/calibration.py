"""Calibration endpoints: reference segments, data values, status, reset."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from charttrace.dependencies import get_document_session
from charttrace.engine.calibrator import AxisCalibrator
from charttrace.engine.errors import DegenerateAxisError, NotCalibratedError
from charttrace.models.requests import CalibrationValueRequest, ConvertRequest, SegmentRequest
from charttrace.models.responses import AxisScaleOut, CalibrationStatusResponse, ConvertResponse
from charttrace.session import DocumentSession

router = APIRouter(prefix="/calibration")


def _status(calibrator: AxisCalibrator) -> CalibrationStatusResponse:
    response = CalibrationStatusResponse(**calibrator.status())
    try:
        factors = calibrator.derive_scale()
    except DegenerateAxisError as e:
        response.error = e.message
        return response
    except NotCalibratedError:
        return response
    response.scale = {
        axis: AxisScaleOut(
            scale=cal.scale,
            offset=cal.offset,
            data_min=cal.data_min,
            data_max=cal.data_max,
        )
        for axis, cal in (("x", factors.x), ("y", factors.y))
    }
    return response


@router.get("", response_model=CalibrationStatusResponse)
async def calibration_status(
    session: DocumentSession = Depends(get_document_session),
) -> CalibrationStatusResponse:
    return _status(session.calibrator)


@router.post("/segment", response_model=CalibrationStatusResponse)
async def set_segment(
    req: SegmentRequest,
    session: DocumentSession = Depends(get_document_session),
) -> CalibrationStatusResponse:
    if req.curve_index is not None:
        try:
            geometry = session.get_curve(req.curve_index)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"No curve with index {req.curve_index}")
    elif req.points:
        geometry = req.points
    else:
        raise HTTPException(status_code=422, detail="Provide curve_index or points")

    session.calibrator.set_segment(req.axis, geometry)
    return _status(session.calibrator)


@router.post("/value", response_model=CalibrationStatusResponse)
async def set_value(
    req: CalibrationValueRequest,
    session: DocumentSession = Depends(get_document_session),
) -> CalibrationStatusResponse:
    try:
        session.calibrator.set_value(req.axis, req.endpoint, req.value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Not a number: {req.value!r}")
    return _status(session.calibrator)


@router.post("/convert", response_model=ConvertResponse)
async def convert(
    req: ConvertRequest,
    session: DocumentSession = Depends(get_document_session),
) -> ConvertResponse:
    converted = session.calibrator.convert_points(req.points)
    if converted is None:
        return ConvertResponse(available=False)
    return ConvertResponse(available=True, points=[(float(x), float(y)) for x, y in converted])


@router.delete("", response_model=CalibrationStatusResponse)
async def reset_calibration(
    session: DocumentSession = Depends(get_document_session),
) -> CalibrationStatusResponse:
    session.calibrator.reset()
    return _status(session.calibrator)
