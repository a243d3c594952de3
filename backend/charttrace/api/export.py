"""POST /api/export — labeled, calibrated curves as CSV or JSON text."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from charttrace.dependencies import get_document_session
from charttrace.engine.errors import DegenerateAxisError, NotCalibratedError
from charttrace.export.serializer import prepare_labeled_curves, to_csv, to_json
from charttrace.models.requests import ExportRequest
from charttrace.session import DocumentSession

router = APIRouter()

_MEDIA_TYPES = {"csv": "text/csv", "json": "application/json"}


@router.post("/export")
async def export(
    req: ExportRequest,
    session: DocumentSession = Depends(get_document_session),
) -> Response:
    selections = []
    for sel in req.curves:
        try:
            selections.append((sel.label, session.get_curve(sel.curve_index)))
        except KeyError:
            raise HTTPException(status_code=404, detail=f"No curve with index {sel.curve_index}")

    try:
        labeled = prepare_labeled_curves(selections, session.calibrator)
    except NotCalibratedError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except DegenerateAxisError as e:
        raise HTTPException(status_code=422, detail=e.message)

    content = to_csv(labeled) if req.format == "csv" else to_json(labeled)
    return Response(
        content=content,
        media_type=_MEDIA_TYPES[req.format],
        headers={"Content-Disposition": f'attachment; filename="extracted_data.{req.format}"'},
    )
