"""POST /api/extract — replay one page's operator stream into curves."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from charttrace.config import Settings
from charttrace.dependencies import get_document_session, get_settings
from charttrace.engine.config import ExtractionConfig
from charttrace.engine.pipeline import extract_page
from charttrace.models.requests import ExtractRequest
from charttrace.models.responses import CurveOut, ExtractResponse
from charttrace.session import DocumentSession

router = APIRouter()


@router.post("/extract", response_model=ExtractResponse)
async def extract(
    req: ExtractRequest,
    session: DocumentSession = Depends(get_document_session),
    settings: Settings = Depends(get_settings),
) -> ExtractResponse:
    start = time.perf_counter()

    config = ExtractionConfig(
        tolerance=req.tolerance if req.tolerance is not None else settings.curve_tolerance,
        max_depth=req.max_depth if req.max_depth is not None else settings.curve_max_depth,
    )
    operators = [(o.op, o.args) for o in req.operators]
    ctx = extract_page(operators, page_number=req.page, config=config)

    # A failed pass still replaces the session's curves (with nothing)
    session.replace_extraction(ctx)

    elapsed = (time.perf_counter() - start) * 1000

    return ExtractResponse(
        page=ctx.page_number,
        path_count=ctx.num_paths,
        curves=[
            CurveOut(
                index=c.index,
                path_index=c.path_index,
                operation=c.operation.value,
                points=[(float(x), float(y)) for x, y in c.points],
                bbox=c.features["bbox"],
                closed=c.features["is_closed"],
                point_count=c.features["point_count"],
                length=c.features["length"],
            )
            for c in ctx.curves
        ],
        processing_time_ms=round(elapsed, 1),
        stages_completed=len(ctx.completed_stages),
        errors=ctx.errors,
    )
