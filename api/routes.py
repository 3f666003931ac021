"""
API Routes — upload, health, and metrics endpoints.
"""

import io
import logging

import pandas as pd
from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse

from core.output.json_formatter import format_output
from services.processing_pipeline import ProcessingService
from utils.metrics import MetricsTracker
from utils.validators import validate_csv

logger = logging.getLogger(__name__)

router = APIRouter()
metrics_tracker = MetricsTracker()

VERSION = "1.0.0"


@router.get("/health")
async def health():
    """Return system health status."""
    return {"status": "healthy", "version": VERSION}


@router.get("/metrics")
async def metrics():
    """Return processing statistics from the most recent run."""
    return metrics_tracker.get_metrics()


@router.post("/upload")
async def upload_csv(
    file: UploadFile = File(...),
    include_graph: bool = Query(False),
):
    """
    Accept a transaction CSV, run laundering-topology detection and return
    the JSON report with suspicious accounts, rings and a summary.
    """
    if not file.filename or not file.filename.endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are accepted.")

    try:
        contents = await file.read()
        df = pd.read_csv(
            io.BytesIO(contents),
            dtype={"transaction_id": str, "sender_id": str, "receiver_id": str},
        )
    except (ValueError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise HTTPException(status_code=400, detail=f"Failed to parse CSV: {str(e)}")

    validation_error = validate_csv(df)
    if validation_error:
        raise HTTPException(status_code=400, detail=validation_error)

    result = ProcessingService().process(df)
    if not result.transactions:
        reason = result.diagnostics[0] if result.diagnostics else "no usable rows"
        raise HTTPException(status_code=400, detail=f"No valid transactions found ({reason}).")

    report = format_output(result, include_graph=include_graph)
    metrics_tracker.record(report["summary"])
    logger.info(
        "Processed %s: %d accounts, %d rings",
        file.filename,
        result.summary.accounts_analyzed,
        result.summary.rings_detected,
    )

    return JSONResponse(content=report)
