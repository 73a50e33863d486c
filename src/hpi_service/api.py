from __future__ import annotations

import logging
import time
import uuid
from collections import defaultdict, deque
from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from hpicheck.errors import Err, MalformedFieldError
from hpicheck.legacy import to_legacy
from hpicheck.pipeline import run_check
from hpicheck.serialization import report_to_dict, risk_summary_to_dict
from hpi_service.logging_config import configure_logging, correlation_id, current_vrm
from hpi_service.settings import ServiceSettings
from hpi_service.sources import HpiDataSource, build_data_source, normalize_vrm

logger = logging.getLogger(__name__)


# ── Request / Response Models ───────────────────────────────────────

class HpiCheckRequest(BaseModel):
    registration: str = Field(min_length=1, max_length=16)


class HealthResponse(BaseModel):
    status: str


# ── Metrics ─────────────────────────────────────────────────────────

_counters: dict[str, int] = defaultdict(int)
_latencies: deque[float] = deque(maxlen=10_000)


def _failure_response(error: Err, http_status: int) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "status": "check_failed", "error": error.error.message}
    if isinstance(error.error, MalformedFieldError):
        body["field"] = error.error.field_path
    return JSONResponse(status_code=http_status, content=body)


# ── App Factory ─────────────────────────────────────────────────────

def create_app(data_source: HpiDataSource | None = None) -> FastAPI:
    settings = ServiceSettings()
    configure_logging(level=settings.log_level, fmt=settings.log_format)

    source = data_source or build_data_source(settings)

    app = FastAPI(title="HPI Check API", version="0.1.0")

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next: Any) -> Response:
        cid = request.headers.get("X-Correlation-ID") or uuid.uuid4().hex[:12]
        correlation_id.set(cid)
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = cid
        return response

    # ── HPI Checks ──────────────────────────────────────────────────

    @app.post("/hpi-checks")
    async def create_hpi_check(payload: HpiCheckRequest) -> JSONResponse:
        t0 = time.monotonic()
        try:
            vrm = normalize_vrm(payload.registration)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        current_vrm.set(vrm)

        raw = await source.fetch(vrm)
        outcome = run_check(raw)
        _latencies.append(time.monotonic() - t0)
        if isinstance(outcome, Err):
            _counters["checks_failed"] += 1
            if isinstance(outcome.error, MalformedFieldError):
                return _failure_response(outcome, status.HTTP_422_UNPROCESSABLE_ENTITY)
            return _failure_response(outcome, status.HTTP_502_BAD_GATEWAY)

        check = outcome.value
        _counters[f"checks_risk_{check.risk_summary.overall_risk.lower()}"] += 1
        logger.info(
            "HPI check complete: risk=%s score=%d",
            check.risk_summary.overall_risk, check.risk_summary.score,
        )
        legacy = to_legacy(check.report, raw=raw, risk_summary=check.risk_summary)
        body = legacy.to_dict()
        body["riskSummary"] = risk_summary_to_dict(check.risk_summary)
        return JSONResponse(content={"success": True, "registration": vrm, "data": body})

    @app.post("/hpi-checks/parse")
    async def parse_hpi_response(body: dict[str, Any]) -> JSONResponse:
        outcome = run_check(body)
        if isinstance(outcome, Err):
            _counters["parse_failed"] += 1
            if isinstance(outcome.error, MalformedFieldError):
                return _failure_response(outcome, status.HTTP_422_UNPROCESSABLE_ENTITY)
            return _failure_response(outcome, status.HTTP_400_BAD_REQUEST)

        check = outcome.value
        return JSONResponse(content={
            "success": True,
            "registration": check.report.vehicle_info.registration,
            "report": report_to_dict(check.report),
            "riskSummary": risk_summary_to_dict(check.risk_summary),
        })

    # ── Health / Metrics ────────────────────────────────────────────

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/metrics")
    async def get_metrics() -> dict[str, Any]:
        ordered = sorted(_latencies)
        return {
            "counters": dict(_counters),
            "check_latency": {
                "count": len(ordered),
                "p50_ms": round(ordered[len(ordered) // 2] * 1000, 1) if ordered else 0,
                "p95_ms": round(ordered[int(len(ordered) * 0.95)] * 1000, 1) if ordered else 0,
            },
        }

    return app


app = create_app()
