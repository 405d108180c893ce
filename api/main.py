"""
HeadlineCheck API — Main Application

POST /detect        — Classify a headline as fake or trustworthy
POST /detect/batch  — Classify multiple headlines
POST /log-headline  — Append a classification to the headline log
GET  /logs          — Recent headline log entries
GET  /rules         — The rule table the engine scores against
GET  /health        — Health check
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Query, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from headlinecheck.config import settings
from headlinecheck.engine import ENGINE_VERSION, headline_engine
from headlinecheck.headline_log import HeadlineLog
from headlinecheck.logging import setup_logging, get_logger
from headlinecheck.schemas.headline import (
    DetectRequest,
    DetectBatchRequest,
    DetectResponse,
    DetectBatchResponse,
    LogRequest,
    LogResponse,
    LogEntriesResponse,
    RulesResponse,
    HealthResponse,
)

logger = get_logger("api")


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("HeadlineCheck API starting",
                extra={"engine_version": ENGINE_VERSION, "log_path": settings.LOG_PATH})
    yield
    logger.info("HeadlineCheck API shutting down")


app = FastAPI(
    title="HeadlineCheck API",
    description="Deterministic rule-based fake headline detection",
    version=f"{settings.VERSION} (engine {ENGINE_VERSION})",
    lifespan=lifespan,
)

# CORS: set HEADLINECHECK_CORS_ORIGINS in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    allow_credentials=False,
)


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions and return a structured error without internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The request could not be completed."},
    )


# Lazy headline log
_headline_log: Optional[HeadlineLog] = None


def get_headline_log() -> HeadlineLog:
    global _headline_log
    if _headline_log is None:
        _headline_log = HeadlineLog(path=settings.LOG_PATH)
    return _headline_log


def _detect(headline: str) -> dict:
    result, breakdown = headline_engine.classify(headline)
    return {
        "headline": headline,
        **result.to_dict(),
        "engine_version": ENGINE_VERSION,
        "score_breakdown": breakdown.to_dict(),
    }


# ============================================================
# ROUTES
# ============================================================

@app.post("/detect", response_model=DetectResponse)
async def detect(request: DetectRequest):
    """Classify a headline as fake or trustworthy."""
    result = _detect(request.headline)
    breakdown = result["score_breakdown"]

    logger.info(
        f"Headline classified: label={result['label']} confidence={result['confidence']}",
        extra={
            "label": result["label"],
            "confidence": result["confidence"],
            "fake_score": breakdown["fake_score"],
            "trust_score": breakdown["trust_score"],
            "final_score": breakdown["final_score"],
        },
    )
    return result


@app.post("/detect/batch", response_model=DetectBatchResponse)
async def detect_batch(request: DetectBatchRequest):
    """Classify multiple headlines. Results keep the request order."""
    results = [_detect(item.headline) for item in request.items]

    logger.info(
        f"Batch complete: {len(results)} headlines classified",
        extra={"batch_size": len(results)},
    )
    return {"results": results, "total": len(results)}


@app.post("/log-headline", response_model=LogResponse)
async def log_headline(
    request: LogRequest,
    headline_log: HeadlineLog = Depends(get_headline_log),
):
    """Append a classification to the CSV headline log."""
    if not isinstance(request.headline, str) or not request.headline:
        return JSONResponse(status_code=400, content={"error": "headline is required"})

    headline_log.append(
        headline=request.headline,
        label=request.label,
        confidence=request.confidence,
    )
    logger.info(
        "Headline logged",
        extra={"label": request.label, "confidence": request.confidence},
    )
    return {"ok": True}


@app.get("/logs", response_model=LogEntriesResponse)
async def get_logs(
    limit: int = Query(20, ge=1, le=100),
    headline_log: HeadlineLog = Depends(get_headline_log),
):
    """Get recent headline log entries, newest first."""
    return {
        "entries": headline_log.get_recent(limit=limit),
        "total_count": headline_log.get_count(),
    }


@app.get("/rules", response_model=RulesResponse)
async def get_rules():
    """Return the rule categories the engine scores against."""
    rules = headline_engine.get_rules()
    return {
        "engine_version": ENGINE_VERSION,
        "total_rules": len(rules),
        "rules": rules,
    }


@app.get("/health", response_model=HealthResponse)
async def health(headline_log: HeadlineLog = Depends(get_headline_log)):
    return {
        "status": "operational",
        "version": settings.VERSION,
        "engine_version": ENGINE_VERSION,
        "log_entries": headline_log.get_count(),
    }


# --- Security + Version Headers Middleware ---
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Add security and version headers to all responses."""
    response = await call_next(request)
    response.headers["X-HeadlineCheck-Version"] = settings.VERSION
    response.headers["X-Engine-Version"] = ENGINE_VERSION
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# --- Body Size Limit Middleware ---
@app.middleware("http")
async def enforce_body_size_limit(request: Request, call_next):
    """Reject requests over the configured size, by Content-Length or actual body."""
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            if int(content_length) > settings.MAX_BODY_BYTES:
                return JSONResponse(
                    status_code=413,
                    content={"detail": "Request body too large."},
                )
        except ValueError:
            pass  # Malformed content-length; let the framework handle it

    if request.method in ("POST", "PUT", "PATCH"):
        body = await request.body()
        if len(body) > settings.MAX_BODY_BYTES:
            return JSONResponse(
                status_code=413,
                content={"detail": "Request body too large."},
            )

    return await call_next(request)


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with method, path, status, duration."""
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} → {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)
