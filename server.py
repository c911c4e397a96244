import math
import time
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware

from lzt_proxy import (
    SUPPORTED_CATEGORIES,
    ListingQuery,
    MarketplaceService,
    ProxyError,
    ValidationError,
    create_service,
)
from lzt_proxy.config import DEFAULT_CATEGORY, DEFAULT_PAGE, DEFAULT_PER_PAGE
from lzt_proxy.logger import new_request_id, request_id_ctx, setup_logger

log = setup_logger("lzt_proxy.server")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

app = FastAPI(title="LZT Marketplace Proxy")


class ErrorBody(BaseModel):
    error: str


ERROR_RESPONSES = {
    400: {"model": ErrorBody},
    502: {"model": ErrorBody},
    500: {"model": ErrorBody},
}


# ----- CORS + request logging -----
class ProxyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or new_request_id()
        request_id_ctx.set(rid)
        start = time.perf_counter()

        if request.method == "OPTIONS":
            # Preflight: answered here for every path, no body.
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception:
                log.exception({"msg": "http_unhandled_exception", "method": request.method, "path": request.url.path})
                response = JSONResponse({"error": "Internal Server Error"}, status_code=500)

        response.headers.update(CORS_HEADERS)
        response.headers["X-Request-ID"] = rid
        log.info({
            "msg": "http_request",
            "method": request.method,
            "path": request.url.path,
            "query": str(request.url.query),
            "status": response.status_code,
            "dur_ms": round((time.perf_counter() - start) * 1000, 2),
        })
        return response


app.add_middleware(ProxyMiddleware)


@app.exception_handler(ProxyError)
async def proxy_error_handler(request: Request, exc: ProxyError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Bad query input is a client error like any other: 400, not 422.
    errors = exc.errors()
    if errors:
        field = errors[0].get("loc", ["", "query"])[-1]
        message = f"Invalid {field}: {errors[0].get('msg', 'bad value')}"
    else:
        message = "Invalid request"
    return JSONResponse({"error": message}, status_code=400)


# Shared service instance: one result cache per process.
service = create_service()


@app.on_event("shutdown")
async def shutdown_event():
    log.info({"msg": "closing upstream connections"})
    await service.aclose()


def get_service() -> MarketplaceService:
    return service


def _optional_number(raw: Optional[str], name: str) -> Optional[float]:
    """Blank values mean "not set", the way the front end sends empty inputs."""
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f"Invalid {name}: must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"Invalid {name}: must be a finite number")
    return value


def _optional_days(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        days = int(raw)
    except ValueError:
        raise ValidationError("Invalid inactiveDays: must be an integer")
    if days < 0:
        raise ValidationError("Invalid inactiveDays: must not be negative")
    return days


@app.get("/marketplace", responses=ERROR_RESPONSES)
async def marketplace(
    category: str = Query(DEFAULT_CATEGORY),
    page: int = Query(DEFAULT_PAGE, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, alias="perPage", ge=1),
    title: Optional[str] = Query(None),
    pmin: Optional[str] = Query(None),
    pmax: Optional[str] = Query(None),
    order_by: Optional[str] = Query(None),
    inactive_days: Optional[str] = Query(None, alias="inactiveDays"),
    svc: MarketplaceService = Depends(get_service),
):
    query = ListingQuery(
        category=category,
        page=page,
        per_page=per_page,
        title=title or None,
        pmin=_optional_number(pmin, "pmin"),
        pmax=_optional_number(pmax, "pmax"),
        order_by=order_by or None,
        inactive_days=_optional_days(inactive_days),
    )
    return await svc.list_listings(query)


@app.get("/item", responses=ERROR_RESPONSES)
async def item_missing_id():
    raise ValidationError("Missing id")


@app.get("/item/{item_id}", responses=ERROR_RESPONSES)
async def item(item_id: str, svc: MarketplaceService = Depends(get_service)):
    return await svc.get_item(item_id)


@app.get("/")
async def root():
    return {"status": "LZT Marketplace Proxy is running", "categories": SUPPORTED_CATEGORIES, "docs": "/docs"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
