"""SweetHome API - voice check-ins for elderly family members."""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from sweethome.config import get_settings
from sweethome.errors import EntryError
from sweethome.rate_limit import limiter
from sweethome.routers import entries_router

settings = get_settings()

# Logging
logger = logging.getLogger("sweet_home")
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

for warning in settings.validate():
    logger.warning(warning)

app = FastAPI(title="SweetHome API", version="0.1.0")
app.state.limiter = limiter


# --- Audit logging middleware ---
class AuditLogMiddleware(BaseHTTPMiddleware):
    AUDIT_PREFIX = "/v1/entries"

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        path = request.url.path
        method = request.method
        if method == "POST" and path.startswith(self.AUDIT_PREFIX):
            logger.info(
                "AUDIT %s %s -> %d (%.0fms) from %s",
                method,
                path,
                response.status_code,
                duration_ms,
                request.client.host if request.client else "unknown",
            )

        return response


app.add_middleware(AuditLogMiddleware)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(entries_router)


# --- Rate limit error handler ---
@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded."""
    return JSONResponse(status_code=429, content={"detail": "Rate limit exceeded. Try again later."})


# --- Domain errors -> JSON ---
@app.exception_handler(EntryError)
async def entry_error_handler(request: Request, exc: EntryError) -> JSONResponse:
    """Report lifecycle errors as a status code plus a short message."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# --- Malformed input -> 400 ---
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as a 400 with a short message."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse(status_code=400, content={"detail": problems or "invalid request"})


# --- Health check ---
@app.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "app": "sweet-home-api", "version": "0.1.0"}


if __name__ == "__main__":
    import uvicorn

    logger.info("SweetHome API running on http://localhost:%d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
