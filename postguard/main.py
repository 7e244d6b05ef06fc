from __future__ import annotations

import time
import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from postguard.api.process import process
from postguard.api.router import build_router
from postguard.core.settings import settings
from postguard.core.logging import setup_logging
from postguard.core.errors import UTF8JSONResponse, errors_payload, internal_error_response
from postguard.core.request_id import (
    REQUEST_ID_HEADER,
    bind_request_id,
    get_request_id,
    reset_request_id,
)
from postguard.schemas import schema_definition
from postguard.validation import CompiledSchema, Handler, load_schema

"""
Application FastAPI (entrypoint).

Rôle (fonctionnel) :
- Charge le schéma UNE fois, avant la construction de l’application : si le schéma est invalide,
  l’import échoue et le serveur ne démarre jamais.
- Assemble l’application autour du schéma injecté (create_app) :
  - "/" : middleware de validation -> handler aval
  - "/health"
- Centralise l’observabilité :
  - request_id propagé (X-Request-Id)
  - logs structurés JSON (timing, status, client_ip)
  - seuil de “slow request”
- Uniformise les erreurs :
  - erreurs HTTP natives (404, 405) -> {"errors": [...]}
  - exception non gérée -> 500 sans body (stacktrace uniquement côté logs)
"""

LOG_LEVEL = getattr(settings, "LOG_LEVEL", "INFO")
setup_logging(LOG_LEVEL)

log = logging.getLogger("postguard")

# logger dédié observabilité HTTP (séparé du métier)
http_log = logging.getLogger("postguard.http")

SLOW_MS = int(getattr(settings, "SLOW_REQUEST_MS", 800))


def create_app(schema: CompiledSchema, handler: Handler = process) -> FastAPI:
    """
    Construit l’application pour un schéma déjà compilé.

    Le schéma est injecté (jamais relu ni modifié) : les tests peuvent fournir une variante.
    """
    app = FastAPI(
        title=getattr(settings, "APP_NAME", "PostGuard API"),
        debug=getattr(settings, "DEBUG", False),
        default_response_class=UTF8JSONResponse,
    )

    # Lecture seule (health) ; le chemin de validation reçoit le schéma par capture
    app.state.schema = schema

    app.include_router(build_router(schema, handler))

    @app.middleware("http")
    async def request_observability(request: Request, call_next):
        rid, token = bind_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)

            level = logging.WARNING if duration_ms >= SLOW_MS else logging.INFO
            http_log.log(
                level,
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": getattr(response, "status_code", None),
                    "duration_ms": duration_ms,
                    "client_ip": request.client.host if request.client else None,
                },
            )

            reset_request_id(token)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Erreurs HTTP natives (404, 405…) -> {"errors": [detail]}."""
        return UTF8JSONResponse(
            status_code=exc.status_code,
            content=errors_payload([str(exc.detail)]),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """Fallback : exception non gérée -> 500 sans body + log serveur."""
        rid = getattr(request.state, "request_id", None) or get_request_id() or "-"
        log.exception("Unhandled error: %s", exc, extra={"request_id": rid})
        return internal_error_response()

    return app


# --- Schéma process-wide : chargé avant toute connexion ---
schema = load_schema(schema_definition(settings.REQUIRE_AUTHOR_EMAIL))
log.info(
    "schema variant selected",
    extra={"required": sorted(schema.required)},
)

app = create_app(schema)
