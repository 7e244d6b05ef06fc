from fastapi import APIRouter

from postguard.api.health import router as health_router
from postguard.api.process import process
from postguard.validation import CompiledSchema, Handler, validate

"""
Router principal de l’API.

Rôle (fonctionnel) :
- "/" : handler aval enveloppé par le middleware de validation, toutes méthodes HTTP
  (la restriction de méthode, si besoin, relève du handler aval).
- "/health" : disponibilité du service.
"""

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def build_router(schema: CompiledSchema, handler: Handler = process) -> APIRouter:
    """Assemble le routeur pour un schéma donné (injecté, jamais global)."""
    api_router = APIRouter()

    api_router.add_api_route(
        "/",
        validate(schema, handler),
        methods=ALL_METHODS,
        include_in_schema=False,
    )
    api_router.include_router(health_router, tags=["health"])

    return api_router
