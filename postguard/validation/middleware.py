from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable

from starlette.requests import ClientDisconnect, Request
from starlette.responses import Response

from postguard.core.errors import (
    BodyReadError,
    DocumentParseError,
    ValidationMachineryError,
    errors_response,
    internal_error_response,
)
from postguard.validation.loader import CompiledSchema

"""
Validation Middleware.

Rôle (fonctionnel) :
- Intercepte chaque requête AVANT le handler métier.
- Pipeline linéaire par requête :
  1) lecture du body (échec I/O -> 500, pas de retry)
  2) parsing JSON + validation contre le schéma (moteur en échec -> 500)
  3) branche :
     - valide   -> handler aval appelé avec la requête d’origine (body toujours lisible)
     - invalide -> 400 {"errors": [...]} avec toutes les violations, puis retour immédiat

Notes :
- Composition explicite : validate(schema, handler) retourne un handler de même interface
  (Request -> Response). Le handler aval ignore que la validation a eu lieu.
- Le handler aval n’est JAMAIS appelé après un rejet (une seule réponse par requête).
"""

log = logging.getLogger("postguard.validation")

Handler = Callable[[Request], Awaitable[Response]]


async def read_body(request: Request) -> bytes:
    """Lit le body complet (mis en cache par Starlette pour le handler aval)."""
    try:
        return await request.body()
    except (ClientDisconnect, OSError) as exc:
        raise BodyReadError(f"cannot read request body: {exc!r}") from exc


def parse_document(body: bytes) -> Any:
    """
    Interprète le body comme un document JSON (UTF-8/16/32 détecté par json).

    ValueError couvre le décodage (UnicodeDecodeError, JSONDecodeError) et les littéraux
    refusés par l’interpréteur (entier au-delà de la limite de chiffres).
    """
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as exc:
        raise DocumentParseError(f"request body is not JSON: {exc}") from exc


def validate(schema: CompiledSchema, next_handler: Handler) -> Handler:
    """Enveloppe `next_handler` : seules les requêtes conformes à `schema` lui parviennent."""

    async def validated(request: Request) -> Response:
        try:
            body = await read_body(request)
        except BodyReadError as exc:
            log.warning("body read failed: %s", exc)
            return internal_error_response()

        try:
            result = schema.validate(parse_document(body))
        except DocumentParseError as exc:
            log.warning("unparseable body: %s", exc)
            return internal_error_response()
        except ValidationMachineryError:
            log.exception("validation engine failure")
            return internal_error_response()

        if not result.valid:
            try:
                response = errors_response(result.errors, status_code=400)
            except (TypeError, ValueError):
                log.exception("cannot serialize validation errors")
                return internal_error_response()

            log.info(
                "request rejected",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "violations": len(result.errors),
                },
            )
            return response

        return await next_handler(request)

    return validated
