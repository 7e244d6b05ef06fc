from __future__ import annotations

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

"""
API Process (handler aval).

Rôle (fonctionnel) :
- Placeholder métier derrière le middleware de validation.
- Ne reçoit que des requêtes dont le body est conforme au schéma.
- Répond toujours 200 avec un body texte fixe.
"""

CONFIRMATION_BODY = "valid request"


async def process(request: Request) -> Response:
    return PlainTextResponse(CONFIRMATION_BODY, status_code=200)
