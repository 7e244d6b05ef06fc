from __future__ import annotations

from typing import Any, Dict, Sequence

from starlette.responses import JSONResponse, Response

"""
Core Errors.

Rôle (fonctionnel) :
- Typage des échecs du pipeline de validation (1 exception = 1 classe d’échec).
- Construction du payload d’erreur client : {"errors": ["<message>", ...]}.
- Réponses standard : JSON UTF-8 explicite, 500 sans body (aucun détail côté client).

Taxonomie :
- SchemaLoadError          : schéma embarqué invalide -> le process ne démarre pas
- BodyReadError            : lecture du body impossible -> 500
- DocumentParseError       : body non JSON -> 500
- ValidationMachineryError : la librairie de validation a levé -> 500
Les violations de contraintes ne sont PAS des exceptions : c’est l’issue attendue (400).
"""


class UTF8JSONResponse(JSONResponse):
    """Réponse JSON avec charset UTF-8 explicite (cohérent sur tous les endpoints)."""
    media_type = "application/json; charset=utf-8"


class PostGuardError(Exception):
    """Base des erreurs applicatives."""


class SchemaLoadError(PostGuardError):
    """Définition de schéma illisible ou invalide (fatal au démarrage)."""


class BodyReadError(PostGuardError):
    """Le body de la requête n’a pas pu être lu (déconnexion client, I/O)."""


class DocumentParseError(PostGuardError):
    """Le body n’est pas un document JSON exploitable."""


class ValidationMachineryError(PostGuardError):
    """Erreur interne de la librairie de validation (pas une violation)."""


def errors_payload(messages: Sequence[str]) -> Dict[str, Any]:
    """Construit le payload d’erreur client (ordre des messages conservé)."""
    return {"errors": [str(m) for m in messages]}


def errors_response(messages: Sequence[str], status_code: int = 400) -> UTF8JSONResponse:
    """
    Réponse d’erreur client.

    Le rendu JSON a lieu à la construction : une erreur de sérialisation
    (TypeError / ValueError) remonte donc ici, à l’appelant de décider du 500.
    """
    return UTF8JSONResponse(status_code=status_code, content=errors_payload(messages))


def internal_error_response() -> Response:
    """500 sans body."""
    return Response(status_code=500)
