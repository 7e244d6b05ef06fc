from __future__ import annotations

import re
import uuid
from contextvars import ContextVar, Token

"""
Core Request ID.

Rôle (fonctionnel) :
- Porte l’identifiant de corrélation de la requête en cours (ContextVar).
- Relie entre eux les logs d’une même requête (observabilité, middleware de validation).

Header entrant :
- Réutilisé tel quel s’il est court (<= 128) et composé de caractères sûrs
  ([A-Za-z0-9._:-]) ; sinon remplacé par un UUID4 (pas de valeur client arbitraire dans les logs).

Cycle de vie :
- bind_request_id() au début de la requête, reset_request_id(token) à la fin :
  le contexte retrouve sa valeur précédente (None hors requête).
"""

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 128

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]+$")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def normalize_request_id(incoming: str | None) -> str | None:
    """Valeur entrante utilisable comme request_id, ou None si absente / refusée."""
    rid = (incoming or "").strip()
    if not rid or len(rid) > MAX_REQUEST_ID_LENGTH or not _SAFE_REQUEST_ID.match(rid):
        return None
    return rid


def bind_request_id(incoming: str | None = None) -> tuple[str, Token]:
    """
    Fixe le request_id de la requête courante.

    Retourne (request_id, token) ; le token sert à reset_request_id().
    """
    rid = normalize_request_id(incoming) or str(uuid.uuid4())
    return rid, _request_id.set(rid)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Request_id du contexte courant (None hors requête)."""
    return _request_id.get()
