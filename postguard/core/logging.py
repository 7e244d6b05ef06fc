from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .request_id import get_request_id

"""
Core Logging.

Rôle (fonctionnel) :
- Configure un logging JSON uniforme pour tout le service (API + uvicorn).
- Injecte le request_id courant dans chaque log.
- Sérialise les “extras” connus (method, path, status_code, duration_ms, violations…)
  passés via logger.info(..., extra={...}).

Loggers utilisés :
- postguard            : démarrage / erreurs non gérées
- postguard.http       : 1 ligne par requête (timing, status)
- postguard.validation : rejets et échecs du middleware
- postguard.schema     : chargement du schéma
"""

EXTRA_KEYS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client_ip",
    "violations",
    "required",
)


class RequestIdFilter(logging.Filter):
    """
    Ajoute request_id au LogRecord ('-' hors requête).

    Un request_id explicite (extra={"request_id": ...}) est conservé : les handlers
    d’exception s’exécutent après la remise à zéro du ContextVar.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = get_request_id() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """1 event = 1 ligne JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "msg": record.getMessage(),
        }

        for key in EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO") -> None:
    """
    Initialise le logging global (root) en JSON et aligne uvicorn dessus.

    Idempotent : les handlers existants sont remplacés (évite les doublons avec --reload).
    """
    lvl = level.upper()

    root = logging.getLogger()
    root.setLevel(lvl)

    if root.handlers:
        root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = root.handlers
        logger.setLevel(lvl)
