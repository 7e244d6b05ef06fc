from fastapi import APIRouter, Request

from postguard.core.settings import settings

"""
API Health.

Rôle (fonctionnel) :
- Endpoint simple pour vérifier que le service répond.
- Expose la variante de schéma active (titre + champs requis).
"""

router = APIRouter()


@router.get("/health")
def health(request: Request):
    schema = request.app.state.schema
    return {
        "status": "ok",
        "env": settings.ENV,
        "schema": schema.title,
        "required": sorted(schema.required),
    }
