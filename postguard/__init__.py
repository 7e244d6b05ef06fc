"""
postguard

Package racine du service PostGuard (validation JSON en amont d’un handler HTTP).

Rôle (fonctionnel) :
- Contient tout le code applicatif (API, middleware de validation, schéma embarqué).
- Sert de point d’ancrage pour les imports : `from postguard...`

Organisation (haute-level) :
- postguard.api        : routes FastAPI (handler aval, health, assemblage du routeur)
- postguard.core       : briques transverses (settings, errors, logs, request_id)
- postguard.schemas    : définition textuelle du schéma "post" (JSON Schema draft-04)
- postguard.validation : chargement du schéma + middleware de validation
"""

__version__ = "0.1.0"
