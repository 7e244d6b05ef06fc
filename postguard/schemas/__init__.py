"""
postguard.schemas

Définitions textuelles des schémas JSON embarqués (JSON Schema draft-04).

Rôle (fonctionnel) :
- Porte le contrat HTTP du payload "post" sous forme de texte littéral.
- Aucune lecture de fichier ni fetch réseau : le texte est compilé au démarrage
  par postguard.validation.loader.
"""

from .post import AUTHOR_EMAIL_FIELD, POST_SCHEMA_JSON, schema_definition

__all__ = ["AUTHOR_EMAIL_FIELD", "POST_SCHEMA_JSON", "schema_definition"]
