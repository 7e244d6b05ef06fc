from __future__ import annotations

import json

"""
Schéma "post" (article de blog).

Rôle (fonctionnel) :
- Définit les contraintes du payload accepté sur "/" :
  - title     : string, 1..50 caractères, commence par une majuscule
  - date      : string
  - body      : string
  - views     : integer >= 1
  - post_type : "cross-post" | "original"
  - tags      : array de strings
- Champs requis : title, date, body, post_type.

Variante `author_email` :
- La définition historique exigeait aussi `author_email`, jamais déclaré dans `properties`.
- Conservée comme choix de configuration explicite (REQUIRE_AUTHOR_EMAIL), désactivée par défaut.
"""

AUTHOR_EMAIL_FIELD = "author_email"

POST_SCHEMA_JSON = """{
  "$schema": "http://json-schema.org/draft-04/schema#",
  "type": "object",
  "title": "post",
  "description": "a blog post",
  "properties": {
    "title": {
      "type": "string",
      "minLength": 1,
      "maxLength": 50,
      "pattern": "^[A-Z].*"
    },
    "date": {
      "type": "string"
    },
    "body": {
      "type": "string"
    },
    "views": {
      "type": "integer",
      "minimum": 1
    },
    "post_type": {
      "type": "string",
      "enum": ["cross-post", "original"]
    },
    "tags": {
      "type": "array",
      "items": {
        "type": "string"
      }
    }
  },
  "required": ["title", "date", "body", "post_type"]
}"""


def schema_definition(require_author_email: bool = False) -> str:
    """Texte du schéma à compiler, avec ou sans l’exigence `author_email`."""
    if not require_author_email:
        return POST_SCHEMA_JSON

    doc = json.loads(POST_SCHEMA_JSON)
    required = list(doc["required"])
    # Même position que dans la définition historique (avant post_type)
    required.insert(required.index("post_type"), AUTHOR_EMAIL_FIELD)
    doc["required"] = required
    return json.dumps(doc, indent=2)
