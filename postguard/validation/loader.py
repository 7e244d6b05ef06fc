from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, FrozenSet, Iterable, Mapping, Tuple

from jsonschema import Draft4Validator
from jsonschema.exceptions import SchemaError, ValidationError

from postguard.core.errors import SchemaLoadError, ValidationMachineryError

"""
Validation Loader.

Rôle (fonctionnel) :
- Compile une fois, au démarrage, la définition textuelle du schéma en validateur prêt à l’emploi.
- Échoue immédiatement (SchemaLoadError) si la définition est invalide : le service ne doit
  jamais servir de trafic sans schéma chargé.
- Évalue un document JSON et retourne TOUTES les violations (pas seulement la première),
  dans un ordre déterministe.

Notes :
- Le moteur de validation est `jsonschema` (draft-04, comme la définition embarquée).
- CompiledSchema est immuable : partagé sans verrou entre requêtes concurrentes.
"""

log = logging.getLogger("postguard.schema")

ROOT_FIELD = "(root)"


@dataclass(frozen=True)
class ValidationResult:
    """Résultat éphémère d’une validation (1 message par contrainte violée)."""
    valid: bool
    errors: Tuple[str, ...] = ()

    @classmethod
    def from_violations(cls, violations: Iterable[ValidationError]) -> "ValidationResult":
        messages = tuple(format_violation(v) for v in violations)
        return cls(valid=not messages, errors=messages)


def format_violation(error: ValidationError) -> str:
    """
    Message lisible : "<champ>: <description>".

    - champ = chemin pointé de la valeur fautive (ex : "title", "tags.1")
    - "(root)" pour les violations au niveau du document (champ requis manquant, type racine…)
    """
    path = ".".join(str(p) for p in error.absolute_path) or ROOT_FIELD
    return f"{path}: {error.message}"


def _violation_order(error: ValidationError) -> Tuple[str, str]:
    # chemin JSON puis mot-clé ; sorted() est stable pour le reste
    return (error.json_path, str(error.validator))


@dataclass(frozen=True)
class CompiledSchema:
    """
    Schéma compilé (lecture seule après chargement).

    - title      : titre déclaré par le schéma ("post")
    - properties : champ -> contraintes déclarées
    - required   : noms des champs requis
    """
    title: str
    properties: Mapping[str, Mapping[str, Any]]
    required: FrozenSet[str]
    _validator: Draft4Validator = field(repr=False, compare=False)

    def validate(self, document: Any) -> ValidationResult:
        """
        Vérifie `document` contre toutes les contraintes du schéma.

        Une violation n’est pas une erreur : elle est portée par le ValidationResult.
        Lève ValidationMachineryError uniquement si la librairie elle-même échoue.
        """
        try:
            violations = sorted(self._validator.iter_errors(document), key=_violation_order)
        except Exception as exc:
            raise ValidationMachineryError(f"validation engine failure: {exc}") from exc
        return ValidationResult.from_violations(violations)


def load_schema(definition: str) -> CompiledSchema:
    """
    Compile une définition de schéma (texte JSON Schema draft-04).

    Lève SchemaLoadError si le texte n’est pas du JSON, pas un objet, ou pas un schéma valide.
    """
    try:
        doc = json.loads(definition)
    except json.JSONDecodeError as exc:
        log.critical("schema definition is not valid JSON: %s", exc)
        raise SchemaLoadError(f"schema definition is not valid JSON: {exc}") from exc

    if not isinstance(doc, dict):
        log.critical("schema definition must be a JSON object")
        raise SchemaLoadError("schema definition must be a JSON object")

    try:
        Draft4Validator.check_schema(doc)
    except SchemaError as exc:
        log.critical("invalid schema definition: %s", exc.message)
        raise SchemaLoadError(f"invalid schema definition: {exc.message}") from exc

    properties = {
        name: MappingProxyType(dict(constraints))
        for name, constraints in (doc.get("properties") or {}).items()
    }
    schema = CompiledSchema(
        title=str(doc.get("title", "")),
        properties=MappingProxyType(properties),
        required=frozenset(doc.get("required") or ()),
        _validator=Draft4Validator(doc),
    )

    log.info("schema loaded", extra={"required": sorted(schema.required)})
    return schema
