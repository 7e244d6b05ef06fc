"""
postguard.validation

Validation des payloads entrants contre le schéma embarqué.

- loader     : compilation du schéma (fail fast) + évaluation d’un document
- middleware : composition validate(schema, handler) -> handler
"""

from .loader import CompiledSchema, ValidationResult, format_violation, load_schema
from .middleware import Handler, parse_document, read_body, validate

__all__ = [
    "CompiledSchema",
    "Handler",
    "ValidationResult",
    "format_violation",
    "load_schema",
    "parse_document",
    "read_body",
    "validate",
]
