import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from postguard.core.errors import DocumentParseError, SchemaLoadError
from postguard.schemas import schema_definition
from postguard.validation import load_schema, parse_document

"""
Script CLI: validate_file

Rôle (fonctionnel) :
- Valide un ou plusieurs fichiers JSON contre le schéma embarqué, sans démarrer le serveur.
- Affiche "OK <fichier>" ou chaque violation préfixée par le fichier.

Usage typique :
- python -m scripts.validate_file post.json autre.json
- cat post.json | python -m scripts.validate_file -

Codes de sortie :
- 0 : tous les documents sont valides
- 1 : au moins une violation
- 2 : fichier illisible / non JSON, ou schéma invalide
"""

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def _read(path: str, stdin: TextIO) -> bytes:
    if path == "-":
        # octets bruts : l’encodage est détecté par parse_document, comme pour les fichiers
        buffer = getattr(stdin, "buffer", None)
        if buffer is not None:
            return buffer.read()
        return stdin.read().encode("utf-8")
    return Path(path).read_bytes()


def main(argv: Optional[List[str]] = None, stdin: TextIO = sys.stdin, out: TextIO = sys.stdout) -> int:
    parser = argparse.ArgumentParser(description="Valide des posts JSON contre le schéma embarqué.")
    parser.add_argument("paths", nargs="+", help="fichiers JSON ('-' pour stdin)")
    parser.add_argument(
        "--require-author-email",
        action="store_true",
        help="active l’exigence historique du champ author_email",
    )
    args = parser.parse_args(argv)

    try:
        schema = load_schema(schema_definition(args.require_author_email))
    except SchemaLoadError as exc:
        print(f"schema error: {exc}", file=out)
        return EXIT_ERROR

    code = EXIT_OK
    for path in args.paths:
        try:
            document = parse_document(_read(path, stdin))
        except (OSError, UnicodeError, DocumentParseError) as exc:
            print(f"{path}: {exc}", file=out)
            code = EXIT_ERROR
            continue

        result = schema.validate(document)
        if result.valid:
            print(f"OK {path}", file=out)
            continue

        for message in result.errors:
            print(f"{path}: {message}", file=out)
        if code == EXIT_OK:
            code = EXIT_INVALID

    return code


if __name__ == "__main__":
    sys.exit(main())
