import sys
from pathlib import Path

import pytest

# Add repo root so "import scripts...." works
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from postguard.schemas import POST_SCHEMA_JSON  # noqa: E402
from postguard.validation import load_schema  # noqa: E402


@pytest.fixture(scope="session")
def post_schema():
    return load_schema(POST_SCHEMA_JSON)


@pytest.fixture
def valid_post():
    return {
        "title": "Hello",
        "date": "2023-01-01",
        "body": "text",
        "post_type": "original",
    }


@pytest.fixture
def oversized_int_body():
    # entier au-delà de la limite de conversion str -> int de l’interpréteur
    limit = getattr(sys, "get_int_max_str_digits", lambda: 0)()
    if not limit:
        pytest.skip("interpreter has no int digit limit")
    return b'{"views": ' + b"9" * (limit + 1) + b"}"
