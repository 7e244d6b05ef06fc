import asyncio
import json
import logging

import pytest
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from postguard.core.errors import DocumentParseError, ValidationMachineryError
from postguard.validation import ValidationResult, middleware, parse_document, validate


def make_request(body: bytes = b"", method: str = "POST", receive=None) -> Request:
    scope = {
        "type": "http",
        "method": method,
        "path": "/",
        "root_path": "",
        "scheme": "http",
        "query_string": b"",
        "headers": [(b"content-type", b"application/json")],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 5000),
    }

    if receive is None:
        sent = False

        async def receive():
            nonlocal sent
            if sent:
                return {"type": "http.disconnect"}
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


class RecordingHandler:
    def __init__(self):
        self.calls = []

    async def __call__(self, request: Request):
        self.calls.append(await request.body())
        return PlainTextResponse("valid request")


def run(handler, request):
    return asyncio.run(handler(request))


def test_valid_body_is_forwarded_with_original_body(post_schema, valid_post):
    downstream = RecordingHandler()
    body = json.dumps(valid_post).encode()

    response = run(validate(post_schema, downstream), make_request(body))

    assert response.status_code == 200
    assert response.body == b"valid request"
    assert downstream.calls == [body]


def test_any_method_goes_through_validation(post_schema, valid_post):
    downstream = RecordingHandler()
    handler = validate(post_schema, downstream)

    for method in ("GET", "PUT", "DELETE"):
        response = run(handler, make_request(json.dumps(valid_post).encode(), method=method))
        assert response.status_code == 200

    assert len(downstream.calls) == 3


def test_invalid_body_is_rejected_without_calling_downstream(post_schema):
    downstream = RecordingHandler()
    body = json.dumps({"title": "nope", "post_type": "draft"}).encode()

    response = run(validate(post_schema, downstream), make_request(body))

    assert response.status_code == 400
    assert response.media_type.startswith("application/json")
    payload = json.loads(response.body)
    assert list(payload) == ["errors"]
    assert len(payload["errors"]) == 4
    assert downstream.calls == []


def test_rejection_lists_same_messages_as_schema(post_schema):
    doc = {"title": "", "date": 1, "body": "b", "post_type": "original", "tags": [None]}

    response = run(validate(post_schema, RecordingHandler()), make_request(json.dumps(doc).encode()))

    assert json.loads(response.body) == {"errors": list(post_schema.validate(doc).errors)}


def test_unparseable_body_is_server_error(post_schema):
    downstream = RecordingHandler()
    handler = validate(post_schema, downstream)

    for body in (b"", b"not json", b'{"title": ', b"\xff\xfe\xfa"):
        response = run(handler, make_request(body))
        assert response.status_code == 500
        assert response.body == b""

    assert downstream.calls == []


def test_body_read_io_error_is_server_error(post_schema):
    downstream = RecordingHandler()

    async def broken_receive():
        raise OSError("connection reset")

    response = run(validate(post_schema, downstream), make_request(receive=broken_receive))

    assert response.status_code == 500
    assert response.body == b""
    assert downstream.calls == []


def test_client_disconnect_is_server_error(post_schema):
    async def disconnect():
        return {"type": "http.disconnect"}

    response = run(validate(post_schema, RecordingHandler()), make_request(receive=disconnect))

    assert response.status_code == 500


def test_validation_engine_failure_is_server_error(valid_post):
    class BrokenSchema:
        def validate(self, document):
            raise ValidationMachineryError("boom")

    downstream = RecordingHandler()
    response = run(validate(BrokenSchema(), downstream), make_request(json.dumps(valid_post).encode()))

    assert response.status_code == 500
    assert downstream.calls == []


def test_error_serialization_failure_is_server_error(monkeypatch, post_schema):
    def unserializable(messages, status_code=400):
        raise ValueError("cannot encode")

    monkeypatch.setattr(middleware, "errors_response", unserializable)

    response = run(validate(post_schema, RecordingHandler()), make_request(b"{}"))

    assert response.status_code == 500
    assert response.body == b""


def test_alternate_schema_can_be_injected():
    class AcceptAll:
        def validate(self, document):
            return ValidationResult(valid=True)

    downstream = RecordingHandler()
    response = run(validate(AcceptAll(), downstream), make_request(b"[1, 2, 3]"))

    assert response.status_code == 200
    assert downstream.calls == [b"[1, 2, 3]"]


def test_parse_document_wraps_oversized_integer(oversized_int_body):
    with pytest.raises(DocumentParseError):
        parse_document(oversized_int_body)


def test_oversized_integer_takes_unparseable_branch(post_schema, oversized_int_body, caplog):
    downstream = RecordingHandler()

    with caplog.at_level(logging.WARNING, logger="postguard.validation"):
        response = run(validate(post_schema, downstream), make_request(oversized_int_body))

    assert response.status_code == 500
    assert response.body == b""
    assert downstream.calls == []
    assert any(r.getMessage().startswith("unparseable body") for r in caplog.records)
