"""
Tests for JSON response writing and error rendering.
"""

import math

import pytest

from fastapi import FastAPI
from fastapi.testclient import TestClient

from user_service.errors import AuthError, MethodError, SerializationError, ValidationError
from user_service.models import UserResponse
from user_service.responses import (
    INTERNAL_ERROR_BODY,
    error_response,
    escape_html,
    register_exception_handlers,
    write_json,
)


class TestWriteJson:
    
    def test_writes_status_and_compact_body(self):
        response = write_json(200, {"user_id": 5, "tags": ["a", "b"]})
        assert response.status_code == 200
        assert response.body == b'{"user_id":5,"tags":["a","b"]}\n'
        assert response.headers["content-type"] == "application/json"
    
    def test_dumps_pydantic_models(self):
        response = write_json(200, UserResponse(user_id=-3))
        assert response.body == b'{"user_id":-3}\n'
    
    def test_extra_headers(self):
        response = write_json(405, {"error": "x"}, headers={"Allow": "GET"})
        assert response.headers["allow"] == "GET"
    
    def test_escapes_html_characters(self):
        response = write_json(201, {"created": "<script>&</script>"})
        assert response.body == b'{"created":"\\u003cscript\\u003e\\u0026\\u003c/script\\u003e"}\n'
    
    def test_keeps_non_ascii(self):
        response = write_json(201, {"created": "Zoë"})
        assert response.body == '{"created":"Zoë"}\n'.encode("utf-8")
    
    def test_escapes_line_separators(self):
        assert escape_html("a\u2028b\u2029c") == "a\\u2028b\\u2029c"
    
    def test_unserializable_value_falls_back_to_500(self, caplog):
        response = write_json(200, {"value": object()}, headers={"Allow": "GET"})
        assert response.status_code == 500
        assert response.body == INTERNAL_ERROR_BODY
        assert response.headers["content-type"] == "application/json"
        assert "allow" not in response.headers
        assert any("Failed to encode" in m for m in caplog.messages)
    
    def test_nan_falls_back_to_500(self):
        response = write_json(200, {"value": math.nan})
        assert response.status_code == 500
        assert response.body == b'{"error":"internal error"}\n'
    
    def test_error_response(self):
        response = error_response(400, "invalid id")
        assert response.status_code == 400
        assert response.body == b'{"error":"invalid id"}\n'


class TestExceptionHandlers:
    """ServiceError subclasses render as {"error": ...} with their status."""
    
    def _client(self, exc):
        app = FastAPI()
        register_exception_handlers(app)
        
        @app.get("/boom")
        def boom():
            raise exc
        
        return TestClient(app)
    
    def test_auth_error(self):
        response = self._client(AuthError()).get("/boom")
        assert response.status_code == 401
        assert response.json() == {"error": "unauthorized"}
    
    def test_validation_error(self):
        response = self._client(ValidationError("invalid name")).get("/boom")
        assert response.status_code == 400
        assert response.json() == {"error": "invalid name"}
    
    def test_method_error_sets_allow(self):
        response = self._client(MethodError(allow="GET, POST")).get("/boom")
        assert response.status_code == 405
        assert response.headers["allow"] == "GET, POST"
        assert response.json() == {"error": "method not allowed"}
    
    def test_serialization_error(self):
        response = self._client(SerializationError()).get("/boom")
        assert response.status_code == 500
        assert response.json() == {"error": "internal error"}


class TestErrorTaxonomy:
    
    def test_validation_error_requires_a_message(self):
        with pytest.raises(TypeError):
            ValidationError()
    
    def test_validation_error_carries_its_message(self):
        error = ValidationError("invalid id")
        assert error.status_code == 400
        assert error.message == "invalid id"
        assert str(error) == "invalid id"
    
    def test_default_messages(self):
        assert AuthError().message == "unauthorized"
        assert SerializationError().message == "internal error"
        assert MethodError(allow="GET").message == "method not allowed"
