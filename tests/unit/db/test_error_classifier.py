"""Tests unitarios para la clasificación de respuestas de la Storefront API."""

import asyncio
import json

import aiohttp

from storefront.domain.results import BackendError, Ok, TransportFailure
from storefront.db.shopify_clients.error_classifier import classify_exception, classify_response

QUERY = "query getMenu { menu { items { title } } }"


class TestClassifyResponse:
    """Tests para classify_response."""

    def test_successful_body_is_ok(self):
        body = {"data": {"menu": None}}
        outcome = classify_response(200, body, QUERY)
        assert isinstance(outcome, Ok)
        assert outcome.value == body

    def test_non_mapping_body_is_transport_failure(self):
        """Debe tratar un cuerpo que no es objeto como fallo de transporte."""
        outcome = classify_response(200, ["unexpected"], QUERY)
        assert isinstance(outcome, TransportFailure)
        assert outcome.cause == "malformed response"

    def test_only_first_error_is_surfaced(self):
        """Debe reportar solo el primer error del arreglo."""
        body = {
            "errors": [
                {"message": "Throttled", "extensions": {"code": "THROTTLED"}},
                {"message": "Second error"},
            ]
        }
        outcome = classify_response(200, body, QUERY)

        assert isinstance(outcome, BackendError)
        assert outcome.message == "Throttled"
        assert outcome.cause == "THROTTLED"
        assert outcome.status == 500
        assert outcome.query == QUERY

    def test_error_cause_and_status_are_used_when_present(self):
        body = {"errors": [{"message": "Not allowed", "cause": "ACCESS_DENIED", "status": 403}]}
        outcome = classify_response(200, body, QUERY)
        assert outcome.cause == "ACCESS_DENIED"
        assert outcome.status == 403

    def test_error_without_cause_is_unknown(self):
        outcome = classify_response(200, {"errors": [{"message": "Boom"}]}, QUERY)
        assert outcome.cause == "unknown"

    def test_string_errors_use_http_status(self):
        """Debe mapear errores de autenticación en formato string."""
        outcome = classify_response(401, {"errors": "[API] Invalid API key or access token"}, QUERY)
        assert isinstance(outcome, BackendError)
        assert outcome.status == 401

    def test_http_error_without_errors(self):
        outcome = classify_response(502, {}, QUERY)
        assert isinstance(outcome, BackendError)
        assert outcome.message == "HTTP 502"
        assert outcome.status == 502


class TestClassifyException:
    """Tests para classify_exception."""

    def test_timeout(self):
        assert classify_exception(asyncio.TimeoutError(), QUERY).cause == "timeout"

    def test_connection_error(self):
        outcome = classify_exception(aiohttp.ClientConnectionError("refused"), QUERY)
        assert isinstance(outcome, TransportFailure)
        assert outcome.cause.startswith("connection error")
        assert outcome.query == QUERY

    def test_decode_error(self):
        outcome = classify_exception(json.JSONDecodeError("Expecting value", "<html>", 0), QUERY)
        assert outcome.cause.startswith("invalid JSON response")
