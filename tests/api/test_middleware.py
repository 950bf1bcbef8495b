"""
Tests for API middleware — error mapping and the catch-all handler.
"""

from __future__ import annotations

import json

from fastapi.testclient import TestClient

from termdict.api.middleware.errors import (
    ERROR_CODE_TO_STATUS,
    handle_error,
    problem_response,
    status_for_error_code,
)
from termdict.ops.result import OperationResult


class TestErrorCodeMapping:
    def test_known_codes(self):
        assert status_for_error_code("NOT_FOUND") == 404
        assert status_for_error_code("INTERNAL") == 500

    def test_unknown_code_defaults_to_500(self):
        assert status_for_error_code("SOMETHING_ELSE") == 500

    def test_mapping_completeness(self):
        for code, status in ERROR_CODE_TO_STATUS.items():
            assert 400 <= status <= 599, f"{code} -> {status}"


class TestProblemResponse:
    def test_body(self):
        resp = problem_response(status=404, title="Word not found", instance="/api/words/x")
        assert resp.status_code == 404
        assert json.loads(resp.body) == {
            "type": "about:blank",
            "title": "Word not found",
            "status": 404,
            "detail": "",
            "instance": "/api/words/x",
        }

    def test_handle_error_uses_result_code(self):
        resp = handle_error(OperationResult.fail("NOT_FOUND", "Word not found"))
        assert resp.status_code == 404
        assert json.loads(resp.body)["title"] == "Word not found"


class TestUnhandledExceptions:
    def _client(self, app):
        @app.get("/api/explode")
        def explode():
            raise RuntimeError("kaboom")

        # The catch-all asset route was registered first; move the new route ahead of it.
        app.router.routes.insert(0, app.router.routes.pop())
        return TestClient(app, raise_server_exceptions=False)

    def test_generic_500(self, app):
        resp = self._client(app).get("/api/explode")
        assert resp.status_code == 500
        body = resp.json()
        assert body["title"] == "Internal Server Error"
        assert "kaboom" not in body["detail"]

    def test_debug_exposes_message(self, app):
        app.state.settings = app.state.settings.model_copy(update={"debug": True})
        resp = self._client(app).get("/api/explode")
        assert resp.json()["detail"] == "kaboom"
