"""Tests for the HTTP client wrapper."""

from __future__ import annotations

import json
import unittest
from unittest import mock

import requests

from bitbucket_pr_cli.client import BitbucketClient
from bitbucket_pr_cli.exceptions import ApiError


def _response(status: int, body: object | None = None, url: str = "https://api.example.org/2.0/x") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = url
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return response


class BitbucketClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = mock.Mock()
        self.session.headers = {}
        self.client = BitbucketClient(
            "dev",
            "app-pass",
            base_url="https://api.example.org/2.0/",
            timeout=7,
            session=self.session,
        )

    def test_session_configured_with_basic_auth(self) -> None:
        self.assertEqual(self.session.auth, ("dev", "app-pass"))
        self.assertEqual(self.session.headers["Content-Type"], "application/json")

    def test_get_resolves_relative_path(self) -> None:
        self.session.request.return_value = _response(200, {"values": []})

        data = self.client.get("/repositories/acme/svc-api/pullrequests", params={"state": "OPEN"})

        self.assertEqual(data, {"values": []})
        self.session.request.assert_called_once_with(
            "GET",
            "https://api.example.org/2.0/repositories/acme/svc-api/pullrequests",
            timeout=7,
            params={"state": "OPEN"},
        )

    def test_absolute_url_used_verbatim(self) -> None:
        self.session.request.return_value = _response(200, {"values": []})
        cursor = "https://api.example.org/2.0/repositories/acme/svc-api/refs/branches?page=2"

        self.client.get(cursor)

        self.assertEqual(self.session.request.call_args.args[1], cursor)

    def test_post_sends_json_body(self) -> None:
        self.session.request.return_value = _response(201, {"id": 1})

        self.assertEqual(self.client.post("repositories/acme/svc-api/pullrequests", {"title": "x"}), {"id": 1})
        self.assertEqual(self.session.request.call_args.kwargs["json"], {"title": "x"})

    def test_empty_body_returns_empty_dict(self) -> None:
        self.session.request.return_value = _response(204)

        self.assertEqual(self.client.post("/anything", {}), {})

    def test_http_error_carries_remote_message(self) -> None:
        self.session.request.return_value = _response(400, {"type": "error", "error": {"message": "Branch not found"}})

        with self.assertRaises(ApiError) as ctx:
            self.client.get("/repositories/acme/svc-api/refs/branches")

        self.assertEqual(ctx.exception.message, "Branch not found")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_http_error_without_json_uses_transport_message(self) -> None:
        response = _response(502)
        response._content = b"<html>bad gateway</html>"
        self.session.request.return_value = response

        with self.assertRaises(ApiError) as ctx:
            self.client.get("/x")

        self.assertIn("502", str(ctx.exception))
        self.assertEqual(ctx.exception.status_code, 502)

    def test_network_failure_becomes_api_error(self) -> None:
        self.session.request.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(ApiError) as ctx:
            self.client.get("/x")

        self.assertEqual(str(ctx.exception), "connection refused")
        self.assertIsNone(ctx.exception.status_code)


if __name__ == "__main__":
    unittest.main()
