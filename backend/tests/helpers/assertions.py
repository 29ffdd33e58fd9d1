"""Envelope assertions for API responses."""

from __future__ import annotations

from typing import Any

SUCCESS_KEYS = {"statusCode", "data", "message", "success"}
FAILURE_KEYS = {"statusCode", "message", "errors", "data", "success"}


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``."""

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_success(resp, status: int = 200) -> Any:
    """Check the success envelope and return its ``data``.

    Parameters
    ----------
    resp:
        Werkzeug test response.
    status:
        Expected HTTP status, mirrored in ``statusCode``.
    """

    body = resp.get_json()
    assert resp.status_code == status, body
    assert_json_keys(body, SUCCESS_KEYS)
    assert body["statusCode"] == status
    assert body["success"] is True
    return body["data"]


def assert_failure(resp, status: int, message: str | None = None) -> dict:
    """Check the failure envelope; optionally match a message fragment."""

    body = resp.get_json()
    assert resp.status_code == status, body
    assert_json_keys(body, FAILURE_KEYS)
    assert body["statusCode"] == status
    assert body["success"] is False
    assert body["data"] is None
    assert isinstance(body["errors"], list)
    if message is not None:
        assert message in body["message"], body["message"]
    return body
