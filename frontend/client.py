"""
HTTP client for the course reverse search API.

Validates the course code with the same shared check the API uses, posts it
to POST /search and turns the response into a SearchOutcome the UI can
render directly.

A request that never reaches the server (connection refused, timeout) is
reported differently from an HTTP error response.
"""

import os
from dataclasses import dataclass, field
from typing import Any

import requests

from catalog.course_code import is_valid_course_code

API_URL = os.getenv("API_URL", "http://localhost:3000/search")
TIMEOUT = 30

FORMAT_HINT   = 'Input does not match the expected format. Try something like "CNIT 120".'
NETWORK_ERROR = "Network error. Could not reach the server."
BAD_RESPONSE  = "Error: Unexpected response from the server."


@dataclass
class SearchOutcome:
    ok: bool
    message: str = ""
    results: list[dict[str, Any]] = field(default_factory=list)


def format_result(row: dict[str, Any]) -> str:
    """'Network Security — Cybersecurity'; a missing name renders as ''."""
    degree = row.get("degree_name") or ""
    certificate = row.get("certificate_name") or ""
    return f"{degree} — {certificate}"


def _error_message(resp: requests.Response) -> str:
    try:
        error = resp.json().get("error")
    except (ValueError, AttributeError):
        error = None
    return f"Error: {error or resp.reason}"


def search(course_code: str, api_url: str = API_URL, timeout: float = TIMEOUT) -> SearchOutcome:
    if not is_valid_course_code(course_code):
        return SearchOutcome(ok=False, message=FORMAT_HINT)

    try:
        resp = requests.post(api_url, json={"courseCode": course_code.strip()}, timeout=timeout)
    except requests.exceptions.RequestException:
        return SearchOutcome(ok=False, message=NETWORK_ERROR)

    if not resp.ok:
        return SearchOutcome(ok=False, message=_error_message(resp))

    try:
        results = resp.json()["results"]
    except (ValueError, KeyError, TypeError):
        return SearchOutcome(ok=False, message=BAD_RESPONSE)
    return SearchOutcome(ok=True, results=results)
