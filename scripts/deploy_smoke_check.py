"""Post-deploy smoke checks executed from the app container."""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from uuid import uuid4

BASE_URL = os.getenv("SMOKE_BASE_URL", "http://localhost:8000").rstrip("/")
API_PREFIX = "/api/v1"


def request(
    path: str,
    *,
    method: str = "GET",
    body: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    expected: int = 200,
) -> bytes:
    payload = None
    req_headers = {"Accept": "application/json"}
    if headers:
        req_headers.update(headers)
    if body is not None:
        payload = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"

    request_obj = urllib.request.Request(
        f"{BASE_URL}{path}",
        data=payload,
        method=method,
        headers=req_headers,
    )
    try:
        with urllib.request.urlopen(request_obj, timeout=30) as response:
            content = response.read()
            status = response.getcode()
    except urllib.error.HTTPError as exc:  # pragma: no cover - runtime smoke script
        body_text = exc.read().decode("utf-8", errors="ignore")
        raise RuntimeError(f"{method} {path} -> {exc.code}: {body_text}") from exc

    if status != expected:
        raise RuntimeError(f"{method} {path} -> {status}, expected {expected}")
    return content


def main() -> None:
    for endpoint in ["/health", "/ready", "/docs", "/metrics"]:
        request(endpoint, expected=200)

    experts_page = json.loads(request(f"{API_PREFIX}/experts?limit=5").decode("utf-8"))
    if not isinstance(experts_page.get("items"), list):
        raise RuntimeError("Experts listing did not return a page")
    request(f"{API_PREFIX}/experts/categories", expected=200)

    suffix = uuid4().hex[:10]
    request(
        f"{API_PREFIX}/community/waitlist",
        method="POST",
        body={"email": f"deploy-smoke-{suffix}@expertbooking.dev", "reason": "smoke"},
        expected=201,
    )

    access_token = os.getenv("SMOKE_ACCESS_TOKEN")
    if access_token:
        auth = {"Authorization": f"Bearer {access_token}"}
        request(f"{API_PREFIX}/identity/profiles/me", headers=auth, expected=200)
        request(f"{API_PREFIX}/sessions/active", headers=auth, expected=200)

    print("Smoke checks passed.")


if __name__ == "__main__":
    main()
