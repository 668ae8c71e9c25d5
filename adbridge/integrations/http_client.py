"""
HTTP client (stdlib) for the platform API clients.

- Stdlib-only (urllib).
- One attempt per request: no retries, no backoff. A caller wanting resilience
  wraps ``distribute`` with its own policy.
- Mock-friendly: tests patch ``urllib.request.urlopen`` or inject a fake with
  the same ``request`` method.
"""

from __future__ import annotations

import json
import socket
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol


class HttpClientError(RuntimeError):
    pass


class HttpTimeoutError(HttpClientError):
    pass


class HttpResponseError(HttpClientError):
    def __init__(self, status: int, body: bytes, message: str = "HTTP error"):
        super().__init__(f"{message} (status={status})")
        self.status = status
        self.body = body

    def json(self) -> Any:
        try:
            return json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None


@dataclass(frozen=True)
class HttpRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout_s: float = 30.0


@dataclass(frozen=True)
class HttpResponse:
    status: int
    headers: Dict[str, str]
    body: bytes

    def json(self) -> Any:
        if not self.body:
            return {}
        return json.loads(self.body.decode("utf-8"))

    def header(self, name: str) -> Optional[str]:
        low = name.lower()
        for k, v in self.headers.items():
            if k.lower() == low:
                return v
        return None


class HttpTransport(Protocol):
    def request(self, req: HttpRequest) -> HttpResponse: ...


def with_query(url: str, params: Optional[Mapping[str, Any]]) -> str:
    if not params:
        return url
    sep = "&" if "?" in url else "?"
    return url + sep + urllib.parse.urlencode({k: v for k, v in params.items() if v is not None})


class SimpleHttpClient:
    """
    Minimal HTTP client over urllib.

    Raises HttpResponseError for any status >= 400 (body preserved so callers can
    extract the platform message), HttpTimeoutError on socket timeouts and
    HttpClientError for every other transport failure.
    """

    def __init__(
        self,
        *,
        timeout_s: float = 30.0,
        user_agent: str = "adbridge-http/1.0",
    ):
        if timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        self.timeout_s = timeout_s
        self.user_agent = user_agent

    @classmethod
    def from_settings(cls) -> "SimpleHttpClient":
        from adbridge.infra.settings import get_settings

        s = get_settings()
        return cls(
            timeout_s=float(s.get("http.timeout_s", 30.0)),
            user_agent=str(s.get("http.user_agent", "adbridge-http/1.0")),
        )

    def request(self, req: HttpRequest) -> HttpResponse:
        headers = dict(req.headers or {})
        headers.setdefault("User-Agent", self.user_agent)

        try:
            ureq = urllib.request.Request(
                url=req.url,
                data=req.body,
                method=req.method.upper(),
                headers=headers,
            )
            with urllib.request.urlopen(ureq, timeout=req.timeout_s) as resp:
                status = int(getattr(resp, "status", 200))
                # resp.headers may be an HTTPMessage; normalize to dict
                hdrs_obj = getattr(resp, "headers", None)
                resp_headers = dict(hdrs_obj.items()) if hasattr(hdrs_obj, "items") else dict(hdrs_obj or {})
                body = resp.read() if hasattr(resp, "read") else b""
        except urllib.error.HTTPError as e:
            status = int(getattr(e, "code", 500))
            body = e.read() if hasattr(e, "read") else b""
            raise HttpResponseError(status=status, body=body, message="Upstream rejected") from e
        except (socket.timeout, TimeoutError) as e:
            raise HttpTimeoutError("timeout") from e
        except urllib.error.URLError as e:
            if isinstance(getattr(e, "reason", None), (socket.timeout, TimeoutError)):
                raise HttpTimeoutError("timeout") from e
            raise HttpClientError(f"request failed: {e.reason}") from e
        except (ValueError, TypeError, OSError) as e:
            raise HttpClientError(f"request failed: {e}") from e

        if status >= 400:
            raise HttpResponseError(status=status, body=body, message="Upstream rejected")
        return HttpResponse(status=status, headers=resp_headers, body=body)

