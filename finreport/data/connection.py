from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from finreport.config import AppConfig
from finreport.data.errors import Cancelled, NetworkUnreachable

logger = logging.getLogger("finreport.data.connection")


class CancelToken:
    """
    Caller-owned cancellation handle.

    Checked before a request is sent and again when it returns; a cancelled
    call raises Cancelled instead of producing a result.
    """

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise Cancelled("Request was cancelled")


@dataclass(frozen=True)
class CallResult:
    ok: bool
    data: Any = None
    status_code: Optional[int] = None
    error: Optional[NetworkUnreachable] = None


class HttpClient:
    """
    Thin requests wrapper for the reporting API.

    Never raises for transport problems: connection errors, timeouts and non-2xx
    answers come back as CallResult(ok=False). A 2xx answer is a success even
    when its body is not JSON; the raw text is passed on and callers that need
    a particular shape reject it themselves.
    """

    def __init__(self, cfg: AppConfig, session: Optional[requests.Session] = None):
        self.cfg = cfg
        self.session = session or requests.Session()
        self._base_url = cfg.api_url.rstrip("/")
        self._headers = {"Content-Type": "application/json", "Accept": "application/json"}

    def url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        timeout_ms: Optional[int] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> CallResult:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        method = method.upper()
        url = self.url(path)
        timeout_s = timeout_ms / 1000.0 if timeout_ms is not None else self.cfg.api_timeout_s
        logger.debug(f"[{method}] {url} {json if json is not None else ''}")

        result = self._send(method, url, json, timeout_s)

        # Whatever happened on the wire, a cancelled call must not report back
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        return result

    def _send(self, method: str, url: str, payload: Any, timeout_s: float) -> CallResult:
        try:
            resp = self.session.request(method, url, json=payload, headers=self._headers, timeout=timeout_s)
            resp.raise_for_status()
        except requests.Timeout:
            logger.warning(f"[{method}] {url} timed out after {timeout_s:.1f}s")
            return CallResult(ok=False, error=NetworkUnreachable(f"Request to {url} timed out"))
        except requests.HTTPError as e:
            code = e.response.status_code if e.response is not None else None
            logger.warning(f"[{method}] {url} returned {code}")
            return CallResult(ok=False, status_code=code, error=NetworkUnreachable(f"{url} returned {code}", status_code=code))
        except requests.ConnectionError:
            logger.warning(f"[{method}] {url} server is not responding")
            return CallResult(ok=False, error=NetworkUnreachable(f"Server at {self._base_url} is not responding"))
        except requests.RequestException as e:
            logger.warning(f"[{method}] {url} request failed: {type(e).__name__}")
            return CallResult(ok=False, error=NetworkUnreachable(f"Request to {url} failed: {e}"))

        logger.debug(f"[{method}] {url} {resp.status_code}")
        if not resp.content:
            return CallResult(ok=True, data=None, status_code=resp.status_code)
        try:
            data = resp.json()
        except ValueError:
            logger.debug(f"[{method}] {url} answered with a body that is not JSON")
            data = resp.text
        return CallResult(ok=True, data=data, status_code=resp.status_code)


def get_http_client(cfg: AppConfig) -> HttpClient:
    return HttpClient(cfg=cfg)
