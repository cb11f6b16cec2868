"""
eazyscripts/request.py
----------------------
EazyScripts Python Client — Request Builder
-------------------------------------------
Turns a path, a header set and an optional payload into an ``httpx.Request``
against ``https://{subdomain}.{host}{path}``, dispatches it on the injected
``httpx.Client`` and normalises the result into a ``Response``.

A builder is constructed fresh for every call and is never shared, so
authorization headers set for one request can never leak into another.

Payload handling:
  - ``get()``          mapping -> query parameters (``None`` values dropped)
  - ``post()/put()``   mapping / list -> JSON body; ``str`` -> sent verbatim
                       (already-serialised JSON)

Usage::

    builder = RequestBuilder(http, credentials, "/patients", payload={"Take": 10})
    response = builder.with_authorization(token).get()

Project: EazyScripts Python Client
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Union

import httpx

from eazyscripts.response import Response
from eazyscripts.schemas import Credentials

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: Mapping[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

Payload = Union[Mapping[str, Any], list, str, None]


def to_json(payload: Any) -> str:
    """Serialise a request body the way the service expects (compact, UTF-8)."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


class RequestBuilder:
    """
    Builds and dispatches one request to the EazyScripts API.

    Args:
        http:        Transport used by ``get`` / ``post`` / ``put``.
        credentials: Tenant subdomain/host and the application key/secret.
        path:        Path beginning with ``/`` (e.g. ``"/patients/12/info"``).
        headers:     Base headers; defaults to ``DEFAULT_HEADERS``.  Copied,
                     never mutated in place.
        payload:     Query mapping for GET, JSON body for POST/PUT.
    """

    def __init__(
        self,
        http: httpx.Client,
        credentials: Credentials,
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        payload: Payload = None,
    ) -> None:
        self._http = http
        self._credentials = credentials
        self.path = path if path.startswith("/") else f"/{path}"
        self.headers: dict[str, str] = dict(
            DEFAULT_HEADERS if headers is None else headers
        )
        self.payload = payload

    # ── Authorization ────────────────────────────────────────────────────────

    def with_authorization(
        self, token: Optional[str], as_bearer: bool = True
    ) -> "RequestBuilder":
        """
        Attach the application key/secret and, when *as_bearer*, the bearer token.

        Repeated calls overwrite earlier ones; only the last token is sent.
        An unset token leaves no ``Authorization`` header at all and the
        service answers with its own 401, surfaced in the ``Response``.
        """
        self.headers["ApplicationKey"] = self._credentials.key
        self.headers["ApplicationSecret"] = self._credentials.secret

        self.headers.pop("Authorization", None)
        if as_bearer:
            if token is None:
                logger.warning(
                    "EazyScripts: %s requested without a session token; "
                    "call set_token() after authenticate().",
                    self.path,
                )
            else:
                self.headers["Authorization"] = f"Bearer {token}"
        return self

    # ── URL / descriptor ─────────────────────────────────────────────────────

    def get_url(self) -> str:
        """Fully-qualified URL for this path, without query string or I/O."""
        return f"{self._credentials.base_url}{self.path}"

    def build(self, method: str) -> httpx.Request:
        """Return the outbound ``httpx.Request`` for *method* without sending it."""
        method = method.upper()
        params: Optional[dict[str, Any]] = None
        content: Optional[str] = None

        if method == "GET":
            if isinstance(self.payload, Mapping):
                params = {k: v for k, v in self.payload.items() if v is not None}
            elif self.payload is not None:
                raise TypeError(
                    f"GET payload must be a mapping of query parameters, "
                    f"got {type(self.payload).__name__}."
                )
        elif self.payload is not None:
            content = (
                self.payload if isinstance(self.payload, str) else to_json(self.payload)
            )

        return self._http.build_request(
            method,
            self.get_url(),
            headers=self.headers,
            params=params or None,
            content=content,
        )

    # ── Dispatch ─────────────────────────────────────────────────────────────

    def get(self) -> Response:
        return self._send("GET")

    def post(self, *, capture_token: bool = False) -> Response:
        return self._send("POST", capture_token=capture_token)

    def put(self) -> Response:
        return self._send("PUT")

    def _send(self, method: str, *, capture_token: bool = False) -> Response:
        request = self.build(method)
        logger.debug(
            "EazyScripts: %s %s params=%s",
            method,
            self.path,
            dict(request.url.params) or "<none>",
        )
        try:
            resp = self._http.send(request)
        except httpx.HTTPError as exc:
            logger.warning(
                "EazyScripts: %s %s failed at transport level: %s",
                method,
                self.path,
                exc,
            )
            return Response.from_transport_error(exc)

        return Response.from_httpx(resp, capture_token=capture_token)
