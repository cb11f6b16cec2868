"""
eazyscripts/response.py
-----------------------
EazyScripts Python Client — Normalised Response
-----------------------------------------------
Every endpoint method returns a ``Response``.  The success / failure
decision is made exactly once, when the response is parsed, and stored as
a discriminated ``outcome``:

    Success{body}                   2xx status
    Failure{status, message, raw}   non-2xx status or transport error

Parsing rules:

  - 2xx with a JSON body       -> ``body`` is the parsed JSON.
  - 2xx with empty / bad JSON  -> ``body`` is ``None``.
  - non-2xx                    -> ``body`` always carries an ``error`` or
                                  ``errors`` key; the server's own body is
                                  kept when it already has one.
  - transport error            -> ``status_code`` is 0 and ``body`` is
                                  ``{"error": "<ExcType>: <message>"}``.

Project: EazyScripts Python Client
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Top-level fields the authenticate endpoint may carry the session token in.
_TOKEN_FIELDS = ("token", "Token", "access_token")

_ERROR_FIELDS = ("error", "errors")


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    body: Any = None


class Failure(BaseModel):
    """A remote or transport failure; ``status`` is 0 when no HTTP response arrived."""

    model_config = ConfigDict(frozen=True)

    kind:    Literal["failure"] = "failure"
    status:  int
    message: str
    raw:     str = Field(default="", repr=False)


Outcome = Annotated[Union[Success, Failure], Field(discriminator="kind")]


class Response(BaseModel):
    """
    Immutable wrapper around one HTTP exchange with the EazyScripts API.

    Attributes:
        status_code: HTTP status, or 0 for transport-level failures.
        body:        Parsed JSON body, or ``None``.
        raw:         Raw response text (kept for diagnostics).
        token:       Session token, populated only for authenticate responses.
        outcome:     ``Success`` or ``Failure``.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    body:        Any = None
    raw:         str = Field(default="", repr=False)
    token:       Optional[str] = Field(default=None, repr=False)
    outcome:     Outcome

    # ── Convenience accessors ────────────────────────────────────────────────

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def error_message(self) -> Optional[str]:
        """The failure message, or ``None`` for successful responses."""
        if isinstance(self.outcome, Failure):
            return self.outcome.message
        return None

    # ── Constructors ─────────────────────────────────────────────────────────

    @classmethod
    def from_httpx(
        cls, resp: httpx.Response, *, capture_token: bool = False
    ) -> "Response":
        """
        Normalise an ``httpx.Response``.

        Args:
            resp:          The transport's response (already read).
            capture_token: Look for a session token in the body.  Only the
                           authenticate call sets this.
        """
        text = resp.text
        body = _parse_json(resp)

        if resp.is_success:
            token = _extract_token(body) if capture_token else None
            if capture_token and token is None:
                logger.warning(
                    "EazyScripts: authenticate returned %d but no token field "
                    "was found in the response body.",
                    resp.status_code,
                )
            return cls(
                status_code=resp.status_code,
                body=body,
                raw=text,
                token=token,
                outcome=Success(body=body),
            )

        message = (
            _error_message(body)
            or resp.reason_phrase
            or f"HTTP {resp.status_code}"
        )
        if not (isinstance(body, dict) and any(k in body for k in _ERROR_FIELDS)):
            body = {"error": message}

        logger.info(
            "EazyScripts: %s %s returned %d (%s).",
            resp.request.method,
            resp.request.url.path,
            resp.status_code,
            message,
        )
        return cls(
            status_code=resp.status_code,
            body=body,
            raw=text,
            outcome=Failure(status=resp.status_code, message=message, raw=text),
        )

    @classmethod
    def from_transport_error(cls, exc: httpx.HTTPError) -> "Response":
        """Wrap a connection / timeout / protocol error that produced no response."""
        message = f"{type(exc).__name__}: {exc}"
        return cls(
            status_code=0,
            body={"error": message},
            outcome=Failure(status=0, message=message),
        )


# ── Parsing helpers ──────────────────────────────────────────────────────────

def _parse_json(resp: httpx.Response) -> Any:
    """Parsed JSON body, or ``None`` when the body is empty or malformed."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        logger.debug(
            "EazyScripts: non-JSON body from %s (status=%d, %d bytes).",
            resp.request.url.path,
            resp.status_code,
            len(resp.content),
        )
        return None


def _extract_token(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    for field in _TOKEN_FIELDS:
        value = body.get(field)
        if isinstance(value, str) and value:
            return value
    return None


def _error_message(body: Any) -> Optional[str]:
    """
    Best-effort human-readable message from an error body.

    Handles the shapes the service is known to return:
    ``{"error": "..."}``, ``{"error": {"message": "..."}}``,
    ``{"errors": [...]}`` / ``{"errors": {"Field": ["..."]}}`` and
    ``{"message": "..."}``.
    """
    if not isinstance(body, dict):
        return None

    for key in ("error", "errors", "message", "Message"):
        value = body.get(key)
        if not value:
            continue
        if isinstance(value, str):
            return value
        if isinstance(value, dict):
            inner = value.get("message") or value.get("Message")
            if isinstance(inner, str) and inner:
                return inner
            parts = []
            for field, detail in value.items():
                if isinstance(detail, list):
                    detail = ", ".join(str(d) for d in detail)
                parts.append(f"{field}: {detail}")
            return "; ".join(parts)
        if isinstance(value, list):
            return "; ".join(str(v) for v in value)
        return str(value)
    return None
