"""
eazyscripts/client.py
---------------------
EazyScripts Python Client — API Facade
--------------------------------------
Synchronous client for the EazyScripts e-prescribing API running at
``https://{subdomain}.eazyscripts.net``.

Authentication flow:
  1. ``authenticate()`` posts the user's credentials together with the
     application key/secret and subdomain to ``/account/authenticate``;
     no bearer header is sent on this call.
  2. The caller reads ``response.token`` and hands it to ``set_token()``.
  3. Every other API call carries ``Authorization: Bearer <token>`` plus
     the ``ApplicationKey`` / ``ApplicationSecret`` headers.

The client never raises for remote errors: every endpoint method returns a
``Response`` whose ``outcome`` is ``Success`` or ``Failure``.  The only
errors raised locally are ``ValidationError``: from the browser-URL
helpers when a required field or the session token is missing, and from
``get_active_patient_medications`` for a non-numeric patient id.

The session token is the only mutable state.  Changing it while another
thread is mid-call on the same instance is the caller's responsibility.

Usage (context manager — preferred)::

    with EazyScriptsClient(key, secret, "demo") as client:
        auth = client.authenticate({
            "Email": "doctor@example.com",
            "Password": "...",
            "PlatformType": PLATFORM_SERVER,
        })
        client.set_token(auth.token)
        patient = client.get_patient("123")
        if patient.ok:
            print(patient.body)

Usage (from environment)::

    client = EazyScriptsClient.from_env()

Project: EazyScripts Python Client
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from eazyscripts.constants import PharmacyType, UserLevel
from eazyscripts.exceptions import ValidationError
from eazyscripts.request import DEFAULT_HEADERS, Payload, RequestBuilder, to_json
from eazyscripts.response import Response
from eazyscripts.schemas import DEFAULT_HOST, Credentials, SearchQuery

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_S = 30.0


class EazyScriptsClient:
    """
    Typed facade over the EazyScripts REST API.

    Args:
        key:       Application key issued by EazyScripts.
        secret:    Application secret issued by EazyScripts.
        subdomain: Tenant subdomain the application's account lives on.
        host:      Service host; override only for staging environments.
        http:      Pre-configured ``httpx.Client``.  The caller keeps
                   ownership and is responsible for closing it.
        transport: ``httpx.BaseTransport`` for a client-owned
                   ``httpx.Client`` (e.g. ``httpx.MockTransport`` in tests).
                   Ignored when *http* is given.
        timeout:   Request timeout in seconds for a client-owned transport.
    """

    def __init__(
        self,
        key: str,
        secret: str,
        subdomain: str,
        *,
        host: str = DEFAULT_HOST,
        http: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = _DEFAULT_TIMEOUT_S,
    ) -> None:
        self._credentials = Credentials(
            key=key, secret=secret, subdomain=subdomain, host=host
        )
        self._token: Optional[str] = None

        self._owns_http = http is None
        self._http = (
            http if http is not None
            else httpx.Client(transport=transport, timeout=timeout)
        )
        logger.debug(
            "EazyScriptsClient: configured for %s.", self._credentials.base_url
        )

    @classmethod
    def from_env(
        cls, env_file: Optional[str] = None, **kwargs: Any
    ) -> "EazyScriptsClient":
        """
        Build a client from ``EAZYSCRIPTS_*`` environment variables.

        See ``eazyscripts.config.load_settings`` for the variables read.
        Keyword arguments (``http``, ``transport``) are passed through.
        """
        from eazyscripts.config import load_settings

        settings = load_settings(env_file)
        kwargs.setdefault("timeout", settings.timeout)
        return cls(
            settings.key,
            settings.secret,
            settings.subdomain,
            host=settings.host,
            **kwargs,
        )

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def close(self) -> None:
        """Close the underlying HTTP transport if this client created it."""
        if self._owns_http:
            self._http.close()
            logger.debug("EazyScriptsClient: HTTP transport closed.")

    def __enter__(self) -> "EazyScriptsClient":
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    # ── Credentials / token ──────────────────────────────────────────────────

    @property
    def subdomain(self) -> str:
        return self._credentials.subdomain

    @property
    def base_url(self) -> str:
        return self._credentials.base_url

    def get_token(self) -> Optional[str]:
        """The session token used for authorized calls, or ``None`` if unset."""
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        """Set the session token; every subsequent request carries it."""
        self._token = token

    # ── Internal request helpers ─────────────────────────────────────────────

    def _request(self, path: str, payload: Payload = None) -> RequestBuilder:
        """Fresh builder for *path*, authorized with the current token."""
        return RequestBuilder(
            self._http, self._credentials, path, DEFAULT_HEADERS, payload
        ).with_authorization(self._token, True)

    @staticmethod
    def _query(
        defaults: Optional[Mapping[str, Any]] = None,
        search: Optional[SearchQuery] = None,
    ) -> dict[str, Any]:
        """Method defaults, overridden by the caller's SearchQuery fields."""
        query = dict(defaults or {})
        if search is not None:
            query.update(search.to_query())
        return query

    def _browser_url(
        self,
        path: str,
        params: Optional[Mapping[str, Any]],
        *,
        include_subdomain: bool = False,
    ) -> str:
        """
        Build a browser-navigable URL that embeds the auth material.

        Caller-supplied *params* are merged over the defaults, so a caller
        key always wins and is never dropped.  No request is sent.

        Raises:
            ValidationError: if no session token has been set.
        """
        if self._token is None:
            raise ValidationError(
                "You must authenticate and call set_token() before generating "
                "a browser url"
            )

        query: dict[str, Any] = {
            "Token":             self._token,
            "ApplicationKey":    self._credentials.key,
            "ApplicationSecret": self._credentials.secret,
        }
        if include_subdomain:
            query["Subdomain"] = self._credentials.subdomain
        query.update(params or {})

        # The hosted UI reads flags as 1/0, not httpx's true/false.
        params = {
            k: int(v) if isinstance(v, bool) else v
            for k, v in query.items()
            if v is not None
        }
        url = RequestBuilder(self._http, self._credentials, path).get_url()
        return str(httpx.URL(url, params=params))

    # ── Authentication ───────────────────────────────────────────────────────

    def authenticate(self, body: Mapping[str, Any]) -> Response:
        """
        Authenticate a user  →  ``POST /account/authenticate``.

        The application key, secret and subdomain are merged under *body*;
        no bearer token is attached.  On success ``response.token`` holds the
        session token to pass to ``set_token()``.

        Args:
            body: Typically ``Email``, ``Password`` and ``PlatformType``.
        """
        payload = {
            "ApplicationKey":    self._credentials.key,
            "ApplicationSecret": self._credentials.secret,
            "Subdomain":         self._credentials.subdomain,
            **body,
        }
        logger.debug("EazyScriptsClient: POST /account/authenticate")
        request = RequestBuilder(
            self._http, self._credentials, "/account/authenticate",
            DEFAULT_HEADERS, payload,
        )
        return request.post(capture_token=True)

    # ── Patients ─────────────────────────────────────────────────────────────

    def get_patients(
        self, take: int = 24, skip: int = 0, search: Optional[SearchQuery] = None
    ) -> Response:
        """List patients  →  ``GET /patients?Take=&Skip=``."""
        query = self._query({"Take": take, "Skip": skip}, search)
        return self._request("/patients", query).get()

    def get_patient(self, id: str) -> Response:
        """Get a single patient record  →  ``GET /patients/{id}/info``."""
        return self._request(f"/patients/{id}/info").get()

    def search_patient(self, email: Optional[str]) -> Response:
        """Find a patient by username (email)  →  ``GET /patients/searchbyusername``."""
        return self._request(
            "/patients/searchbyusername", {"Email": _trim(email)}
        ).get()

    def get_patient_addresses(self, id: str) -> Response:
        return self._request(f"/patients/{id}/addresses").get()

    def get_patient_phone_numbers(self, id: str) -> Response:
        return self._request(f"/patients/{id}/phone-numbers").get()

    def add_patient(self, body: Mapping[str, Any]) -> Response:
        """
        Create a patient user  →  ``PUT /users``.

        ``Level`` defaults to ``UserLevel.PATIENT``; a ``Level`` in *body*
        takes precedence.
        """
        payload = {"Level": UserLevel.PATIENT, **body}
        return self._request("/users", payload).put()

    def update_user_info(self, id: str, body: Mapping[str, Any]) -> Response:
        """Update any user's account info  →  ``POST /users/{id}/info``."""
        return self._request(f"/users/{id}/info", body).post()

    def update_patient(self, id: str, body: Mapping[str, Any]) -> Response:
        """Update a patient record  →  ``POST /patients/{id}/info``."""
        return self._request(f"/patients/{id}/info", body).post()

    def update_patient_address(
        self, patient_id: str, address_id: str, body: Mapping[str, Any]
    ) -> Response:
        return self._request(
            f"/patients/{patient_id}/addresses/{address_id}", body
        ).post()

    def update_patient_phone_number(
        self, patient_id: str, phone_id: str, body: Mapping[str, Any]
    ) -> Response:
        return self._request(
            f"/patients/{patient_id}/phone-numbers/{phone_id}", body
        ).post()

    # ── Prescribers ──────────────────────────────────────────────────────────

    def get_prescriber_specialties(
        self, search: Optional[SearchQuery] = None
    ) -> Response:
        """All prescriber specialties  →  ``GET /prescribers/specialties``."""
        return self._request("/prescribers/specialties", self._query(search=search)).get()

    def get_prescriber_specialty_qualifiers(
        self, search: Optional[SearchQuery] = None
    ) -> Response:
        """All specialty qualifier types  →  ``GET /prescribers/specialty-qualifiers``."""
        return self._request(
            "/prescribers/specialty-qualifiers", self._query(search=search)
        ).get()

    def get_prescribers(self, search: Optional[SearchQuery] = None) -> Response:
        return self._request("/prescribers", self._query(search=search)).get()

    def get_prescriber(self, id: str) -> Response:
        return self._request(f"/prescribers/{id}").get()

    def add_prescriber(self, body: Mapping[str, Any]) -> Response:
        """
        Create a prescriber user  →  ``PUT /users``.

        Unlike ``add_patient`` no ``Level`` default is applied; pass
        ``"Level": UserLevel.DOCTOR`` in *body* when the tenant requires it.
        """
        return self._request("/users", body).put()

    def update_prescriber(self, id: str, body: Mapping[str, Any]) -> Response:
        return self._request(f"/prescribers/{id}/info", body).post()

    def add_prescriber_location(
        self, prescriber_id: str, body: Mapping[str, Any]
    ) -> Response:
        """Add a practice location  →  ``PUT /prescribers/{id}/locations``."""
        return self._request(f"/prescribers/{prescriber_id}/locations", body).put()

    def update_prescriber_location(
        self, prescriber_id: str, location_id: str, body: Mapping[str, Any]
    ) -> Response:
        return self._request(
            f"/prescribers/{prescriber_id}/locations/{location_id}", body
        ).post()

    def get_prescriber_locations(self, prescriber_id: str) -> Response:
        return self._request(f"/prescribers/{prescriber_id}/locations").get()

    def get_prescribers_preferred_prescriptions(self) -> Response:
        """Preferred prescriptions of the authenticated prescriber."""
        return self._request("/prescriber/preferred-prescriptions").get()

    # ── Pharmacies ───────────────────────────────────────────────────────────

    def get_pharmacies(self, search: str, take: int, skip: int) -> Response:
        """Search pharmacies by name  →  ``GET /pharmacies?Search=&Take=&Skip=``."""
        query = {
            "Search": _trim(search),
            "Take":   take,
            "Skip":   skip,
        }
        return self._request("/pharmacies", query).get()

    def get_pharmacies_advanced(
        self, search: str, address: str, range: int = 50, take: int = 100
    ) -> Response:
        """
        Search pharmacies near an address
        →  ``GET /pharmacies/advancepharmacysearch``.

        Args:
            search:  Pharmacy name / free text.
            address: Address the radius is measured from.
            range:   Radius in miles.
            take:    Maximum number of results.
        """
        query = {
            "Search":  _trim(search),
            "Range":   range,
            "Address": address,
            "Take":    take,
        }
        return self._request("/pharmacies/advancepharmacysearch", query).get()

    def get_mail_in_pharmacies(
        self, search: str, state: str, skip: int, take: int
    ) -> Response:
        """Mail-order pharmacies licensed for *state*  →  ``GET /pharmacies/types``."""
        query = {
            "Search": _trim(search),
            "Take":   take,
            "Skip":   skip,
            "State":  state,
            "Type":   int(PharmacyType.MAIL_IN),
        }
        return self._request("/pharmacies/types", query).get()

    def get_pharmacy(self, id: str) -> Response:
        # The service routes this endpoint with a trailing slash.
        return self._request(f"/pharmacies/{id}/").get()

    # ── Medicines ────────────────────────────────────────────────────────────

    def get_medicines(
        self, search: Optional[str] = None, take: int = 24, skip: int = 0
    ) -> Response:
        """Search the medicine catalogue  →  ``GET /medicines``."""
        query = {
            "Search": _trim(search),
            "Take":   take,
            "Skip":   skip,
        }
        return self._request("/medicines", query).get()

    def get_potency_unit_codes(self, medicine_id: str) -> Response:
        return self._request(f"/medicines/{medicine_id}/potency-unit-codes").get()

    # ── Prescriptions / permissions ──────────────────────────────────────────

    def get_active_patient_medications(
        self, patient_id: int, search: Optional[SearchQuery] = None
    ) -> Response:
        """
        A patient's active prescriptions
        →  ``GET /patients/{patient_id}/prescriptions/active``.

        *patient_id* must be the numeric patient id.

        Raises:
            ValidationError: if *patient_id* is not an integer.
        """
        try:
            numeric_id = int(patient_id)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"patient_id must be an integer, got {patient_id!r}"
            ) from exc
        return self._request(
            f"/patients/{numeric_id}/prescriptions/active",
            self._query(search=search),
        ).get()

    def get_pending_permissions(self, search: Optional[SearchQuery] = None) -> Response:
        return self._request(
            "/prescriber/permissions/pendings", self._query(search=search)
        ).get()

    def get_refill_requests(self, search: Optional[SearchQuery] = None) -> Response:
        return self._request("/requests/refills", self._query(search=search)).get()

    def submit_prescription(self, patient_id: str, body: Mapping[str, Any]) -> Response:
        """
        Submit a prescription for a patient
        →  ``POST /patients/{patient_id}/prescriptions/submit``.

        The service expects the prescription wrapped in a one-element JSON
        array (``[{...}]``), not a bare object.
        """
        payload = f"[{to_json(body)}]"
        return self._request(
            f"/patients/{patient_id}/prescriptions/submit", payload
        ).post()

    def get_prescription_details(self, patient_id: str, prescription_id: str) -> Response:
        return self._request(
            f"/patients/{patient_id}/prescriptions/{prescription_id}"
        ).get()

    # ── Browser URLs ─────────────────────────────────────────────────────────

    def get_auto_login_url(self, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        URL that signs the current user into the hosted EazyScripts UI.

        Raises:
            ValidationError: if no session token is set.
        """
        return self._browser_url("/browser/auto-login", params)

    def get_new_prescription_url(
        self, params: Optional[Mapping[str, Any]] = None
    ) -> str:
        """
        URL for the hosted new-prescription flow.

        Raises:
            ValidationError: if ``PatientId`` is missing from *params* or no
                             session token is set.
        """
        params = params or {}
        if params.get("PatientId") is None:
            raise ValidationError(
                "You must provide a PatientId when generating this url"
            )
        return self._browser_url("/browser/new-prescription", params)

    def get_refill_url(self, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        URL for the hosted refill flow.

        Raises:
            ValidationError: if ``PatientId`` or ``RefillRequestId`` is
                             missing, or no session token is set.
        """
        params = params or {}
        if params.get("PatientId") is None:
            raise ValidationError(
                "You must provide a PatientId when generating this url"
            )
        if params.get("RefillRequestId") is None:
            raise ValidationError(
                "You must provide a RefillRequestId when generating this url"
            )
        return self._browser_url("/browser/refill", params)

    def cancel_prescription(self, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        URL for the hosted cancel-prescription flow.

        Only builds the URL; the cancellation happens when the user's
        browser opens it.  ``Subdomain`` is included alongside the usual
        auth material.

        Raises:
            ValidationError: if neither ``PrescriptionId`` nor
                             ``ConsultationId`` is given, or no session
                             token is set.
        """
        params = params or {}
        if params.get("PrescriptionId") is None and params.get("ConsultationId") is None:
            raise ValidationError(
                "You must provide a PrescriptionId or a ConsultationId when "
                "canceling a prescription"
            )
        return self._browser_url(
            "/browser/cancel-prescription", params, include_subdomain=True
        )


def _trim(value: Optional[str]) -> str:
    """Strip a search term; ``None`` becomes the empty string."""
    return "" if value is None else str(value).strip()
