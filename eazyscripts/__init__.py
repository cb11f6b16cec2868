"""
eazyscripts/
------------
EazyScripts Python Client
-------------------------
Typed, synchronous client for the EazyScripts e-prescribing API.

Modules:
    - client.py:     EazyScriptsClient facade (one method per endpoint)
    - request.py:    RequestBuilder (URL, headers, payload, dispatch)
    - response.py:   Response with Success / Failure outcome
    - schemas.py:    Credentials and SearchQuery pydantic models
    - config.py:     Environment / .env settings loader
    - constants.py:  Service enumerations (user level, gender, contact type)
    - exceptions.py: EazyScriptsError hierarchy

Project: EazyScripts Python Client
"""

from eazyscripts.client import EazyScriptsClient
from eazyscripts.constants import (
    PLATFORM_SERVER,
    ContactType,
    Gender,
    PharmacyType,
    UserLevel,
)
from eazyscripts.exceptions import (
    ConfigurationError,
    EazyScriptsError,
    ValidationError,
)
from eazyscripts.request import DEFAULT_HEADERS, RequestBuilder
from eazyscripts.response import Failure, Response, Success
from eazyscripts.schemas import DEFAULT_HOST, Credentials, SearchQuery

__version__ = "1.0.0"

__all__ = [
    "EazyScriptsClient",
    "RequestBuilder",
    "DEFAULT_HEADERS",
    "DEFAULT_HOST",
    "Response",
    "Success",
    "Failure",
    "Credentials",
    "SearchQuery",
    "EazyScriptsError",
    "ValidationError",
    "ConfigurationError",
    "UserLevel",
    "Gender",
    "ContactType",
    "PharmacyType",
    "PLATFORM_SERVER",
]
