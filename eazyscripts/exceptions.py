"""
eazyscripts/exceptions.py
-------------------------
EazyScripts Python Client — Exception Hierarchy
-----------------------------------------------
Errors raised by the library itself.  Remote and transport failures are
never raised from endpoint methods; they arrive inside ``Response``.

    EazyScriptsError       base class for everything below
    ValidationError        caller omitted a required field (or token)
    ConfigurationError     required environment settings are missing

Project: EazyScripts Python Client
"""


class EazyScriptsError(Exception):
    """Base class for errors raised by the EazyScripts client."""


class ValidationError(EazyScriptsError, ValueError):
    """Raised before any request or URL is built when required input is missing."""


class ConfigurationError(EazyScriptsError):
    """Raised when the environment does not provide required client settings."""
