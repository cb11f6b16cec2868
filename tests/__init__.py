"""
tests/
------
EazyScripts Python Client — Test Package
----------------------------------------
Test suites for the EazyScripts client.  HTTP is simulated with
``httpx.MockTransport``; nothing here calls the live service (see
``scripts/smoke_test.py`` for that).

Test Modules:
    - test_schemas.py:      Credentials and SearchQuery models
    - test_response.py:     Response parsing and Success / Failure outcomes
    - test_request.py:      RequestBuilder URLs, headers, payloads, dispatch
    - test_client.py:       Endpoint catalog, authentication, error surfacing
    - test_browser_urls.py: Browser URL generation and validation
    - test_config.py:       Environment settings loader

Project: EazyScripts Python Client
"""
