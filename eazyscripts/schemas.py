"""
eazyscripts/schemas.py
----------------------
EazyScripts Python Client — Pydantic Data Contracts
---------------------------------------------------
Pydantic v2 models for the two caller-supplied inputs that shape every
request:

    Credentials     application key, secret, and tenant subdomain; frozen
                    once the client is constructed.
    SearchQuery     optional filter / pagination object that contributes a
                    query-string mapping to list endpoints.

Query policy
------------
SearchQuery.to_query() is the single place where a filter becomes query
parameters.  It is a pure function of the model:

  1. Keys use the exact casing the service expects (``Search``, ``Take``,
     ``Skip`` ...), produced via field aliases.

  2. Unset fields are omitted, never sent as empty or null.

  3. String fields are stripped of surrounding whitespace; a value that is
     empty after stripping counts as unset.

  4. ``take`` / ``skip`` must be non-negative; pydantic rejects anything
     else at construction time.

Usage::

    from eazyscripts import SearchQuery

    query = SearchQuery(search="  cardio ", take=10)
    query.to_query()   # {"Search": "cardio", "Take": 10}

Project: EazyScripts Python Client
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Public host serving every tenant as https://{subdomain}.{host}
DEFAULT_HOST = "eazyscripts.net"


class Credentials(BaseModel):
    """
    Application credentials and tenant target for one client instance.

    ``key`` and ``secret`` are excluded from ``repr`` so that logging a
    client or its credentials never leaks them.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )

    key:       str = Field(repr=False)
    secret:    str = Field(repr=False)
    subdomain: str
    host:      str = DEFAULT_HOST

    @field_validator("host", mode="after")
    @classmethod
    def strip_host_dots(cls, v: str) -> str:
        return v.strip(".") or DEFAULT_HOST

    @property
    def base_url(self) -> str:
        """Scheme + tenant host, e.g. ``https://demo.eazyscripts.net``."""
        return f"https://{self.subdomain}.{self.host}"


class SearchQuery(BaseModel):
    """
    Optional filter / pagination object accepted by list endpoints.

    Fields may be given by their Python name (``take=10``) or by the
    service's query key (``Take=10``).

    Fields
    ------
    search:          Free-text search term            -> ``Search``
    name:            Name filter                      -> ``Name``
    specialty:       Prescriber specialty filter      -> ``Specialty``
    state:           US state code                    -> ``State``
    status:          Record status filter             -> ``Status``
    take:            Page size                        -> ``Take``
    skip:            Page offset                      -> ``Skip``
    order_by:        Sort column                      -> ``OrderBy``
    order_direction: ``"asc"`` | ``"desc"``           -> ``OrderDirection``
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        extra="forbid",
    )

    search:          Optional[str] = Field(default=None, alias="Search")
    name:            Optional[str] = Field(default=None, alias="Name")
    specialty:       Optional[str] = Field(default=None, alias="Specialty")
    state:           Optional[str] = Field(default=None, alias="State")
    status:          Optional[str] = Field(default=None, alias="Status")
    take:            Optional[int] = Field(default=None, ge=0, alias="Take")
    skip:            Optional[int] = Field(default=None, ge=0, alias="Skip")
    order_by:        Optional[str] = Field(default=None, alias="OrderBy")
    order_direction: Optional[str] = Field(default=None, alias="OrderDirection")

    @field_validator(
        "search", "name", "specialty", "state", "status",
        "order_by", "order_direction",
        mode="after",
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        # Runs after str_strip_whitespace, so "   " arrives here as "".
        return v or None

    def to_query(self) -> Dict[str, Any]:
        """Return the query-string mapping for this filter (unset fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)
