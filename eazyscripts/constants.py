"""
eazyscripts/constants.py
------------------------
EazyScripts Python Client — Domain Constants
--------------------------------------------
Enumerations the EazyScripts service expects inside request bodies and
query strings.  All are ``IntEnum`` so they serialise to plain integers.

Project: EazyScripts Python Client
"""

from enum import IntEnum


class UserLevel(IntEnum):
    DOCTOR = 2
    PATIENT = 3


class Gender(IntEnum):
    UNKNOWN = 0
    MALE = 1
    FEMALE = 2


class ContactType(IntEnum):
    """Type code shared by addresses and phone numbers."""

    HOME = 1
    WORK = 2
    FAX = 3


class PharmacyType(IntEnum):
    MAIL_IN = 4


# PlatformType value sent with /account/authenticate for server-side callers.
PLATFORM_SERVER = "SERVER"
