#!/usr/bin/env python3
"""
smoke_test.py
-------------
EazyScripts Python Client — Live API Smoke Test
-----------------------------------------------
End-to-end walk-through against a real EazyScripts tenant:

  Step 1  AUTH        — authenticate and store the session token
  Step 2  PATIENT     — add a patient, list patients, fetch and update it
  Step 3  LOOKUPS     — fetch prescriber specialties and specialty qualifiers
  Step 4  PRESCRIBER  — add a prescriber, list prescribers, fetch and update it
  Step 5  URLS        — generate auto-login and new-prescription browser URLs

Every step inspects the returned ``Response``; the first ``Failure`` is
logged and the script exits with code 1.

Credentials come from ``.env.testing`` (or the file given by --env-file):

    EAZYSCRIPTS_KEY, EAZYSCRIPTS_SECRET, EAZYSCRIPTS_SUBDOMAIN,
    EAZYSCRIPTS_EMAIL, EAZYSCRIPTS_PASSWORD

Usage:
    python scripts/smoke_test.py [--env-file .env.testing]

Project: EazyScripts Python Client
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import Any

# ── Path bootstrap ────────────────────────────────────────────────────────────
_SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
_REPO_ROOT   = os.path.dirname(_SCRIPT_DIR)
sys.path.insert(0, _REPO_ROOT)

from dotenv import load_dotenv                               # noqa: E402

from eazyscripts import (                                    # noqa: E402
    PLATFORM_SERVER,
    ContactType,
    EazyScriptsClient,
    EazyScriptsError,
    Gender,
    Response,
)

# ── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("smoke_test")

_SEPARATOR = "─" * 68


# ── Helpers ───────────────────────────────────────────────────────────────────

def _check(label: str, response: Response) -> Any:
    """Log the outcome of *response*; exit with code 1 on failure."""
    if not response.ok:
        log.error("FAIL  %s  (status=%d): %s", label, response.status_code, response.error_message)
        log.info(_SEPARATOR)
        sys.exit(1)
    log.info("OK    %s  (status=%d)", label, response.status_code)
    return response.body


def _first_value(body: Any, label: str) -> Any:
    """First ``value`` of a lookup list (specialties, qualifiers)."""
    if not body:
        log.error("FAIL  %s returned an empty list.", label)
        sys.exit(1)
    return body[0]["value"]


def _address(contact_type: ContactType, zip_code: str) -> dict[str, Any]:
    return {
        "Address1": "123 Test Road",
        "City":     "San Diego",
        "State":    "CA",
        "Country":  "USA",
        "Zip":      zip_code,
        "Type":     contact_type,
    }


def _phone(contact_type: ContactType) -> dict[str, Any]:
    return {"Number": "4155552671", "Extension": "+1", "Type": contact_type}


# ── Walk-through ──────────────────────────────────────────────────────────────

def run(client: EazyScriptsClient, email: str, password: str) -> None:
    stamp = int(time.time())

    log.info("Step 1 / 5  AUTH …")
    auth = client.authenticate({
        "Email":        email,
        "Password":     password,
        "PlatformType": PLATFORM_SERVER,
    })
    _check("authenticate", auth)
    if not auth.token:
        log.error("FAIL  authenticate succeeded but returned no token.")
        sys.exit(1)
    client.set_token(auth.token)

    log.info("Step 2 / 5  PATIENT …")
    patient = _check("add_patient", client.add_patient({
        "FirstName":   "Testing",
        "LastName":    "Patient",
        "Email":       f"{stamp}testing+patient@testemail.com",
        "Password":    "pa55word",
        "DateOfBirth": "1970-2-1",
        "Gender":      Gender.FEMALE,
        "Patient": {
            "HomeAddress":     _address(ContactType.HOME, "60654"),
            "WorkAddress":     _address(ContactType.WORK, "60654"),
            "HomePhoneNumber": _phone(ContactType.HOME),
            "WorkPhoneNumber": _phone(ContactType.WORK),
        },
    }))
    patient_id = patient["id"]
    _check("get_patients", client.get_patients())
    _check("get_patient", client.get_patient(patient_id))
    _check("update_patient", client.update_patient(patient_id, {"consent": None}))

    log.info("Step 3 / 5  LOOKUPS …")
    specialty_id = _first_value(
        _check("get_prescriber_specialties", client.get_prescriber_specialties()),
        "get_prescriber_specialties",
    )
    qualifier_id = _first_value(
        _check(
            "get_prescriber_specialty_qualifiers",
            client.get_prescriber_specialty_qualifiers(),
        ),
        "get_prescriber_specialty_qualifiers",
    )

    log.info("Step 4 / 5  PRESCRIBER …")
    prescriber = _check("add_prescriber", client.add_prescriber({
        "FirstName":   "Testing",
        "LastName":    "Doctor",
        "Email":       f"{stamp}testing+doctor@testemail.com",
        "Password":    "pa55word",
        "DateOfBirth": "1970-3-1",
        "Gender":      Gender.MALE,
        "Prescriber": {
            "Npi":                "1234567890",
            "Specialty":          specialty_id,
            "SpecialtyQualifier": qualifier_id,
            "ClinicName":         "Test Clinic",
            "Address":            _address(ContactType.WORK, "92117"),
            "Permissions": {
                "NewRx":               False,
                "Refill":              False,
                "Change":              False,
                "Cancel":              False,
                "ControlledSubstance": False,
            },
            "PhoneNumbers": [_phone(ContactType.WORK), _phone(ContactType.FAX)],
        },
    }))
    prescriber_id = prescriber["id"]
    _check("get_prescribers", client.get_prescribers())
    _check("get_prescriber", client.get_prescriber(prescriber_id))
    _check("update_prescriber", client.update_prescriber(prescriber_id, {
        "Npi":                "1234567890",
        "Specialty":          specialty_id,
        "SpecialtyQualifier": qualifier_id,
    }))

    log.info("Step 5 / 5  URLS …")
    log.info("auto-login url generated (%d chars).", len(client.get_auto_login_url()))
    log.info(
        "new-prescription url generated (%d chars).",
        len(client.get_new_prescription_url({"PatientId": patient_id})),
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Live EazyScripts API smoke test.")
    parser.add_argument(
        "--env-file",
        default=os.path.join(_REPO_ROOT, ".env.testing"),
        help="dotenv file holding EAZYSCRIPTS_* credentials",
    )
    args = parser.parse_args()

    load_dotenv(args.env_file, override=False)
    email = os.getenv("EAZYSCRIPTS_EMAIL", "")
    password = os.getenv("EAZYSCRIPTS_PASSWORD", "")

    log.info(_SEPARATOR)
    log.info("EazyScripts — Live API Smoke Test")
    log.info(_SEPARATOR)

    try:
        with EazyScriptsClient.from_env(args.env_file) as client:
            log.info("Target: %s", client.base_url)
            run(client, email, password)
    except EazyScriptsError as exc:
        log.error("FAIL  %s", exc)
        sys.exit(1)

    log.info(_SEPARATOR)
    log.info("All steps passed.")


if __name__ == "__main__":
    main()
