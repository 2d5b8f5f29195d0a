"""Realtime Database paths (schema-in-code).

The Realtime Database has no DDL. Top-level nodes appear on first write. Use
these constants so paths stay consistent and act as the single source of
truth for the "schema".

Example:
    await store.get(user_path(uid))
"""

USERS = "users"
ADMINS = "admin"
CERTIFICATES = "certificates"
CERTIFICATE_DETAILS = "certificate-details"

CAMPUS_AMBASSADORS = "campus_ambassadors_web"
INTERNATIONAL_CAMPUS_AMBASSADORS = "international_campus_ambassadors_web"
AMBASSADOR_APPLICATIONS = "campus-ambassadors"

AWARD_NOMINATIONS = "awards-nominations"
SESSION_FORMS = "sessionForms"
INTERNSHIP_FORMS = "internshipForms"
CERTIFICATION_FORMS = "certificationForms"
GENERIC_FORMS = "forms"

OLYMPIAD_ENTRIES = "gio-event"

PROFILE_IMAGES = "profile_images"


def user_path(uid: str) -> str:
    return f"{USERS}/{uid}"


def admin_path(uid: str) -> str:
    return f"{ADMINS}/{uid}"


def certificate_path(certificate_id: str) -> str:
    return f"{CERTIFICATES}/{certificate_id}"


def olympiad_entry_path(uid: str) -> str:
    return f"{OLYMPIAD_ENTRIES}/{uid}"
