"""
Course code validation, shared by the API and the Streamlit client.

A course code is a 2-4 letter department prefix, one space, a 1-4 ASCII digit
course number and an optional trailing letter:

    CNIT 120   CS 101   MATH 80A

Both sides of the HTTP boundary import this module. The client check only
saves a round trip; the API check is the one that decides.

Public API:
    COURSE_CODE_PATTERN
    is_valid_course_code(raw) → bool
    normalize_course_code(raw) → str
"""

import re

COURSE_CODE_PATTERN = re.compile(r"^[A-Za-z]{2,4} [0-9]{1,4}[A-Za-z]?$")


def is_valid_course_code(raw: object) -> bool:
    """Return True if raw, once trimmed, is a well-formed course code."""
    if not isinstance(raw, str):
        return False
    return COURSE_CODE_PATTERN.fullmatch(raw.strip()) is not None


def normalize_course_code(raw: str) -> str:
    """Canonicalise a course code for lookup: ' cnit 120 ' → 'CNIT 120'."""
    return raw.strip().upper()
