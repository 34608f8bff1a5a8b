"""Helpers for matching phone-like sender identifiers."""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[\s\-()]")


def clean_identifier(identifier: object) -> str:
    """Drop whitespace, hyphens and parentheses from an identifier."""

    return _SEPARATORS.sub("", str(identifier))


def strip_transport_suffix(sender_id: str, suffix: str) -> str:
    """Remove a trailing transport domain marker (e.g. ``@s.whatsapp.net``)."""

    if suffix and sender_id.endswith(suffix):
        return sender_id[: -len(suffix)]
    return sender_id


def phone_variants(identifier: object, country_code: str = "972") -> set[str]:
    """Return the equivalent spellings of a phone number.

    Only numbers of the given country get multi-format equivalence
    (``+CC...``, ``CC...`` and the domestic ``0...`` form). Any other shape
    is returned as-is so it must match literally.
    """

    cleaned = clean_identifier(identifier)
    cc = re.escape(country_code)

    if re.fullmatch(rf"\+{cc}[0-9]{{8,9}}", cleaned):
        national = cleaned[1 + len(country_code):]
        return {cleaned, cleaned[1:], "0" + national}

    if re.fullmatch(rf"{cc}[0-9]{{8,9}}", cleaned):
        national = cleaned[len(country_code):]
        return {"+" + cleaned, cleaned, "0" + national}

    if re.fullmatch(r"0[0-9]{8,9}", cleaned):
        international = country_code + cleaned[1:]
        return {"+" + international, international, cleaned}

    return {cleaned}
