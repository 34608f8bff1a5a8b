from __future__ import annotations

from core.phone import phone_variants, strip_transport_suffix


def test_domestic_number_expands_to_international_forms() -> None:
    variants = phone_variants("0501234567")
    assert variants == {"+972501234567", "972501234567", "0501234567"}


def test_international_with_plus() -> None:
    assert phone_variants("+972501234567") == {"+972501234567", "972501234567", "0501234567"}


def test_international_without_plus() -> None:
    assert phone_variants("972501234567") == {"+972501234567", "972501234567", "0501234567"}


def test_separators_are_removed_before_matching() -> None:
    assert "+972501234567" in phone_variants("050-123 (4567)")


def test_eight_digit_national_numbers_are_supported() -> None:
    assert phone_variants("031234567") == {"+97231234567", "97231234567", "031234567"}


def test_foreign_numbers_match_literally() -> None:
    assert phone_variants("+1 (555) 123-4567") == {"+15551234567"}
    assert phone_variants("15551234567") == {"15551234567"}


def test_non_phone_identifiers_are_returned_cleaned() -> None:
    assert phone_variants("alice@example.com") == {"alice@example.com"}
    assert phone_variants("") == {""}


def test_other_country_code_can_be_configured() -> None:
    assert phone_variants("0612345678", country_code="33") == {"+33612345678", "33612345678", "0612345678"}


def test_strip_transport_suffix_only_at_the_end() -> None:
    assert strip_transport_suffix("972501234567@s.whatsapp.net", "@s.whatsapp.net") == "972501234567"
    assert strip_transport_suffix("972501234567", "@s.whatsapp.net") == "972501234567"
    assert strip_transport_suffix("a@s.whatsapp.net.x", "@s.whatsapp.net") == "a@s.whatsapp.net.x"
    assert strip_transport_suffix("972501234567@x", "") == "972501234567@x"


def test_non_ascii_digits_match_literally() -> None:
    arabic_indic = "٠٥٠١٢٣٤٥٦٧"
    assert phone_variants(arabic_indic) == {arabic_indic}
    assert phone_variants("+٩٧٢٥٠١٢٣٤٥٦٧") == {"+٩٧٢٥٠١٢٣٤٥٦٧"}
