from __future__ import annotations

import logging

from core.patterns import PatternCompiler, fingerprint_patterns


def test_same_content_reuses_compiled_list() -> None:
    compiler = PatternCompiler()
    first = compiler.compiled_for(["pricing", "demo"])
    second = compiler.compiled_for(["pricing", "demo"])

    assert first is second
    assert compiler.compilations == 1


def test_changed_content_or_order_recompiles() -> None:
    compiler = PatternCompiler()
    compiler.compiled_for(["pricing", "demo"])
    compiler.compiled_for(["demo", "pricing"])
    compiler.compiled_for(["demo", "pricing", "quote"])

    assert compiler.compilations == 3


def test_single_slot_is_replaced() -> None:
    compiler = PatternCompiler()
    compiler.compiled_for(["a"])
    compiler.compiled_for(["b"])
    compiler.compiled_for(["a"])

    assert compiler.compilations == 3


def test_invalid_pattern_is_skipped(caplog) -> None:
    compiler = PatternCompiler()
    with caplog.at_level(logging.WARNING):
        compiled = compiler.compiled_for(["pric(ing", "demo"])

    assert [regex.pattern for regex in compiled] == ["demo"]
    assert "Skipping invalid regex pattern" in caplog.text


def test_patterns_are_case_insensitive_regexes() -> None:
    compiled = PatternCompiler().compiled_for([r"price\s*list"])

    assert compiled[0].search("Send me the PRICE LIST")


def test_fingerprint_is_order_sensitive() -> None:
    assert fingerprint_patterns(["a", "b"]) == fingerprint_patterns(["a", "b"])
    assert fingerprint_patterns(["a", "b"]) != fingerprint_patterns(["b", "a"])
    assert fingerprint_patterns(["ab"]) != fingerprint_patterns(["a", "b"])


def test_oversized_repeat_is_skipped_and_cached(caplog) -> None:
    compiler = PatternCompiler()
    with caplog.at_level(logging.WARNING):
        compiled = compiler.compiled_for(["a{4294967296}", "pricing"])

    assert [regex.pattern for regex in compiled] == ["pricing"]
    assert "Skipping invalid regex pattern: a{4294967296}" in caplog.text

    assert compiler.compiled_for(["a{4294967296}", "pricing"]) is compiled
    assert compiler.compilations == 1
