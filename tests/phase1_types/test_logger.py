"""
Phase 1 Tests: Logging helpers

Correlation-id scoping and request id generation.
"""

import re

from markfold.utils.logger import (
    base36_encode,
    generate_request_id,
    get_correlation_id,
    get_request_context,
    is_debug_enabled,
    with_correlation_id,
)


class TestRequestIds:
    def test_base36_encode(self):
        assert base36_encode(0) == "0"
        assert base36_encode(35) == "z"
        assert base36_encode(36) == "10"

    def test_generate_request_id_format(self):
        request_id = generate_request_id()
        assert re.fullmatch(r"req_[0-9a-z]+_[0-9a-f]{8}", request_id)

    def test_generate_request_id_unique(self):
        assert generate_request_id() != generate_request_id()


class TestCorrelationScope:
    def test_no_context_outside_scope(self):
        assert get_request_context() is None
        assert get_correlation_id() is None

    def test_scope_sets_and_resets(self):
        with with_correlation_id("req_abc", operation="folding") as ctx:
            assert get_correlation_id() == "req_abc"
            assert ctx.operation == "folding"
            assert ctx.elapsed_ms >= 0.0
        assert get_correlation_id() is None

    def test_nested_scopes_restore_outer(self):
        with with_correlation_id("outer"):
            with with_correlation_id("inner"):
                assert get_correlation_id() == "inner"
            assert get_correlation_id() == "outer"


class TestDebugFlag:
    def test_debug_flag_from_environment(self, monkeypatch):
        monkeypatch.setenv("MARKFOLD_DEBUG", "true")
        assert is_debug_enabled() is True
        monkeypatch.setenv("MARKFOLD_DEBUG", "no")
        assert is_debug_enabled() is False
