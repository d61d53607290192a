"""
Exception Hierarchy Tests
===========================
"""

from helpcenter.exceptions import (
    NotFoundError,
    UpstreamAuthError,
    ValidationError,
    missing_fields,
)


class TestContextHandling:

    def test_validation_error_leaves_caller_context_untouched(self):
        context = {"route": "users"}

        exc = ValidationError(fields=["email"], context=context)

        assert context == {"route": "users"}
        assert exc.context == {"route": "users", "fields": ["email"]}

    def test_not_found_error_leaves_caller_context_untouched(self):
        context = {"route": "users"}

        exc = NotFoundError(resource="user", resource_id="7", context=context)

        assert context == {"route": "users"}
        assert exc.context["resource_id"] == "7"

    def test_shared_context_is_not_accumulated(self):
        shared = {}
        UpstreamAuthError(provider="google", context=shared)
        UpstreamAuthError(provider="github", context=shared)

        assert shared == {}


class TestMissingFields:

    def test_none_and_blank_are_missing(self):
        assert missing_fields(name="Ana", email="  ", phone=None) == ["email", "phone"]

    def test_nothing_missing(self):
        assert missing_fields(name="Ana", email="ana@example.com") == []
