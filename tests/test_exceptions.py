"""
tests/test_exceptions.py

Tests for the exception hierarchy (goap_exceptions.py).
"""

import pytest

from goap_exceptions import (
    ConfigurationException,
    DomainConfigurationError,
    DomainException,
    EmptyQueueError,
    GOAPException,
    InvalidConfigError,
    PlanExecutionError,
    PlanNotFoundError,
    PlanningException,
    get_user_friendly_message,
    wrap_exception,
)
from infrastructure.interfaces import PlanningFailure


class TestHierarchy:
    """Tests for inheritance and context handling"""

    @pytest.mark.parametrize(
        "exc_class, base",
        [
            (DomainConfigurationError, DomainException),
            (EmptyQueueError, PlanningException),
            (PlanNotFoundError, PlanningException),
            (PlanExecutionError, PlanningException),
            (InvalidConfigError, ConfigurationException),
        ],
    )
    def test_inheritance(self, exc_class, base):
        assert issubclass(exc_class, base)
        assert issubclass(exc_class, GOAPException)

    def test_str_includes_context_and_cause(self):
        exc = GOAPException("failed", context={"a": 1}, original_exception=KeyError("k"))
        text = str(exc)
        assert text.startswith("failed")
        assert "a=1" in text
        assert "KeyError" in text

    def test_plan_not_found_context(self):
        exc = PlanNotFoundError(
            "no plan", failure=PlanningFailure.BUDGET_EXHAUSTED, goal="x == True"
        )
        assert exc.context == {"failure": "budget_exhausted", "goal": "x == True"}
        assert exc.failure is PlanningFailure.BUDGET_EXHAUSTED

    def test_plan_execution_context(self):
        exc = PlanExecutionError("failed", action_name="Chop", action_index=2)
        assert exc.context["action_name"] == "Chop"
        assert exc.context["action_index"] == 2

    def test_wrap_exception(self):
        original = ValueError("bad")
        wrapped = wrap_exception(original, InvalidConfigError, "wrapped", path="x.yaml")
        assert isinstance(wrapped, InvalidConfigError)
        assert wrapped.original_exception is original
        assert wrapped.context == {"path": "x.yaml"}


class TestUserFriendlyMessage:
    """Tests for get_user_friendly_message()"""

    def test_budget_exhausted(self):
        exc = PlanNotFoundError("x", failure=PlanningFailure.BUDGET_EXHAUSTED)
        assert "budget" in get_user_friendly_message(exc)

    def test_unreachable(self):
        exc = PlanNotFoundError("x", failure=PlanningFailure.UNREACHABLE)
        assert "cannot be reached" in get_user_friendly_message(exc)

    def test_execution_error_names_action(self):
        exc = PlanExecutionError("x", action_name="Chop")
        assert "Chop" in get_user_friendly_message(exc)

    def test_details(self):
        exc = InvalidConfigError("broken config")
        message = get_user_friendly_message(exc, include_details=True)
        assert "configuration" in message
        assert "broken config" in message

    def test_foreign_exception(self):
        assert get_user_friendly_message(RuntimeError()) == "An unexpected error occurred."
