"""
goap_exceptions.py

Central exception hierarchy for the GOAP planner.

Exception hierarchy:
    GOAPException (base)
    ├── DomainException
    │   └── DomainConfigurationError
    ├── PlanningException
    │   ├── EmptyQueueError
    │   ├── PlanNotFoundError
    │   └── PlanExecutionError
    └── ConfigurationException
        └── InvalidConfigError

Usage:
    from goap_exceptions import PlanNotFoundError

    try:
        plan = planner.require_plan(goal, agent)
    except PlanNotFoundError as e:
        logger.warning(f"No plan: {e}")
        logger.warning(f"Context: {e.context}")
"""

from typing import Any, Dict, Optional


class GOAPException(Exception):
    """
    Base exception for all planner-specific errors.

    All GOAP exceptions support:
    - Detailed messages
    - Contextual information (dict)
    - Chaining of the original exception
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ============================================================================
# DOMAIN EXCEPTIONS
# ============================================================================


class DomainException(GOAPException):
    """Base exception for errors in the Variable/Goal/Action domain model."""


class DomainConfigurationError(DomainException):
    """
    The domain was configured with invalid values.

    Causes:
    - Negative action or goal cost
    - Unhashable goal value (goals are interned by value)
    - Objects from a different registry mixed into this one
    """


# ============================================================================
# PLANNING EXCEPTIONS
# ============================================================================


class PlanningException(GOAPException):
    """Base exception for planning errors."""


class EmptyQueueError(PlanningException):
    """
    remove_min() was called on an empty MinQueue.

    This is a contract violation: the planner checks for an empty
    frontier before extracting.
    """


class PlanNotFoundError(PlanningException):
    """
    No plan was found for a goal.

    Causes:
    - The goal is unreachable with the registered achievers
    - The iteration budget was exhausted before a plan was found
    """

    def __init__(
        self,
        message: str,
        failure: Optional[Any] = None,
        goal: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["failure"] = getattr(failure, "value", failure)
        context["goal"] = str(goal) if goal is not None else None
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.failure = failure
        self.goal = goal


class PlanExecutionError(PlanningException):
    """
    An action of a plan failed while being performed.

    Causes:
    - The action's behavior raised an exception
    - The action's behavior reported failure (returned False)
    """

    def __init__(
        self,
        message: str,
        action_name: Optional[str] = None,
        action_index: Optional[int] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["action_name"] = action_name
        context["action_index"] = action_index
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.action_name = action_name
        self.action_index = action_index


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================


class ConfigurationException(GOAPException):
    """Base exception for configuration errors."""


class InvalidConfigError(ConfigurationException):
    """
    Invalid planner configuration.

    Causes:
    - Malformed YAML file
    - Invalid values (e.g. non-positive iteration limit)
    - Unknown log level
    """


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def wrap_exception(
    exc: Exception, goap_exception_class: type[GOAPException], message: str, **context
) -> GOAPException:
    """
    Converts a generic exception into a GOAP-specific exception.

    Args:
        exc: Original exception
        goap_exception_class: Target exception class (e.g. InvalidConfigError)
        message: Custom message
        **context: Additional context information

    Returns:
        GOAP exception chained to the original exception

    Example:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise wrap_exception(e, InvalidConfigError, "Malformed config", path=path)
    """
    return goap_exception_class(message=message, context=context, original_exception=exc)


def get_user_friendly_message(exc: Exception, include_details: bool = False) -> str:
    """
    Builds a short human-readable message from an exception.

    Args:
        exc: Exception object
        include_details: Append the technical details (debug mode)

    Returns:
        Readable message
    """
    if isinstance(exc, PlanNotFoundError):
        if exc.context.get("failure") == "budget_exhausted":
            msg = "No plan was found within the search budget."
        else:
            msg = "The goal cannot be reached with the known actions."
    elif isinstance(exc, PlanExecutionError):
        msg = f"The action '{exc.action_name}' failed while executing the plan."
    elif isinstance(exc, EmptyQueueError):
        msg = "Internal planner error (empty frontier)."
    elif isinstance(exc, DomainException):
        msg = "The planning domain is configured incorrectly."
    elif isinstance(exc, ConfigurationException):
        msg = "The planner configuration is invalid."
    elif isinstance(exc, GOAPException):
        msg = "A planner error occurred."
    else:
        msg = "An unexpected error occurred."

    if include_details:
        msg += f"\n\nDetails: {str(exc)}"

    return msg
