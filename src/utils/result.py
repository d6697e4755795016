"""
Result type for pipeline steps.

Each remote call in the transfer pipeline runs through run_step, which
turns its outcome into a StepResult instead of letting exceptions fly.
The result says whether the step failed in transport (HTTP, network)
or in validation (the response lacked data the next step needs).

Steps run exactly once.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Literal, Optional, TypeVar

from src.wise_client import WiseAPIError

logger = logging.getLogger(__name__)

T = TypeVar('T')

FailureKind = Literal["transport", "validation"]


@dataclass
class StepResult(Generic[T]):
    """
    Result of one pipeline step.

    Attributes:
        step: Name of the step, for logs
        success: True if the step produced a value
        value: The step's return value if successful, None otherwise
        error: The exception if failed, None otherwise
        failure: "transport" or "validation" when failed, None otherwise

    Example:
        >>> result = run_step("quote", lambda: client.create_quote(profile_id))
        >>> if result.success:
        ...     print(f"Quote: {result.value.id}")
        ... else:
        ...     print(f"{result.failure} failure: {result.error}")
    """
    step: str
    success: bool
    value: Optional[T] = None
    error: Optional[Exception] = None
    failure: Optional[FailureKind] = None


def run_step(step: str, operation: Callable[[], T]) -> StepResult[T]:
    """
    Execute a step once and capture its outcome.

    Args:
        step: Name of the step, used in log messages
        operation: Callable taking no arguments (use a lambda to
            capture inputs)

    Returns:
        StepResult with the value, or with the error and its kind

    Raises:
        Any exception that is neither a WiseAPIError nor a ValueError.
    """
    try:
        value = operation()
        return StepResult(step=step, success=True, value=value)

    except WiseAPIError as e:
        logger.error(f"Step '{step}' failed in transport (status {e.status_code}): {e}")
        return StepResult(step=step, success=False, error=e, failure="transport")

    except ValueError as e:
        # SchemaError and PipelineValidationError are both ValueErrors
        logger.error(f"Step '{step}' failed validation: {e}")
        return StepResult(step=step, success=False, error=e, failure="validation")

