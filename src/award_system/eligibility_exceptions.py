"""
Award Eligibility Exception Hierarchy

Exceptions raised by the award eligibility engine. Each carries an error
code, a severity level, a recommended recovery strategy and a context dict
so callers can log or serialize the failure.

Exception Hierarchy:
    EligibilityException (base)
    ├── InvalidThresholdException
    ├── UnknownAwardCategoryException
    ├── InvalidRankingDataException
    ├── UnknownGradeBandException
    └── EligibilityComputationException

Missing rankings, teams absent from the roster and free-text award titles
are NOT exceptions: the engine degrades to "ineligible with a reason" or to
combined mode instead.
"""

from enum import Enum
from typing import Any, Dict, Optional
from datetime import datetime


class ExceptionSeverity(Enum):
    """Severity levels for exceptions"""
    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class RecoveryStrategy(Enum):
    """Recovery strategies for exception handling"""
    ABORT = "abort"          # Stop the computation
    RETRY = "retry"          # Retry with fresh inputs
    SKIP = "skip"            # Skip this division/category and continue
    MANUAL = "manual"        # Requires a configuration change


class EligibilityException(Exception):
    """
    Base exception for all award eligibility errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code (e.g., "ELIG_001")
        severity: Exception severity level
        recovery_strategy: Recommended recovery action
        context_dict: Additional context (event_id, division_id, category, etc.)
        original_exception: Original exception if wrapping another exception
        timestamp: When the exception was raised
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ELIG_000",
        severity: ExceptionSeverity = ExceptionSeverity.ERROR,
        recovery_strategy: RecoveryStrategy = RecoveryStrategy.ABORT,
        context_dict: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.recovery_strategy = recovery_strategy
        self.context_dict = context_dict or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build error message with context"""
        lines = [
            f"[{self.error_code}] {self.message}",
            f"Severity: {self.severity.value}",
            f"Recovery: {self.recovery_strategy.value}",
        ]

        if self.context_dict:
            lines.append("Context:")
            for key, value in self.context_dict.items():
                lines.append(f"  {key}: {value}")

        if self.original_exception:
            lines.append(
                f"Original Error: {type(self.original_exception).__name__}: "
                f"{self.original_exception}"
            )

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recovery_strategy": self.recovery_strategy.value,
            "context": self.context_dict,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidThresholdException(EligibilityException):
    """
    Raised when a cutoff is requested with an unusable threshold or population.

    Examples:
    - Threshold fraction of 0, 1, or outside (0, 1)
    - Negative population size
    """

    def __init__(
        self,
        message: str,
        threshold: Optional[float] = None,
        population_size: Optional[int] = None,
        **kwargs
    ):
        context = {
            "threshold": threshold,
            "population_size": population_size,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="ELIG_THRESHOLD_001",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.MANUAL,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class UnknownAwardCategoryException(EligibilityException):
    """Raised when a category value names neither All-Around nor Excellence."""

    def __init__(
        self,
        category: Any = None,
        message: Optional[str] = None,
        valid_categories: Optional[list] = None,
        **kwargs
    ):
        context = {
            "invalid_category": category,
            "valid_categories": valid_categories or ["All-Around Champion", "Excellence Award"],
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message or f"Unknown award category: '{category}'",
            error_code="ELIG_CATEGORY_002",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class InvalidRankingDataException(EligibilityException):
    """
    Raised when a ranking record cannot be interpreted at all.

    Examples:
    - API payload without a team id
    - Skills bundle containing rows for two different teams
    """

    def __init__(
        self,
        message: str,
        team_id: Optional[int] = None,
        table: Optional[str] = None,
        **kwargs
    ):
        context = {
            "team_id": team_id,
            "table": table,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="ELIG_DATA_003",
            severity=ExceptionSeverity.WARNING,
            recovery_strategy=RecoveryStrategy.SKIP,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class UnknownGradeBandException(EligibilityException):
    """Raised when a grade band value is neither middle school nor its complement."""

    def __init__(
        self,
        band: Any = None,
        message: Optional[str] = None,
        **kwargs
    ):
        context = {
            "invalid_band": band,
            "valid_bands": ["Middle School", "Not Middle School", "High School"],
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message or f"Unknown grade band: '{band}'",
            error_code="ELIG_BAND_005",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


class EligibilityComputationException(EligibilityException):
    """Raised when one batch job (event, division, category) fails to compute."""

    def __init__(
        self,
        message: str,
        event_id: Optional[int] = None,
        division_id: Optional[int] = None,
        category: Optional[str] = None,
        **kwargs
    ):
        context = {
            "event_id": event_id,
            "division_id": division_id,
            "category": category,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="ELIG_COMPUTE_004",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.SKIP,
            context_dict=context,
            original_exception=kwargs.get('original_exception')
        )


def wrap_exception(
    original: Exception,
    message: str,
    exception_class: type = EligibilityException,
    **kwargs
) -> EligibilityException:
    """
    Wrap an existing exception in an EligibilityException.

    Args:
        original: The original exception to wrap
        message: New error message
        exception_class: Which EligibilityException subclass to use
        **kwargs: Additional context merged into context_dict

    Returns:
        New EligibilityException wrapping the original

    Example:
        >>> try:
        ...     manager.compute_eligibility(...)
        ... except ValueError as e:
        ...     raise wrap_exception(
        ...         e,
        ...         "Eligibility failed for division",
        ...         exception_class=EligibilityComputationException,
        ...         division_id=3
        ...     )
    """
    context = dict(kwargs.pop('context_dict', {}))
    context.update(kwargs)

    return exception_class(
        message=message,
        context_dict=context,
        original_exception=original
    )
