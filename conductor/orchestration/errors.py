"""
Error taxonomy for advisor orchestration.

Only CircularDependencyError is fatal (it aborts initialization). The
others are local to one advisor or one name and are logged and filtered
by the orchestration layer rather than propagated to callers.
"""

from typing import Optional, Sequence


class ConductorError(Exception):
    """Base class for all orchestration errors."""

    pass


class CircularDependencyError(ConductorError):
    """Raised when the requested advisor subset contains a dependency cycle."""

    def __init__(self, advisor: str, cycle: Optional[Sequence[str]] = None):
        self.advisor = advisor
        self.cycle = list(cycle) if cycle else [advisor, advisor]
        super().__init__(
            f"Circular dependency detected: {advisor} ({' -> '.join(self.cycle)})"
        )


class UnknownAdvisorError(ConductorError):
    """Raised when a name does not refer to a registered or live advisor."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown advisor: {name}")


class InvalidStateTransitionError(ConductorError):
    """Raised when an advisor is asked to make an illegal lifecycle transition."""

    def __init__(self, advisor: str, current: str, target: str):
        self.advisor = advisor
        self.current = current
        self.target = target
        super().__init__(
            f"Invalid state transition for {advisor}: {current} -> {target}"
        )


class BackendResponseError(ConductorError):
    """Raised when the response backend fails to answer for one advisor."""

    def __init__(self, advisor: str, message: str):
        self.advisor = advisor
        self.message = message
        super().__init__(f"Backend response failed for {advisor}: {message}")


class ConsultationCancelledError(ConductorError):
    """Raised when a consultation is abandoned before synthesis."""

    def __init__(self, consultation_id: str):
        self.consultation_id = consultation_id
        super().__init__(f"Consultation {consultation_id} was cancelled")


class ProjectConfigError(ConductorError):
    """Raised when a project configuration file exists but cannot be read."""

    pass
