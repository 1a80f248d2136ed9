"""Exception hierarchy for the PRD swarm."""

from typing import Iterable, List, Optional


class SwarmError(Exception):
    """Base exception for swarm errors."""

    pass


class ProviderError(SwarmError):
    """The text-generation provider call failed or returned nothing usable."""

    def __init__(self, message: str, model: Optional[str] = None):
        super().__init__(message)
        self.model = model


class SchedulingDeadlock(SwarmError):
    """Some selected roles can never have their dependencies satisfied."""

    def __init__(self, unscheduled: Iterable[str]):
        self.unscheduled: List[str] = [str(getattr(r, "value", r)) for r in unscheduled]
        super().__init__(
            f"Unresolvable dependencies for roles: {', '.join(self.unscheduled)}"
        )


class ConfigurationError(SwarmError):
    """Static swarm configuration is inconsistent (programming error)."""

    pass
