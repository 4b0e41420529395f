"""Exception taxonomy for the ingestion pipeline."""
from typing import Optional


class PipelineError(Exception):
    """Base class for every error raised on purpose by the pipeline."""


class ConfigurationError(PipelineError):
    """Missing or malformed configuration; raised before any I/O."""


class RiotAPIError(PipelineError):
    """A non-2xx response that is not retried (auth, validation, not found)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: str = "",
        partition: str = "",
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.partition = partition
        self.body = body

    def __str__(self) -> str:
        base = super().__str__()
        if self.body:
            return f"{base}\n{self.body[:500]}"
        return base


class RetryBudgetExhaustedError(RiotAPIError):
    """429 / 5xx / transport failures persisted past the retry budget."""


class LadderBootstrapError(PipelineError):
    """The ladder listing resolved to zero player ids."""


class ItemCatalogError(PipelineError):
    """The item metadata file is missing or unreadable."""


class MatchShapeError(PipelineError, ValueError):
    """A match or timeline document lacks the fields the pipeline reads."""
