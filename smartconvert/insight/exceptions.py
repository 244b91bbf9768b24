class InsightError(Exception):
    """Raised when a document insight cannot be produced."""


class InsightValidationError(InsightError):
    """Raised when the model's answer does not have the expected shape."""


class InsightNetworkError(InsightError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
