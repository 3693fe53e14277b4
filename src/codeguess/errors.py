"""CodeGuess exception hierarchy.

All CodeGuess-specific exceptions inherit from CodeGuessError,
enabling structured error handling and cleaner catch clauses.
"""


class CodeGuessError(Exception):
    """Base exception for all CodeGuess errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class GatewayError(CodeGuessError):
    """Error talking to the remote content API."""

    def __init__(
        self,
        message: str = "",
        *,
        status_code: int | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message, retryable=retryable)
        self.status_code = status_code


class RateLimited(GatewayError):
    """Remote quota is spent; the reset time comes from the response headers."""

    def __init__(self, message: str = "", *, reset_at: int | None = None) -> None:
        super().__init__(message, status_code=403, retryable=False)
        self.reset_at = reset_at


class BudgetExhausted(CodeGuessError):
    """Local call budget is spent and the cache has nothing to offer."""


class NoCodeFound(CodeGuessError):
    """A repository listing yielded no candidate code files."""


class NoSuitableFile(CodeGuessError):
    """No sampled file met the length and complexity constraints."""


class JudgeError(CodeGuessError):
    """Error communicating with the text-analysis service."""

    def __init__(self, message: str = "", *, retryable: bool = True) -> None:
        super().__init__(message, retryable=retryable)


class RoundContentUnavailable(CodeGuessError):
    """Every tier of the fallback ladder failed."""


class GameNotFound(CodeGuessError):
    """Referenced game does not exist."""


class RoundConflict(CodeGuessError):
    """Round already exists or lies outside the game's round range."""


class ConfigError(CodeGuessError, ValueError):
    """Invalid or missing configuration; still a ValueError for settings callers."""
