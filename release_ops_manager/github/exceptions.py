"""Custom exceptions for the GitHub module."""


class GitHubUnprocessableEntityError(ValueError):
    """Raised when GitHub rejects a request with 422 Unprocessable Entity."""

    def __init__(self, function: str, message: str, errors: list, url: str | None = None) -> None:
        """Initializes the exception with the details GitHub returned."""
        super().__init__(f"GitHub 422 error in {function}: {message} | errors: {errors} | url: {url}")
        self.function = function
        self.message = message
        self.errors = errors
        self.url = url
