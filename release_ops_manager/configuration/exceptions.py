"""Contains exceptions raised when reconciling application configuration."""


class TemplateConfigurationError(Exception):
    """Raised when a naming or formatting template is not a string."""

    def __init__(self, name: str, template: object) -> None:
        """Initializes the exception with the name of the offending template."""
        super().__init__(f"{name} template is not a string: {template!r}")
        self.name = name
        self.template = template


class ReleaseConfigurationError(Exception):
    """Raised when a release configuration file cannot be loaded or is invalid."""

    pass


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the GitHub authentication configuration is undefined."""

    pass
