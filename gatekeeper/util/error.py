"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Required configuration is missing or invalid."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Missing required environment variables: " + ", ".join(missing)
        )


class DependencyInjectionError(UtilError):
    """Dependency injection error."""

    pass
