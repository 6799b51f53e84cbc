"""Custom exception hierarchy for Starnamer."""


class StarnamerError(Exception):
    """Base exception for all Starnamer errors."""

    pass


class ConfigError(StarnamerError):
    """Configuration-related errors."""

    pass


class CatalogError(StarnamerError):
    """Star catalog could not be loaded."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)


class CatalogFetchError(CatalogError):
    """Catalog payload could not be fetched (network, I/O or timeout)."""

    pass


class CatalogDecodeError(CatalogError):
    """Catalog payload could not be decoded into text."""

    pass


class CatalogEmptyError(CatalogError):
    """Catalog payload contained no valid rows."""

    def __init__(
        self,
        malformed_rows: int = 0,
        source: str | None = None,
    ):
        self.malformed_rows = malformed_rows
        super().__init__(
            f"Catalog contains no valid rows ({malformed_rows} malformed)",
            source=source,
        )


class CatalogPreviouslyFailedError(CatalogError):
    """An earlier load failed and the loader has not been reset."""

    def __init__(self, cause: CatalogError | None = None):
        self.cause = cause
        message = "Catalog load previously failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, source=cause.source if cause else None)


class StarNotFoundError(StarnamerError):
    """Star not found in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Star not found: {name}")


class GeneratorError(StarnamerError):
    """Star generator failures."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)


class GeneratorUnavailableError(GeneratorError):
    """Generator returned an error or could not be reached."""

    pass


class GeneratorTimeoutError(GeneratorError):
    """Generator did not answer in time."""

    pass


class CacheError(StarnamerError):
    """Cache read/write errors."""

    pass
