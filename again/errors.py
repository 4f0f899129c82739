class AgainError(Exception):
    """Base exception for alias registry errors."""

    pass


class StorageError(AgainError):
    """Raised when a persisted table cannot be read or written."""

    def __init__(self, table: str, path, reason: str):
        self.table = table
        self.path = path
        super().__init__(f"{table} table ({path}): {reason}")


class EditorError(AgainError):
    """Raised when the editor cannot be launched or exits abnormally."""

    pass


class ConfigError(AgainError):
    """Raised when required configuration is missing or malformed."""

    pass
