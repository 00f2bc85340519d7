"""Custom exceptions for the compiler."""


class CompileError(Exception):
    """Base compiler exception."""
    pass


class ConfigError(CompileError):
    pass


class _PathError(CompileError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SourceReadError(_PathError):
    """Top-level source document could not be read."""
    pass


class OutputWriteError(_PathError):
    """Compiled document could not be written."""
    pass


class SourcesDirError(_PathError):
    """Sources directory is missing or cannot be listed."""
    pass
