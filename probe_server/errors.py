# errors.py
# Exceptions for config loading and port binding.


class ConfigError(Exception):
    """Base class for problems with an input file."""


class FormatError(ConfigError):
    def __init__(self, path: str, line: int, message: str):
        self.path = path
        self.line = line
        super().__init__(f"{path}: invalid format at line {line}: {message}")


class BindError(Exception):
    """A configured port could not be listened on."""

    def __init__(self, port: int, cause: Exception):
        self.port = port
        self.cause = cause
        super().__init__(f"Failed to start server on port {port}: {cause}")
