# errors.py
# Exceptions raised while loading the servers file.


class ConfigError(Exception):
    """Base class for problems with an input file."""


class FormatError(ConfigError):
    def __init__(self, path: str, line: int, message: str):
        self.path = path
        self.line = line
        super().__init__(f"{path}: invalid format at line {line}: {message}")
