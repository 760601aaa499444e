"""Exceptions raised by the level generator.

Only configuration mistakes and misuse of a finished grid raise. Soft
degradation (fewer rooms than requested, a residual disconnected region)
is reported through metrics and logs instead.
"""


class ConfigurationError(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class FrozenGridError(RuntimeError):
    pass


__all__ = ["ConfigurationError", "FrozenGridError"]
