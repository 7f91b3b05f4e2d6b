"""
Errors raised by the file bridge.

Only pre-flight validation raises. Timeouts, unparseable responses and
host-reported failures come back as ``CommandResult(success=False)``.
"""


class BridgeError(Exception):
    """Base class for bridge errors."""


class ScriptValidationError(BridgeError, ValueError):
    """A script was refused before anything was written to disk."""

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason
