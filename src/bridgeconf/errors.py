"""Typed exceptions raised while loading and rendering bridge configuration."""


class BridgeConfError(Exception):
    """Base exception for bridgeconf."""

    exit_code: int = 1


class ConfigLoadError(BridgeConfError):
    """Configuration could not be turned into a model (bad YAML, env, values)."""


class MalformedModelError(BridgeConfError):
    """A value the skeleton always expects is structurally missing.

    The model comes from a trusted loader, so this is a contract violation
    and rendering is aborted instead of emitting a corrupted document.
    """


class SinkWriteError(BridgeConfError):
    """The output sink rejected a write or flush.

    The underlying ``OSError`` (or the ``ValueError`` of a closed handle) is
    kept as ``__cause__``. Writes are never
    retried since the stream may already hold part of the document.
    """

    def __init__(self, detail: str = "") -> None:
        super().__init__(f"Failed to write configuration document: {detail}")
