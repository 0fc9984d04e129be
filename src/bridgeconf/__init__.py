"""bridgeconf - LoRa Gateway Bridge configuration file renderer.

Renders the bridge's typed configuration into the annotated TOML
configuration file operators edit by hand. The same file doubles as the
shipped example configuration, so rendering is fully deterministic.
"""

__version__ = "0.1.0"
