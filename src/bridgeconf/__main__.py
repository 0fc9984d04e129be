"""Entry point for running bridgeconf as a module.

Usage:
    python -m bridgeconf configfile > lora-gateway-bridge.toml
"""

from bridgeconf.cli import app

if __name__ == "__main__":
    app()
