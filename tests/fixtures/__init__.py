"""Test fixtures for bridgeconf.

- golden/default_configfile.toml: Rendered document for the bridge defaults
- configs/gateway.yaml: YAML overrides exercising every collection
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

GOLDEN_DIR = FIXTURES_DIR / "golden"

CONFIGS_DIR = FIXTURES_DIR / "configs"

GATEWAY_CONFIG_PATH = CONFIGS_DIR / "gateway.yaml"
