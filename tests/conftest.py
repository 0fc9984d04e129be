"""Shared pytest fixtures for bridgeconf tests.

Fixtures are organized by category:
- Model fixtures: default and fully populated bridge configurations
- Configuration fixtures: raw dictionaries as loaded from YAML
"""

import logging
from collections.abc import Iterator
from datetime import timedelta
from typing import Any

import pytest

from bridgeconf.models import (
    BackendType,
    BridgeConfig,
    CommandConfig,
    Marshaler,
    MQTTAuthType,
    PacketForwarderConfig,
)
from bridgeconf.templates import DocumentRenderer
from bridgeconf.utils.logging import ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by CLI runs so they never outlive their stream."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def renderer() -> DocumentRenderer:
    """Create a renderer instance."""
    return DocumentRenderer()


@pytest.fixture
def default_config() -> BridgeConfig:
    """Return a configuration holding only the bridge defaults."""
    return BridgeConfig()


@pytest.fixture
def populated_config() -> BridgeConfig:
    """Return a configuration with every collection and variant filled in."""
    config = BridgeConfig()

    config.general.log_level = 5
    config.filters.net_ids = ["000000", "000001"]
    config.filters.join_euis = [
        ("0000000000000000", "00000000000000ff"),
        ("000000000000ff00", "000000000000ffff"),
    ]

    config.backend.type = BackendType.BASIC_STATION
    config.backend.semtech_udp.skip_crc_check = True
    config.backend.semtech_udp.configuration = [
        PacketForwarderConfig(
            gateway_id="0102030405060708",
            base_file="/etc/lora-packet-forwarder/global_conf.json",
            output_file="/etc/lora-packet-forwarder/local_conf.json",
            restart_command="/etc/init.d/lora-packet-forwarder restart",
        ),
    ]
    config.backend.basic_station.tls_cert = "/etc/lora-gateway-bridge/cert.pem"
    config.backend.basic_station.verify_cn = True

    config.integration.marshaler = Marshaler.JSON
    config.integration.mqtt.auth.type = MQTTAuthType.AZURE_IOT_HUB
    config.integration.mqtt.auth.generic.qos = 1
    config.integration.mqtt.auth.azure_iot_hub.hostname = "iot-hub-name.azure-devices.net"

    config.metrics.prometheus.endpoint_enabled = True
    config.metrics.prometheus.bind = "0.0.0.0:9100"

    config.meta_data.static = {"serial_number": "A1B21234", "model": "outdoor"}
    config.meta_data.dynamic.commands = {
        "temperature": "/opt/gateway-temperature/gateway-temperature.sh",
    }

    config.commands.commands = {
        "reboot": CommandConfig(
            max_execution_duration=timedelta(seconds=1),
            command="/usr/bin/reboot",
        ),
    }

    return config


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def full_config_data() -> dict[str, Any]:
    """Return a YAML-shaped configuration dictionary."""
    return {
        "general": {"log_level": 3},
        "filters": {
            "net_ids": ["000000"],
            "join_euis": [["0000000000000000", "00000000000000ff"]],
        },
        "backend": {
            "type": "basic_station",
            "semtech_udp": {
                "udp_bind": "0.0.0.0:1701",
                "configuration": [
                    {"gateway_id": "0102030405060708", "base_file": "/tmp/base.json"},
                ],
            },
            "basic_station": {
                "ping_interval": "30s",
                "read_timeout": "35s",
                "frequency_min": 902000000,
            },
        },
        "integration": {
            "marshaler": "json",
            "mqtt": {
                "max_reconnect_interval": "2m",
                "auth": {
                    "type": "gcp_cloud_iot_core",
                    "gcp_cloud_iot_core": {
                        "project_id": "my-project",
                        "jwt_expiration": "12h",
                    },
                },
            },
        },
        "metrics": {"prometheus": {"endpoint_enabled": True, "bind": "0.0.0.0:9100"}},
        "meta_data": {
            "static": {"serial_number": "A1B21234"},
            "dynamic": {"execution_interval": "5m", "commands": {"uptime": "/usr/bin/uptime"}},
        },
        "commands": {
            "commands": {
                "reboot": {"max_execution_duration": "1s", "command": "/usr/bin/reboot"},
            },
        },
    }
