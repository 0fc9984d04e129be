"""Bridge configuration model.

This module exports the typed configuration tree rendered by the document
renderer:
- BridgeConfig: Root of the tree
- BackendConfig: Backend type plus Semtech UDP and Basic Station settings
- IntegrationConfig: Marshaler plus MQTT settings and authentication
- MetaDataConfig, CommandsConfig: Key/value and named command collections
"""

from bridgeconf.models.backend import (
    BackendConfig,
    BackendType,
    BasicStationConfig,
    PacketForwarderConfig,
    SemtechUDPConfig,
)
from bridgeconf.models.bridge import (
    BridgeConfig,
    CommandConfig,
    CommandsConfig,
    DynamicMetaDataConfig,
    FiltersConfig,
    GeneralConfig,
    MetaDataConfig,
    MetricsConfig,
    PrometheusConfig,
)
from bridgeconf.models.integration import (
    AzureIoTHubAuthConfig,
    GCPCloudIoTCoreAuthConfig,
    GenericAuthConfig,
    IntegrationConfig,
    Marshaler,
    MQTTAuthConfig,
    MQTTAuthType,
    MQTTConfig,
)

__all__ = [
    "BridgeConfig",
    "GeneralConfig",
    "FiltersConfig",
    "BackendConfig",
    "BackendType",
    "SemtechUDPConfig",
    "PacketForwarderConfig",
    "BasicStationConfig",
    "IntegrationConfig",
    "Marshaler",
    "MQTTConfig",
    "MQTTAuthConfig",
    "MQTTAuthType",
    "GenericAuthConfig",
    "GCPCloudIoTCoreAuthConfig",
    "AzureIoTHubAuthConfig",
    "MetricsConfig",
    "PrometheusConfig",
    "MetaDataConfig",
    "DynamicMetaDataConfig",
    "CommandsConfig",
    "CommandConfig",
]
