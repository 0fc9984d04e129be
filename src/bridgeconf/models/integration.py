"""MQTT integration entities.

All three authentication blocks are kept on ``MQTTAuthConfig`` at all times,
``MQTTAuthConfig.type`` names the one the bridge uses.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum


class Marshaler(Enum):
    """Payload encoding used on the MQTT topics."""

    PROTOBUF = "protobuf"
    JSON = "json"


class MQTTAuthType(Enum):
    """MQTT authentication mechanism."""

    GENERIC = "generic"
    GCP_CLOUD_IOT_CORE = "gcp_cloud_iot_core"
    AZURE_IOT_HUB = "azure_iot_hub"


@dataclass
class GenericAuthConfig:
    """Generic MQTT broker authentication.

    Attributes:
        server: Broker URI (tcp://, ssl:// or ws://)
        username: Username (optional)
        password: Password (optional)
        qos: Quality of service level (0, 1 or 2)
        clean_session: Set the clean session flag on connect
        client_id: Client ID, random when empty
        ca_cert: CA certificate file (optional)
        tls_cert: TLS certificate file (optional)
        tls_key: TLS key file (optional)
    """

    server: str = "tcp://127.0.0.1:1883"
    username: str = ""
    password: str = ""
    qos: int = 0
    clean_session: bool = True
    client_id: str = ""
    ca_cert: str = ""
    tls_cert: str = ""
    tls_key: str = ""


@dataclass
class GCPCloudIoTCoreAuthConfig:
    """Google Cloud IoT Core authentication."""

    server: str = "ssl://mqtt.googleapis.com:8883"
    device_id: str = ""
    project_id: str = ""
    cloud_region: str = ""
    registry_id: str = ""
    jwt_expiration: timedelta = timedelta(hours=24)
    jwt_key_file: str = ""


@dataclass
class AzureIoTHubAuthConfig:
    """Azure IoT Hub authentication (symmetric key or X.509)."""

    device_connection_string: str = ""
    sas_token_expiration: timedelta = timedelta(hours=24)
    device_id: str = ""
    hostname: str = ""
    tls_cert: str = ""
    tls_key: str = ""


@dataclass
class MQTTAuthConfig:
    """Selected MQTT authentication type plus every mechanism's settings."""

    type: MQTTAuthType = MQTTAuthType.GENERIC
    generic: GenericAuthConfig = field(default_factory=GenericAuthConfig)
    gcp_cloud_iot_core: GCPCloudIoTCoreAuthConfig = field(
        default_factory=GCPCloudIoTCoreAuthConfig
    )
    azure_iot_hub: AzureIoTHubAuthConfig = field(default_factory=AzureIoTHubAuthConfig)


@dataclass
class MQTTConfig:
    """MQTT integration settings.

    The topic templates are bridge-side templates and are rendered verbatim.

    Attributes:
        event_topic_template: Event topic template
        command_topic_template: Command topic template
        max_reconnect_interval: Max. wait between reconnection attempts
        auth: Authentication settings
    """

    event_topic_template: str = "gateway/{{ .GatewayID }}/event/{{ .EventType }}"
    command_topic_template: str = "gateway/{{ .GatewayID }}/command/#"
    max_reconnect_interval: timedelta = timedelta(minutes=1)
    auth: MQTTAuthConfig = field(default_factory=MQTTAuthConfig)


@dataclass
class IntegrationConfig:
    """Uplink/downlink event transport."""

    marshaler: Marshaler = Marshaler.PROTOBUF
    mqtt: MQTTConfig = field(default_factory=MQTTConfig)
