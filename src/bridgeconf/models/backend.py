"""Gateway backend entities.

The backend section always carries both variant blocks:
- SemtechUDPConfig: UDP packet-forwarder listener
- BasicStationConfig: Basic Station websocket listener

``BackendConfig.type`` only tells the bridge which of the two is consulted.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum


class BackendType(Enum):
    """Gateway transport used by the bridge."""

    SEMTECH_UDP = "semtech_udp"
    BASIC_STATION = "basic_station"


@dataclass
class PacketForwarderConfig:
    """Per-gateway packet-forwarder configuration override.

    Attributes:
        gateway_id: Gateway ID (EUI64, hex encoded)
        base_file: Packet-forwarder base configuration file
        output_file: File the merged configuration is written to
        restart_command: Command restarting the packet-forwarder
    """

    gateway_id: str = ""
    base_file: str = ""
    output_file: str = ""
    restart_command: str = ""


@dataclass
class SemtechUDPConfig:
    """Semtech UDP packet-forwarder backend.

    Attributes:
        udp_bind: ip:port the UDP listener binds to
        skip_crc_check: Forward frames with a failed CRC check
        fake_rx_time: Fake the RX time for gateways without GPS
        configuration: Per-gateway overrides, rendered in list order
    """

    udp_bind: str = "0.0.0.0:1700"
    skip_crc_check: bool = False
    fake_rx_time: bool = False
    configuration: list[PacketForwarderConfig] = field(default_factory=list)


@dataclass
class BasicStationConfig:
    """Basic Station websocket backend.

    Attributes:
        bind: ip:port the websocket listener binds to
        tls_cert: TLS certificate file
        tls_key: TLS key file
        ca_cert: CA certificate used to validate gateway client certificates
        verify_cn: Require the client certificate CommonName to match the gateway EUI
        ping_interval: Websocket ping interval
        read_timeout: Read timeout (must exceed ping_interval)
        write_timeout: Write timeout
        region: LoRaWAN region name
        frequency_min: Minimal frequency (Hz)
        frequency_max: Maximum frequency (Hz)
    """

    bind: str = ":3001"
    tls_cert: str = ""
    tls_key: str = ""
    ca_cert: str = ""
    verify_cn: bool = False
    ping_interval: timedelta = timedelta(minutes=1)
    read_timeout: timedelta = timedelta(minutes=1, seconds=5)
    write_timeout: timedelta = timedelta(seconds=1)
    region: str = "EU868"
    frequency_min: int = 863000000
    frequency_max: int = 870000000


@dataclass
class BackendConfig:
    """Gateway backend selection plus every backend's settings."""

    type: BackendType = BackendType.SEMTECH_UDP
    semtech_udp: SemtechUDPConfig = field(default_factory=SemtechUDPConfig)
    basic_station: BasicStationConfig = field(default_factory=BasicStationConfig)
