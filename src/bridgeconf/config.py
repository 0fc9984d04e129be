"""Bridge configuration loading.

Builds a fully populated ``BridgeConfig`` from the bridge defaults plus an
optional YAML override file. Keys mirror the sections of the rendered
document (``backend.basic_station.ping_interval`` and so on). Durations use
the bridge's short-unit syntax (``1m5s``, ``24h``, ``500ms``).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.bridgeconf/config.yaml
3. ./bridgeconf.yaml
"""

import logging
import os
import re
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from bridgeconf.errors import ConfigLoadError
from bridgeconf.models import (
    AzureIoTHubAuthConfig,
    BackendConfig,
    BackendType,
    BasicStationConfig,
    BridgeConfig,
    CommandConfig,
    CommandsConfig,
    DynamicMetaDataConfig,
    FiltersConfig,
    GCPCloudIoTCoreAuthConfig,
    GeneralConfig,
    GenericAuthConfig,
    IntegrationConfig,
    Marshaler,
    MetaDataConfig,
    MetricsConfig,
    MQTTAuthConfig,
    MQTTAuthType,
    MQTTConfig,
    PacketForwarderConfig,
    PrometheusConfig,
    SemtechUDPConfig,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# =============================================================================
# Durations
# =============================================================================

_DURATION_MICROSECONDS = {
    "h": 3_600_000_000,
    "m": 60_000_000,
    "s": 1_000_000,
    "ms": 1_000,
    "us": 1,
    "µs": 1,
    "ns": 0.001,
}

_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|h|m|s)")


def parse_duration(value: str | int | float | timedelta) -> timedelta:
    """Parse a duration in the bridge's short-unit syntax.

    Bare numbers are taken as seconds.

    Args:
        value: Duration string such as "1m5s", "24h" or "500ms"

    Returns:
        Parsed duration

    Raises:
        ConfigLoadError: If the string is not a valid duration
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ConfigLoadError(f"Invalid duration: {value!r}")
    if isinstance(value, int | float):
        return timedelta(seconds=value)

    text = value.strip()
    sign = 1
    if text[:1] in ("-", "+"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta()

    total = 0.0
    pos = 0
    for match in _DURATION_PART_RE.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_MICROSECONDS[match.group(2)]
        pos = match.end()

    if not text or pos != len(text):
        raise ConfigLoadError(f"Invalid duration: {value!r}")

    return timedelta(microseconds=sign * total)


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, e.g. ${MQTT_PASSWORD}.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ConfigLoadError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ConfigLoadError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".bridgeconf" / "config.yaml",
        start_path / "bridgeconf.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigLoadError(f"Section '{key}' must be a mapping")
    return section


def _entry(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigLoadError(f"{what} must be a mapping, got: {value!r}")
    return value


def _entries(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ConfigLoadError(f"'{key}' must be a list")
    return value


def _enum(enum_cls: type[E], value: Any, default: E) -> E:
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        valid = sorted(member.value for member in enum_cls)
        raise ConfigLoadError(f"Invalid {enum_cls.__name__}: {value!r}. Valid: {valid}") from None


def _duration(data: dict[str, Any], key: str, default: timedelta) -> timedelta:
    if data.get(key) is None:
        return default
    return parse_duration(data[key])


def _string_map(data: dict[str, Any], key: str) -> dict[str, str]:
    return {str(k): str(v) for k, v in _section(data, key).items()}


def _join_eui_range(value: Any) -> tuple[str, str]:
    if not isinstance(value, list | tuple) or len(value) != 2:
        raise ConfigLoadError(f"JoinEUI range must be a [low, high] pair, got: {value!r}")
    return (str(value[0]), str(value[1]))


def _load_backend(data: dict[str, Any]) -> BackendConfig:
    udp_data = _section(data, "semtech_udp")
    udp = SemtechUDPConfig()
    station_data = _section(data, "basic_station")
    station = BasicStationConfig()
    forwarders = [
        _entry(item, "Packet forwarder configuration")
        for item in _entries(udp_data, "configuration")
    ]

    return BackendConfig(
        type=_enum(BackendType, data.get("type"), BackendType.SEMTECH_UDP),
        semtech_udp=SemtechUDPConfig(
            udp_bind=udp_data.get("udp_bind", udp.udp_bind),
            skip_crc_check=udp_data.get("skip_crc_check", udp.skip_crc_check),
            fake_rx_time=udp_data.get("fake_rx_time", udp.fake_rx_time),
            configuration=[
                PacketForwarderConfig(
                    gateway_id=pf.get("gateway_id", ""),
                    base_file=pf.get("base_file", ""),
                    output_file=pf.get("output_file", ""),
                    restart_command=pf.get("restart_command", ""),
                )
                for pf in forwarders
            ],
        ),
        basic_station=BasicStationConfig(
            bind=station_data.get("bind", station.bind),
            tls_cert=station_data.get("tls_cert", station.tls_cert),
            tls_key=station_data.get("tls_key", station.tls_key),
            ca_cert=station_data.get("ca_cert", station.ca_cert),
            verify_cn=station_data.get("verify_cn", station.verify_cn),
            ping_interval=_duration(station_data, "ping_interval", station.ping_interval),
            read_timeout=_duration(station_data, "read_timeout", station.read_timeout),
            write_timeout=_duration(station_data, "write_timeout", station.write_timeout),
            region=station_data.get("region", station.region),
            frequency_min=station_data.get("frequency_min", station.frequency_min),
            frequency_max=station_data.get("frequency_max", station.frequency_max),
        ),
    )


def _load_mqtt_auth(data: dict[str, Any]) -> MQTTAuthConfig:
    generic_data = _section(data, "generic")
    generic = GenericAuthConfig()
    gcp_data = _section(data, "gcp_cloud_iot_core")
    gcp = GCPCloudIoTCoreAuthConfig()
    azure_data = _section(data, "azure_iot_hub")
    azure = AzureIoTHubAuthConfig()

    return MQTTAuthConfig(
        type=_enum(MQTTAuthType, data.get("type"), MQTTAuthType.GENERIC),
        generic=GenericAuthConfig(
            server=generic_data.get("server", generic.server),
            username=generic_data.get("username", generic.username),
            password=generic_data.get("password", generic.password),
            qos=generic_data.get("qos", generic.qos),
            clean_session=generic_data.get("clean_session", generic.clean_session),
            client_id=generic_data.get("client_id", generic.client_id),
            ca_cert=generic_data.get("ca_cert", generic.ca_cert),
            tls_cert=generic_data.get("tls_cert", generic.tls_cert),
            tls_key=generic_data.get("tls_key", generic.tls_key),
        ),
        gcp_cloud_iot_core=GCPCloudIoTCoreAuthConfig(
            server=gcp_data.get("server", gcp.server),
            device_id=gcp_data.get("device_id", gcp.device_id),
            project_id=gcp_data.get("project_id", gcp.project_id),
            cloud_region=gcp_data.get("cloud_region", gcp.cloud_region),
            registry_id=gcp_data.get("registry_id", gcp.registry_id),
            jwt_expiration=_duration(gcp_data, "jwt_expiration", gcp.jwt_expiration),
            jwt_key_file=gcp_data.get("jwt_key_file", gcp.jwt_key_file),
        ),
        azure_iot_hub=AzureIoTHubAuthConfig(
            device_connection_string=azure_data.get(
                "device_connection_string", azure.device_connection_string
            ),
            sas_token_expiration=_duration(
                azure_data, "sas_token_expiration", azure.sas_token_expiration
            ),
            device_id=azure_data.get("device_id", azure.device_id),
            hostname=azure_data.get("hostname", azure.hostname),
            tls_cert=azure_data.get("tls_cert", azure.tls_cert),
            tls_key=azure_data.get("tls_key", azure.tls_key),
        ),
    )


def _load_integration(data: dict[str, Any]) -> IntegrationConfig:
    mqtt_data = _section(data, "mqtt")
    mqtt = MQTTConfig()

    return IntegrationConfig(
        marshaler=_enum(Marshaler, data.get("marshaler"), Marshaler.PROTOBUF),
        mqtt=MQTTConfig(
            event_topic_template=mqtt_data.get(
                "event_topic_template", mqtt.event_topic_template
            ),
            command_topic_template=mqtt_data.get(
                "command_topic_template", mqtt.command_topic_template
            ),
            max_reconnect_interval=_duration(
                mqtt_data, "max_reconnect_interval", mqtt.max_reconnect_interval
            ),
            auth=_load_mqtt_auth(_section(mqtt_data, "auth")),
        ),
    )


def load_config_from_dict(data: dict[str, Any]) -> BridgeConfig:
    """Load configuration from a dictionary.

    Missing keys keep the bridge defaults.

    Args:
        data: Configuration dictionary

    Returns:
        BridgeConfig instance

    Raises:
        ConfigLoadError: If a value cannot be converted
    """
    # Apply environment variable substitution
    data = substitute_env_vars(data)

    config = BridgeConfig()

    if "general" in data:
        general_data = _section(data, "general")
        config.general = GeneralConfig(
            log_level=general_data.get("log_level", config.general.log_level),
        )

    if "filters" in data:
        filters_data = _section(data, "filters")
        config.filters = FiltersConfig(
            net_ids=[str(net_id) for net_id in _entries(filters_data, "net_ids")],
            join_euis=[_join_eui_range(r) for r in _entries(filters_data, "join_euis")],
        )

    if "backend" in data:
        config.backend = _load_backend(_section(data, "backend"))

    if "integration" in data:
        config.integration = _load_integration(_section(data, "integration"))

    if "metrics" in data:
        prometheus_data = _section(_section(data, "metrics"), "prometheus")
        config.metrics = MetricsConfig(
            prometheus=PrometheusConfig(
                endpoint_enabled=prometheus_data.get("endpoint_enabled", False),
                bind=prometheus_data.get("bind", ""),
            ),
        )

    if "meta_data" in data:
        meta_data = _section(data, "meta_data")
        dynamic_data = _section(meta_data, "dynamic")
        dynamic = DynamicMetaDataConfig()
        config.meta_data = MetaDataConfig(
            static=_string_map(meta_data, "static"),
            dynamic=DynamicMetaDataConfig(
                execution_interval=_duration(
                    dynamic_data, "execution_interval", dynamic.execution_interval
                ),
                max_execution_duration=_duration(
                    dynamic_data, "max_execution_duration", dynamic.max_execution_duration
                ),
                commands=_string_map(dynamic_data, "commands"),
            ),
        )

    if "commands" in data:
        commands_data = _section(_section(data, "commands"), "commands")
        commands: dict[str, CommandConfig] = {}
        for name, value in commands_data.items():
            cmd = _entry(value, f"Command '{name}'")
            commands[str(name)] = CommandConfig(
                max_execution_duration=_duration(
                    cmd, "max_execution_duration", timedelta(seconds=1)
                ),
                command=cmd.get("command", ""),
            )
        config.commands = CommandsConfig(commands=commands)

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> BridgeConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        BridgeConfig instance (bridge defaults when no file is found)

    Raises:
        ConfigLoadError: If the file is missing, unreadable or invalid
    """
    if config_path is not None:
        if not config_path.exists():
            raise ConfigLoadError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is None:
        logger.debug("No config file found, using bridge defaults")
        return BridgeConfig()

    try:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Failed to read {found_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config file must contain a mapping: {found_path}")

    logger.debug("Loaded config from: %s", found_path)
    return load_config_from_dict(data)
