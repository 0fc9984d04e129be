"""Root bridge configuration and its small sections.

The defaults are the bridge's documented defaults. Fields with no default
carry an empty value (``""``, ``0``, ``False``, empty collection) and are
never ``None``: the document renders every scalar.
"""

from dataclasses import dataclass, field
from datetime import timedelta

from bridgeconf.models.backend import BackendConfig
from bridgeconf.models.integration import IntegrationConfig


@dataclass
class GeneralConfig:
    """General settings.

    Attributes:
        log_level: debug=5, info=4, warning=3, error=2, fatal=1, panic=0
    """

    log_level: int = 4


@dataclass
class FiltersConfig:
    """Uplink and join-request admission filters.

    Attributes:
        net_ids: NetIDs (hex) used to filter uplink data frames
        join_euis: (low, high) JoinEUI ranges used to filter join-requests
    """

    net_ids: list[str] = field(default_factory=list)
    join_euis: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class PrometheusConfig:
    """Prometheus metrics endpoint."""

    endpoint_enabled: bool = False
    bind: str = ""


@dataclass
class MetricsConfig:
    """Observability settings."""

    prometheus: PrometheusConfig = field(default_factory=PrometheusConfig)


@dataclass
class DynamicMetaDataConfig:
    """Meta-data retrieved by executing external commands.

    Attributes:
        execution_interval: Interval between command executions
        max_execution_duration: Max. duration of a single execution
        commands: Meta-data key to command
    """

    execution_interval: timedelta = timedelta(minutes=1)
    max_execution_duration: timedelta = timedelta(seconds=1)
    commands: dict[str, str] = field(default_factory=dict)


@dataclass
class MetaDataConfig:
    """Gateway meta-data added to every stats message."""

    static: dict[str, str] = field(default_factory=dict)
    dynamic: DynamicMetaDataConfig = field(default_factory=DynamicMetaDataConfig)


@dataclass
class CommandConfig:
    """A command that can be triggered through the bridge."""

    max_execution_duration: timedelta = timedelta(seconds=1)
    command: str = ""


@dataclass
class CommandsConfig:
    """Named executable commands."""

    commands: dict[str, CommandConfig] = field(default_factory=dict)


@dataclass
class BridgeConfig:
    """Top-level bridge configuration, one attribute per document section."""

    general: GeneralConfig = field(default_factory=GeneralConfig)
    filters: FiltersConfig = field(default_factory=FiltersConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    integration: IntegrationConfig = field(default_factory=IntegrationConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    meta_data: MetaDataConfig = field(default_factory=MetaDataConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)
