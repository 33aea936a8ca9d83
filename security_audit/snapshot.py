"""Input schema for the engine: system snapshots and traffic samples.

Both are produced by external collectors (IP discovery, SSH agents, capture
pipelines) and only read here. The loaders accept the collectors' camelCase
JSON/YAML documents and turn them into frozen dataclasses.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = 1

# Collection method reported by network-only discovery (no login on the host)
IP_BASED_DISCOVERY = "ip_based_discovery"

RISK_LEVELS = ("low", "medium", "high", "unknown")
PROTOCOLS = ("TCP", "UDP", "ICMP")


@dataclass(frozen=True)
class ServiceInfo:
    """A network service visible on the target."""

    name: str
    port: int
    protocol: str = "tcp"
    status: Optional[str] = None


@dataclass(frozen=True)
class HostInfo:
    """Identity of the audited host."""

    ip: Optional[str] = None
    hostname: Optional[str] = None
    os: Optional[str] = None


@dataclass(frozen=True)
class NetworkFacts:
    """Network-level facts."""

    primary_ip: Optional[str] = None
    accessibility: Optional[str] = None
    scan_method: Optional[str] = None
    firewall_active: Optional[bool] = None


@dataclass(frozen=True)
class SecurityFacts:
    """Precomputed security hints from the collector."""

    open_ports: Optional[int] = None
    risk_level: Optional[str] = None

    def __post_init__(self) -> None:
        if self.risk_level is not None and self.risk_level not in RISK_LEVELS:
            raise ValueError(f"Unknown risk level: {self.risk_level!r}")


@dataclass(frozen=True)
class SshConfig:
    """Effective sshd settings, as written in sshd_config ("yes", "no", ...)."""

    permit_root_login: Optional[str] = None
    password_authentication: Optional[str] = None


@dataclass(frozen=True)
class DiskUsage:
    """Usage of one mounted filesystem."""

    mount: str
    used_percent: int


@dataclass(frozen=True)
class SystemFacts:
    """Facts only an authenticated collector can gather."""

    ssh: Optional[SshConfig] = None
    uid0_accounts: Optional[tuple[str, ...]] = None
    pending_updates: Optional[int] = None
    disk_usage: tuple[DiskUsage, ...] = ()
    running_services: tuple[str, ...] = ()


@dataclass(frozen=True)
class SnapshotMetadata:
    """How the snapshot was collected."""

    collection_method: Optional[str] = None
    limitations: tuple[str, ...] = ()


@dataclass(frozen=True)
class SystemSnapshot:
    """Everything observed about one target at one point in time."""

    services: Optional[tuple[ServiceInfo, ...]] = None
    host: HostInfo = field(default_factory=HostInfo)
    network: NetworkFacts = field(default_factory=NetworkFacts)
    security: SecurityFacts = field(default_factory=SecurityFacts)
    system: Optional[SystemFacts] = None
    metadata: SnapshotMetadata = field(default_factory=SnapshotMetadata)
    schema_version: int = SCHEMA_VERSION

    def __post_init__(self) -> None:
        if self.schema_version != SCHEMA_VERSION:
            raise ValueError(
                f"Unsupported snapshot schema version {self.schema_version} "
                f"(expected {SCHEMA_VERSION})"
            )

    @property
    def visible_services(self) -> tuple[ServiceInfo, ...]:
        """Services, with unknown treated as none."""
        return self.services or ()

    def has_service(self, name: str) -> bool:
        """Check whether a service with this exact name is visible."""
        return any(s.name == name for s in self.visible_services)


@dataclass(frozen=True)
class TrafficSample:
    """One observed network flow record."""

    timestamp: datetime
    source: str
    destination: str
    protocol: str
    port: int
    size_bytes: int
    country: Optional[str] = None
    suspicious_score: int = 0

    def __post_init__(self) -> None:
        if self.protocol not in PROTOCOLS:
            raise ValueError(f"Unknown protocol: {self.protocol!r}")
        if not 0 <= self.suspicious_score <= 100:
            raise ValueError(
                f"suspicious_score must be within 0-100, got {self.suspicious_score}"
            )
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))


def parse_timestamp(value: Union[str, int, float, datetime]) -> datetime:
    """
    Parse a sample timestamp.

    Args:
        value: ISO-8601 string (a trailing "Z" is accepted), epoch seconds or datetime

    Returns:
        Timezone-aware datetime (naive values are taken as UTC)
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def snapshot_from_dict(data: dict[str, Any]) -> SystemSnapshot:
    """
    Build a SystemSnapshot from a collector document.

    Missing sections become unknown rather than errors.

    Args:
        data: Decoded JSON/YAML document

    Returns:
        SystemSnapshot
    """
    raw_services = data.get("services")
    services = None
    if raw_services is not None:
        services = tuple(
            ServiceInfo(
                name=s["name"],
                port=int(s["port"]),
                protocol=s.get("protocol", "tcp"),
                status=s.get("status"),
            )
            for s in raw_services
        )

    server = data.get("server") or {}
    network = data.get("network") or {}
    security = data.get("security") or {}
    metadata = data.get("metadata") or {}

    return SystemSnapshot(
        services=services,
        host=HostInfo(
            ip=server.get("ip"),
            hostname=server.get("hostname"),
            os=server.get("os"),
        ),
        network=NetworkFacts(
            primary_ip=network.get("primaryIP"),
            accessibility=network.get("accessibility"),
            scan_method=network.get("scanMethod"),
            firewall_active=network.get("firewallActive"),
        ),
        security=SecurityFacts(
            open_ports=security.get("openPorts"),
            risk_level=security.get("riskLevel"),
        ),
        system=_system_from_dict(data.get("system")),
        metadata=SnapshotMetadata(
            collection_method=metadata.get("collectionMethod"),
            limitations=tuple(metadata.get("limitations") or ()),
        ),
        schema_version=data.get("schemaVersion", SCHEMA_VERSION),
    )


def _system_from_dict(system: Optional[dict[str, Any]]) -> Optional[SystemFacts]:
    """Parse the authenticated-collection section."""
    if not system:
        return None

    ssh = system.get("ssh")
    uid0 = system.get("uid0Accounts")

    return SystemFacts(
        ssh=SshConfig(
            permit_root_login=ssh.get("permitRootLogin"),
            password_authentication=ssh.get("passwordAuthentication"),
        )
        if ssh is not None
        else None,
        uid0_accounts=tuple(uid0) if uid0 is not None else None,
        pending_updates=system.get("pendingUpdates"),
        disk_usage=tuple(
            DiskUsage(mount=d["mount"], used_percent=int(d["usedPercent"]))
            for d in system.get("diskUsage") or ()
        ),
        running_services=tuple(system.get("runningServices") or ()),
    )


def sample_from_dict(data: dict[str, Any]) -> TrafficSample:
    """Build a TrafficSample from a capture record."""
    return TrafficSample(
        timestamp=parse_timestamp(data["timestamp"]),
        source=data["source"],
        destination=data["destination"],
        protocol=str(data["protocol"]).upper(),
        port=int(data.get("port", 0)),
        size_bytes=int(data.get("size", 0)),
        country=data.get("country"),
        suspicious_score=int(data.get("suspiciousScore", 0)),
    )


def _read_document(path: Union[str, Path]) -> Any:
    """Read a JSON or YAML file (YAML is a superset of JSON)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path, "r") as f:
        return yaml.safe_load(f)


def load_snapshot(path: Union[str, Path]) -> SystemSnapshot:
    """
    Load a system snapshot document.

    Args:
        path: Path to a JSON or YAML snapshot

    Returns:
        SystemSnapshot

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document violates the snapshot schema
    """
    data = _read_document(path)
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot document must be a mapping: {path}")

    try:
        snapshot = snapshot_from_dict(data)
    except KeyError as e:
        raise ValueError(f"Snapshot {path} is missing field {e}") from e
    except (TypeError, AttributeError) as e:
        raise ValueError(f"Snapshot {path} is malformed: {e}") from e

    logger.info(
        f"Loaded snapshot from {path}: {len(snapshot.visible_services)} services, "
        f"collection method {snapshot.metadata.collection_method or 'unknown'}"
    )
    return snapshot


def load_traffic_samples(path: Union[str, Path]) -> list[TrafficSample]:
    """
    Load a batch of traffic samples.

    Args:
        path: Path to a JSON or YAML list of samples (or a mapping with a "traffic" key)

    Returns:
        List of TrafficSample

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a record is malformed
    """
    data = _read_document(path)
    if isinstance(data, dict):
        data = data.get("traffic")
    if not isinstance(data, list):
        raise ValueError(f"Traffic document must be a list of samples: {path}")

    try:
        samples = [sample_from_dict(record) for record in data]
    except KeyError as e:
        raise ValueError(f"Traffic sample in {path} is missing field {e}") from e
    except (TypeError, AttributeError) as e:
        raise ValueError(f"Traffic sample in {path} is malformed: {e}") from e

    logger.info(f"Loaded {len(samples)} traffic samples from {path}")
    return samples
