"""Configuration records for the ingesting rotation strategy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union


class MappingKind(str, Enum):
    """Schema-mapping formats understood by the ingestion endpoint."""

    CSV = "csv"
    JSON = "json"

    @classmethod
    def from_value(cls, value: str) -> "MappingKind":
        """Return CSV for ``"csv"`` (any case) and JSON for anything else."""

        return cls.CSV if value.strip().lower() == cls.CSV.value else cls.JSON


@dataclass(frozen=True, slots=True)
class IdentityAuth:
    """Authenticate with the identity assigned to the host (managed identity)."""

    app_id: str = ""


@dataclass(frozen=True, slots=True)
class AppCredentialsAuth:
    """Authenticate with an application key issued by a tenant."""

    app_id: str
    app_key: str = field(repr=False)
    app_tenant: str


AuthMode = Union[IdentityAuth, AppCredentialsAuth]


def resolve_auth(app_id: str | None, app_key: str | None, app_tenant: str | None) -> AuthMode:
    """Pick the auth mode once: identity unless both key and tenant are set."""

    if not app_key or not app_tenant:
        return IdentityAuth(app_id=app_id or "")
    return AppCredentialsAuth(app_id=app_id or "", app_key=app_key, app_tenant=app_tenant)


@dataclass(frozen=True, slots=True)
class IngestionMapping:
    """Named schema transform applied by the endpoint while ingesting."""

    name: str
    kind: MappingKind


@dataclass(frozen=True, slots=True)
class IngestionProperties:
    """Target of every submission made by one strategy instance."""

    database: str
    table: str
    mapping: IngestionMapping | None = None

    @property
    def data_format(self) -> str:
        return self.mapping.kind.value if self.mapping else MappingKind.CSV.value


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True, slots=True)
class RotationConfig:
    """Immutable settings captured when the strategy is initialised."""

    endpoint: str
    database: str
    table: str
    app_id: str = ""
    app_key: str = field(default="", repr=False)
    app_tenant: str = ""
    mapping_name: str | None = None
    mapping_kind: str | None = None

    def __post_init__(self) -> None:
        if _blank(self.endpoint):
            raise ValueError("endpoint is required")
        if _blank(self.database) or _blank(self.table):
            raise ValueError("datasetName and tableName are required")

    @property
    def auth(self) -> AuthMode:
        return resolve_auth(self.app_id, self.app_key, self.app_tenant)

    @property
    def mapping(self) -> IngestionMapping | None:
        """Return the bound mapping, or ``None`` unless both parts are non-blank."""

        if _blank(self.mapping_name) or _blank(self.mapping_kind):
            return None
        assert self.mapping_name is not None and self.mapping_kind is not None
        return IngestionMapping(
            name=self.mapping_name.strip(),
            kind=MappingKind.from_value(self.mapping_kind),
        )

    def ingestion_properties(self) -> IngestionProperties:
        return IngestionProperties(database=self.database, table=self.table, mapping=self.mapping)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "RotationConfig":
        """Build a config from the flat option names used in handler configs.

        Recognised keys are ``endpoint``, ``appId``, ``appKey``, ``appTenant``,
        ``datasetName``, ``tableName``, ``mappingName`` and ``mappingKind``.
        Unknown keys are ignored so callers can pass a whole handler section.
        """

        def _get(key: str) -> str | None:
            value = options.get(key)
            return None if value is None else str(value)

        return cls(
            endpoint=_get("endpoint") or "",
            database=_get("datasetName") or "",
            table=_get("tableName") or "",
            app_id=_get("appId") or "",
            app_key=_get("appKey") or "",
            app_tenant=_get("appTenant") or "",
            mapping_name=_get("mappingName"),
            mapping_kind=_get("mappingKind"),
        )


__all__ = [
    "AppCredentialsAuth",
    "AuthMode",
    "IdentityAuth",
    "IngestionMapping",
    "IngestionProperties",
    "MappingKind",
    "RotationConfig",
    "resolve_auth",
]
