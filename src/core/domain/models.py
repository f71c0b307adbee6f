"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Tipado y (de)serialización JSON sin acoplar el Core a httpx ni a MCP.
- Los modelos son inmutables (`frozen`): se construyen desde cada respuesta
  y se descartan después.

Nota:
- Los invariantes NO se aplican al construir el modelo. La API externa es la
  fuente de verdad y sus datos se aceptan siempre; `violations()` informa de
  lo que no cuadra y el servicio decide (avisar o rechazar).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

from core.domain.validation import (
    is_valid_email,
    is_valid_semantic_version,
    is_valid_slug,
    validate_archived_state,
    validate_key_value_map,
    validate_not_before,
    validate_timestamps,
)
from core.errors import EntityValidationError

MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 1000
MAX_NOTES_LENGTH = 10_000
MAX_CHANNEL_NAME_LENGTH = 100
MAX_CHANNEL_DESCRIPTION_LENGTH = 500
MAX_CUSTOMER_NAME_LENGTH = 255


class ReleaseStatus(str, Enum):
    DRAFT = "draft"
    RELEASED = "released"
    ARCHIVED = "archived"
    SUPERSEDED = "superseded"


class CustomerType(str, Enum):
    TRIAL = "trial"
    PAID = "paid"
    COMMUNITY = "community"
    DEVELOPMENT = "development"


class LicenseType(str, Enum):
    TRIAL = "trial"
    PAID = "paid"
    COMMUNITY = "community"
    DEVELOPMENT = "development"
    EMBEDDED = "embedded"


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def _flag(value: bool) -> str:
    return "true" if value else "false"


class VendorEntity(BaseModel):
    """Base común de las cuatro entidades del Vendor Portal.

    Por qué una base:
    - Centraliza la política de parsing (extra ignorado, inmutabilidad,
      timestamps normalizados a UTC).
    - Da a los servicios una única interfaz: `violations()` / `validate_invariants()`.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    kind: ClassVar[str] = "entity"

    @model_validator(mode="before")
    @classmethod
    def _null_means_default(cls, data: Any) -> Any:
        # `null` en un campo no opcional equivale a omitirlo (se usa el default).
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for name, field in cls.model_fields.items():
            if field.default is None:
                continue
            for key in {name, field.alias or name}:
                if key in cleaned and cleaned[key] is None:
                    del cleaned[key]
        return cleaned

    @field_validator("*", mode="after")
    @classmethod
    def _aware_timestamps(cls, value: object) -> object:
        # Timestamps sin zona se interpretan como UTC para poder compararlos.
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def violations(self) -> list[str]:
        raise NotImplementedError

    def validate_invariants(self) -> None:
        """Lanza `EntityValidationError` con todas las reglas incumplidas."""

        errors = self.violations()
        if errors:
            raise EntityValidationError(self.kind, errors)


class Application(VendorEntity):
    """Aplicación del Vendor Portal (nivel raíz; no tiene padre)."""

    kind: ClassVar[str] = "application"

    id: str = Field(default="", description="Identificador opaco de la aplicación.")
    name: str = Field(default="", description="Nombre visible.")
    slug: str = Field(default="", description="Slug único dentro del equipo.")
    team_id: str = Field(default="", description="Equipo propietario.")
    team_name: str = Field(default="", description="Nombre del equipo propietario.")
    description: str = Field(default="", description="Descripción libre.")
    icon: str = Field(default="", description="URL del icono.")
    is_active: bool = Field(default=False)
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)

    def violations(self) -> list[str]:
        errors: list[str] = []

        if not self.id:
            errors.append("application ID is required")

        if not self.name:
            errors.append("application name is required")
        elif len(self.name) > MAX_NAME_LENGTH:
            errors.append("application name must be 255 characters or less")

        if not self.slug:
            errors.append("application slug is required")
        elif not is_valid_slug(self.slug):
            errors.append("application slug must contain only lowercase letters, numbers, and hyphens")

        if not self.team_id:
            errors.append("team ID is required")

        errors.extend(validate_timestamps(self.created_at, self.updated_at))

        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            errors.append("application description must be 1000 characters or less")

        return errors

    def __str__(self) -> str:
        return (
            f"Application{{ID: {self.id}, Name: {self.name}, Slug: {self.slug}, "
            f"TeamID: {self.team_id}, IsActive: {_flag(self.is_active)}}}"
        )


class Release(VendorEntity):
    """Release de una aplicación.

    `sequence` es el ordinal monotónico por aplicación; `version` es SemVer.
    """

    kind: ClassVar[str] = "release"

    id: str = Field(default="")
    application_id: str = Field(default="")
    version: str = Field(default="", description="Versión SemVer (sin prefijo `v`).")
    sequence: int = Field(default=0, description="Ordinal monotónico por aplicación.")
    status: str = Field(default="", description="draft | released | archived | superseded")
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)
    released_at: datetime | None = Field(default=None)
    notes: str = Field(default="", description="Release notes (texto libre).")
    metadata: dict[str, str] = Field(default_factory=dict)
    is_required: bool = Field(default=False)
    is_prerelease: bool = Field(default=False)
    config: str = Field(default="", description="Configuración asociada a la release (opaca).")

    def violations(self) -> list[str]:
        errors: list[str] = []

        if not self.id:
            errors.append("release ID is required")
        if not self.application_id:
            errors.append("application ID is required")

        if not self.version:
            errors.append("release version is required")
        elif not is_valid_semantic_version(self.version):
            errors.append("release version must follow semantic versioning format (e.g., 1.0.0)")

        if self.sequence < 0:
            errors.append("release sequence must be non-negative")

        valid_statuses = _enum_values(ReleaseStatus)
        if not self.status:
            errors.append("release status is required")
        elif self.status not in valid_statuses:
            errors.append(
                f"invalid release status '{self.status}'. Valid statuses are: {', '.join(valid_statuses)}"
            )

        errors.extend(validate_timestamps(self.created_at, self.updated_at))
        errors.extend(validate_not_before(self.released_at, self.created_at, "released_at"))

        if self.status == ReleaseStatus.RELEASED.value and self.released_at is None:
            errors.append("released_at is required when status is 'released'")

        if len(self.notes) > MAX_NOTES_LENGTH:
            errors.append("release notes must be 10000 characters or less")

        errors.extend(validate_key_value_map(self.metadata, "metadata"))
        return errors

    def is_released(self) -> bool:
        return self.status == ReleaseStatus.RELEASED.value and self.released_at is not None

    def __str__(self) -> str:
        return (
            f"Release{{ID: {self.id}, ApplicationID: {self.application_id}, Version: {self.version}, "
            f"Sequence: {self.sequence}, Status: {self.status}}}"
        )


class Channel(VendorEntity):
    """Canal de distribución; puede apuntar a una release (id + sequence)."""

    kind: ClassVar[str] = "channel"

    id: str = Field(default="")
    application_id: str = Field(default="")
    name: str = Field(default="")
    description: str = Field(default="")
    channel_slug: str = Field(default="")
    release_id: str = Field(default="", description="Release actual del canal (opcional).")
    release_sequence: int = Field(default=0)
    is_default: bool = Field(default=False)
    is_archived: bool = Field(default=False)
    archived_at: datetime | None = Field(default=None)
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)

    def violations(self) -> list[str]:
        errors: list[str] = []

        if not self.id:
            errors.append("channel ID is required")
        if not self.application_id:
            errors.append("application ID is required")

        if not self.name:
            errors.append("channel name is required")
        elif len(self.name) > MAX_CHANNEL_NAME_LENGTH:
            errors.append("channel name must be 100 characters or less")

        if not self.channel_slug:
            errors.append("channel slug is required")
        elif not is_valid_slug(self.channel_slug):
            errors.append("channel slug must contain only lowercase letters, numbers, and hyphens")

        errors.extend(validate_timestamps(self.created_at, self.updated_at))
        errors.extend(
            validate_archived_state(
                is_archived=self.is_archived,
                archived_at=self.archived_at,
                created_at=self.created_at,
            )
        )

        if self.release_id and self.release_sequence <= 0:
            errors.append("release_sequence must be positive when release_id is provided")
        if not self.release_id and self.release_sequence > 0:
            errors.append("release_id is required when release_sequence is provided")

        if len(self.description) > MAX_CHANNEL_DESCRIPTION_LENGTH:
            errors.append("channel description must be 500 characters or less")

        return errors

    def has_release(self) -> bool:
        return bool(self.release_id) and self.release_sequence > 0

    def is_active(self) -> bool:
        return not self.is_archived

    def __str__(self) -> str:
        return (
            f"Channel{{ID: {self.id}, ApplicationID: {self.application_id}, Name: {self.name}, "
            f"Slug: {self.channel_slug}, IsDefault: {_flag(self.is_default)}, "
            f"IsArchived: {_flag(self.is_archived)}}}"
        )


class Customer(VendorEntity):
    """Cliente con licencia, asignado a una aplicación y a un canal."""

    kind: ClassVar[str] = "customer"

    id: str = Field(default="")
    application_id: str = Field(default="")
    name: str = Field(default="")
    email: str = Field(default="")
    channel_id: str = Field(default="")
    channel_name: str = Field(default="")
    type: str = Field(default="", description="trial | paid | community | development")
    status: str = Field(default="", description="Estado informado por la API (sin validar).")
    license_id: str = Field(default="")
    license_type: str = Field(default="", description="trial | paid | community | development | embedded")
    expires_at: datetime | None = Field(default=None)
    is_archived: bool = Field(default=False)
    archived_at: datetime | None = Field(default=None)
    is_gitops_supported: bool = Field(default=False)
    entitlements: dict[str, str] = Field(default_factory=dict)
    custom_fields: dict[str, str] = Field(default_factory=dict)
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)

    def violations(self) -> list[str]:
        errors = self._basic_field_violations()
        errors.extend(self._timestamp_violations())
        errors.extend(validate_key_value_map(self.entitlements, "entitlement"))
        errors.extend(validate_key_value_map(self.custom_fields, "custom field"))
        return errors

    def _basic_field_violations(self) -> list[str]:
        errors: list[str] = []

        if not self.id:
            errors.append("customer ID is required")
        if not self.application_id:
            errors.append("application ID is required")

        if not self.name:
            errors.append("customer name is required")
        elif len(self.name) > MAX_CUSTOMER_NAME_LENGTH:
            errors.append("customer name must be 255 characters or less")

        if self.email and not is_valid_email(self.email):
            errors.append("customer email must be a valid email address")

        if not self.channel_id:
            errors.append("channel ID is required")

        customer_types = _enum_values(CustomerType)
        if not self.type:
            errors.append("customer type is required")
        elif self.type not in customer_types:
            errors.append(f"invalid customer type '{self.type}'. Valid types are: {', '.join(customer_types)}")

        if not self.license_id:
            errors.append("license ID is required")

        license_types = _enum_values(LicenseType)
        if not self.license_type:
            errors.append("license type is required")
        elif self.license_type not in license_types:
            errors.append(
                f"invalid license type '{self.license_type}'. Valid types are: {', '.join(license_types)}"
            )

        return errors

    def _timestamp_violations(self) -> list[str]:
        errors = validate_timestamps(self.created_at, self.updated_at)
        errors.extend(
            validate_archived_state(
                is_archived=self.is_archived,
                archived_at=self.archived_at,
                created_at=self.created_at,
            )
        )
        errors.extend(validate_not_before(self.expires_at, self.created_at, "expires_at"))
        return errors

    def is_active(self) -> bool:
        return not self.is_archived

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.expires_at < now

    def is_trial_customer(self) -> bool:
        return self.type == CustomerType.TRIAL.value or self.license_type == LicenseType.TRIAL.value

    def __str__(self) -> str:
        return (
            f"Customer{{ID: {self.id}, ApplicationID: {self.application_id}, Name: {self.name}, "
            f"Type: {self.type}, LicenseType: {self.license_type}, IsArchived: {_flag(self.is_archived)}}}"
        )


def validate_entity(entity: VendorEntity) -> EntityValidationError | None:
    """Devuelve el error agregado (o None) sin lanzar; útil para logging."""

    errors = entity.violations()
    if not errors:
        return None
    return EntityValidationError(entity.kind, errors)
