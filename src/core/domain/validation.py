"""Reglas de validación compartidas por las entidades.

Son funciones puras: sin I/O ni estado. Cada `violations()` de los modelos
las combina para devolver *todas* las reglas incumplidas.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime

MAX_KEY_LENGTH = 100
MAX_VALUE_LENGTH = 500

_SLUG_RE = re.compile(r"[a-z0-9-]+")

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$",
    re.ASCII,
)


def is_valid_slug(slug: str) -> bool:
    """`[a-z0-9-]+`, sin guion al principio ni al final."""

    if not slug or _SLUG_RE.fullmatch(slug) is None:
        return False
    return not slug.startswith("-") and not slug.endswith("-")


def is_valid_semantic_version(version: str) -> bool:
    """SemVer 2.0 estricto: sin prefijo `v` ni ceros a la izquierda."""

    return bool(version) and _SEMVER_RE.fullmatch(version) is not None


def is_valid_email(email: str) -> bool:
    parts = email.split("@")
    if len(parts) != 2:
        return False
    local, domain = parts
    if not local or not domain:
        return False
    return "." in domain


def validate_key_value_map(values: Mapping[str, str] | None, label: str) -> list[str]:
    """Reglas de longitud para mapas str->str (metadata, entitlements...)."""

    errors: list[str] = []
    for key, value in (values or {}).items():
        if key == "":
            errors.append(f"{label} keys cannot be empty")
        if len(key) > MAX_KEY_LENGTH:
            errors.append(f"{label} keys must be {MAX_KEY_LENGTH} characters or less")
        if len(value) > MAX_VALUE_LENGTH:
            errors.append(f"{label} values must be {MAX_VALUE_LENGTH} characters or less")
    return errors


def validate_timestamps(created_at: datetime | None, updated_at: datetime | None) -> list[str]:
    errors: list[str] = []
    if created_at is None:
        errors.append("created_at timestamp is required")
    if updated_at is None:
        errors.append("updated_at timestamp is required")
    if created_at is not None and updated_at is not None and updated_at < created_at:
        errors.append("updated_at must be equal to or after created_at")
    return errors


def validate_archived_state(
    *,
    is_archived: bool,
    archived_at: datetime | None,
    created_at: datetime | None,
) -> list[str]:
    """Consistencia entre `is_archived` y `archived_at` (Channel y Customer)."""

    errors: list[str] = []
    if archived_at is not None:
        if created_at is not None and archived_at < created_at:
            errors.append("archived_at must be equal to or after created_at")
        if not is_archived:
            errors.append("is_archived must be true when archived_at is set")
    if is_archived and archived_at is None:
        errors.append("archived_at is required when is_archived is true")
    return errors


def validate_not_before(
    value: datetime | None,
    created_at: datetime | None,
    field_name: str,
) -> list[str]:
    if value is not None and created_at is not None and value < created_at:
        return [f"{field_name} must be equal to or after created_at"]
    return []
