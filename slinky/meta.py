"""Object metadata, owner references and API errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class NamespacedName:
    """A namespace and a name identifying an object."""

    namespace: str = ""
    name: str = ""

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class OwnerReference:
    """A reference from an object to the object that owns it."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    uid: str = ""
    controller: Optional[bool] = None
    block_owner_deletion: Optional[bool] = None


@dataclass
class ObjectMeta:
    """Metadata common to every stored object."""

    name: str = ""
    namespace: str = ""
    generate_name: str = ""
    uid: str = ""
    resource_version: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)
    owner_references: list[OwnerReference] = field(default_factory=list)
    deletion_timestamp: Optional[datetime] = None


class ApiError(Exception):
    """An error reported by the object store."""

    def __init__(self, message: str = "", *, causes: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.causes = tuple(causes)

    def has_cause(self, cause: str) -> bool:
        return cause in self.causes


class NotFoundError(ApiError):
    """The object does not exist."""


class AlreadyExistsError(ApiError):
    """An object with the same name already exists."""


class ConflictError(ApiError):
    """The object was changed since it was read."""


class InvalidError(ApiError):
    """The object failed validation."""


def metadata_of(obj: Any) -> ObjectMeta:
    """Return the ObjectMeta of ``obj``, which may itself be an ObjectMeta."""
    if isinstance(obj, ObjectMeta):
        return obj
    meta = getattr(obj, "metadata", None)
    if not isinstance(meta, ObjectMeta):
        raise TypeError(f"{type(obj).__name__} does not have ObjectMeta")
    return meta


def key_func(obj: Any) -> str:
    """Return the ``namespace/name`` key of an object."""
    meta = metadata_of(obj)
    return str(NamespacedName(meta.namespace, meta.name))


def get_controller_of(obj: Any) -> Optional[OwnerReference]:
    """Return the owner reference marked as controller, if any."""
    for ref in metadata_of(obj).owner_references:
        if ref.controller:
            return ref
    return None