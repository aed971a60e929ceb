"""Controller revisions: naming, hashing and an API-backed history control."""

from __future__ import annotations

import copy
import random
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, TypeVar

from .meta import (
    ApiError,
    ConflictError,
    InvalidError,
    NamespacedName,
    NotFoundError,
    ObjectMeta,
    OwnerReference,
    get_controller_of,
    metadata_of,
)

T = TypeVar("T")

CONTROLLER_REVISION_HASH_LABEL = "controller-revision-hash"

_SAFE_ALPHABET = "bcdfghjklmnpqrstvwxz2456789"
_MAX_PREFIX = 223

_RETRY_STEPS = 4
_RETRY_DELAY = 0.01
_RETRY_FACTOR = 5.0
_RETRY_JITTER = 0.1


@dataclass
class ControllerRevision:
    """An immutable snapshot of state data with a revision number."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    data: bytes = b""
    revision: int = 0


@dataclass(frozen=True)
class GroupVersionKind:
    """An API group, version and kind."""

    group: str = ""
    version: str = ""
    kind: str = ""

    @property
    def group_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    @classmethod
    def from_api_version_and_kind(cls, api_version: str, kind: str) -> GroupVersionKind:
        parts = api_version.split("/")
        if api_version == "" or len(parts) > 2:
            return cls(kind=kind)
        if len(parts) == 1:
            return cls(version=api_version, kind=kind)
        return cls(group=parts[0], version=parts[1], kind=kind)


class _Client(Protocol):
    def create(self, obj: Any) -> None: ...

    def get(self, kind: type, key: NamespacedName) -> Any: ...

    def update(self, obj: Any) -> None: ...

    def delete(self, obj: Any) -> None: ...

    def list(self, kind: type, namespace: str) -> Iterable[Any]: ...


def set_revision(labels: Optional[dict[str, str]], revision: str) -> None:
    """Record ``revision`` in ``labels`` when both are non-empty."""
    if labels is None:
        return
    if revision:
        labels[CONTROLLER_REVISION_HASH_LABEL] = revision


def get_revision(labels: Optional[Mapping[str, str]]) -> str:
    """Return the revision recorded in ``labels``, or an empty string."""
    if labels is None:
        return ""
    return labels.get(CONTROLLER_REVISION_HASH_LABEL, "")


def _fnv32(data: bytes) -> int:
    value = 0x811C9DC5
    for byte in data:
        value = (value * 0x01000193) & 0xFFFFFFFF
        value ^= byte
    return value


def hash_controller_revision(revision: ControllerRevision, collision_count: Optional[int]) -> str:
    """Hash the revision's data and collision count into a name-safe string."""
    payload = bytes(revision.data)
    if collision_count is not None:
        payload += str(collision_count).encode()
    digits = str(_fnv32(payload)).encode()
    return "".join(_SAFE_ALPHABET[b % len(_SAFE_ALPHABET)] for b in digits)


def controller_revision_name(prefix: str, hash_value: str) -> str:
    """Return ``prefix-hash``, truncating the prefix to 223 characters."""
    return f"{prefix[:_MAX_PREFIX]}-{hash_value}"


def retry_on_conflict(fn: Callable[[], T]) -> T:
    """Call ``fn``, retrying with exponential backoff while it raises ConflictError."""
    delay = _RETRY_DELAY
    for attempt in range(_RETRY_STEPS):
        try:
            return fn()
        except ConflictError:
            if attempt == _RETRY_STEPS - 1:
                raise
        time.sleep(delay + random.random() * _RETRY_JITTER * delay)
        delay *= _RETRY_FACTOR
    raise AssertionError("unreachable")


class HistoryControl:
    """Manages controller revisions through an object store client."""

    def __init__(self, client: _Client) -> None:
        self._client = client

    def _refetch(self, key: NamespacedName, fallback: ControllerRevision) -> ControllerRevision:
        try:
            return self._client.get(ControllerRevision, key)
        except ApiError:
            return fallback

    def list_controller_revisions(
        self, parent: Any, selector: Optional[Mapping[str, str]]
    ) -> list[ControllerRevision]:
        """Return revisions matching ``selector`` that are unowned or owned by ``parent``."""
        meta = metadata_of(parent)
        wanted = dict(selector or {})
        owned = []
        for rev in self._client.list(ControllerRevision, meta.namespace):
            labels = rev.metadata.labels
            if any(labels.get(k) != v for k, v in wanted.items()):
                continue
            ref = get_controller_of(rev)
            if ref is None or ref.uid == meta.uid:
                owned.append(rev)
        return owned

    def create_controller_revision(
        self, parent: Any, revision: ControllerRevision, collision_count: Optional[int]
    ) -> tuple[ControllerRevision, int]:
        """Create ``revision`` under a hashed name, bumping the collision count on clashes.

        Returns the stored revision and the final collision count.
        """
        if collision_count is None:
            raise ValueError("collision_count should not be None")
        meta = metadata_of(parent)
        clone = copy.deepcopy(revision)
        while True:
            hash_value = hash_controller_revision(revision, collision_count)
            clone.metadata.name = controller_revision_name(meta.name, hash_value)
            created = copy.deepcopy(clone)
            created.metadata.namespace = meta.namespace
            try:
                self._client.create(created)
            except ApiError as exc:
                if not isinstance(exc, type(exc)) or exc.__class__.__name__ != "AlreadyExistsError":
                    raise
                key = NamespacedName(meta.namespace, clone.metadata.name)
                exists = self._client.get(ControllerRevision, key)
                if bytes(exists.data) == bytes(clone.data):
                    return exists, collision_count
                collision_count += 1
                continue
            return created, collision_count

    def update_controller_revision(
        self, revision: ControllerRevision, new_revision: int
    ) -> ControllerRevision:
        """Set the revision number, retrying on conflicts."""
        clone = copy.deepcopy(revision)
        key = NamespacedName(clone.metadata.namespace, clone.metadata.name)

        def attempt() -> None:
            nonlocal clone
            if clone.revision == new_revision:
                return
            clone.revision = new_revision
            try:
                self._client.update(clone)
            except ApiError:
                clone = self._refetch(key, clone)
                raise

        retry_on_conflict(attempt)
        return clone

    def delete_controller_revision(self, revision: ControllerRevision) -> None:
        """Delete ``revision`` from the store."""
        self._client.delete(revision)

    def adopt_controller_revision(
        self, parent: Any, parent_kind: GroupVersionKind, revision: ControllerRevision
    ) -> ControllerRevision:
        """Make ``parent`` the controlling owner of an unowned revision."""
        meta = metadata_of(parent)
        clone = copy.deepcopy(revision)
        key = NamespacedName(clone.metadata.namespace, clone.metadata.name)

        def attempt() -> None:
            nonlocal clone
            owner = get_controller_of(clone)
            if owner is not None:
                raise ValueError(f"attempt to adopt revision owned by {owner}")
            clone.metadata.owner_references.append(
                OwnerReference(
                    api_version=parent_kind.group_version,
                    kind=parent_kind.kind,
                    name=meta.name,
                    uid=meta.uid,
                    controller=True,
                    block_owner_deletion=True,
                )
            )
            try:
                self._client.update(clone)
            except ApiError:
                clone = self._refetch(key, clone)
                raise

        retry_on_conflict(attempt)
        return clone

    def release_controller_revision(
        self, parent: Any, revision: ControllerRevision
    ) -> Optional[ControllerRevision]:
        """Drop ``parent`` from the revision's owners.

        Returns None when the revision is gone or no longer valid to release.
        """
        meta = metadata_of(parent)
        clone = copy.deepcopy(revision)
        key = NamespacedName(clone.metadata.namespace, clone.metadata.name)

        def attempt() -> None:
            nonlocal clone
            owner = get_controller_of(clone)
            if owner is not None:
                raise ValueError(f"attempt to adopt revision owned by {owner}")
            clone.metadata.owner_references = [
                ref for ref in clone.metadata.owner_references if ref.uid != meta.uid
            ]
            try:
                self._client.update(clone)
            except ApiError:
                clone = self._refetch(key, clone)
                raise

        try:
            retry_on_conflict(attempt)
        except (NotFoundError, InvalidError):
            return None
        return clone