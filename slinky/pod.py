"""Pods and predicates over their lifecycle state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

from .meta import ObjectMeta

POD_READY = "Ready"

CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
CONDITION_UNKNOWN = "Unknown"


class PodPhase(str, Enum):
    """The lifecycle phase of a pod."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


@dataclass
class PodCondition:
    """One observed condition of a pod."""

    type: str
    status: str = CONDITION_UNKNOWN
    last_transition_time: Optional[datetime] = None


@dataclass
class PodStatus:
    """The observed state of a pod; a phase of None means not yet created."""

    phase: Optional[PodPhase] = None
    conditions: list[PodCondition] = field(default_factory=list)


@dataclass
class Pod:
    """A pod: its metadata, its spec and its observed status."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: dict[str, Any] = field(default_factory=dict)
    status: PodStatus = field(default_factory=PodStatus)


def _ready_condition(pod: Pod) -> Optional[PodCondition]:
    return next((c for c in pod.status.conditions if c.type == POD_READY), None)


def is_pod_ready(pod: Pod) -> bool:
    """Return True when the pod's Ready condition is True."""
    condition = _ready_condition(pod)
    return condition is not None and condition.status == CONDITION_TRUE


def is_running_and_ready(pod: Pod) -> bool:
    """Return True when the pod is running and ready."""
    return pod.status.phase == PodPhase.RUNNING and is_pod_ready(pod)


def is_running_and_available(pod: Pod, min_ready_seconds: int) -> bool:
    """Return True when the pod has been ready for at least ``min_ready_seconds``."""
    if not is_pod_ready(pod):
        return False
    if min_ready_seconds == 0:
        return True
    condition = _ready_condition(pod)
    since = condition.last_transition_time if condition is not None else None
    if since is None:
        return False
    now = datetime.now(timezone.utc)
    return since + timedelta(seconds=min_ready_seconds) < now


def is_created(pod: Pod) -> bool:
    """Return True when the pod has a phase, i.e. the API server maintains it."""
    return pod.status.phase is not None


def is_pending(pod: Pod) -> bool:
    """Return True when the pod is pending."""
    return pod.status.phase == PodPhase.PENDING


def is_failed(pod: Pod) -> bool:
    """Return True when the pod has failed."""
    return pod.status.phase == PodPhase.FAILED


def is_succeeded(pod: Pod) -> bool:
    """Return True when the pod has succeeded."""
    return pod.status.phase == PodPhase.SUCCEEDED


def is_terminating(pod: Pod) -> bool:
    """Return True when the pod has a deletion timestamp."""
    return pod.metadata.deletion_timestamp is not None


def is_healthy(pod: Pod) -> bool:
    """Return True when the pod is running, ready and not terminating."""
    return is_running_and_ready(pod) and not is_terminating(pod)