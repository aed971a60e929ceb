"""Creating, deleting and patching pods on behalf of a controlling object."""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from .meta import ApiError, NotFoundError, ObjectMeta, OwnerReference, metadata_of
from .pod import Pod

logger = logging.getLogger(__name__)

EVENT_TYPE_NORMAL = "Normal"
EVENT_TYPE_WARNING = "Warning"

FAILED_CREATE_POD_REASON = "FailedCreate"
SUCCESSFUL_CREATE_POD_REASON = "SuccessfulCreate"
FAILED_DELETE_POD_REASON = "FailedDelete"
SUCCESSFUL_DELETE_POD_REASON = "SuccessfulDelete"

NAMESPACE_TERMINATING_CAUSE = "NamespaceTerminating"

STRATEGIC_MERGE_PATCH_TYPE = "application/strategic-merge-patch+json"

_DNS1123_SUBDOMAIN = re.compile(
    r"[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*"
)
_DNS1123_SUBDOMAIN_MAX_LENGTH = 253


@dataclass
class PodTemplate:
    """Metadata and spec from which pods are stamped out."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: dict[str, Any] = field(default_factory=dict)


class _Client(Protocol):
    def create(self, obj: Any) -> None: ...

    def delete(self, obj: Any) -> None: ...

    def patch(self, obj: Any, patch_type: str, data: bytes) -> None: ...


class _Recorder(Protocol):
    def event(self, obj: Any, event_type: str, reason: str, message: str) -> None: ...


def _is_valid_pod_name_prefix(prefix: str) -> bool:
    """Check a generated-name prefix as a DNS-1123 subdomain, allowing a trailing dash."""
    name = prefix
    if len(name) > 1 and name.endswith("-"):
        name = name[:-1] + "a"
    return (
        len(name) <= _DNS1123_SUBDOMAIN_MAX_LENGTH
        and _DNS1123_SUBDOMAIN.fullmatch(name) is not None
    )


def _pods_prefix(controller_name: str) -> str:
    prefix = f"{controller_name}-"
    if not _is_valid_pod_name_prefix(prefix):
        prefix = controller_name
    return prefix


def get_pod_from_template(
    template: PodTemplate, parent: Any, controller_ref: Optional[OwnerReference]
) -> Pod:
    """Build a pod from ``template``, named after ``parent`` and owned by ``controller_ref``.

    Raises TypeError when ``parent`` has no metadata.
    """
    try:
        parent_meta = metadata_of(parent)
    except TypeError as exc:
        raise TypeError(f"parentObject does not have ObjectMeta, {exc}") from exc
    metadata = ObjectMeta(
        labels=dict(template.metadata.labels),
        annotations=dict(template.metadata.annotations),
        generate_name=_pods_prefix(parent_meta.name),
        finalizers=list(template.metadata.finalizers),
    )
    if controller_ref is not None:
        metadata.owner_references.append(copy.copy(controller_ref))
    return Pod(metadata=metadata, spec=copy.deepcopy(template.spec))


def validate_controller_ref(controller_ref: Optional[OwnerReference]) -> None:
    """Raise ValueError unless ``controller_ref`` is a complete controlling reference."""
    if controller_ref is None:
        raise ValueError("controllerRef is nil")
    if not controller_ref.api_version:
        raise ValueError("controllerRef has empty APIVersion")
    if not controller_ref.kind:
        raise ValueError("controllerRef has empty Kind")
    if not controller_ref.controller:
        raise ValueError("controllerRef.Controller is not set to true")
    if not controller_ref.block_owner_deletion:
        raise ValueError("controllerRef.BlockOwnerDeletion is not set")


class PodControl:
    """Manages pods through an object store client, recording events on the owner."""

    def __init__(self, client: _Client, recorder: _Recorder) -> None:
        self._client = client
        self._recorder = recorder

    def create_pods(
        self,
        namespace: str,
        template: PodTemplate,
        obj: Any,
        controller_ref: Optional[OwnerReference],
    ) -> None:
        """Create a pod from ``template`` in ``namespace``, controlled by ``obj``."""
        self.create_pods_with_generate_name(namespace, template, obj, controller_ref, "")

    def create_pods_with_generate_name(
        self,
        namespace: str,
        template: PodTemplate,
        obj: Any,
        controller_ref: Optional[OwnerReference],
        generate_name: str,
    ) -> None:
        """Like create_pods, overriding the generated name prefix when one is given."""
        validate_controller_ref(controller_ref)
        pod = get_pod_from_template(template, obj, controller_ref)
        pod.metadata.namespace = namespace
        if generate_name:
            pod.metadata.generate_name = generate_name
        self._create_pods(pod, obj)

    def create_this_pod(self, pod: Optional[Pod], obj: Any) -> None:
        """Create exactly ``pod`` on behalf of ``obj``."""
        if pod is None:
            raise ValueError("pod cannot be nil")
        self._create_pods(pod, obj)

    def _create_pods(self, pod: Pod, obj: Any) -> None:
        if not pod.metadata.labels:
            raise ValueError("unable to create pods, no labels")
        try:
            self._client.create(pod)
        except ApiError as exc:
            if not exc.has_cause(NAMESPACE_TERMINATING_CAUSE):
                self._recorder.event(
                    obj, EVENT_TYPE_WARNING, FAILED_CREATE_POD_REASON, f"Error creating: {exc}"
                )
            raise
        try:
            parent_meta = metadata_of(obj)
        except TypeError:
            logger.exception("parentObject does not have ObjectMeta")
            return
        logger.debug(
            "Controller created pod: controller=%s pod=%s/%s",
            parent_meta.name,
            pod.metadata.namespace,
            pod.metadata.name,
        )
        self._recorder.event(
            obj,
            EVENT_TYPE_NORMAL,
            SUCCESSFUL_CREATE_POD_REASON,
            f"Created pod: {pod.metadata.name}",
        )

    def delete_pod(self, namespace: str, pod_name: str, obj: Any) -> None:
        """Delete the named pod on behalf of ``obj``.

        NotFoundError propagates unchanged; other store errors are raised as
        ApiError after a warning event is recorded.
        """
        try:
            parent_meta = metadata_of(obj)
        except TypeError as exc:
            raise TypeError(f"object does not have ObjectMeta, {exc}") from exc
        logger.debug(
            "Deleting pod: controller=%s pod=%s/%s", parent_meta.name, namespace, pod_name
        )
        pod = Pod(metadata=ObjectMeta(namespace=namespace, name=pod_name))
        try:
            self._client.delete(pod)
        except NotFoundError:
            logger.debug("Pod has already been deleted: pod=%s/%s", namespace, pod_name)
            raise
        except ApiError as exc:
            self._recorder.event(
                obj, EVENT_TYPE_WARNING, FAILED_DELETE_POD_REASON, f"Error deleting: {exc}"
            )
            raise ApiError(f"unable to delete pods: {exc}") from exc
        self._recorder.event(
            obj, EVENT_TYPE_NORMAL, SUCCESSFUL_DELETE_POD_REASON, f"Deleted pod: {pod_name}"
        )

    def patch_pod(self, namespace: str, name: str, data: bytes) -> None:
        """Apply a strategic merge patch to the named pod."""
        pod = Pod(metadata=ObjectMeta(namespace=namespace, name=name))
        self._client.patch(pod, STRATEGIC_MERGE_PATCH_TYPE, data)