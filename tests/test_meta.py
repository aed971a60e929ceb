from dataclasses import dataclass, field

import pytest

from slinky.meta import (
    AlreadyExistsError,
    ApiError,
    ConflictError,
    InvalidError,
    NamespacedName,
    NotFoundError,
    ObjectMeta,
    OwnerReference,
    get_controller_of,
    key_func,
    metadata_of,
)


@dataclass
class NodeSet:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)


def test_key_func_no_namespace():
    assert key_func(NodeSet()) == "/"


def test_key_func_slurm_namespace():
    ns = NodeSet(ObjectMeta(name="nodeSetTest", namespace="slurm"))
    assert key_func(ns) == "slurm/nodeSetTest"


def test_key_func_on_object_meta():
    assert key_func(ObjectMeta(name="a", namespace="b")) == "b/a"


def test_namespaced_name_str():
    assert str(NamespacedName("default", "foo")) == "default/foo"


def test_metadata_of_rejects_plain_object():
    with pytest.raises(TypeError):
        metadata_of(object())


def test_get_controller_of_finds_controller():
    plain = OwnerReference(kind="A", name="a")
    ctrl = OwnerReference(kind="B", name="b", controller=True)
    meta = ObjectMeta(owner_references=[plain, ctrl])
    assert get_controller_of(meta) is ctrl


def test_get_controller_of_without_controller():
    meta = ObjectMeta(owner_references=[OwnerReference(name="a", controller=False)])
    assert get_controller_of(NodeSet(meta)) is None


@pytest.mark.parametrize("cls", [NotFoundError, AlreadyExistsError, ConflictError, InvalidError])
def test_api_errors_carry_message_and_causes(cls):
    err = cls("boom", causes=("NamespaceTerminating",))
    assert issubclass(cls, ApiError)
    assert str(err) == "boom"
    assert err.has_cause("NamespaceTerminating") is True
    assert err.has_cause("Other") is False


@pytest.mark.parametrize("cls", [NotFoundError, AlreadyExistsError, ConflictError, InvalidError])
def test_api_errors_without_causes(cls):
    err = cls("boom")
    assert err.has_cause("NamespaceTerminating") is False