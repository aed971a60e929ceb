import threading

from slinky.clusters import Clusters
from slinky.meta import NamespacedName

FOO = NamespacedName("default", "foo")
BAR = NamespacedName("default", "bar")


class FakeClient:
    def __init__(self):
        self.started = threading.Event()
        self.stopped = False

    def start(self):
        self.started.set()

    def stop(self):
        self.stopped = True


def _with_foo():
    clusters = Clusters()
    client = FakeClient()
    clusters.add(FOO, client)
    return clusters, client


def test_new_clusters_is_empty():
    clusters = Clusters()
    assert len(clusters) == 0
    assert clusters.get(FOO) is None


def test_get_existing():
    clusters, client = _with_foo()
    assert clusters.get(NamespacedName("default", "foo")) is client


def test_get_missing():
    clusters, _ = _with_foo()
    assert clusters.get(BAR) is None


def test_add_new_name_starts_client():
    clusters, _ = _with_foo()
    other = FakeClient()
    assert clusters.add(BAR, other) is True
    assert other.started.wait(2)
    assert len(clusters) == 2


def test_add_existing_name_replaces_client():
    clusters, old = _with_foo()
    new = FakeClient()
    assert clusters.add(FOO, new) is True
    assert old.stopped is True
    assert clusters.get(FOO) is new
    assert len(clusters) == 1


def test_has():
    clusters, _ = _with_foo()
    assert clusters.has(BAR) is False
    assert clusters.has(BAR, FOO) is True
    assert clusters.has() is False


def test_remove_existing():
    clusters, client = _with_foo()
    assert clusters.remove(FOO) is True
    assert client.stopped is True
    assert clusters.get(FOO) is None


def test_remove_missing():
    clusters, client = _with_foo()
    assert clusters.remove(BAR) is False
    assert client.stopped is False