# slinky

Building blocks for a controller that manages Slurm clusters on Kubernetes.
The package is pure Python and has no runtime dependencies.

## Modules

- `slinky.lists`: `reference_list` copies items into a new list. `dereference_list` drops
  every `None`.
- `slinky.annotations`: reads typed values from an annotation mapping.
  - `get_number_from_annotations` returns a 32-bit integer, or 0 when the key is absent.
    A plus sign, leading zeros or an out-of-range value raise `ValueError`.
  - `get_bool_from_annotations` accepts `1 t T TRUE true True` and
    `0 f F FALSE false False`. It returns `False` when the key is absent.
  - `get_time_from_annotations` parses an RFC 3339 time and returns an aware `datetime`.
    It returns `slinky.timestore.ZERO_TIME` when the key is absent.
- `slinky.mathutil`:
  - `clamp(val, a, b)` limits `val` to the range between `a` and `b`, in either order.
  - `get_scaled_value_from_int_or_percent` takes an int or a string such as `"50%"` and
    scales it against a total, rounding up or down. It returns the default when the input is
    `None` or invalid.
- `slinky.meta`: `NamespacedName` (its `str` form is `namespace/name`), `ObjectMeta`,
  `OwnerReference`, `metadata_of`, `key_func` and `get_controller_of`. It also holds the store
  errors `ApiError` (with `has_cause`), `NotFoundError`, `AlreadyExistsError`,
  `ConflictError` and `InvalidError`.
- `slinky.batch`: `slow_start_batch(count, initial_batch_size, fn)` calls `fn(index)` in
  concurrent batches that double in size. It returns the number of successful calls. If a
  batch fails, no further batches run and `SlowStartError` is raised. That error carries
  `successes` and the first failure as `error`.
- `slinky.podinfo`: `PodInfo(namespace, pod_name)` with `to_json()`. `parse_pod_info(text, base)`
  fills a `PodInfo` from JSON and keeps the fields of `base` that the JSON leaves out.
  Invalid JSON raises `ValueError`.
- `slinky.durationstore` / `slinky.timestore`: `DurationStore` and `TimeStore` hold one value
  per key and are thread-safe. Each has `push`, `pop` and `peek`. On a repeated push, the
  `keep` function decides which value stays: `greater` (the default) or `less`. A missing key
  gives `timedelta(0)` or `ZERO_TIME`.
- `slinky.pod`: the `Pod`, `PodStatus`, `PodCondition` and `PodPhase` types. It also has the
  predicates `is_pod_ready`, `is_running_and_ready`, `is_running_and_available`,
  `is_created`, `is_pending`, `is_failed`, `is_succeeded`, `is_terminating` and
  `is_healthy`.
- `slinky.clusters`: `Clusters` is a thread-safe registry of client objects, keyed by
  `NamespacedName`, with `get`, `has`, `add` and `remove`.
  - `add` stops any client already registered under the name. It then calls the new
    client's `start()` in a daemon thread.
  - `remove` calls `stop()`.
- `slinky.history`: controller revisions.
  - `ControllerRevision`, `GroupVersionKind`, `set_revision`, `get_revision`,
    `hash_controller_revision`, `controller_revision_name` and `retry_on_conflict`.
  - `HistoryControl` wraps a store client and has these methods:
    `list_controller_revisions`, `create_controller_revision` (returns the revision and the
    final collision count), `update_controller_revision`, `delete_controller_revision`,
    `adopt_controller_revision` and `release_controller_revision`.
- `slinky.podcontrol`: `PodTemplate`, `get_pod_from_template`, `validate_controller_ref` and
  `PodControl`.
  - `PodControl` creates pods from a template or as given, and deletes and patches pods.
  - It records events through a recorder object.

## Clients and recorders

`HistoryControl`, `PodControl` and `Clusters` take plain objects that provide these methods:

- `HistoryControl`: a store client with `create(obj)`, `get(kind, key)`, `update(obj)`,
  `delete(obj)` and `list(kind, namespace)`. It signals failures by raising the errors
  in `slinky.meta`.
- `PodControl`: a store client with `create(obj)`, `delete(obj)` and
  `patch(obj, patch_type, data)`, plus a recorder with
  `event(obj, event_type, reason, message)`.
- `Clusters`: clients with `start()` and `stop()`.

## What this package does not do

It contains no client for a Kubernetes API server and no Slurm client. It has no reconcile
loop, controller manager or command-line program. You supply the store client, the event
recorder and the cluster clients, and you drive the helpers from your own controller.

## Examples

```python
from datetime import timedelta
from slinky.durationstore import DurationStore, greater

store = DurationStore(greater)
store.push("node-0", timedelta(seconds=1))
store.push("node-0", timedelta(minutes=1))
assert store.pop("node-0") == timedelta(minutes=1)
assert store.pop("node-0") == timedelta(0)
```

```python
from slinky.batch import slow_start_batch

assert slow_start_batch(10, 1, lambda index: None) == 10
```

```python
from slinky.annotations import get_number_from_annotations

assert get_number_from_annotations({"replicas": "3"}, "replicas") == 3
assert get_number_from_annotations({}, "replicas") == 0
```

```python
from slinky.podinfo import PodInfo, parse_pod_info

info = PodInfo("default", "foo")
assert info.to_json() == '{"namespace":"default","podName":"foo"}'
assert parse_pod_info(info.to_json()) == info
```

## Running the tests

```
pip install -e ".[test]"
pytest
```