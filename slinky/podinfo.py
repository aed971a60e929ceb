"""Identity of a pod, stored as a small JSON document."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Optional

_ESCAPES = str.maketrans({
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
})

_FIELDS = {"namespace": "namespace", "podname": "pod_name"}


@dataclass(frozen=True)
class PodInfo:
    """The namespace and name of a pod."""

    namespace: str = ""
    pod_name: str = ""

    def to_json(self) -> str:
        """Return the compact JSON form of this PodInfo."""
        text = json.dumps(
            {"namespace": self.namespace, "podName": self.pod_name},
            separators=(",", ":"),
            ensure_ascii=False,
        )
        return text.translate(_ESCAPES)

    def __str__(self) -> str:
        return self.to_json()


def parse_pod_info(text: Optional[str], base: Optional[PodInfo] = None) -> PodInfo:
    """Parse JSON into a PodInfo, keeping fields of ``base`` that the JSON omits.

    Raises ValueError when the text is not a valid PodInfo document.
    """
    base = base if base is not None else PodInfo()
    data = json.loads(text or "")
    if data is None:
        return base
    if not isinstance(data, dict):
        raise ValueError(f"cannot parse {type(data).__name__} into PodInfo")
    changes: dict[str, str] = {}
    for key, value in data.items():
        attr = _FIELDS.get(key.lower())
        if attr is None or value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"field {key!r} must be a string")
        changes[attr] = value
    return replace(base, **changes)