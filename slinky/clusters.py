"""A registry of running cluster clients keyed by namespaced name."""

from __future__ import annotations

import threading
from typing import Optional, Protocol

from .meta import NamespacedName


class _Client(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


class Clusters:
    """Thread-safe map of cluster clients; adding starts a client, removing stops it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._clients: dict[str, _Client] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    def get(self, name: NamespacedName) -> Optional[_Client]:
        """Return the client registered under ``name``, or None."""
        with self._lock:
            return self._clients.get(str(name))

    def has(self, *args: NamespacedName) -> bool:
        """Return True when any of the given names is registered."""
        with self._lock:
            return any(str(name) in self._clients for name in args)

    def add(self, name: NamespacedName, client: _Client) -> bool:
        """Register and start ``client``, stopping any client it replaces."""
        with self._lock:
            self._remove(name)
            return self._add(name, client)

    def remove(self, name: NamespacedName) -> bool:
        """Stop and unregister the client under ``name``; False if there was none."""
        with self._lock:
            return self._remove(name)

    def _add(self, name: NamespacedName, client: _Client) -> bool:
        key = str(name)
        if key in self._clients:
            return False
        threading.Thread(target=client.start, name=f"cluster-{key}", daemon=True).start()
        self._clients[key] = client
        return True

    def _remove(self, name: NamespacedName) -> bool:
        client = self._clients.pop(str(name), None)
        if client is None:
            return False
        client.stop()
        return True