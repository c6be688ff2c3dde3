"""Use-case entities and the registry that owns them."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class UseCaseStatus(str, Enum):
    """Lifecycle of a use case. The values are the labels shown to clients."""

    READY = "BEREIT"
    RUNNING = "LÄUFT"
    DONE = "ABGESCHLOSSEN"


@dataclass
class UseCase:
    """A managed use case.

    ``id``, ``name`` and ``description`` never change after creation. The
    status is read and written through :attr:`status`, which serializes
    access with a per-instance lock.
    """

    id: str
    name: str
    description: str
    _status: UseCaseStatus = UseCaseStatus.READY
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    @property
    def status(self) -> UseCaseStatus:
        """Current lifecycle status."""
        with self._lock:
            return self._status

    def transition(self, value: UseCaseStatus) -> UseCaseSnapshot:
        """Set the status and return the state as of that write."""
        with self._lock:
            self._status = value
            return self._snapshot_locked()

    def snapshot(self) -> UseCaseSnapshot:
        """Return an immutable copy of the current state."""
        with self._lock:
            return self._snapshot_locked()

    def _snapshot_locked(self) -> UseCaseSnapshot:
        return UseCaseSnapshot(
            id=self.id,
            name=self.name,
            description=self.description,
            status=self._status,
        )


@dataclass(frozen=True)
class UseCaseSnapshot:
    """Point-in-time view of a :class:`UseCase`."""

    id: str
    name: str
    description: str
    status: UseCaseStatus


class UseCaseRegistry:
    """Fixed set of use cases keyed by id.

    The registry is populated once, before serving begins, and is never
    structurally modified afterwards. Lookups therefore need no locking;
    only the status of each entry is mutable.
    """

    def __init__(self, use_cases: Iterable[UseCase] = ()) -> None:
        """Build the registry from the given use cases."""
        self._use_cases: dict[str, UseCase] = {}
        for use_case in use_cases:
            if use_case.id in self._use_cases:
                raise ValueError(f"Use case '{use_case.id}' is already registered")
            self._use_cases[use_case.id] = use_case

    def get(self, use_case_id: str) -> UseCase | None:
        """Return the use case with the given id, if any."""
        return self._use_cases.get(use_case_id)

    def snapshot(self) -> list[UseCaseSnapshot]:
        """Return a consistent copy of every entry in registration order."""
        return [use_case.snapshot() for use_case in self._use_cases.values()]

    def __len__(self) -> int:
        return len(self._use_cases)

    def __contains__(self, use_case_id: object) -> bool:
        return use_case_id in self._use_cases


DEFAULT_USE_CASES: tuple[tuple[str, str, str], ...] = (
    ("uc1", "Benutzer registrieren", "Registriert einen neuen Benutzer im System"),
    ("uc2", "Bestellung aufgeben", "Erstellt eine neue Bestellung"),
    ("uc3", "Rechnung erstellen", "Generiert eine Rechnung für eine Bestellung"),
    ("uc4", "Daten exportieren", "Exportiert Daten in verschiedene Formate"),
)


def build_default_registry() -> UseCaseRegistry:
    """Create a registry holding the four demo use cases, all READY."""
    return UseCaseRegistry(
        UseCase(id=use_case_id, name=name, description=description)
        for use_case_id, name, description in DEFAULT_USE_CASES
    )
