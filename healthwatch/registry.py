import threading
from typing import Iterable, List

from healthwatch.health_check import CheckDefinition


class RegistryIndexError(IndexError):
    """Raised when an update targets an entry the registry does not have"""


class CheckRegistry:
    """Fixed-size list of checks shared by the polling and reporting loops.

    Every read goes through snapshot() and every write through
    update_fail_count(). The lock is only held for a copy or a single swap,
    never while a probe is in flight.
    """

    def __init__(self, checks: Iterable[CheckDefinition]):
        self._checks = list(checks)
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._checks)

    def snapshot(self) -> List[CheckDefinition]:
        """Point-in-time copy of all entries, in registry order"""
        with self._lock:
            return list(self._checks)

    def update_fail_count(self, index: int, fail_count: int) -> None:
        """Replace the fail count of the entry at ``index``"""
        with self._lock:
            if not 0 <= index < len(self._checks):
                raise RegistryIndexError(
                    f"check index {index} out of range for {len(self._checks)} checks"
                )
            self._checks[index] = self._checks[index].with_fail_count(fail_count)
