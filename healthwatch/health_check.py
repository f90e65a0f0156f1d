from dataclasses import dataclass, replace

import requests

from healthwatch.evaluator import is_healthy


@dataclass(frozen=True)
class CheckDefinition:
    """One monitored HTTP endpoint and its fail-count state"""
    domain: str
    path: str
    port: str
    timeout_sec: int
    check_interval_sec: int
    healthy_threshold: int
    # Ceiling for fail_count. Health itself is decided by healthy_threshold.
    unhealthy_threshold: int
    fail_count: int = 0

    @property
    def url(self) -> str:
        return f"http://{self.domain}:{self.port}{self.path}"

    @property
    def healthy(self) -> bool:
        return is_healthy(self.fail_count, self.healthy_threshold)

    def with_fail_count(self, fail_count: int) -> "CheckDefinition":
        return replace(self, fail_count=fail_count)


def probe(url: str, timeout_sec: int) -> bool:
    """Single HTTP GET. True only for a 2xx response, every failure is False.

    A refused connection, a timeout, a bad URL and a 404 all look the same here.
    Repeated failures are smoothed out by the fail count, not by retrying.
    """
    if timeout_sec <= 0:
        return False
    try:
        with requests.get(url, timeout=timeout_sec) as response:
            return 200 <= response.status_code < 300
    except (requests.RequestException, OverflowError, ValueError):
        # OverflowError and ValueError come from timeouts the socket layer refuses
        return False


class HealthCheck:
    def __init__(self, check, prober=probe):
        self.check_definition = check
        self.url = check.url
        self.prober = prober

    def check(self):
        return self.prober(self.url, self.check_definition.timeout_sec)
