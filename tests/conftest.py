import pytest

from healthwatch.health_check import CheckDefinition


def make_check(**overrides) -> CheckDefinition:
    fields = dict(
        domain="localhost",
        path="/health",
        port="8080",
        timeout_sec=2,
        check_interval_sec=5,
        healthy_threshold=2,
        unhealthy_threshold=3,
        fail_count=0,
    )
    fields.update(overrides)
    return CheckDefinition(**fields)


@pytest.fixture
def check_factory():
    return make_check
