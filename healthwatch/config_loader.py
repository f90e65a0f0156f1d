import json
import logging
import re

import yaml

from healthwatch.health_check import CheckDefinition

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    'domain',
    'path',
    'port',
    'timeout_sec',
    'check_interval_sec',
    'healthy_threshold',
    'unhealthy_threshold',
)
OPTIONAL_FIELDS = ('fail_count',)

_DOMAIN_RE = re.compile(r'[A-Za-z0-9_](?:[A-Za-z0-9_-]*[A-Za-z0-9_])?(?:\.[A-Za-z0-9_](?:[A-Za-z0-9_-]*[A-Za-z0-9_])?)*')
MAX_TIMEOUT_SEC = 3600


class ConfigError(ValueError):
    """Invalid or unreadable check configuration"""


class ConfigLoader:
    def __init__(self, path, strict=False):
        self.path = str(path)
        self.strict = strict
        self.config = None
        self.warnings = []

    def load(self):
        self.config = self._read()
        self.warnings = []

        entries = self.config
        if isinstance(entries, dict):
            if 'checks' not in entries:
                raise ConfigError(f"{self.path}: expected a 'checks' list")
            entries = entries['checks']
        if not isinstance(entries, list):
            raise ConfigError(f"{self.path}: checks must be a list")
        if not entries:
            raise ConfigError(f"{self.path}: no checks defined")

        checks = [self._parse_check(i, entry) for i, entry in enumerate(entries)]
        for warning in self.warnings:
            logger.info(warning)
        if self.strict and self.warnings:
            raise ConfigError('; '.join(self.warnings))
        return checks

    def _read(self):
        try:
            with open(self.path, encoding='utf-8') as f:
                if self.path.endswith('.json'):
                    return json.load(f)
                return yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Unable to read config file {self.path}: {e}") from e
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigError(f"Unable to parse config file {self.path}: {e}") from e

    def _parse_check(self, index, entry):
        where = f"check #{index + 1}"
        if not isinstance(entry, dict):
            raise ConfigError(f"{where}: expected a mapping, got {type(entry).__name__}")

        missing = [name for name in REQUIRED_FIELDS if name not in entry]
        if missing:
            raise ConfigError(f"{where}: missing field(s) {', '.join(missing)}")
        unknown = sorted(map(str, set(entry) - set(REQUIRED_FIELDS) - set(OPTIONAL_FIELDS)))
        if unknown:
            raise ConfigError(f"{where}: unknown field(s) {', '.join(unknown)}")

        numbers = {
            name: _non_negative_int(where, name, entry[name])
            for name in ('timeout_sec', 'check_interval_sec',
                         'healthy_threshold', 'unhealthy_threshold')
        }
        fail_count = _non_negative_int(where, 'fail_count', entry.get('fail_count', 0))

        if numbers['timeout_sec'] > MAX_TIMEOUT_SEC:
            raise ConfigError(f"{where}: timeout_sec must be at most {MAX_TIMEOUT_SEC}")
        if numbers['check_interval_sec'] == 0:
            raise ConfigError(f"{where}: check_interval_sec must be greater than 0")
        if fail_count > numbers['unhealthy_threshold']:
            raise ConfigError(
                f"{where}: fail_count {fail_count} exceeds "
                f"unhealthy_threshold {numbers['unhealthy_threshold']}"
            )

        check = CheckDefinition(
            domain=_domain(where, entry['domain']),
            path=_path(where, entry['path']),
            port=_port(where, entry['port']),
            fail_count=fail_count,
            **numbers,
        )

        if check.unhealthy_threshold < check.healthy_threshold:
            self.warnings.append(
                f"{where} ({check.url}): unhealthy_threshold {check.unhealthy_threshold} "
                f"is below healthy_threshold {check.healthy_threshold}, "
                f"the check can never be reported unhealthy"
            )
        return check


def _non_negative_int(where, name, value):
    # bool is an int subclass, "true" in a config is a typo not a number
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where}: {name} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigError(f"{where}: {name} must not be negative, got {value}")
    return value


def _domain(where, value):
    if not isinstance(value, str) or not _DOMAIN_RE.fullmatch(value):
        raise ConfigError(f"{where}: invalid domain {value!r}")
    return value


def _path(where, value):
    if not isinstance(value, str) or (value and not value.startswith('/')):
        raise ConfigError(f"{where}: path must be empty or start with '/', got {value!r}")
    if any(c.isspace() for c in value):
        raise ConfigError(f"{where}: path must not contain whitespace, got {value!r}")
    return value


def _port(where, value):
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ConfigError(f"{where}: invalid port {value!r}")
    port = str(value)
    if not (port.isascii() and port.isdigit()) or not 0 < int(port) <= 65535:
        raise ConfigError(f"{where}: invalid port {value!r}")
    return port
