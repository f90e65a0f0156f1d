import logging
import threading
import time

from healthwatch.evaluator import is_due, next_fail_count
from healthwatch.health_check import probe

logger = logging.getLogger(__name__)


class Ticker:
    """Yields the current epoch second at most once per second.

    Sleeps on the stop event between ticks. A late tick yields the current
    second, so seconds missed during a slow iteration are skipped.
    """

    def __init__(self, stop_event: threading.Event, clock=time.time):
        self.stop_event = stop_event
        self.clock = clock

    def __iter__(self):
        last_run = int(self.clock())
        while not self.stop_event.is_set():
            now = self.clock()
            wait = last_run + 1 - now
            if wait > 0:
                if self.stop_event.wait(wait):
                    return
                continue
            last_run = int(now)
            yield last_run


class PollingLoop:
    """Probes due checks and writes back their fail counts"""

    def __init__(self, registry, prober=probe):
        self.registry = registry
        self.prober = prober

    def tick(self, now: int):
        # Probe against a snapshot so the lock is never held over the network.
        for index, check in enumerate(self.registry.snapshot()):
            if not is_due(now, check.check_interval_sec):
                continue

            ok = self.prober(check.url, check.timeout_sec)
            fail_count = next_fail_count(check.fail_count, ok, check.unhealthy_threshold)
            if fail_count == check.fail_count:
                continue

            self.registry.update_fail_count(index, fail_count)
            logger.debug("%s fail count %d -> %d", check.url, check.fail_count, fail_count)

            updated = check.with_fail_count(fail_count)
            if updated.healthy != check.healthy:
                logger.info(
                    "%s is now %s (fail count %d)",
                    check.url, 'healthy' if updated.healthy else 'unhealthy', fail_count,
                )

    def run(self, ticker):
        for now in ticker:
            self.tick(now)


class ReportingLoop:
    """Hands a fresh snapshot to the display every tick"""

    def __init__(self, registry, display):
        self.registry = registry
        self.display = display

    def tick(self, now: int):
        self.display.show(self.registry.snapshot(), now)

    def run(self, ticker):
        for now in ticker:
            self.tick(now)


class Monitor:
    """Runs the polling loop on the calling thread and reporting on a daemon thread"""

    def __init__(self, registry, display, prober=probe, clock=time.time):
        self.registry = registry
        self.polling = PollingLoop(registry, prober)
        self.reporting = ReportingLoop(registry, display)
        self.clock = clock
        self.stop_event = threading.Event()
        self._reporter_error = None

    def stop(self):
        self.stop_event.set()

    def run(self):
        reporter = threading.Thread(target=self._run_reporting, name='healthwatch-reporter', daemon=True)
        reporter.start()
        try:
            self.polling.run(Ticker(self.stop_event, self.clock))
        finally:
            self.stop()
            reporter.join()

        if self._reporter_error is not None:
            raise self._reporter_error

    def _run_reporting(self):
        try:
            self.reporting.run(Ticker(self.stop_event, self.clock))
        except Exception as e:
            logger.error("Reporting loop failed: %s", e)
            self._reporter_error = e
            self.stop()
