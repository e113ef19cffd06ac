import logging
import threading
import time
from typing import Callable, List, Optional

from .lifecycle import Match, Outbound
from .timers import PeriodicTimer


class BroadcastScheduler:
    """Drives a match and publishes its snapshots.

    Two cadences share one loop: the match's physics timer (tick, then
    snapshot) which only runs while a match is being played, and an idle
    timer that always publishes the current snapshot so lobby changes
    and paddle positions reach clients between matches.
    """

    def __init__(self, match: Match, publish: Callable[[Outbound], None],
                 logger: Optional[logging.Logger] = None):
        self.match = match
        self.publish = publish
        self.logger = logger or logging.getLogger(__name__)
        self.idle_timer = PeriodicTimer(match.settings.idle_interval)
        self._stop = threading.Event()

    def step(self, now: float) -> List[Outbound]:
        if not self.idle_timer.running:
            self.idle_timer.start(now, first_at=now)
        events = self.match.pump(now)
        if self.match.physics_timer.due(now):
            events.extend(self.match.tick(now))
            events.append(Outbound('state', self.match.snapshot(), None))
        if self.idle_timer.due(now):
            events.append(Outbound('state', self.match.snapshot(), None))
        return events

    def run_once(self, now: float) -> List[Outbound]:
        events = self.step(now)
        for event in events:
            self.publish(event)
        return events

    def next_wake(self, now: float) -> float:
        """Seconds until the nearest physics tick, idle tick or respawn."""
        deadlines = [self.idle_timer.next_at, self.match.physics_timer.next_at,
                     self.match.respawn_timer.deadline]
        pending = [d for d in deadlines if d is not None]
        if not pending:
            return self.idle_timer.interval
        return max(0.0, min(pending) - now)

    def run(self, clock: Callable[[], float] = time.monotonic,
            sleep: Callable[[float], None] = time.sleep) -> None:
        self.logger.info(
            f"[loop-start] tick={self.match.settings.tick_rate}Hz idle={self.match.settings.idle_broadcast_rate}Hz"
        )
        while not self._stop.is_set():
            now = clock()
            try:
                self.run_once(now)
            except Exception:
                self.logger.exception('[loop-error] broadcast step failed')
            sleep(self.next_wake(clock()))
        self.logger.info('[loop-stop]')

    def stop(self) -> None:
        self._stop.set()
