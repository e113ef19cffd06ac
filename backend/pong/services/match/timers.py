from typing import Any, Optional


class PeriodicTimer:
    """Fixed-interval timer polled by the scheduler loop."""

    def __init__(self, interval: float):
        self.interval = interval
        self.next_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.next_at is not None

    def start(self, now: float, first_at: Optional[float] = None) -> None:
        self.next_at = now + self.interval if first_at is None else first_at

    def stop(self) -> None:
        self.next_at = None

    def due(self, now: float) -> bool:
        """True at most once per call when the next firing time has passed."""
        if self.next_at is None or now < self.next_at:
            return False
        self.next_at += self.interval
        if self.next_at <= now:
            # Fell behind; skip the missed firings instead of bursting.
            self.next_at = now + self.interval
        return True


class OneShotTimer:
    """Schedule-and-forget deadline carrying a token for the callback to check."""

    def __init__(self):
        self.deadline: Optional[float] = None
        self.token: Any = None

    @property
    def armed(self) -> bool:
        return self.deadline is not None

    def arm(self, deadline: float, token: Any = None) -> None:
        self.deadline = deadline
        self.token = token

    def cancel(self) -> None:
        self.deadline = None
        self.token = None

    def due(self, now: float) -> bool:
        return self.deadline is not None and now >= self.deadline

    def fire(self) -> Any:
        token = self.token
        self.cancel()
        return token
