"""Accumulator timers driven by the session's shared clock."""

from __future__ import annotations

from dataclasses import dataclass

# Float accumulators drift; 10 x 0.1 must still fire a 1.0 timer.
_EPSILON = 1e-9


@dataclass(slots=True)
class IntervalTimer:
    """Periodic timer; ``advance`` reports how many times it fired."""

    interval: float
    accumulator: float = 0.0
    fired: int = 0

    def advance(self, dt: float) -> int:
        if dt <= 0 or self.interval <= 0:
            return 0
        self.accumulator += dt
        count = 0
        while self.accumulator + _EPSILON >= self.interval:
            self.accumulator -= self.interval
            count += 1
        self.fired += count
        return count

    def reset(self) -> None:
        self.accumulator = 0.0


@dataclass(slots=True)
class OneShotTimer:
    duration: float
    remaining: float = 0.0
    active: bool = False

    def start(self) -> None:
        self.remaining = self.duration
        self.active = True

    def cancel(self) -> None:
        self.remaining = 0.0
        self.active = False

    def advance(self, dt: float) -> bool:
        """Count down; True exactly once, on the call that expires the timer."""
        if not self.active or dt <= 0:
            return False
        self.remaining = max(0.0, self.remaining - dt)
        if self.remaining > _EPSILON:
            return False
        self.active = False
        return True


@dataclass(slots=True)
class FadeClock:
    """Lifetime counter that maps age onto a visual intensity.

    Fully opaque for ``visible_time`` seconds, then linear down to
    ``min_alpha`` over ``fade_time`` seconds and clamped there.
    """

    visible_time: float
    fade_time: float
    min_alpha: float = 0.1
    age: float = 0.0

    @property
    def alpha(self) -> float:
        if self.age <= self.visible_time:
            return 1.0
        if self.fade_time <= 0:
            return self.min_alpha
        progress = (self.age - self.visible_time) / self.fade_time
        return max(self.min_alpha, 1.0 - (1.0 - self.min_alpha) * progress)

    def update(self, dt: float) -> float:
        if dt > 0:
            self.age += dt
        return self.alpha

    def reset(self) -> None:
        self.age = 0.0
