"""Behaviours ticked by a host loop, including fixed-rate sub hosts."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .console import print_line
from .duration import MILLISECOND_MAX, BehaviorDuration, Clock, Duration
from .exceptions import VisindigoError

DEFAULT_TICK_DURATION = 10_000_000


class BehaviorState(Enum):
    IDLE = 0
    ACTIVE = 1
    SUBSIDE = 2


class QuantifyTickType(Enum):
    T0 = 0
    T20 = 20
    T32 = 32
    T64 = 64
    T128 = 128


class _BehaviorHostBase:
    """Shared state of hosts: a running list and a list of behaviours to add."""

    def __init__(self) -> None:
        self.tick_duration = 0
        self._behaviors: list["BasicBehavior"] = []
        self._pending: list["BasicBehavior"] = []

    @property
    def behaviors(self) -> list["BasicBehavior"]:
        return list(self._behaviors)

    def add_behavior(self, behavior: "BasicBehavior", tick_type: QuantifyTickType) -> None:
        raise NotImplementedError


class BasicBehavior:
    """A behaviour with start, tick and stop hooks."""

    def __init__(self, host: Optional[_BehaviorHostBase] = None) -> None:
        self.host = host
        self.state = BehaviorState.IDLE

    def on_start(self) -> None:
        """Called when the behaviour starts."""

    def on_tick(self) -> None:
        """Called on each tick while active."""

    def on_stop(self) -> None:
        """Called once when the behaviour winds down."""

    def host_call(self) -> BehaviorState:
        """Advance the behaviour by one tick and return its state."""
        if self.state is BehaviorState.ACTIVE:
            self.on_tick()
        elif self.state is BehaviorState.SUBSIDE:
            self.on_stop()
            self.state = BehaviorState.IDLE
        return self.state

    def _require_host(self) -> _BehaviorHostBase:
        if self.host is None:
            raise VisindigoError(
                "Behavior has no host",
                "Create a BehaviorHost and pass it to the behavior before starting it.",
            )
        return self.host

    def start(self, tick_type: QuantifyTickType = QuantifyTickType.T0) -> None:
        if self.state is BehaviorState.IDLE:
            host = self._require_host()
            self.state = BehaviorState.ACTIVE
            self.on_start()
            host.add_behavior(self, tick_type)

    def stop(self) -> None:
        """Ask an active behaviour to stop on its next tick."""
        if self.state is BehaviorState.ACTIVE:
            self.state = BehaviorState.SUBSIDE


class TimedBehavior(BasicBehavior):
    """A behaviour that stops by itself once its duration has passed."""

    def __init__(self, host: Optional[_BehaviorHostBase] = None) -> None:
        super().__init__(host)
        self.duration = BehaviorDuration()

    def set_duration(self, milliseconds: float) -> None:
        self.duration.duration = milliseconds * 1_000_000

    def set_forever_duration(self) -> None:
        self.duration.duration = MILLISECOND_MAX

    def get_duration_percent(self) -> float:
        return self.duration.percent

    def get_tick_duration(self) -> float:
        """The current host's tick length in milliseconds."""
        return self._require_host().tick_duration / 1_000_000.0

    def host_call(self) -> BehaviorState:
        self.duration.add_time(self._require_host().tick_duration)
        if self.duration.timeout:
            self.state = BehaviorState.SUBSIDE
        return super().host_call()

    def start(self, tick_type: QuantifyTickType = QuantifyTickType.T0) -> None:
        if self.state is BehaviorState.IDLE:
            host = self._require_host()
            self.state = BehaviorState.ACTIVE
            self.duration.init_duration()
            self.on_start()
            host.add_behavior(self, tick_type)


class AnimationBehavior(TimedBehavior):
    """A timed behaviour that always runs at 64 ticks per second."""

    def start(self, tick_type: QuantifyTickType = QuantifyTickType.T64) -> None:
        super().start(QuantifyTickType.T64)


class QuantifyTickBehaviorHost(_BehaviorHostBase):
    """Spreads its behaviours over a fixed period driven by the main host."""

    def __init__(self, host: "BehaviorHost", duration_limit: int) -> None:
        super().__init__()
        self.name = f"QTickBehaviorHost_{int(1_000_000_000.0 / duration_limit)}"
        self.host = host
        self.duration_limit = duration_limit
        self._duration_limit_now = duration_limit
        self.tick_duration = duration_limit
        self._left = 0
        self.nspt = 0
        self._nspt_now = 0
        self.duration_now = 0
        self.magnification = 1.0
        self.paused = False

    def start(self) -> None:
        raise VisindigoError("QuantifyTickBehaviorHost cannot be manually started")

    def stop(self) -> None:
        raise VisindigoError("QuantifyTickBehaviorHost cannot be manually stopped")

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def _right_index(self) -> tuple[int, bool]:
        size = len(self._behaviors)
        right = size * (self.duration_now // self._duration_limit_now)
        if right >= size:
            return size, True
        return right, False

    def _step(self, elapsed: int, right: int, loop_finish: bool) -> None:
        if right != self._left:
            for behavior in self._behaviors[self._left:right]:
                behavior.host_call()
            self._nspt_now += elapsed
        if loop_finish:
            self._left = 0
            if self.duration_now > self.duration_limit:
                self._duration_limit_now = 2 * self.duration_limit - self.duration_now
                if self._duration_limit_now <= 0:
                    self._duration_limit_now = self.duration_limit
            else:
                self._duration_limit_now = self.duration_limit
            self.duration_now = 0
            self.nspt = self._nspt_now
            self._nspt_now = 0
            self._merge()
        else:
            self._left = right

    def tick_loop(self) -> None:
        """Run the share of behaviours due for the main host's last tick."""
        if self.paused:
            return
        elapsed = self.host.tick_duration
        self.duration_now = int(self.duration_now + elapsed * self.magnification)
        right, loop_finish = self._right_index()
        self._step(elapsed, right, loop_finish)

    def manual_tick_loop(self, duration: int = -1) -> None:
        """Pause automatic ticking and advance by duration; negative finishes the period."""
        self.paused = True
        if duration < 0:
            duration = self.duration_limit
            self.duration_now = self.duration_limit
            right, loop_finish = len(self._behaviors), True
        else:
            self.duration_now += duration
            right, loop_finish = self._right_index()
        self._step(duration, right, loop_finish)

    def _merge(self) -> None:
        remaining = []
        for behavior in self._behaviors:
            if behavior.state is BehaviorState.IDLE:
                behavior.host = self.host
            else:
                remaining.append(behavior)
        self._behaviors = remaining
        for behavior in self._pending:
            self._behaviors.append(behavior)
            behavior.host = self
        self._pending.clear()

    def add_behavior(self, behavior: BasicBehavior, tick_type: QuantifyTickType) -> None:
        self._pending.append(behavior)


_QUANTIFY_LIMITS = {
    QuantifyTickType.T128: 7_812_500,
    QuantifyTickType.T64: 15_625_000,
    QuantifyTickType.T32: 31_250_000,
    QuantifyTickType.T20: 50_000_000,
}
_TICK_ORDER = (QuantifyTickType.T20, QuantifyTickType.T32, QuantifyTickType.T64, QuantifyTickType.T128)


class BehaviorHost(_BehaviorHostBase):
    """The main loop: ticks its own behaviours and drives four fixed-rate hosts."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        super().__init__()
        self.name = "VIBehaviorHost"
        self.tick_duration = DEFAULT_TICK_DURATION
        self.host_duration = Duration(clock)
        self._stop_flag = False
        self.quantify_hosts: dict[QuantifyTickType, QuantifyTickBehaviorHost] = {
            tick_type: QuantifyTickBehaviorHost(self, limit)
            for tick_type, limit in _QUANTIFY_LIMITS.items()
        }

    def _selected(self, tick_type: QuantifyTickType) -> list[QuantifyTickBehaviorHost]:
        if tick_type is QuantifyTickType.T0:
            return list(self.quantify_hosts.values())
        return [self.quantify_hosts[tick_type]]

    def start(self) -> None:
        self.tick_duration = DEFAULT_TICK_DURATION
        self._stop_flag = False

    def stop(self) -> None:
        self._stop_flag = True

    @property
    def stopped(self) -> bool:
        return self._stop_flag

    def tick_loop(self) -> None:
        """Run one tick of everything and measure how long it took."""
        self._merge()
        for tick_type in _TICK_ORDER:
            self.quantify_hosts[tick_type].tick_loop()
        self._ergodic()
        self.tick_duration = self.host_duration.get_nano_duration()

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Tick until stopped or max_ticks have run; returns the number of ticks."""
        self.start()
        count = 0
        while not self._stop_flag and (max_ticks is None or count < max_ticks):
            self.tick_loop()
            count += 1
        return count

    def add_behavior(
        self, behavior: BasicBehavior, tick_type: QuantifyTickType = QuantifyTickType.T0
    ) -> None:
        if tick_type is QuantifyTickType.T0:
            self._pending.append(behavior)
        else:
            self.quantify_hosts[tick_type].add_behavior(behavior, tick_type)

    def _merge(self) -> None:
        if self._pending:
            self._behaviors.extend(self._pending)
            self._pending.clear()

    def _ergodic(self) -> None:
        self._behaviors = [
            behavior for behavior in list(self._behaviors)
            if behavior.host_call() is not BehaviorState.IDLE
        ]

    def get_magnification(self) -> float:
        return self.quantify_hosts[QuantifyTickType.T20].magnification

    def set_magnification(self, magnification: float) -> None:
        for host in self.quantify_hosts.values():
            host.magnification = magnification

    def pause_quantify_tick_host(self, tick_type: QuantifyTickType = QuantifyTickType.T0) -> None:
        for host in self._selected(tick_type):
            host.pause()

    def resume_quantify_tick_host(self, tick_type: QuantifyTickType = QuantifyTickType.T0) -> None:
        for host in self._selected(tick_type):
            host.resume()

    def manual_execute_quantify_tick_host(
        self, tick_type: QuantifyTickType = QuantifyTickType.T0, duration: int = -1
    ) -> None:
        """Advance fixed-rate hosts by hand; T0 advances all, by 1/128 s if no duration."""
        if tick_type is QuantifyTickType.T0:
            if duration < 0:
                duration = _QUANTIFY_LIMITS[QuantifyTickType.T128]
            for order in _TICK_ORDER:
                self.quantify_hosts[order].manual_tick_loop(duration)
        else:
            self.quantify_hosts[tick_type].manual_tick_loop(duration)

    def log(self, message: str) -> None:
        print_line(f"{self.name}: {message}")