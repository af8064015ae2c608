import pytest

from visindigo.behavior import (
    AnimationBehavior,
    BasicBehavior,
    BehaviorHost,
    BehaviorState,
    QuantifyTickType,
    TimedBehavior,
)
from visindigo.duration import MILLISECOND_MAX
from visindigo.exceptions import VisindigoError


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


class Recorder(BasicBehavior):
    def __init__(self, host=None):
        super().__init__(host)
        self.events = []

    def on_start(self):
        self.events.append("start")

    def on_tick(self):
        self.events.append("tick")

    def on_stop(self):
        self.events.append("stop")


class TimedRecorder(TimedBehavior):
    def __init__(self, host=None):
        super().__init__(host)
        self.events = []

    def on_start(self):
        self.events.append("start")

    def on_tick(self):
        self.events.append("tick")

    def on_stop(self):
        self.events.append("stop")


class Stopper(BasicBehavior):
    def on_tick(self):
        self.host.stop()


@pytest.fixture
def host():
    return BehaviorHost(FakeClock())


def test_start_requires_host():
    behavior = BasicBehavior()
    with pytest.raises(VisindigoError):
        behavior.start()


def test_basic_lifecycle_in_main_host(host):
    rec = Recorder(host)
    rec.start()
    assert rec.state is BehaviorState.ACTIVE
    assert rec.events == ["start"]
    host.tick_loop()
    assert rec.events == ["start", "tick"]
    rec.stop()
    assert rec.state is BehaviorState.SUBSIDE
    host.tick_loop()
    assert rec.events[-1] == "stop"
    assert rec.state is BehaviorState.IDLE
    host.tick_loop()
    assert rec.events == ["start", "tick", "stop"]
    assert rec not in host.behaviors


def test_start_twice_adds_once(host):
    rec = Recorder(host)
    rec.start()
    rec.start()
    host.tick_loop()
    assert rec.events.count("tick") == 1
    assert rec.events.count("start") == 1


def test_stop_when_idle_stays_idle(host):
    rec = Recorder(host)
    rec.stop()
    assert rec.state is BehaviorState.IDLE


def test_timed_behavior_times_out(host):
    timed = TimedRecorder(host)
    timed.set_duration(25)
    timed.start()
    host.tick_duration = 10_000_000
    timed.host_call()
    assert timed.get_duration_percent() == pytest.approx(10 / 25)
    assert timed.state is BehaviorState.ACTIVE
    timed.host_call()
    timed.host_call()
    assert timed.state is BehaviorState.IDLE
    assert timed.events == ["start", "tick", "tick", "stop"]
    assert timed.get_duration_percent() >= 1


def test_timed_start_resets_duration(host):
    timed = TimedRecorder(host)
    timed.duration.add_time(5)
    timed.start()
    assert timed.duration.elapse == 0
    assert timed.duration.timeout is False


def test_forever_duration(host):
    timed = TimedRecorder(host)
    timed.set_forever_duration()
    assert timed.duration.duration == MILLISECOND_MAX


def test_run_counts_ticks(host):
    rec = Recorder(host)
    rec.start()
    assert host.run(max_ticks=3) == 3
    assert rec.events.count("tick") == 3


def test_stop_inside_tick_ends_run(host):
    Stopper(host).start()
    assert host.run(max_ticks=10) == 1
    assert host.stopped is True


def test_quantify_host_names(host):
    assert host.quantify_hosts[QuantifyTickType.T20].name == "QTickBehaviorHost_20"
    assert host.quantify_hosts[QuantifyTickType.T128].name == "QTickBehaviorHost_128"


def test_manual_execute_merges_then_ticks(host):
    rec = Recorder(host)
    rec.start(QuantifyTickType.T20)
    q20 = host.quantify_hosts[QuantifyTickType.T20]
    host.manual_execute_quantify_tick_host(QuantifyTickType.T20)
    assert rec.events == ["start"]
    assert rec.host is q20
    host.manual_execute_quantify_tick_host(QuantifyTickType.T20)
    assert rec.events == ["start", "tick"]


def test_manual_execute_pauses_automatic_ticks(host):
    rec = Recorder(host)
    rec.start(QuantifyTickType.T20)
    q20 = host.quantify_hosts[QuantifyTickType.T20]
    host.manual_execute_quantify_tick_host(QuantifyTickType.T20)
    assert q20.paused is True
    host.tick_duration = q20.duration_limit
    q20.tick_loop()
    assert "tick" not in rec.events
    host.resume_quantify_tick_host(QuantifyTickType.T20)
    q20.tick_loop()
    assert rec.events.count("tick") == 1


def test_idle_behavior_returns_to_main_host(host):
    rec = Recorder(host)
    rec.start(QuantifyTickType.T20)
    host.manual_execute_quantify_tick_host(QuantifyTickType.T20)
    rec.stop()
    host.manual_execute_quantify_tick_host(QuantifyTickType.T20)
    assert rec.state is BehaviorState.IDLE
    assert rec.events[-1] == "stop"
    assert rec.host is host
    assert rec not in host.quantify_hosts[QuantifyTickType.T20].behaviors


def test_pause_all_with_t0(host):
    host.pause_quantify_tick_host(QuantifyTickType.T0)
    assert all(q.paused for q in host.quantify_hosts.values())
    host.resume_quantify_tick_host()
    assert not any(q.paused for q in host.quantify_hosts.values())


def test_magnification_round_trip(host):
    host.set_magnification(2.5)
    assert host.get_magnification() == 2.5
    assert all(q.magnification == 2.5 for q in host.quantify_hosts.values())


def test_animation_runs_in_t64(host):
    anim = AnimationBehavior(host)
    anim.start(QuantifyTickType.T0)
    q64 = host.quantify_hosts[QuantifyTickType.T64]
    host.manual_execute_quantify_tick_host(QuantifyTickType.T64)
    assert anim.host is q64
    assert anim.get_tick_duration() == pytest.approx(q64.duration_limit / 1_000_000)


def test_quantify_host_cannot_be_started_or_stopped(host):
    q = host.quantify_hosts[QuantifyTickType.T32]
    with pytest.raises(VisindigoError):
        q.start()
    with pytest.raises(VisindigoError):
        q.stop()


def test_tick_duration_measured_by_clock():
    clock = FakeClock()
    host = BehaviorHost(clock)
    host.tick_loop()
    clock.now += 1234
    host.tick_loop()
    assert host.tick_duration == 1234