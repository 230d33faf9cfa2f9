"""Phase machine, event bus and frame scheduler tests."""

import unittest

from spinwheel.core.events import Event, EventBus, EventType, spin_request_event, tick_event
from spinwheel.core.state import PhaseMachine, WheelPhase
from spinwheel.wheel.reward_wheel import RewardWheel
from spinwheel.wheel.scheduler import FrameScheduler

from tests.helpers import ScriptedRandom, abc_segments


class TestPhaseMachine(unittest.TestCase):

    def test_valid_cycle(self):
        machine = PhaseMachine()
        self.assertTrue(machine.ready)
        self.assertTrue(machine.transition(WheelPhase.SPINNING))
        self.assertFalse(machine.ready)
        self.assertTrue(machine.transition(WheelPhase.SETTLED))
        self.assertTrue(machine.ready)
        self.assertTrue(machine.transition(WheelPhase.SPINNING))

    def test_invalid_transitions_refused(self):
        machine = PhaseMachine()
        with self.assertLogs("spinwheel.core.state", level="WARNING"):
            self.assertFalse(machine.transition(WheelPhase.SETTLED))
        self.assertEqual(machine.phase, WheelPhase.IDLE)

        machine.transition(WheelPhase.SPINNING)
        self.assertFalse(machine.can_transition(WheelPhase.SPINNING))
        self.assertFalse(machine.can_transition(WheelPhase.IDLE))

    def test_listener_error_is_isolated(self):
        machine = PhaseMachine()
        calls = []

        def bad(old, new):
            raise RuntimeError("listener failed")

        machine.add_listener(bad)
        machine.add_listener(lambda old, new: calls.append(new))
        with self.assertLogs("spinwheel.core.state", level="ERROR"):
            machine.transition(WheelPhase.SPINNING)
        self.assertEqual(calls, [WheelPhase.SPINNING])

    def test_remove_listener(self):
        machine = PhaseMachine()
        calls = []
        listener = lambda old, new: calls.append(new)
        machine.add_listener(listener)
        machine.remove_listener(listener)
        machine.transition(WheelPhase.SPINNING)
        self.assertEqual(calls, [])


class TestEventBus(unittest.TestCase):

    def test_subscribe_and_unsubscribe(self):
        bus = EventBus()
        seen = []
        unsubscribe = bus.subscribe(EventType.SPIN_STARTED, seen.append)

        bus.emit(Event(EventType.SPIN_STARTED))
        unsubscribe()
        bus.emit(Event(EventType.SPIN_STARTED))

        self.assertEqual(len(seen), 1)

    def test_handler_error_does_not_stop_dispatch(self):
        bus = EventBus()
        seen = []

        def bad(event):
            raise ValueError("nope")

        bus.subscribe(EventType.TICK, bad)
        bus.subscribe(EventType.TICK, seen.append)
        with self.assertLogs("spinwheel.core.events", level="ERROR"):
            bus.emit(tick_event(16.0, 1))
        self.assertEqual(seen[0].data, {"delta_ms": 16.0, "frame": 1})


class TestEventBusAsync(unittest.IsolatedAsyncioTestCase):

    async def test_queued_events_reach_async_handlers(self):
        bus = EventBus()
        seen = []

        async def handler(event):
            seen.append(event.source)

        bus.subscribe(EventType.SPIN_REQUESTED, handler)
        bus.queue_event(spin_request_event("button"))
        self.assertEqual(bus.queued, 1)
        self.assertEqual(await bus.process_queue(), 1)
        self.assertEqual(seen, ["button"])
        self.assertEqual(bus.queued, 0)

    async def test_sync_emit_skips_async_handlers(self):
        bus = EventBus()
        seen = []

        async def handler(event):
            seen.append(event)

        bus.subscribe(EventType.TICK, handler)
        bus.emit(tick_event(1.0, 0))
        self.assertEqual(seen, [])
        bus.queue_event(tick_event(1.0, 1))
        await bus.process_queue()
        self.assertEqual(len(seen), 1)

    async def test_queued_spin_request_spins_wheel(self):
        bus = EventBus()
        scheduler = FrameScheduler()
        wheel = RewardWheel(abc_segments(), rng=ScriptedRandom(0.7), scheduler=scheduler,
                            event_bus=bus)
        bus.subscribe(EventType.SPIN_REQUESTED, lambda e: wheel.spin())

        bus.queue_event(spin_request_event("keyboard"))
        bus.queue_event(spin_request_event("keyboard"))
        self.assertEqual(wheel.phase, WheelPhase.IDLE)

        self.assertEqual(await bus.process_queue(), 2)
        self.assertTrue(wheel.is_spinning)
        self.assertEqual(wheel.last_outcome.segment.label, "B")
        self.assertEqual(scheduler.pending, 1)


class TestFrameScheduler(unittest.TestCase):

    def test_fires_in_due_order(self):
        scheduler = FrameScheduler()
        fired = []
        scheduler.call_later(300, lambda: fired.append("c"))
        scheduler.call_later(100, lambda: fired.append("a"))
        scheduler.call_later(100, lambda: fired.append("b"))

        self.assertEqual(scheduler.tick(99), 0)
        self.assertEqual(scheduler.tick(1), 2)
        self.assertEqual(fired, ["a", "b"])
        self.assertEqual(scheduler.pending, 1)
        scheduler.tick(1000)
        self.assertEqual(fired, ["a", "b", "c"])
        self.assertEqual(scheduler.now_ms, 1100)

    def test_delay_measured_from_scheduling_time(self):
        scheduler = FrameScheduler()
        fired = []
        scheduler.tick(500)
        scheduler.call_later(100, lambda: fired.append(scheduler.now_ms))
        scheduler.tick(50)
        self.assertEqual(fired, [])
        scheduler.tick(50)
        self.assertEqual(fired, [600])

    def test_zero_delay_fires_on_next_tick(self):
        scheduler = FrameScheduler()
        fired = []
        scheduler.call_later(0, lambda: fired.append(True))
        self.assertEqual(fired, [])
        scheduler.tick(0)
        self.assertEqual(fired, [True])


if __name__ == "__main__":
    unittest.main()
