"""Shared fixtures for the tap_reset test suite."""

import pytest

from tap_reset.skeleton import BodySegment, HumanSkeleton, ImuTracker

MS = 1_000_000
"""Nanoseconds per millisecond."""


class FakeSkeleton(HumanSkeleton):
    """Skeleton that records which resets were requested."""

    def __init__(self, trackers=None):
        super().__init__(trackers)
        self.resets = []

    def reset_trackers_yaw(self):
        self.resets.append("yaw")

    def reset_trackers_full(self):
        self.resets.append("full")

    def reset_trackers_mounting(self):
        self.resets.append("mounting")


class TapFeeder:
    """
    Drives an update callable at a fixed tick rate while setting the
    acceleration of one tracker before each tick.
    """

    def __init__(self, update, tracker, step_ms=10):
        self.update = update
        self.tracker = tracker
        self.step_ms = step_ms
        self.t_ms = 0

    @property
    def now_ns(self):
        return self.t_ms * MS

    def tick(self, accel=0.0):
        self.t_ms += self.step_ms
        self.tracker.set_acceleration((0.0, 0.0, accel))
        self.update(self.now_ns)

    def rest(self, duration_ms):
        for _ in range(duration_ms // self.step_ms):
            self.tick(0.0)

    def rest_until(self, t_ms):
        while self.t_ms + self.step_ms <= t_ms:
            self.tick(0.0)

    def tap(self, accel=10.0):
        """One impulse tick, after which the tracker is back at rest."""
        self.tick(accel)
        self.tracker.set_acceleration((0.0, 0.0, 0.0))


@pytest.fixture
def trackers():
    names = [
        BodySegment.CHEST,
        BodySegment.HIP,
        BodySegment.WAIST,
        BodySegment.LEFT_UPPER_LEG,
        BodySegment.RIGHT_UPPER_LEG,
    ]
    return {segment: ImuTracker(str(segment)) for segment in names}


@pytest.fixture
def skeleton(trackers):
    return FakeSkeleton(trackers)
