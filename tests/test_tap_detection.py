"""Tests for TapDetector (impulse detection, windows, static-body veto)."""

import pytest

from conftest import MS, FakeSkeleton, TapFeeder
from tap_reset.detection import TapDetector
from tap_reset.skeleton import BodySegment, ImuTracker


@pytest.fixture
def chest(trackers):
    return trackers[BodySegment.CHEST]


@pytest.fixture
def detector(skeleton, chest):
    detector = TapDetector(skeleton, chest)
    detector.enabled = True
    detector.set_max_taps(3)
    return detector


@pytest.fixture
def feeder(detector, chest):
    feeder = TapFeeder(detector.update, chest)
    feeder.rest(100)
    return feeder


class TestTapCounting:
    """Test suite for counting separate impulses."""

    def test_new_detector_has_no_taps(self, detector):
        assert detector.taps == 0
        assert detector.detection_time == -1.0

    def test_first_sample_never_counts(self, detector, chest):
        chest.set_acceleration((0.0, 0.0, 20.0))
        detector.update(10 * MS)

        assert detector.taps == 0

    def test_counts_separate_impulses(self, detector, feeder):
        feeder.tap()
        assert detector.taps == 1
        feeder.rest(150)
        feeder.tap()
        assert detector.taps == 2
        feeder.rest(150)
        feeder.tap()

        assert detector.taps == 3
        assert detector.detection_time == feeder.now_ns

    def test_small_swings_are_ignored(self, detector, feeder):
        for _ in range(5):
            feeder.tap(accel=5.0)
            feeder.rest(100)

        assert detector.taps == 0

    def test_sustained_plateau_is_one_tap(self, detector, feeder):
        for _ in range(30):
            feeder.tick(10.0)
        feeder.rest(200)

        assert detector.taps == 1

    def test_latch_holds_until_rest(self, detector, feeder):
        feeder.tap()
        # still inside the clump window of the first impulse
        feeder.rest(30)
        feeder.tap()

        assert detector.taps == 1
        assert detector.wait_for_low_accel

    def test_stale_input_never_increases_taps(self, detector, feeder):
        feeder.tap()
        feeder.rest(300)
        taps = detector.taps

        for _ in range(10):
            detector.update(feeder.now_ns)

        assert detector.taps == taps == 1


class TestWindows:
    """Test suite for sample and tap window maintenance."""

    def test_set_max_taps_sizes_window(self, detector):
        detector.set_max_taps(4)

        assert detector.time_window_ns == pytest.approx(1.2e9)
        assert detector.tap_window.max_life == pytest.approx(1.2e9)

    def test_sample_window_stays_within_clump_time(self, detector, feeder):
        feeder.rest(500)

        timestamps = detector.accel_window.timestamps()
        assert all(feeder.now_ns - ts <= 60 * MS for ts in timestamps)
        assert len(timestamps) == 7

    def test_taps_age_out_of_window(self, detector, feeder):
        detector.set_max_taps(2)
        feeder.tap()
        feeder.rest(150)
        feeder.tap()
        assert len(detector.tap_window) == 2

        feeder.rest(500)
        assert len(detector.tap_window) == 1

        feeder.rest(200)
        assert len(detector.tap_window) == 0
        # the confirmed count only drops on reset
        assert detector.taps == 2

    def test_taps_outside_window_do_not_accumulate(self, detector, feeder):
        detector.set_max_taps(2)
        for _ in range(3):
            feeder.tap()
            feeder.rest(700)

        assert detector.taps == 1


class TestStaticBody:
    """Test suite for the body-motion veto."""

    def test_moving_body_cancels_taps(self, detector, feeder, trackers):
        trackers[BodySegment.HIP].set_acceleration((0.0, 3.0, 0.0))
        trackers[BodySegment.WAIST].set_acceleration((3.0, 0.0, 0.0))

        for _ in range(3):
            feeder.tap()
            feeder.rest(150)

        assert detector.taps == 0
        assert len(detector.tap_window) == 0

    def test_threshold_count_allows_some_motion(self, detector, feeder, trackers):
        detector.set_static_body_threshold_count(3)
        trackers[BodySegment.HIP].set_acceleration((0.0, 3.0, 0.0))
        trackers[BodySegment.WAIST].set_acceleration((3.0, 0.0, 0.0))

        feeder.tap()
        feeder.rest(150)
        feeder.tap()

        assert detector.taps == 2

    def test_watched_tracker_is_excluded(self, chest):
        # the chest is one of the static-check segments
        detector = TapDetector(FakeSkeleton({BodySegment.CHEST: chest}), chest)
        detector.enabled = True
        feeder = TapFeeder(detector.update, chest)

        feeder.rest(100)
        feeder.tap()

        assert detector.taps == 1

    def test_lower_leg_motion_is_not_checked(self, detector, feeder, skeleton):
        skeleton.trackers[BodySegment.LEFT_LOWER_LEG] = ImuTracker("left_lower_leg", (5.0, 0.0, 0.0))

        feeder.tap()

        assert detector.taps == 1


class TestLifecycle:
    """Test suite for reset, enable and missing collaborators."""

    def test_reset_clears_state(self, detector, feeder):
        feeder.tap()
        feeder.rest(150)
        feeder.tap()

        detector.reset_detector()

        assert detector.taps == 0
        assert len(detector.tap_window) == 0
        assert len(detector.accel_window) == 0
        assert detector.enabled
        assert detector.wait_for_low_accel

    def test_disabled_detector_is_frozen(self, detector, feeder):
        feeder.tap()
        detection_time = detector.detection_time
        detector.enabled = False

        for _ in range(3):
            feeder.rest(150)
            feeder.tap()

        assert detector.taps == 1
        assert len(detector.tap_window) == 1
        assert detector.detection_time == detection_time

        detector.enabled = True
        feeder.rest(10)

        assert detector.taps == 1
        assert detector.detection_time == detection_time

    def test_missing_tracker_is_noop(self, skeleton):
        detector = TapDetector(skeleton)
        detector.enabled = True

        detector.update(10 * MS)

        assert detector.tracker is None
        assert detector.taps == 0
        assert len(detector.accel_window) == 0

    def test_missing_skeleton_is_noop(self, chest):
        detector = TapDetector(None, chest)
        detector.enabled = True
        chest.set_acceleration((0.0, 0.0, 10.0))

        detector.update(10 * MS)

        assert len(detector.accel_window) == 0

    def test_default_clock_is_used(self, detector):
        detector.update()

        assert len(detector.accel_window) == 1
