"""
Interfaces to the skeletal model the tap detectors watch.

The skeleton, its trackers and its reset operations belong to the host
application. This module only describes the narrow surface the detectors use:
a lookup of trackers by body segment, an acceleration reading per tracker and
the three reset calls.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterable, Optional, Protocol, Sequence

import numpy as np
import numpy.typing as npt


class BodySegment(Enum):
    """
    Body segments a tracker can be assigned to.
    """

    UPPER_CHEST = "upper_chest"
    CHEST = "chest"
    HIP = "hip"
    WAIST = "waist"
    LEFT_UPPER_LEG = "left_upper_leg"
    RIGHT_UPPER_LEG = "right_upper_leg"
    LEFT_LOWER_LEG = "left_lower_leg"
    RIGHT_LOWER_LEG = "right_lower_leg"
    LEFT_FOOT = "left_foot"
    RIGHT_FOOT = "right_foot"

    def __str__(self) -> str:
        return self.value


STATIC_CHECK_SEGMENTS: Sequence[BodySegment] = (
    BodySegment.UPPER_CHEST,
    BodySegment.CHEST,
    BodySegment.HIP,
    BodySegment.WAIST,
    BodySegment.LEFT_UPPER_LEG,
    BodySegment.RIGHT_UPPER_LEG,
    BodySegment.LEFT_FOOT,
    BodySegment.RIGHT_FOOT,
)
" Segments whose trackers vote on whether the body is still. "


class Tracker(Protocol):
    """
    Anything that reports a linear acceleration vector.
    Trackers are compared by identity.
    """

    def get_acceleration(self) -> npt.NDArray[np.float64]: ...


class YawAligner(Protocol):
    """
    Orientation-correction collaborator notified before yaw and full resets.
    """

    def yaw_align(self) -> None: ...


class ImuTracker:
    """
    Minimal tracker holding the latest acceleration sample of one IMU.
    """

    def __init__(self, name: str, acceleration: Optional[Iterable[float]] = None) -> None:
        self.name = name
        " Display name of the tracker. "

        self.acceleration = np.zeros(3, dtype=float)
        " Latest linear acceleration (gravity removed). "

        if acceleration is not None:
            self.set_acceleration(acceleration)

    def set_acceleration(self, acceleration: Iterable[float]) -> None:
        self.acceleration = np.asarray(list(acceleration), dtype=float)

    def get_acceleration(self) -> npt.NDArray[np.float64]:
        return self.acceleration

    def __repr__(self) -> str:
        return f"ImuTracker({self.name!r})"


class HumanSkeleton(ABC):
    """
    Base class for the skeleton the tap detection manager drives.

    Subclasses provide the reset operations; the tracker assignment is a plain
    lookup table keyed by body segment.
    """

    def __init__(self, trackers: Optional[Dict[BodySegment, Tracker]] = None) -> None:
        self.trackers: Dict[BodySegment, Tracker] = dict(trackers or {})
        " Trackers currently assigned to each body segment. "

    def get_tracker(self, segment: BodySegment) -> Optional[Tracker]:
        """
        Return the tracker assigned to a segment, or None.
        """
        return self.trackers.get(segment)

    def first_tracker(self, segments: Iterable[BodySegment]) -> Optional[Tracker]:
        """
        Return the tracker of the first segment in `segments` that has one.
        """
        for segment in segments:
            tracker = self.get_tracker(segment)
            if tracker is not None:
                return tracker
        return None

    @abstractmethod
    def reset_trackers_yaw(self) -> None:
        pass

    @abstractmethod
    def reset_trackers_full(self) -> None:
        pass

    @abstractmethod
    def reset_trackers_mounting(self) -> None:
        pass
