"""
Throttled pose-estimation loop.

The sampler asks a keypoint provider for a pose at most `target_fps` times a
second, runs it through its own DirectionClassifier and forwards emitted
directions to a callback. Scheduling is left to the caller: call poll() as
often as you like and the sampler decides whether a sample is due.
"""

import logging
from typing import Callable, Optional

from .classifier import DirectionClassifier
from .keypoints import Pose

logger = logging.getLogger(__name__)

DEFAULT_TARGET_FPS = 20
STATUS_LOG_EVERY = 120

PoseProvider = Callable[[], Optional[Pose]]


class PoseSampler:
    def __init__(
        self,
        provider: PoseProvider,
        on_direction: Callable[[str], None],
        classifier: Optional[DirectionClassifier] = None,
        on_pose: Optional[Callable[[Pose], None]] = None,
        target_fps: float = DEFAULT_TARGET_FPS,
    ):
        if target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {target_fps}")
        self.provider = provider
        self.on_direction = on_direction
        self.on_pose = on_pose
        self.classifier = classifier or DirectionClassifier()
        self.interval_ms = 1000.0 / target_fps

        self.frames = 0
        self.poses_detected = 0
        self.errors = 0
        self.last_direction: Optional[str] = None
        self._last_sample: Optional[float] = None

    def next_due(self) -> Optional[float]:
        """Timestamp (ms) of the next sample, or None before the first one."""
        if self._last_sample is None:
            return None
        return self._last_sample + self.interval_ms

    def is_due(self, now: float) -> bool:
        return self._last_sample is None or now - self._last_sample >= self.interval_ms

    def poll(self, now: float) -> Optional[str]:
        """
        Sample once if the interval has elapsed. Returns the emitted
        direction (already forwarded to on_direction) or None.
        """
        if not self.is_due(now):
            return None
        self._last_sample = now
        self.frames += 1

        try:
            pose = self.provider()
        except Exception:
            self.errors += 1
            logger.exception("Pose estimation failed on frame %d", self.frames)
            return None

        if self.frames % STATUS_LOG_EVERY == 0:
            logger.info(
                "Pose sampler: %d frames, %d poses, %d errors",
                self.frames, self.poses_detected, self.errors,
            )

        if pose is not None:
            self.poses_detected += 1
            if self.on_pose is not None:
                self.on_pose(pose)

        direction = self.classifier.evaluate(pose, now)
        if direction is not None:
            self.last_direction = direction
            self.on_direction(direction)
        return direction
