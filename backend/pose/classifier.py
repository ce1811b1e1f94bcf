"""
Posture -> direction classifier.

Each frame is reduced to at most one piece of evidence by a fixed-priority
rule table, then debounced: a direction is only emitted once the same
evidence has been seen continuously for `dwell_ms`.

Debounce state lives on the classifier instance. Run one classifier per
detection session.
"""

import logging
from typing import Optional

from domain.constants import DOWN, LEFT, RIGHT, UP
from .keypoints import (
    LEFT_HIP, LEFT_KNEE, LEFT_SHOULDER, LEFT_WRIST,
    RIGHT_HIP, RIGHT_KNEE, RIGHT_SHOULDER, RIGHT_WRIST,
    Pose,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 0.4
DEFAULT_DWELL_MS = 220.0
DEBUG_LOG_EVERY = 30

# Emission policies once the dwell window has elapsed
REPEAT = "repeat"  # emit on every qualifying frame
ONCE = "once"      # emit one time per continuous posture
EMISSION_POLICIES = {REPEAT, ONCE}

# (raised point, reference point, direction), first match wins
EVIDENCE_RULES = (
    (RIGHT_WRIST, RIGHT_SHOULDER, RIGHT),  # right hand raised
    (LEFT_WRIST, LEFT_SHOULDER, LEFT),     # left hand raised
    (RIGHT_KNEE, RIGHT_HIP, UP),           # right leg raised
    (LEFT_KNEE, LEFT_HIP, DOWN),           # left leg raised
)


def _raised(pose: Pose, point: str, reference: str, min_score: float) -> bool:
    a = pose.get(point)
    b = pose.get(reference)
    if a is None or b is None:
        return False
    if a.score < min_score or b.score < min_score:
        return False
    # smaller y is higher in image space
    return a.y < b.y


def direction_evidence(pose: Optional[Pose], min_score: float = DEFAULT_MIN_SCORE) -> Optional[str]:
    """Return the direction implied by this frame, or None."""
    if pose is None:
        return None
    for point, reference, direction in EVIDENCE_RULES:
        if _raised(pose, point, reference, min_score):
            return direction
    return None


class DirectionClassifier:
    """
    Debounces per-frame evidence into direction commands.

    States: Idle (no pending direction) and Accumulating (pending direction
    D first seen at T). Evidence for D with now - T >= dwell_ms emits D;
    different evidence restarts the timer; no evidence returns to Idle.
    """

    def __init__(
        self,
        min_score: float = DEFAULT_MIN_SCORE,
        dwell_ms: float = DEFAULT_DWELL_MS,
        policy: str = REPEAT,
    ):
        if not 0.0 <= min_score <= 1.0:
            raise ValueError(f"min_score must be within [0, 1], got {min_score}")
        if dwell_ms < 0:
            raise ValueError(f"dwell_ms must be non-negative, got {dwell_ms}")
        if policy not in EMISSION_POLICIES:
            raise ValueError(
                f"Unknown emission policy '{policy}'. Choose one of: {', '.join(sorted(EMISSION_POLICIES))}"
            )
        self.min_score = min_score
        self.dwell_ms = dwell_ms
        self.policy = policy

        self._pending: Optional[str] = None
        self._since: Optional[float] = None
        self._emitted = False
        self._frames = 0

    @property
    def pending_direction(self) -> Optional[str]:
        return self._pending

    @property
    def evidence_since(self) -> Optional[float]:
        return self._since

    def reset(self) -> None:
        if self._pending is not None:
            logger.debug("Debounce reset (pending %s dropped)", self._pending)
        self._pending = None
        self._since = None
        self._emitted = False

    def evaluate(self, pose: Optional[Pose], now: float) -> Optional[str]:
        """
        Feed one frame observed at `now` (milliseconds) and return the
        direction to emit, if any.
        """
        self._frames += 1
        if pose is not None and self._frames % DEBUG_LOG_EVERY == 0:
            logger.debug(
                "Keypoints: %s",
                {name: (round(kp.y), round(kp.score, 2)) for name, kp in pose.keypoints.items()},
            )

        evidence = direction_evidence(pose, self.min_score)

        if evidence is None:
            self.reset()
            return None

        if evidence != self._pending:
            self._pending = evidence
            self._since = now
            self._emitted = False
            logger.debug("Evidence for %s, dwell timer started", evidence)
            return None

        if now - self._since < self.dwell_ms:
            return None

        if self.policy == ONCE and self._emitted:
            return None

        self._emitted = True
        logger.debug("Direction %s held for %.0fms", evidence, now - self._since)
        return evidence
