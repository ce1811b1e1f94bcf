#!/usr/bin/env python3
"""Replay a recorded keypoint session through the direction classifier.

Useful for tuning the confidence threshold and dwell window offline. It:
- Reads a JSON Lines recording (see pose/providers.py for the format).
- Uses each frame's "t" timestamp, or spaces frames 1000/fps ms apart.
- Prints every emitted direction and a per-direction summary.

No camera or game engine is involved.
"""

import argparse
import logging
import os
import sys
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pose.classifier import (  # noqa: E402
    DEFAULT_DWELL_MS,
    DEFAULT_MIN_SCORE,
    EMISSION_POLICIES,
    REPEAT,
    DirectionClassifier,
    direction_evidence,
)
from pose.providers import PoseRecord, read_pose_records  # noqa: E402
from pose.sampler import DEFAULT_TARGET_FPS  # noqa: E402


logger = logging.getLogger(__name__)


@dataclass
class Emission:
    frame: int
    timestamp: float
    direction: str


@dataclass
class RecordingSummary:
    frames: int
    frames_with_pose: int
    frames_with_evidence: int
    emissions: List[Emission]

    @property
    def per_direction(self) -> Dict[str, int]:
        return dict(Counter(e.direction for e in self.emissions))


def replay_records(
    records: List[PoseRecord],
    classifier: DirectionClassifier,
    fps: float = DEFAULT_TARGET_FPS,
) -> RecordingSummary:
    interval = 1000.0 / fps
    emissions: List[Emission] = []
    with_pose = 0
    with_evidence = 0

    for idx, (timestamp, pose) in enumerate(records):
        now = timestamp if timestamp is not None else idx * interval
        if pose is not None:
            with_pose += 1
            if direction_evidence(pose, classifier.min_score) is not None:
                with_evidence += 1
        direction = classifier.evaluate(pose, now)
        if direction is not None:
            emissions.append(Emission(frame=idx, timestamp=now, direction=direction))

    return RecordingSummary(
        frames=len(records),
        frames_with_pose=with_pose,
        frames_with_evidence=with_evidence,
        emissions=emissions,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay a pose recording through the classifier.")
    parser.add_argument("recording", type=str, help="JSON Lines keypoint recording")
    parser.add_argument("--min-score", type=float, default=DEFAULT_MIN_SCORE)
    parser.add_argument("--dwell-ms", type=float, default=DEFAULT_DWELL_MS)
    parser.add_argument("--fps", type=float, default=DEFAULT_TARGET_FPS,
                        help="Frame spacing used when a frame has no timestamp")
    parser.add_argument("--policy", type=str, default=REPEAT, choices=sorted(EMISSION_POLICIES))
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
    )

    path = Path(args.recording).resolve()
    if not path.is_file():
        raise SystemExit(f"Recording does not exist: {path}")

    try:
        records = read_pose_records(path)
        classifier = DirectionClassifier(
            min_score=args.min_score, dwell_ms=args.dwell_ms, policy=args.policy
        )
    except ValueError as exc:
        raise SystemExit(str(exc))

    summary = replay_records(records, classifier, fps=args.fps)

    if not args.quiet:
        for e in summary.emissions:
            logger.info("frame=%d  t=%.0fms  -> %s", e.frame, e.timestamp, e.direction)

    logger.info("")
    logger.info(
        "%d frames, %d with a pose, %d with evidence, %d emissions",
        summary.frames,
        summary.frames_with_pose,
        summary.frames_with_evidence,
        len(summary.emissions),
    )
    for direction, count in sorted(summary.per_direction.items()):
        logger.info("  %-5s %d", direction, count)


if __name__ == "__main__":
    main()
