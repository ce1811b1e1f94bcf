"""
Keypoint providers that do not need a camera.

A provider is any zero-argument callable returning a Pose, or None when no
person is visible in the current frame.

Recordings are JSON Lines, one frame per line:
    {"t": 1234.5, "keypoints": [{"name": "right_wrist", "x": 310, "y": 120, "score": 0.91}, ...]}
"t" (milliseconds) is optional. An empty object or an empty keypoint list
records a frame with no person in it.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .keypoints import Pose

logger = logging.getLogger(__name__)

PoseRecord = Tuple[Optional[float], Optional[Pose]]


class ScriptedPoseProvider:
    """Replays a fixed sequence of poses, then reports no person forever."""

    def __init__(self, poses: Iterable[Optional[Pose]]):
        self._poses: List[Optional[Pose]] = list(poses)
        self._index = 0

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._poses)

    def __call__(self) -> Optional[Pose]:
        if self.exhausted:
            return None
        pose = self._poses[self._index]
        self._index += 1
        return pose


def parse_pose_record(line: str, line_number: int = 0) -> PoseRecord:
    """
    Parse one recorded frame into (timestamp_ms or None, Pose or None).

    Raises:
        ValueError: If the line is not a JSON object or a keypoint is malformed.
    """
    try:
        record = json.loads(line)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Line {line_number}: invalid JSON ({exc.msg})") from exc

    if not isinstance(record, dict):
        raise ValueError(f"Line {line_number}: expected an object, got {type(record).__name__}")

    timestamp = record.get("t")
    if timestamp is not None:
        try:
            timestamp = float(timestamp)
        except (TypeError, ValueError):
            raise ValueError(f"Line {line_number}: timestamp must be a number") from None

    keypoints = record.get("keypoints") or []
    if not keypoints:
        return timestamp, None
    try:
        return timestamp, Pose.from_dicts(keypoints)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValueError(f"Line {line_number}: malformed keypoint ({exc!r})") from exc


def read_pose_records(path: Union[str, Path]) -> List[PoseRecord]:
    records: List[PoseRecord] = []
    with open(path, "r") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            records.append(parse_pose_record(line, line_number))
    return records


class JsonlPoseProvider(ScriptedPoseProvider):
    """Replays poses recorded one JSON object per line, ignoring their timestamps."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        records = read_pose_records(self.path)
        logger.info("Loaded %d recorded frames from %s", len(records), self.path)
        super().__init__(pose for _, pose in records)
