"""
Body keypoint model consumed by the direction classifier.

A Pose is the output of one keypoint-estimator invocation for one person:
named 2D points in image space (y grows downward), each with a confidence
score in [0, 1].
"""

from typing import Any, Dict, Iterable, Mapping, NamedTuple, Optional

LEFT_WRIST = "left_wrist"
RIGHT_WRIST = "right_wrist"
LEFT_SHOULDER = "left_shoulder"
RIGHT_SHOULDER = "right_shoulder"
LEFT_HIP = "left_hip"
RIGHT_HIP = "right_hip"
LEFT_KNEE = "left_knee"
RIGHT_KNEE = "right_knee"

TRACKED_KEYPOINTS = (
    LEFT_WRIST, RIGHT_WRIST,
    LEFT_SHOULDER, RIGHT_SHOULDER,
    LEFT_HIP, RIGHT_HIP,
    LEFT_KNEE, RIGHT_KNEE,
)

# BlazePose / MediaPipe Pose landmark indices
LANDMARK_INDEX = {
    LEFT_SHOULDER: 11,
    RIGHT_SHOULDER: 12,
    LEFT_WRIST: 15,
    RIGHT_WRIST: 16,
    LEFT_HIP: 23,
    RIGHT_HIP: 24,
    LEFT_KNEE: 25,
    RIGHT_KNEE: 26,
}


class Keypoint(NamedTuple):
    name: str
    x: float
    y: float
    score: float = 1.0


class Pose:
    """A single detected body pose, indexed by keypoint name."""

    def __init__(self, keypoints: Iterable[Keypoint] = ()):
        self.keypoints: Dict[str, Keypoint] = {}
        for kp in keypoints:
            if kp.name:
                self.keypoints[kp.name] = kp

    def get(self, name: str) -> Optional[Keypoint]:
        return self.keypoints.get(name)

    def score(self, name: str) -> float:
        kp = self.keypoints.get(name)
        return kp.score if kp is not None else 0.0

    def __contains__(self, name: str) -> bool:
        return name in self.keypoints

    def __len__(self) -> int:
        return len(self.keypoints)

    def __repr__(self):
        return f"<Pose keypoints={sorted(self.keypoints)}>"

    @classmethod
    def from_dicts(cls, items: Iterable[Mapping[str, Any]]) -> "Pose":
        """
        Build from MoveNet-style dicts: {"name", "x", "y", "score"}.
        Entries without a name are ignored; a missing score counts as 0.
        """
        keypoints = []
        for item in items:
            name = item.get("name")
            if not name:
                continue
            score = item.get("score")
            keypoints.append(
                Keypoint(
                    name=name,
                    x=float(item["x"]),
                    y=float(item["y"]),
                    score=float(score) if score is not None else 0.0,
                )
            )
        return cls(keypoints)

    @classmethod
    def from_landmarks(cls, landmarks, image_width: float = 1.0, image_height: float = 1.0) -> "Pose":
        """
        Build from a MediaPipe-style landmark list (objects with .x, .y and
        an optional .visibility, normalised to [0, 1]). Visibility is used as
        the confidence score.
        """
        keypoints = []
        for name, idx in LANDMARK_INDEX.items():
            if idx >= len(landmarks):
                continue
            lm = landmarks[idx]
            keypoints.append(
                Keypoint(
                    name=name,
                    x=float(lm.x) * image_width,
                    y=float(lm.y) * image_height,
                    score=float(getattr(lm, "visibility", 1.0)),
                )
            )
        return cls(keypoints)
