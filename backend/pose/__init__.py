"""
Pose input for PoseSnake: keypoint model, debounced direction classifier,
throttled sampling loop and camera-free providers.
"""

from .keypoints import Keypoint, Pose, TRACKED_KEYPOINTS
from .classifier import DirectionClassifier, direction_evidence, REPEAT, ONCE, EMISSION_POLICIES
from .sampler import PoseSampler
from .providers import JsonlPoseProvider, ScriptedPoseProvider

__all__ = [
    'Keypoint', 'Pose', 'TRACKED_KEYPOINTS',
    'DirectionClassifier', 'direction_evidence', 'REPEAT', 'ONCE', 'EMISSION_POLICIES',
    'PoseSampler',
    'JsonlPoseProvider', 'ScriptedPoseProvider',
]
