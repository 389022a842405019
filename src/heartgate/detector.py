from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import cv2

from .model_assets import DEFAULT_MODEL_PATH, ensure_hand_landmarker_task
from .types import HandLandmark, Handedness, HandPosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SolutionsBackend:
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _handedness_candidates(categories: Iterable) -> List[Handedness]:
    """Normalize solutions `Classification`s or tasks `Category`s, keeping their rank order."""

    out: List[Handedness] = []
    for c in categories:
        label = getattr(c, "label", None) or getattr(c, "category_name", None) or getattr(c, "display_name", None)
        if not label:
            continue
        out.append(Handedness(label=str(label), score=float(getattr(c, "score", 0.0))))
    return out


def hand_from_landmarks(landmarks: Iterable, categories: Iterable = ()) -> HandPosition:
    """Build a HandPosition from detector landmarks (objects with x/y/z) and handedness categories."""

    lms = [
        HandLandmark(idx=i, x=float(lm.x), y=float(lm.y), z=float(getattr(lm, "z", 0.0)))
        for i, lm in enumerate(landmarks)
    ]
    return HandPosition(landmarks=lms, handedness=_handedness_candidates(categories))


def _create_solutions_backend(
    static_image_mode: bool, max_num_hands: int, min_detection_confidence: float, min_tracking_confidence: float
) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=static_image_mode,
        max_num_hands=max_num_hands,
        min_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _SolutionsBackend(hands=hands)


def _create_tasks_backend(
    model_path: str, max_num_hands: int, min_detection_confidence: float, min_tracking_confidence: float
) -> _TasksBackend:
    """
    For MediaPipe builds without `mp.solutions`: the Tasks HandLandmarker in VIDEO mode, which
    needs a `.task` model asset on disk.
    """

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=ensure_hand_landmarker_task(model_path)),
        running_mode=RunningMode.VIDEO,
        num_hands=max_num_hands,
        min_hand_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _TasksBackend(mp=mp, landmarker=HandLandmarker.create_from_options(options))


class HandLandmarkDetector:
    """
    Two-hand landmark source backed by MediaPipe.

    Input frames are expected as **BGR** images (OpenCV default). Each `detect` call returns zero,
    one or two HandPositions with normalized landmarks and ranked handedness candidates.
    """

    def __init__(
        self,
        static_image_mode: bool = False,
        max_num_hands: int = 2,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        tasks_model_path: str = DEFAULT_MODEL_PATH,
    ) -> None:
        self._solutions = _create_solutions_backend(
            static_image_mode, max_num_hands, min_detection_confidence, min_tracking_confidence
        )
        self._tasks: Optional[_TasksBackend] = None
        self._last_timestamp_ms = -1

        if self._solutions is None:
            logger.info("mediapipe has no `solutions`, using the Tasks HandLandmarker")
            try:
                self._tasks = _create_tasks_backend(
                    tasks_model_path, max_num_hands, min_detection_confidence, min_tracking_confidence
                )
            except (ImportError, AttributeError) as e:
                raise RuntimeError(
                    "Could not initialize MediaPipe hand tracking: the installed `mediapipe` exposes neither\n"
                    "`mp.solutions` nor the Tasks HandLandmarker API. Reinstall with `pip install -U mediapipe`."
                ) from e

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
        if self._tasks is not None:
            self._tasks.landmarker.close()

    def __enter__(self) -> "HandLandmarkDetector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _next_timestamp_ms(self, timestamp_ms: Optional[int]) -> int:
        # VIDEO mode rejects timestamps that do not increase.
        if timestamp_ms is None or timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 33
        self._last_timestamp_ms = timestamp_ms
        return timestamp_ms

    def detect(self, frame_bgr, timestamp_ms: Optional[int] = None) -> List[HandPosition]:
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return []
            handedness_list = results.multi_handedness or []
            positions: List[HandPosition] = []
            for i, hand_landmarks in enumerate(results.multi_hand_landmarks):
                categories = handedness_list[i].classification if i < len(handedness_list) else []
                positions.append(hand_from_landmarks(hand_landmarks.landmark, categories))
            return positions

        assert self._tasks is not None
        mp = self._tasks.mp
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        result = self._tasks.landmarker.detect_for_video(mp_image, self._next_timestamp_ms(timestamp_ms))

        hand_landmarks_list = getattr(result, "hand_landmarks", None) or []
        handedness_list = getattr(result, "handedness", None) or []
        return [
            hand_from_landmarks(landmarks, handedness_list[i] if i < len(handedness_list) else [])
            for i, landmarks in enumerate(hand_landmarks_list)
        ]
