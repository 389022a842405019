from __future__ import annotations

import argparse
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from heartgate.classifier import HEART_SCORE_THRESHOLD, assign_hands, score_frame  # noqa: E402
from heartgate.detector import HandLandmarkDetector  # noqa: E402
from heartgate.drawing import draw_hands  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Score a still image for the hand-heart pose.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", help="Optional path for an annotated copy")
    args = ap.parse_args()

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")

    with HandLandmarkDetector(static_image_mode=True) as detector:
        positions = detector.detect(frame)

    hands = [p.landmarks for p in positions]
    handedness = [p.handedness for p in positions]

    print(f"hands: {len(positions)}")
    for i, p in enumerate(positions):
        print(f"[{i}] {p.handedness_label} score={p.handedness_score}")

    assignment = assign_hands(hands, handedness)
    if assignment is not None and not assignment.from_labels:
        print("handedness labels unusable, assigned left/right by detection order")

    score = score_frame(hands, handedness)
    if score is None:
        print("heart: no (need two complete hands)")
    else:
        print(
            f"cross={score.cross_thumb_index:.2f} index={score.index_near:.2f} "
            f"thumb={score.thumb_near:.2f} center={score.center_balance:.2f} "
            f"total={score.total:.2f}/{HEART_SCORE_THRESHOLD} center_distance={score.center_distance:.2f}"
        )
        print(f"heart: {'yes' if score.is_heart else 'no'}{' (hands too far apart)' if score.gated else ''}")

    if args.out:
        if not cv2.imwrite(args.out, draw_hands(frame, positions)):
            raise RuntimeError(f"Could not write output image: {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
