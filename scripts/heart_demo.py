#!/usr/bin/env python3
"""
Webcam hand-heart gate.

Hold a hand-heart in front of the camera until the meter fills. Letting go drains it slowly.
Press 'r' to start over, 'q' or ESC to quit.
"""

from __future__ import annotations

import argparse
import logging
import os
import platform
import sys
import time
from typing import Optional

import cv2
import numpy as np

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from heartgate import messages  # noqa: E402
from heartgate.audio import PewPlayer  # noqa: E402
from heartgate.detector import HandLandmarkDetector  # noqa: E402
from heartgate.drawing import draw_accepted_overlay, draw_hands, draw_hud  # noqa: E402
from heartgate.model_assets import DEFAULT_MODEL_PATH  # noqa: E402
from heartgate.session import HeartSession  # noqa: E402
from heartgate.types import Completed  # noqa: E402

logger = logging.getLogger("heart_demo")

WINDOW_TITLE = "heartgate"


def open_camera(index: int, width: int, height: int) -> Optional[cv2.VideoCapture]:
    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(index, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        logger.warning(
            "could not open camera index %d. On macOS: System Settings -> Privacy & Security -> Camera "
            "-> allow your terminal.",
            index,
        )
        return None
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    return cap


def main() -> int:
    ap = argparse.ArgumentParser(description="Hold a hand-heart to fill the meter.")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=1280, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=720, help="Capture height (best effort)")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Disable horizontal mirroring (default is mirrored/selfie mode)",
    )
    ap.add_argument("--mute", action="store_true", help="Do not play the completion sound")
    ap.add_argument("--volume", type=float, default=1.0, help="Completion sound volume (0.0 to 1.0)")
    ap.add_argument("--model", default=DEFAULT_MODEL_PATH, help="Tasks API model path (fallback backend only)")
    ap.add_argument("--verbose", action="store_true", help="Log per-frame scores")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = HeartSession()
    toast = messages.MessageToast()
    canvas = np.zeros((args.height, args.width, 3), dtype=np.uint8)
    holding = False

    print(messages.STATUS_LOADING)
    cap = open_camera(args.camera, args.width, args.height)
    status = messages.STATUS_READY if cap is not None else messages.STATUS_NO_CAMERA

    with HandLandmarkDetector(tasks_model_path=args.model) as detector, PewPlayer(
        volume=args.volume, enabled=not args.mute
    ) as pew:
        print(status)
        print("Press 'r' to reset, 'q' or ESC to quit")

        while True:
            now = time.monotonic()
            hands = []

            if cap is not None:
                ok, frame = cap.read()
                if not ok:
                    logger.warning("camera stopped delivering frames")
                    cap.release()
                    cap = None
                    status = messages.STATUS_NO_CAMERA
                    holding = False
                else:
                    if not args.no_mirror:
                        frame = cv2.flip(frame, 1)
                    canvas = frame
                    hands = detector.detect(frame, timestamp_ms=int(now * 1000))
                    result = session.step_positions(hands, now=now)
                    holding = result.holding

                    for event in result.events:
                        text = messages.message_for(event)
                        if text:
                            toast.show(text, now)
                        if isinstance(event, Completed):
                            pew.play()
                            # Nothing left to detect once accepted.
                            cap.release()
                            cap = None

            frame = canvas.copy()
            if session.accepted:
                draw_accepted_overlay(frame, messages.COMPLETED_MESSAGE)
            else:
                draw_hands(frame, hands)
                draw_hud(frame, session.state, status, toast=toast.current(now), holding=holding)

            cv2.imshow(WINDOW_TITLE, frame)
            key = cv2.waitKey(1) & 0xFF
            if key in (ord("q"), 27):
                break
            if key == ord("r"):
                session.reset()
                toast.clear()
                holding = False
                print(messages.STATUS_RESETTING)
                if cap is not None:
                    cap.release()
                cap = open_camera(args.camera, args.width, args.height)
                status = messages.STATUS_READY if cap is not None else messages.STATUS_NO_CAMERA
                print(status)

    if cap is not None:
        cap.release()
    cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
