from __future__ import annotations

import logging
import os
import ssl
import subprocess
import urllib.request

logger = logging.getLogger(__name__)


HAND_LANDMARKER_TASK_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
)
DEFAULT_MODEL_PATH = os.path.join("models", "hand_landmarker.task")


def _ssl_context() -> ssl.SSLContext:
    # python.org macOS builds often ship without root certificates; certifi fixes that when present.
    try:
        import certifi  # type: ignore
    except ImportError:
        return ssl.create_default_context()
    return ssl.create_default_context(cafile=certifi.where())


def _remove_partial(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def _fetch_with_urllib(url: str, path: str, timeout_s: int) -> None:
    with urllib.request.urlopen(url, context=_ssl_context(), timeout=timeout_s) as r, open(path, "wb") as f:
        f.write(r.read())


def _fetch_with_curl(url: str, path: str) -> str:
    """Returns curl's stderr on failure, "" on success."""

    try:
        proc = subprocess.run(
            ["curl", "-fL", "-o", path, url],
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        return str(e)
    if proc.returncode == 0 and os.path.exists(path) and os.path.getsize(path) > 0:
        return ""
    return proc.stderr.strip() or f"curl exited with {proc.returncode}"


def ensure_hand_landmarker_task(
    model_path: str = DEFAULT_MODEL_PATH, *, url: str = HAND_LANDMARKER_TASK_URL, timeout_s: int = 30
) -> str:
    """
    Return `model_path`, downloading the hand landmarker model there first if it is missing.

    Tries urllib, then curl (which usually works when Python's certificate store does not).
    Raises RuntimeError with manual download instructions if both fail.
    """

    if os.path.exists(model_path):
        return model_path

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)
    logger.info("downloading hand landmarker model to %s", model_path)

    try:
        _fetch_with_urllib(url, model_path, timeout_s)
        return model_path
    except (OSError, ssl.SSLError) as e:
        urllib_err = e
        logger.warning("urllib download failed (%s), retrying with curl", e)
        _remove_partial(model_path)

    curl_err = _fetch_with_curl(url, model_path)
    if not curl_err:
        return model_path
    _remove_partial(model_path)

    raise RuntimeError(
        "Missing MediaPipe hand landmarker model and auto-download failed.\n\n"
        f"Expected model at: {model_path}\n"
        f"URL: {url}\n\n"
        "Download it manually:\n"
        f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
        f'  curl -L -o "{model_path}" "{url}"\n\n'
        f"curl error:\n{curl_err}\n"
    ) from urllib_err
