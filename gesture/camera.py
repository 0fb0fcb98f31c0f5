# gesture/camera.py
from typing import Optional, Sequence, Tuple
import cv2

from config import CAM_INDEX_CANDIDATES, CAP_BACKENDS, CAM_W, CAM_H


class CameraError(RuntimeError):
    """No usable camera; the game cannot start."""


def try_open_camera(indices: Optional[Sequence[int]] = None) -> Tuple[Optional[cv2.VideoCapture], str]:
    """
    Try each index with each backend; return the capture and a description.
    """
    for idx in (indices if indices is not None else CAM_INDEX_CANDIDATES):
        for name, backend in CAP_BACKENDS:
            if backend is None:
                cap = cv2.VideoCapture(idx)
            else:
                cap = cv2.VideoCapture(idx, backend)

            if cap is not None and cap.isOpened():
                cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAM_W)
                cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAM_H)
                info = f"CAM idx={idx}, backend={name}"
                return cap, info

            if cap is not None:
                cap.release()

    return None, "CAMERA_OPEN_FAILED"


def open_camera_or_raise(indices: Optional[Sequence[int]] = None) -> Tuple[cv2.VideoCapture, str]:
    cap, info = try_open_camera(indices)
    if cap is None:
        tried = list(indices if indices is not None else CAM_INDEX_CANDIDATES)
        raise CameraError(
            f"No camera could be opened (tried indices {tried}). "
            "Close other apps using the camera or pass --camera-index."
        )
    return cap, info
