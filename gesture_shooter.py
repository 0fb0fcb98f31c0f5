# gesture_shooter.py
import argparse
import sys

from config import SHOW_CAMERA
from logger import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="GestureShooter: aim with your index finger, fire with your thumb")
    parser.add_argument("--debug", action="store_true", help="Debug-level logging.")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only.")
    parser.add_argument("--no-camera-window", action="store_true", help="Hide the camera preview window.")
    parser.add_argument("--camera-index", type=int, action="append", default=None,
                        help="Camera index to try (repeatable). Defaults to config.CAM_INDEX_CANDIDATES.")
    parser.add_argument("--mute", action="store_true", help="Disable sound.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    log = setup_logging(debug=args.debug, log_to_file=not args.no_log_file)

    # imported late so --help works without a display or camera stack
    from game.shooter import run_game
    from gesture.camera import CameraError

    try:
        run_game(camera_indices=args.camera_index,
                 show_camera=SHOW_CAMERA and not args.no_camera_window,
                 muted=args.mute)
    except CameraError as e:
        log.error(f"Camera unavailable: {e}")
        print(f"[GestureShooter] CAMERA ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
