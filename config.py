# config.py
import cv2

# Camera: these indices are tried in order
CAM_INDEX_CANDIDATES = [0, 1, 2]

# Camera backends, tried in order
CAP_BACKENDS = [
    ("DSHOW", getattr(cv2, "CAP_DSHOW", None)),
    ("MSMF", getattr(cv2, "CAP_MSMF", None)),
    ("DEFAULT", None),
]

CAM_W, CAM_H = 640, 360
MIRROR = True

SHOW_CAMERA = True  # True: show the camera preview window (Q closes it, tracking keeps running)

# MediaPipe Hands
MP_MAX_NUM_HANDS = 1
MP_MODEL_COMPLEXITY = 1
MP_MIN_DETECTION_CONFIDENCE = 0.5
MP_MIN_TRACKING_CONFIDENCE = 0.5

# Detection driver
DETECTION_INTERVAL_SEC = 0.033  # ~30 detections per second at most

# Gesture thresholds (normalized landmark space)
INDEX_CURL_MIN = 0.8          # tip-pip / pip-mcp above this = index straight
FOLD_CURL_MAX = 1.3           # tip-wrist / pip-wrist below this = finger folded
MIN_FOLDED_FINGERS = 2        # of middle / ring / pinky
THUMB_UP_OFFSET = 0.02        # thumb tip must sit this far above the IP joint
DEGENERATE_EPS = 1e-6

# Smoothing
AIM_SMOOTHING = 0.4           # detection rate, normalized space
CROSSHAIR_SMOOTHING = 0.12    # render rate, pixel space

# Trigger
SHOOT_COOLDOWN_SEC = 0.2

# Combo / score
COMBO_TIMEOUT_SEC = 2.0
COMBO_MAX = 10
PERFECT_COMBO = 5

# Magnetic aim assist
MAGNET_RANGE_PX = 120.0
MAGNET_STRENGTH = 0.6

# Targets (world units, the visible z=0 plane)
TARGET_MAX_COUNT = 4
TARGET_BOUNDS = (-4.0, 4.0, -2.5, 2.5)   # min_x, max_x, min_y, max_y
TARGET_MIN_SEPARATION = 1.5
TARGET_SPAWN_ATTEMPTS = 20
TARGET_DRIFT_SPEED = 0.48     # units per second
TARGET_SPIN_MAX = 2.4         # rad/s, either direction
TARGET_LIFETIME_SEC = 8.0
TARGET_POINTS = 100
TARGET_SPAWN_SCALE = 0.1
TARGET_SCALE_RATE = 3.0       # scale units per second
TARGET_RESPAWN_DELAY_SEC = 0.3
TARGET_STAGGER_SEC = 0.4
TARGET_COLORS = [
    (0, 245, 255),
    (255, 0, 255),
    (0, 255, 136),
    (255, 102, 0),
    (255, 170, 0),
]
TARGET_RADIUS = 0.4           # ring radius, world units

# Window / render
WIN_W, WIN_H = 1280, 720
FPS = 60
CAMERA_FOV_DEG = 75.0
CAMERA_Z = 5.0
MAX_FRAME_DT = 0.1            # clamp after stalls so drift never jumps

# Logging
LOG_DIR_NAME = ".gesture_shooter"
LOG_FILENAME = "gesture_shooter.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
