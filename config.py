# Configuration file for the gesture recorder
# This is the single source of truth for tuning constants

# === Hand smoothing ===
# Blend factor toward the newest raw hand position (0 = frozen, 1 = raw)
LERP_PERCENT = 0.3

# === Hand ROI ===
# Crop side length as a multiple of the spine scale in pixels
ROI_SCALE = 1.15

# Output resolution of every hand crop
IMAGE_WIDTH = 64
IMAGE_HEIGHT = 64

# === Sequence standardization ===
# Number of frames in every exported skeleton sequence
FRAME_STANDARD_SIZE = 35

# Number of crops in every exported hand image sequence
IMAGE_STANDARD_FRAME_SIZE = 35

# Stacked frames a session must exceed before it is finalized
PREDICT_MIN_FRAMES = 18
OUTPUT_MIN_FRAMES = 35

# === Export ===
PATH_DATA_FOLDER = "data"
TEMP_FOLDER = "temp"
FILE_LABEL = "labels.csv"
KEYPOINT_FILE = "Spoints.txt"
IMAGE_EXT = ".png"
DATE_FORMAT = "%Y%m%d-%H%M%S"
DEFAULT_WORKER = "worker"

# === Webcam sensor ===
CAMERA_INDEX = 0
POSE_MODEL_PATH = "pose_landmarker.task"
MAX_BODIES = 2
REAL_SHOULDER_WIDTH = 0.38  # m, used for monocular depth
