"""Global constants for the recorder."""

# Surface defaults
DEFAULT_SIZE = (640, 640)  # Width and height of a fresh surface in pixels
DEFAULT_COLOR = "white"  # Background used when clearing between ticks
DEFAULT_CLEAR = True  # Clear the surface before every tick
TRANSPARENT = (0, 0, 0, 0)  # Clear color when no background color is set

# Timing defaults
DEFAULT_FPS = 60  # Target frames per second
DEFAULT_FRAMES = 0  # Frame limit, 0 runs until stop() is called
MS_PER_SECOND = 1000.0

# Recording defaults
DEFAULT_RECORD = True  # Capture every tick into the archive
DEFAULT_IMAGE_FORMAT = "png"
FRAME_NAME_WIDTH = 6  # Minimum digits in archive entry names (000000.png)
ARCHIVE_MEDIA_TYPE = "application/zip"
ARCHIVE_TIMESTAMP = (1980, 1, 1, 0, 0, 0)  # Fixed entry date so identical frames give identical archives
MAX_PENDING_ENCODES = 8  # Encodes allowed in flight before the tick loop waits for the oldest
