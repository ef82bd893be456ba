"""Shared default values for user-facing configuration settings."""

# Grid
DEFAULT_IMAGES_PER_ROW = 5
DEFAULT_MIN_CELL_WIDTH = 10

# Renderer
DEFAULT_RENDERER_COMMAND = "catimg"
DEFAULT_RENDERER_WIDTH_FLAG = "-w"
# Play animations once so the renderer exits on its own.
DEFAULT_RENDERER_ANIMATED_ARGS: tuple[str, ...] = ("-l", "0")
DEFAULT_ANIMATED_EXTENSIONS: tuple[str, ...] = (".gif",)
# Cursor-up issued between animation frames.
DEFAULT_FRAME_MARKER = r"\x1b\[\d+A"
# Hide/show cursor and save/restore cursor.
DEFAULT_STRIP_PATTERNS: tuple[str, ...] = (
    r"\x1b\[\?25[lh]",
    r"\x1b\[[su]",
    r"\x1b[78]",
)

# Terminal
DEFAULT_TERMINAL_ROWS = 24
DEFAULT_TERMINAL_COLS = 80
DEFAULT_CURSOR_QUERY_TIMEOUT = 1.0
DEFAULT_CURSOR_ROW = 1

# Discovery
DEFAULT_IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".gif")
DEFAULT_SCAN_DIR = "."
