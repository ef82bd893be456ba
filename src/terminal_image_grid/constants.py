"""
Constants used internally by the terminal image grid.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Control sequence introducer
CSI = "\x1b["

# Cursor visibility
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"

# Device status report: ask the terminal for the cursor position
CURSOR_POSITION_REQUEST = f"{CSI}6n"
CURSOR_POSITION_REPLY_PATTERN = r"\x1b\[(\d+);(\d+)R"
CURSOR_POSITION_REPLY_END = "R"

# Caption truncation marker
ELLIPSIS = "..."

# Renderer width is expressed in half cells
RENDER_WIDTH_SCALE = 2

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1

# Signals converted to SystemExit while the cursor is hidden
EXIT_SIGNAL_NAMES = ("SIGTERM", "SIGHUP")

# Controlling terminal device
CONTROLLING_TTY = "/dev/tty"
