"""
run_grid.py - CLI Entry Point

Forwards execution to the CLI logic defined in
`src/terminal_image_grid/cli.py` so the tool can be run from a source
checkout without installing it.

Usage:
    python run_grid.py [-n IMGS_PER_ROW] [PATH]
    ls *.png | python run_grid.py

For help on available options, run:
    python run_grid.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import terminal_image_grid.cli as tig_cli

if __name__ == "__main__":
    raise SystemExit(tig_cli.main())
