"""Starter .driveignore and .driveignore.toml templates."""

DEFAULT_DRIVEIGNORE = """\
# driveignore: paths that are not expected in the sync folder
# Same syntax as .gitignore: trailing / = directories only, ! re-includes.

# OS and editor clutter
.DS_Store
Thumbs.db
desktop.ini
*.swp
*~

# Build output and caches
__pycache__/
node_modules/
.venv/
*.pyc
*.tmp

# Version control metadata
.git/
"""

DEFAULT_TOML = """\
# driveignore configuration
version = "1.0"

[diff]
identity = "inode"          # inode | size | exists, how two files count as the same
merge_ignores = false       # merge global and local .driveignore
require_ignore_file = true  # fail when no .driveignore is found
# queue_size = 0            # per-stream buffer, 0 = unbounded

[ignore]
# filename = ".driveignore"
# global_file = "~/.driveignore"
# patterns = ["*.bak"]

[output]
format = "terminal"         # terminal | json
show_summary = false
"""
