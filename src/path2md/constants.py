from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Prefix applied to every body line and every structure diagram line.
INDENT: str = '    '

STRUCTURE_HEADER: str = '# Directory Structure'

ROOT_MARKER: str = '.'
BRANCH_MID: str = '├─'
BRANCH_LAST: str = '└─'
CONTINUATION: str = '│ '
CONTINUATION_BLANK: str = '  '

# Upper bound of bytes read from a file when sniffing its format.
SNIFF_SIZE: int = 8192
