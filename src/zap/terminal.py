"""Best-effort terminal geometry probe.

Purpose
    Tell the usage renderer how wide the invoking terminal is so flag
    descriptions wrap at the right column.

Contents
    - ``DEFAULT_WIDTH``: column count assumed when the terminal cannot be
      queried.
    - ``terminal_width``: queries the controlling terminal.

System Integration
    Called by :class:`zap.usage.UsageRenderer` on every render. The probe never
    raises; redirected input or a missing controlling terminal silently falls
    back to :data:`DEFAULT_WIDTH`.
"""

from __future__ import annotations

import os
from typing import Final

DEFAULT_WIDTH: Final[int] = 80
_STDIN_FD: Final[int] = 0


def terminal_width(fd: int = _STDIN_FD) -> int:
    """Return the column count of the terminal attached to *fd*.

    Examples
    --------
    >>> terminal_width(-1)
    80
    """

    try:
        columns = os.get_terminal_size(fd).columns
    except (OSError, ValueError):
        return DEFAULT_WIDTH
    if columns <= 0:
        return DEFAULT_WIDTH
    return columns
