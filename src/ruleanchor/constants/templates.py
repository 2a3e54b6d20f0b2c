"""Template slot syntax."""

from __future__ import annotations

import re

SLOT_PATTERN: re.Pattern[str] = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
