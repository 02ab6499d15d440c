from __future__ import annotations

OK = 0
ERR_FINDINGS = 1
ERR_USAGE = 2
ERR_IO = 3
ERR_CONFIG = 4
ERR_INTERNAL = 99
