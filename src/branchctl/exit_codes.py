from __future__ import annotations

OK = 0
ERR_USAGE = 1
# Child status is unavailable: killed by a signal or never spawned.
ERR_UNAVAILABLE = 1
ERR_INTERNAL = 99
