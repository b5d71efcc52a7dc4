from __future__ import annotations

import time
from dataclasses import asdict, dataclass


@dataclass
class ServerStatus:
    """Last known reachability of the remote API. Read by views for the demo-mode banner."""

    available: bool = True
    last_check: float = 0.0  # epoch ms, advisory
    check_interval_ms: int = 60000

    def mark_available(self) -> None:
        self.available = True
        self.last_check = time.time() * 1000.0

    def mark_unavailable(self) -> None:
        self.available = False
        self.last_check = time.time() * 1000.0

    def snapshot(self) -> dict:
        return asdict(self)
