# Delivers notices built in core/notifications.py: console echo plus an
# optional JSON Lines outbox. Warnings are logged as well.

from __future__ import annotations
from pathlib import Path
import json
import logging
from typing import Dict, Iterable, List
from datetime import datetime
from events_main.utils.config import CONFIG

logger = logging.getLogger(__name__)


def render_notice(n: Dict) -> str:
    line = f"[{n['level']}] {n['title']}"
    if n.get("description"):
        line += f" {n['description']}"
    return line


def append_to_outbox(notices: Iterable[Dict], path: str | Path | None = None) -> int:
    """Append one JSON line per notice; all lines share one timestamp."""
    p = Path(path or CONFIG["delivery"]["outbox_path"])
    p.parent.mkdir(parents=True, exist_ok=True)
    created = datetime.now().isoformat(timespec="seconds")
    rows = [
        json.dumps({**n, "created": created, "source": "events"}, ensure_ascii=False)
        for n in notices
    ]
    with p.open("a", encoding="utf-8") as f:
        f.writelines(row + "\n" for row in rows)
    return len(rows)


def deliver_notices(notices: List[Dict]) -> int:
    """Returns the number of notices written to the outbox (0 when disabled)."""
    cfg = CONFIG["delivery"]
    for n in notices:
        if n["level"] == "warning":
            logger.warning("Notice: %s", render_notice(n))
        if cfg.get("console_echo", True):
            print(render_notice(n))
    if not cfg.get("enabled", False):
        return 0
    return append_to_outbox(notices)
