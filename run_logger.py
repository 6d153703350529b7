from __future__ import annotations

import json
import pathlib
import time
from typing import Any, Dict

# Path to the default run log file
LOG_PATH = pathlib.Path("logs") / "runs.log"


def log_run(config: Dict[str, Any], outcome: Dict[str, Any], *, log_file: pathlib.Path = LOG_PATH) -> None:
    """Append a record of one simulation run to the log file.

    Each line is a JSON object with the keys:
      - ts: ISO timestamp (UTC)
      - config: the settings the universe was built from
      - outcome: generations completed, cells created and how the run ended
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    entry = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "config": config,
        "outcome": outcome,
    }
    with log_file.open("a", encoding="utf-8") as fp:
        fp.write(json.dumps(entry, ensure_ascii=False) + "\n")
