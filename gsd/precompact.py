"""PreCompact hook for GSD.

Before context compaction, stamp the Session Continuity section of
.planning/STATE.md so the next session knows where this one stopped.

Nothing is written to stdout or stderr and the exit status is always 0:
a broken state file must never block the host's compaction step.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .config import Config
from .state import state_path, update_state_file

logger = logging.getLogger(__name__)


class HookResult(Enum):
    UPDATED = "updated"
    NO_STATE_FILE = "no_state_file"
    INVALID_INPUT = "invalid_input"
    FAILED = "failed"


class InvalidPayload(ValueError):
    """Hook input was not decodable JSON, or was null."""


def parse_payload(raw: Union[bytes, str]) -> dict:
    """Decode the hook input.

    Raises InvalidPayload for undecodable text, malformed JSON and ``null``.
    Any other non-object value carries no fields and yields an empty payload,
    so the process cwd is used.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        payload = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidPayload(str(e)) from e
    if payload is None:
        raise InvalidPayload("payload is null")
    if not isinstance(payload, dict):
        return {}
    return payload


def resolve_cwd(payload: dict, fallback=None) -> Path:
    cwd = payload.get("cwd")
    if isinstance(cwd, str) and cwd:
        return Path(cwd)
    return Path(fallback if fallback is not None else os.getcwd())


def run_hook(
    raw: Union[bytes, str],
    process_cwd=None,
    now: Optional[datetime] = None,
) -> HookResult:
    """Run the update and map every outcome to a HookResult. Never raises."""
    try:
        payload = parse_payload(raw)
    except InvalidPayload:
        return HookResult.INVALID_INPUT

    try:
        path = state_path(resolve_cwd(payload, process_cwd))
        if not update_state_file(path, now=now):
            return HookResult.NO_STATE_FILE
    except (OSError, UnicodeError) as e:
        logger.warning("Could not update session continuity: %s", e)
        return HookResult.FAILED

    return HookResult.UPDATED


def _setup_logging(config: Config):
    """Log to a rotating file only. Hooks must stay silent on the console."""
    if not config.get("log_enabled", True):
        return

    log_file = config.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger("gsd")
    root.setLevel(logging.INFO)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=1024*1024, backupCount=2, encoding="utf-8", delay=True
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    root.addHandler(file_handler)


def main():
    logging.raiseExceptions = False
    try:
        _setup_logging(Config())
    except Exception:
        # Bad config or no usable home dir: run without a log file
        pass

    try:
        run_hook(sys.stdin.buffer.read())
    except Exception:
        # Last resort, compaction must go ahead
        pass
    sys.exit(0)


if __name__ == "__main__":
    main()
