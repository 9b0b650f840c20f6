"""STATE.md handling for the GSD continuity hook.

The state document is plain text owned by the user. This module only reads
the first ``Status:`` line and rewrites the trailing Session Continuity
section; everything before that heading is preserved byte-for-byte.
"""

import logging
import os
import re
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .constants import (
    FALLBACK_STATUS,
    PLANNING_DIR,
    RESUME_MARKER,
    SECTION_HEADING,
    STATE_FILENAME,
    TIMESTAMP_FORMAT,
)

logger = logging.getLogger(__name__)

_STATUS_RE = re.compile(r"^Status:(.*)$", re.MULTILINE)
_HEADING_RE = re.compile(r"^" + re.escape(SECTION_HEADING), re.MULTILINE)


def state_path(cwd) -> Path:
    return Path(cwd) / PLANNING_DIR / STATE_FILENAME


def extract_status(content: str) -> str:
    """Return the value of the first ``Status:`` line, or ``unknown``."""
    match = _STATUS_RE.search(content)
    if not match:
        return FALLBACK_STATUS
    status = match.group(1).strip()
    return status or FALLBACK_STATUS


def format_timestamp(now: Optional[datetime] = None) -> str:
    """Render ``now`` (default: current time) as a UTC ``YYYY-MM-DD HH:MM:SS``."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def build_continuity_block(status: str, timestamp: str) -> str:
    return (
        f"{SECTION_HEADING}\n"
        f"\n"
        f"Last session: {timestamp}\n"
        f'Stopped at: Context compaction during "{status}"\n'
        f"{RESUME_MARKER}"
    )


def replace_continuity_section(content: str, block: str) -> str:
    """Swap the Session Continuity section for ``block``, appending it if absent.

    The section runs from the first heading at the start of a line to the end
    of the document. An appended section is followed by a single newline;
    a replaced one ends with the block itself.
    """
    match = _HEADING_RE.search(content)
    if match:
        return content[:match.start()] + block
    return content.rstrip() + "\n\n" + block + "\n"


def _write_atomic(path: Path, content: str):
    """Replace ``path`` via a uniquely named temp file in the same directory."""
    fd, tmp_name = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
    )
    tmp_path = Path(tmp_name)
    try:
        with open(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def update_state_file(path: Path, now: Optional[datetime] = None) -> bool:
    """Rewrite the Session Continuity section of ``path``.

    A symlinked state file is written through to its target. Returns False
    when there is no state file (not a GSD project), True after the file has
    been rewritten. I/O and decoding errors propagate.
    """
    if not path.is_file():
        return False

    path = path.resolve()

    with open(path, encoding="utf-8", newline="") as f:
        content = f.read()

    status = extract_status(content)
    block = build_continuity_block(status, format_timestamp(now))
    _write_atomic(path, replace_continuity_section(content, block))

    logger.info("Updated session continuity in %s (status: %s)", path, status)
    return True
