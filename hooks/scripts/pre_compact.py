#!/usr/bin/env python3
"""PreCompact hook for GSD.

Before context compaction, record where the session stopped in
.planning/STATE.md so the next session can pick up from there.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from gsd.precompact import main


if __name__ == "__main__":
    main()
