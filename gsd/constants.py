"""Shared constants for the GSD continuity hook."""

# Project-local state document, relative to the session cwd
PLANNING_DIR = ".planning"
STATE_FILENAME = "STATE.md"

SECTION_HEADING = "## Session Continuity"
FALLBACK_STATUS = "unknown"
RESUME_MARKER = "Resume file: None"

# UTC, no fractional seconds, no zone suffix
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
