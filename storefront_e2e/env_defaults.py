"""Read harness defaults from the repository's ``.env.defaults`` file.

Values in the process environment always win; this file only supplies the
fallback so a fresh checkout can run the live tests without exporting
anything. The loader is keyed to the checkout root rather than the current
working directory, so running pytest from a subdirectory sees the same
defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

DEFAULTS_FILE = Path(__file__).resolve().parents[1] / ".env.defaults"


def parse_env_file(text: str) -> Dict[str, str]:
    """Parse ``KEY=value`` lines, ignoring blanks and ``#`` comments."""
    defaults: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        defaults[key.strip()] = value
    return defaults


@lru_cache(maxsize=1)
def _load_env_defaults() -> Dict[str, str]:
    if not DEFAULTS_FILE.exists():
        return {}
    return parse_env_file(DEFAULTS_FILE.read_text(encoding="utf-8"))


def get_env_default(key: str) -> Optional[str]:
    return _load_env_defaults().get(key)
