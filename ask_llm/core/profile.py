"""Read and write ``export NAME=value`` lines in the user's shell profile."""
from __future__ import annotations

import logging
import re
import shlex
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

# Checked in this order; the first one that exists is the one we write to.
PROFILE_FILES = (".zshrc", ".bashrc", ".bash_profile", ".profile")
FALLBACK_PROFILE = ".profile"


def profile_paths(home: Path) -> List[Path]:
    return [home / name for name in PROFILE_FILES]


def _unquote(raw: str) -> str:
    """Undo the shell quoting of an exported value.

    Values are written with :func:`shlex.quote`. Older entries were written
    as ``"..."`` without escaping inner quotes; those are recovered by just
    stripping the outer pair.
    """
    try:
        parts = shlex.split(raw)
    except ValueError:
        parts = []
    if len(parts) == 1:
        return parts[0]
    if len(raw) >= 2 and raw.startswith('"') and raw.endswith('"'):
        return raw[1:-1]
    return raw


def read_export(name: str, home: Path) -> Optional[str]:
    """Return the value exported for *name* by the first profile defining it."""
    pattern = re.compile(rf"^(?:export\s+)?{re.escape(name)}=(.*)$")
    for path in profile_paths(home):
        if not path.is_file():
            continue
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable profile %s: %s", path, exc)
            continue
        for line in lines:
            match = pattern.match(line.strip())
            if match and match.group(1):
                return _unquote(match.group(1))
    return None


def write_export(name: str, value: Optional[str], home: Path, marker: str) -> Path:
    """Replace any export of *name* in the profile with *value*.

    A blank *value* only removes the old entry. Returns the profile path
    that was (or would have been) written. ``OSError`` propagates.
    """
    target = next((p for p in profile_paths(home) if p.exists()), home / FALLBACK_PROFILE)
    has_value = bool(value and value.strip())
    entry = [marker, f"export {name}={shlex.quote(value)}"] if has_value else []

    if target.exists():
        lines = [
            line
            for line in target.read_text(encoding="utf-8").splitlines()
            if name not in line and marker not in line
        ]
        if entry:
            lines.append("")
            lines.extend(entry)
        target.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    elif entry:
        target.write_text("\n".join(entry) + "\n", encoding="utf-8")

    logger.debug("Updated %s in %s", name, target)
    return target
