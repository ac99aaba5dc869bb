"""Color & style helpers.

Decisions:
- Priority drives a task's colour; completed tasks use the done colour and
  overdue markers use the High colour.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import os, sys
from typing import Dict, Mapping

from dotenv import dotenv_values, find_dotenv

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    return f"\033[38;5;{16 + 36 * r6 + 6 * g6 + b6}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def valid_hex(value: str) -> bool:
    h = value.strip().lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def resolve_palette(defaults: Mapping[str, str], env: Mapping[str, str],
                    dotenv: Mapping[str, object]) -> Dict[str, str]:
    """Pick each colour from env, then .env, then the default; invalid hex is skipped."""
    out: Dict[str, str] = {}
    for key, default in defaults.items():
        chosen = default
        for source in (env, dotenv):
            raw = source.get(key)
            if isinstance(raw, str) and valid_hex(raw):
                chosen = '#' + raw.strip().lstrip('#')
                break
        out[key] = chosen
    return out

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
STRIKE = _code('9')

DEFAULT_PALETTE = {
    'TASKDASH_PRIMARY': '#476EAE',
    'TASKDASH_HIGH': '#E05252',
    'TASKDASH_MEDIUM': '#E3C44B',
    'TASKDASH_LOW': '#48B36A',
    'TASKDASH_DONE': '#A7E399',
}

_env_path = find_dotenv(usecwd=True)
_DOTENV = dotenv_values(_env_path) if _env_path else {}
PALETTE = resolve_palette(DEFAULT_PALETTE, os.environ, _DOTENV)

PRIMARY = _from_hex(PALETTE['TASKDASH_PRIMARY'])
C_HIGH = _from_hex(PALETTE['TASKDASH_HIGH'])
C_MEDIUM = _from_hex(PALETTE['TASKDASH_MEDIUM'])
C_LOW = _from_hex(PALETTE['TASKDASH_LOW'])
C_DONE = _from_hex(PALETTE['TASKDASH_DONE'])

PRIORITY_COLOR = {
    'High': C_HIGH,
    'Medium': C_MEDIUM,
    'Low': C_LOW,
}

HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY
DONE_COLOR = C_DONE
OVERDUE_COLOR = C_HIGH + BOLD

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','RESET','BOLD','DIM','STRIKE','PRIORITY_COLOR','HEADER_COLOR','ID_COLOR',
    'EMPTY_COLOR','DONE_COLOR','OVERDUE_COLOR','PALETTE','resolve_palette','valid_hex',
]
