# ── src/sequencer/utility/utils.py ─────────────────────────────────────
from __future__ import annotations

import copy
import errno
import logging
import logging.handlers
import os
import secrets
import sys
import yaml
from pathlib import Path
import datetime as dt

# ── locate repo root & default paths  ──────────────────────────────────
def _find_repo_root(start: Path | None = None) -> Path:
    """Walk parents until we see pyproject.toml or .git."""
    here = start or Path(__file__).resolve()
    for p in [here, *here.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return Path(__file__).resolve().parents[1]       # site-packages wheel

ROOT      = _find_repo_root()
LOG_ROOT  = ROOT / "logs"
CONF_PATH = ROOT / "config" / "config.yaml"

# used whenever config.yaml is missing or leaves a key out
DEFAULTS: dict = {
    "assembly": {
        "tie_break": "shortest-merge",
        "min_overlap": 1,
    },
}

# ── tiny helpers  ──────────────────────────────────────────────────────
def _deep_merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for key, val in (override or {}).items():
        if isinstance(val, dict) and isinstance(out.get(key), dict):
            out[key] = _deep_merge(out[key], val)
        else:
            out[key] = val
    return out

def load_config(path: str | Path = CONF_PATH) -> dict:
    """
    Read the YAML config and lay it over DEFAULTS.
    A missing file is not an error; an installed wheel has no config/ folder.
    """
    p = Path(path)
    if not p.exists():
        return copy.deepcopy(DEFAULTS)
    with p.open() as fh:
        return _deep_merge(DEFAULTS, yaml.safe_load(fh) or {})

# ── main helper  ───────────────────────────────────────────────────────
def setup_logging(
    log_dir: str | Path | None = LOG_ROOT,
    *,
    level: int | None = None,
    console: bool = True,
    force: bool = False,
    max_bytes: int | None = None,
    backup_count: int = 0,                      # keep everything by default
    session_env: str = "SEQUENCER_SESSION_ID",
    warn_if_generated: bool = False,
    log_file_prefix: str = "sequencer",
) -> Path:
    """
    Create one log file called 'sequencer_<SESSION_ID>.log'.

    SESSION_ID priority
    1. value of $<session_env>  (e.g. SEQUENCER_SESSION_ID)
    2. auto-generated 'YYYYMMDD-HHMMSS-<4-hex>'

    $SEQUENCER_LOG_FILE pins the exact file; $SEQUENCER_LOG_DIR is used when
    log_dir is None. With max_bytes set the file rotates, keeping backup_count
    old copies.
    """
    # ── decide the file (env-var beats arg beats default) -------------
    if os.getenv("SEQUENCER_LOG_FILE"):
        logfile = Path(os.getenv("SEQUENCER_LOG_FILE")).expanduser()
        logfile.parent.mkdir(parents=True, exist_ok=True)
    else:
        root_dir = (
            Path(log_dir).expanduser()
            if log_dir is not None
            else Path(os.getenv("SEQUENCER_LOG_DIR", LOG_ROOT)).expanduser()
        )
        root_dir.mkdir(parents=True, exist_ok=True)

        sess_id = os.getenv(session_env)
        if not sess_id:
            ts = dt.datetime.now().strftime("%Y%m%d-%H%M%S")
            sess_id = f"{ts}-{secrets.token_hex(2)}"
            if warn_if_generated:
                sys.stderr.write(
                    f"{session_env} not set – using auto session ID {sess_id}\n"
                )
        logfile = root_dir / f"{log_file_prefix}_{sess_id}.log"

    # ── short-circuit if already configured ---------------------------
    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        return logfile

    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
        h.close()
    root_logger.setLevel(level if level is not None else logging.INFO)

    fmt = logging.Formatter("%(asctime)s  %(levelname)-7s  %(name)s:  %(message)s")

    if max_bytes:
        fh = logging.handlers.RotatingFileHandler(
            logfile, maxBytes=max_bytes, backupCount=backup_count,
            encoding="utf-8", delay=True
        )
    else:
        fh = logging.FileHandler(logfile, mode="a", encoding="utf-8", delay=True)
    fh.setFormatter(fmt)
    root_logger.addHandler(fh)

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(fmt)
        root_logger.addHandler(ch)

    # ── refresh _latest symlink ---------------------------------------
    latest = logfile.parent / f"{log_file_prefix}_latest.log"
    try:
        if latest.is_symlink() or latest.exists():
            latest.unlink()
        latest.symlink_to(logfile.name)          # relative link
    except OSError as e:
        if e.errno not in (errno.EPERM, errno.EACCES, errno.EEXIST):
            raise

    root_logger.debug("Logging to %s", logfile)
    return logfile
