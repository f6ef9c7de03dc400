from __future__ import annotations

# contactbook/config.py
import os
import yaml

# relative to the working directory the app is started from
CONFIG_PATH = "config.yaml"

DEFAULTS = {
    "db_path": None,
    "test_db_path": None,
    "seed_on_startup": True,
    "page_size": 10,
}


def _as_bool(v, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"):
            return True
        if s in ("0", "false", "no", "off"):
            return False
    return default


def read_config(path: str | None = None) -> dict:
    """
    Read config.yaml and normalise the keys this app understands.
    A missing or unreadable file falls back to DEFAULTS.
    """
    cfg_path = os.path.abspath(path or os.environ.get("CONTACTBOOK_CONFIG") or CONFIG_PATH)
    out = dict(DEFAULTS)
    if not os.path.exists(cfg_path):
        return out
    with open(cfg_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        return out

    for k in ("db_path", "test_db_path"):
        v = raw.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    out["seed_on_startup"] = _as_bool(raw.get("seed_on_startup"), DEFAULTS["seed_on_startup"])
    try:
        size = int(raw.get("page_size", DEFAULTS["page_size"]))
        out["page_size"] = size if size >= 1 else DEFAULTS["page_size"]
    except (TypeError, ValueError):
        pass
    return out
