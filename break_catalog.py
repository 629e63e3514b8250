from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

logger = logging.getLogger(__name__)

PLAYBOOK_FILENAME = "break_playbook.yaml"


def _repo_root() -> Path:
    # Assume this file lives at repo root
    return Path(__file__).resolve().parent


def _empty_playbook() -> Dict[str, Any]:
    return {"by_status": {}, "list": [], "version": ""}


@lru_cache(maxsize=4)
def load_break_playbook(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """
    Read break_playbook.yaml and return a normalized playbook dict.

    Returns a dict with keys:
      - "by_status": map of {lower-cased status -> full entry dict}
      - "list": list of entry dicts in file order
      - "version": string version if present
    """
    playbook = _empty_playbook()

    yaml_path = Path(path) if path is not None else (_repo_root() / PLAYBOOK_FILENAME)
    if not yaml_path.exists():
        logger.warning("%s not found at %s; break details will be unavailable", PLAYBOOK_FILENAME, yaml_path)
        return playbook

    try:
        with yaml_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to read %s: %s", yaml_path, e)
        return playbook

    if not isinstance(data, dict):
        logger.warning("%s is not a mapping. Unable to load break playbook.", yaml_path)
        return playbook

    entries = data.get("breaks") or []
    if not isinstance(entries, list):
        logger.warning("%s missing 'breaks' list. No break details to display.", yaml_path)
        entries = []

    by_status: Dict[str, Any] = {}
    ordered_list = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        status = str(entry.get("status") or "").strip()
        if not status:
            continue
        steps = entry.get("next_steps") or []
        entry = {**entry, "next_steps": [str(s) for s in steps] if isinstance(steps, list) else []}
        ordered_list.append(entry)
        by_status[status.lower()] = entry

    playbook["by_status"] = by_status
    playbook["list"] = ordered_list
    version = data.get("version")
    playbook["version"] = str(version) if version is not None else ""
    return playbook


def break_details(status: str, path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Return the playbook entry for a break status or {} if not found."""
    status_norm = str(status or "").strip().lower()
    if not status_norm:
        return {}
    return load_break_playbook(path)["by_status"].get(status_norm, {})


def priority_badge_text(priority: Optional[str]) -> str:
    """
    Return a compact label string for tables by priority.
    High -> "🔴 High"
    Medium -> "🟠 Medium"
    Low -> "🟢 Low"
    Fallback -> "⚪ Unknown"
    """
    if not priority:
        return "⚪ Unknown"
    p = str(priority).strip().lower()
    if p == "high":
        return "🔴 High"
    if p == "medium":
        return "🟠 Medium"
    if p == "low":
        return "🟢 Low"
    return "⚪ Unknown"
