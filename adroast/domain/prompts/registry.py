from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import json

import yaml


@dataclass(frozen=True)
class PromptPack:
    id: str
    description: str
    critique_system: str
    critique_user: str
    params: dict[str, Any]


class PromptPackNotFound(RuntimeError):
    pass


class PromptPackRegistry:
    """
    packs_dir/
      adroast/
        manifest.yaml(or json)
        critique.system.txt
        critique.user.txt
    """

    def __init__(self, packs_dir: Path, default_pack: str = "adroast"):
        self.packs_dir = packs_dir
        self.default_pack = default_pack

    def resolve(self, pack_id: str | None) -> str:
        return (pack_id or "").strip() or self.default_pack

    def get(self, pack_id: str | None = None) -> PromptPack:
        return self._load_pack_cached(str(self.packs_dir), self.resolve(pack_id))

    @staticmethod
    @lru_cache(maxsize=16)
    def _load_pack_cached(packs_dir_str: str, pid: str) -> PromptPack:
        packs_dir = Path(packs_dir_str)
        pack_dir = packs_dir / pid

        # case-insensitive lookup for case-sensitive filesystems
        if not pack_dir.exists() and packs_dir.exists():
            pid_lower = pid.lower()
            for candidate in packs_dir.iterdir():
                if candidate.is_dir() and candidate.name.lower() == pid_lower:
                    pack_dir = candidate
                    break

        if not pack_dir.exists():
            raise PromptPackNotFound(f"Prompt pack not found: {pack_dir}")

        manifest = _load_manifest(pack_dir)
        templates = manifest.get("templates", {})

        def read_template(key: str, fallback_filename: str) -> str:
            filename = templates.get(key, fallback_filename)
            return (pack_dir / filename).read_text(encoding="utf-8")

        return PromptPack(
            id=str(manifest.get("id", pid)),
            description=str(manifest.get("description", "")),
            critique_system=read_template("critique_system", "critique.system.txt"),
            critique_user=read_template("critique_user", "critique.user.txt"),
            params=dict(manifest.get("params", {})),
        )


def _load_manifest(pack_dir: Path) -> dict[str, Any]:
    """
    manifest.yaml / manifest.yml first, then manifest.json.
    A pack without a manifest uses the default template file names.
    """
    for name in ("manifest.yaml", "manifest.yml"):
        path = pack_dir / name
        if path.exists():
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise RuntimeError(f"Invalid manifest format: {path}")
            return data

    json_path = pack_dir / "manifest.json"
    if json_path.exists():
        data = json.loads(json_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise RuntimeError(f"Invalid manifest format: {json_path}")
        return data

    return {"id": pack_dir.name, "description": "", "templates": {}, "params": {}}
