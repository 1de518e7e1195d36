"""Engine configuration management helpers."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from library_events.domain.models import DEFAULT_CATEGORIES


def _str_to_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _str_to_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value: {value}") from exc


@dataclass(frozen=True)
class AppConfig:
    """Immutable configuration object loaded from env or files."""

    storage_backend: str = "json"
    storage_path: str = "library_events.json"
    seed_on_empty: bool = True
    categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    top_n: int = 5
    recent_limit: int = 5

    _ALLOWED_BACKENDS = {"memory", "json", "sqlite"}

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def from_env(cls) -> "AppConfig":
        defaults = cls()
        categories_raw = os.getenv("LIBRARY_EVENTS_CATEGORIES")
        categories = (
            [name.strip() for name in categories_raw.split(",") if name.strip()]
            if categories_raw
            else defaults.categories
        )
        return cls(
            storage_backend=os.getenv(
                "LIBRARY_EVENTS_STORAGE_BACKEND", defaults.storage_backend
            ),
            storage_path=os.getenv("LIBRARY_EVENTS_STORAGE_PATH", defaults.storage_path),
            seed_on_empty=_str_to_bool(
                os.getenv("LIBRARY_EVENTS_SEED_ON_EMPTY"), defaults.seed_on_empty
            ),
            categories=categories,
            top_n=_str_to_int(os.getenv("LIBRARY_EVENTS_TOP_N"), defaults.top_n),
            recent_limit=_str_to_int(
                os.getenv("LIBRARY_EVENTS_RECENT_LIMIT"), defaults.recent_limit
            ),
        )

    @classmethod
    def from_file(cls, path: str) -> "AppConfig":
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        raw = file_path.read_text()
        data: Dict[str, Any]
        suffix = file_path.suffix.lower()
        if suffix == ".json":
            data = json.loads(raw)
        elif suffix in {".yaml", ".yml"}:
            data = cls._load_yaml(raw)
        else:
            raise ValueError("Unsupported config format. Use JSON or YAML.")
        return cls(**cls._merge_with_defaults(data))

    def validate(self) -> None:
        if self.storage_backend not in self._ALLOWED_BACKENDS:
            raise ValueError(
                f"storage_backend must be one of {sorted(self._ALLOWED_BACKENDS)}"
            )
        if self.storage_backend != "memory" and not self.storage_path:
            raise ValueError("storage_path is required for file-backed storage")
        if not isinstance(self.categories, list) or not self.categories:
            raise ValueError("categories must be a non-empty list")
        if self.top_n <= 0:
            raise ValueError("top_n must be greater than zero")
        if self.recent_limit <= 0:
            raise ValueError("recent_limit must be greater than zero")

    @classmethod
    def _merge_with_defaults(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        defaults = cls()
        return {
            "storage_backend": data.get("storage_backend", defaults.storage_backend),
            "storage_path": data.get("storage_path", defaults.storage_path),
            "seed_on_empty": data.get("seed_on_empty", defaults.seed_on_empty),
            "categories": data.get("categories", defaults.categories),
            "top_n": data.get("top_n", defaults.top_n),
            "recent_limit": data.get("recent_limit", defaults.recent_limit),
        }

    @staticmethod
    def _load_yaml(raw: str) -> Dict[str, Any]:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to parse YAML config files") from exc
        return yaml.safe_load(raw) or {}
