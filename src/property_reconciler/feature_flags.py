from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = str(raw).strip().lower()
    if v in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


@dataclass(frozen=True)
class FeatureFlags:
    """Central feature flag registry.

    Env vars are simple booleans. Defaults MUST preserve the documented
    reconciliation contract (unquoted CSV, JSON fallback for unknown export
    formats, tied merge conflicts logged at DEBUG).
    """

    csv_quoting: bool
    strict_export_format: bool
    warn_on_tied_conflicts: bool

    @classmethod
    def from_env(cls) -> "FeatureFlags":
        return cls(
            csv_quoting=_env_bool("PRC_FEATURE_CSV_QUOTING", False),
            strict_export_format=_env_bool("PRC_FEATURE_STRICT_EXPORT_FORMAT", False),
            warn_on_tied_conflicts=_env_bool("PRC_FEATURE_WARN_ON_TIED_CONFLICTS", False),
        )


@lru_cache(maxsize=1)
def get_flags() -> FeatureFlags:
    return FeatureFlags.from_env()


def reset_flags_cache() -> None:
    """Test helper to force env re-read."""

    get_flags.cache_clear()
