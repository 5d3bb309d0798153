"""Environment-backed settings.

All knobs are plain ``PROMCORE_*`` environment variables. Values are read each
time ``load_settings()`` is called (never cached at import) so tests can flip
flags with ``monkeypatch.setenv`` and have them take effect immediately.

Variables
---------
PROMCORE_ABORT_ON_WIRING_ERROR   : fail-fast registration aborts the process
PROMCORE_LOG_REGISTRATIONS       : debug log line per registered descriptor
PROMCORE_DEFAULT_REGISTRY_PREFIX : metric name prefix for the default registry
PROMCORE_INTROSPECTION_DUMP      : stdout | temp | <path> descriptor inventory dump
PROMCORE_BUILD_VERSION / PROMCORE_BUILD_COMMIT / PROMCORE_BUILD_CONFIG_HASH
                                 : build info label fallbacks
"""
from __future__ import annotations

from dataclasses import dataclass

from promcore.utils.env_flags import env_str, is_truthy, is_truthy_env

UNKNOWN = "unknown"


@dataclass(frozen=True)
class MetricsSettings:
    abort_on_wiring_error: bool = False
    log_registrations: bool = False
    default_registry_prefix: str | None = None
    introspection_dump: str | None = None
    build_version: str = UNKNOWN
    build_commit: str = UNKNOWN
    build_config_hash: str = UNKNOWN

    @classmethod
    def from_env(cls) -> MetricsSettings:
        dump = env_str('PROMCORE_INTROSPECTION_DUMP')
        if dump is not None:
            if is_truthy(dump):
                dump = 'stdout'
            elif dump.lower() in {'0', 'false', 'no', 'off'}:
                dump = None
        return cls(
            abort_on_wiring_error=is_truthy_env('PROMCORE_ABORT_ON_WIRING_ERROR'),
            log_registrations=is_truthy_env('PROMCORE_LOG_REGISTRATIONS'),
            default_registry_prefix=env_str('PROMCORE_DEFAULT_REGISTRY_PREFIX'),
            introspection_dump=dump,
            build_version=env_str('PROMCORE_BUILD_VERSION', UNKNOWN) or UNKNOWN,
            build_commit=env_str('PROMCORE_BUILD_COMMIT', UNKNOWN) or UNKNOWN,
            build_config_hash=env_str('PROMCORE_BUILD_CONFIG_HASH', UNKNOWN) or UNKNOWN,
        )


def load_settings() -> MetricsSettings:
    return MetricsSettings.from_env()


__all__ = ["MetricsSettings", "load_settings", "UNKNOWN"]
