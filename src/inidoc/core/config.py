from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from inidoc.core.models import OutputConfig, ParseOptions

# Python 3.11+ has tomllib; for 3.9/3.10 use tomli
try:
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


# Project-local config (next to the documents being parsed)
DEFAULT_REPO_CONFIG_FILES = (".inidoc/config.toml",)

# Global config (applies on this machine)
DEFAULT_GLOBAL_CONFIG_FILES = (
    "~/.config/inidoc/config.toml",
    "~/.inidoc/config.toml",
)


def _read_toml(path: Path) -> Dict[str, Any]:
    data = tomllib.loads(path.read_text(encoding="utf-8", errors="replace"))
    if not isinstance(data, dict):
        return {}
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge override into base (dict-only). Lists/scalars are replaced.
    """
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)  # type: ignore[arg-type]
        else:
            out[k] = v
    return out


def _expand_paths(paths: Tuple[str, ...]) -> list[Path]:
    return [Path(p).expanduser().resolve() for p in paths]


def _table(merged: Dict[str, Any], name: str) -> Dict[str, Any]:
    d = merged.get(name) or {}
    if not isinstance(d, dict):
        return {}
    return d


def _drop_unset(overrides: Dict[str, Any]) -> Dict[str, Any]:
    # unset CLI flags arrive as None; lower layers must win for those
    out: Dict[str, Any] = {}
    for k, v in overrides.items():
        if isinstance(v, dict):
            out[k] = _drop_unset(v)
        elif v is not None:
            out[k] = v
    return out


def find_repo_config(start_dir: Path) -> Optional[Path]:
    """
    Walk upward to find the closest project config.
    """
    cur = start_dir.resolve()
    for parent in [cur, *cur.parents]:
        for rel in DEFAULT_REPO_CONFIG_FILES:
            p = (parent / rel).resolve()
            if p.exists() and p.is_file():
                return p
    return None


def find_global_config() -> Optional[Path]:
    for p in _expand_paths(DEFAULT_GLOBAL_CONFIG_FILES):
        if p.exists() and p.is_file():
            return p
    return None


@dataclass(frozen=True)
class LoadedConfig:
    parse: ParseOptions
    output: OutputConfig
    global_path: Optional[Path]
    repo_path: Optional[Path]


def load_config(
    start_dir: Path,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> LoadedConfig:
    """
    Precedence (lowest -> highest):
      defaults (ParseOptions/OutputConfig) ->
      global config ->
      repo config (closest) ->
      cli_overrides
    """
    cli_overrides = cli_overrides or {}

    global_path = find_global_config()
    repo_path = find_repo_config(start_dir)

    merged: Dict[str, Any] = {}

    if global_path:
        merged = _deep_merge(merged, _read_toml(global_path))

    if repo_path:
        merged = _deep_merge(merged, _read_toml(repo_path))

    # CLI overrides use the same namespaced shape as the TOML file
    merged = _deep_merge(merged, _drop_unset(cli_overrides))

    return LoadedConfig(
        parse=ParseOptions.model_validate(_table(merged, "parse")),
        output=OutputConfig.model_validate(_table(merged, "output")),
        global_path=global_path,
        repo_path=repo_path,
    )
