from __future__ import annotations

from dataclasses import dataclass
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except ImportError:
    import tomli as toml  # type: ignore

from pow2shift.utility import UserInputError
from pow2shift.workspace import workspace_dir


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (file stem if not given in [_PROFILE_])
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _packaged_profile(name: str) -> Path | None:
    ref = pkg_files("pow2shift") / "profiles" / f"{name}.toml"
    if not ref.is_file():
        return None
    with as_file(ref) as real:
        return Path(real)


def _profile_path(name: str) -> Path | None:
    """Workspace profile first, packaged profile second."""
    p = _profiles_dir() / f"{name}.toml"
    if p.is_file():
        return p
    return _packaged_profile(name)


# --- I/O -------------------------------------------------------------------

def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except (OSError, toml.TOMLDecodeError) as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", None) or getattr(e, "strerror", None) or str(e)
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """Return (settings_without_profile_meta, resolved_name, resolved_description)."""
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


# --- Public API ------------------------------------------------------------

def list_all_profiles() -> list[str]:
    """Profile names (file stems) from the workspace and the package, merged."""
    names: set[str] = set()
    pdir = _profiles_dir()
    if pdir.exists():
        names.update(p.stem for p in pdir.glob("*.toml"))
    ref = pkg_files("pow2shift") / "profiles"
    if ref.is_dir():
        names.update(r.name[:-5] for r in ref.iterdir() if r.name.endswith(".toml"))
    return sorted(names)


def has_profile(name: str) -> bool:
    return _profile_path(name) is not None


def load_settings(name: str | None = None) -> Settings:
    """
    Load a profile by name (default 'default'), strip the [_PROFILE_]
    metadata and return Settings(data=..., name=..., description=..., _source=path).
    """
    if not name:
        name = "default"

    path = _profile_path(name)
    if path is None:
        available = ", ".join(list_all_profiles()) or "(none)"
        raise UserInputError(f"Unknown profile '{name}'. Available profiles: {available}")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
