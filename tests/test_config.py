# tests/test_config.py
from __future__ import annotations

import pytest

from pow2shift.config import has_profile, list_all_profiles, load_settings
from pow2shift.runtime import APPLY, CFG, current
from pow2shift.utility import UserInputError, flatten_dotted, validate_output_setting
from pow2shift.workspace import seed_workspace


def _write_profile(ws, name: str, body: str):
    p = ws / "profiles" / f"{name}.toml"
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(body, encoding="utf-8")
    return p


def test_packaged_default_profile():
    s = load_settings(None)
    assert s.name == "default"
    assert s.description != "(no description)"
    assert "_PROFILE_" not in s.as_dict()
    APPLY(s)
    assert CFG("BEHAVIOUR.THRESHOLD") == 100
    assert CFG("OUTPUT.OUTPUT_FILE") == ""
    assert CFG("BEHAVIOUR.MISSING", "fallback") == "fallback"


def test_packaged_profiles_listed():
    names = list_all_profiles()
    assert "default" in names
    assert "all" in names
    assert has_profile("all")
    assert not has_profile("nope")


def test_workspace_profile_overrides_package(workspace):
    _write_profile(workspace, "default", "[BEHAVIOUR]\nTHRESHOLD = 5000\n")
    s = load_settings("default")
    assert s.name == "default"            # falls back to the file stem
    assert s.description == "(no description)"
    assert s._source == (workspace / "profiles" / "default.toml").resolve()
    APPLY(s)
    assert CFG("BEHAVIOUR.THRESHOLD") == 5000


def test_profile_meta(workspace):
    _write_profile(
        workspace, "big",
        '[_PROFILE_]\nname = "Big ones"\ndescription = """two\n  lines"""\n[BEHAVIOUR]\nTHRESHOLD = 1\n',
    )
    s = load_settings("big")
    assert s.name == "Big ones"
    assert s.description == "two lines"
    APPLY(s)
    assert current().profile_name == "Big ones"


def test_unknown_profile():
    with pytest.raises(UserInputError, match="Unknown profile 'nope'"):
        load_settings("nope")


def test_bad_toml_is_user_error(workspace):
    _write_profile(workspace, "broken", "[BEHAVIOUR\nTHRESHOLD = 1\n")
    with pytest.raises(UserInputError, match="broken.toml"):
        load_settings("broken")


def test_debug_flag_synced_from_profile(workspace):
    _write_profile(workspace, "dbg", "[BEHAVIOUR]\nDEBUG = true\n")
    APPLY(load_settings("dbg"))
    assert current().debug is True


def test_apply_stores_profile_settings(workspace):
    _write_profile(workspace, "wide", "[BEHAVIOUR]\nTHRESHOLD = 7\n")
    APPLY(load_settings("wide"))
    rt = current()
    assert rt.profile_name == "wide"
    assert rt.settings == {"BEHAVIOUR": {"THRESHOLD": 7}}
    assert CFG("BEHAVIOUR.THRESHOLD") == 7
    assert rt.debug is False


def test_seed_workspace(workspace):
    root, copied = seed_workspace()
    assert root == workspace.resolve()
    assert copied["profiles"] >= 2
    assert (workspace / "profiles" / "default.toml").is_file()
    # second run copies nothing new
    _, again = seed_workspace()
    assert again["profiles"] == 0


def test_flatten_dotted():
    assert flatten_dotted({"A": {"B": 1, "C": {"D": 2}}, "E": 3}) == {"A.B": 1, "A.C.D": 2, "E": 3}


@pytest.mark.parametrize("value", [None, ""])
def test_output_setting_stdout(value):
    assert validate_output_setting(value) is None


@pytest.mark.parametrize("value", ["out/", "nul", "con.txt"])
def test_output_setting_rejected(value):
    with pytest.raises(ValueError):
        validate_output_setting(value)


def test_output_setting_directory(tmp_path):
    with pytest.raises(ValueError, match="directory"):
        validate_output_setting(str(tmp_path))
