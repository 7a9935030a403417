"""Tests for settings loading."""

from pathlib import Path

import pytest

from ada_babel.config import DEFAULT_TEMP_DIR, build_metadata, load_settings


def test_defaults_from_empty_environment():
    settings = load_settings({})
    assert settings.compile_cmd == ("gnatmake",)
    assert settings.prove_cmd == ("gnatprove",)
    assert settings.default_version == 2012
    assert settings.temp_dir == DEFAULT_TEMP_DIR
    assert settings.remote_temp_dir is None
    assert settings.timeout is None


def test_overrides():
    settings = load_settings({
        "ADA_BABEL_COMPILE_CMD": "gnatmake -q",
        "ADA_BABEL_PROVE_CMD": "gnatprove -j0",
        "ADA_BABEL_VERSION": "2022",
        "ADA_BABEL_TMPDIR": "/var/tmp/ada",
        "ADA_BABEL_REMOTE_TMPDIR": "/mnt/remote/tmp",
        "ADA_BABEL_TIMEOUT": "30",
    })
    assert settings.compile_cmd == ("gnatmake", "-q")
    assert settings.prove_cmd == ("gnatprove", "-j0")
    assert settings.default_version == 2022
    assert settings.temp_dir == Path("/var/tmp/ada")
    assert settings.remote_temp_dir == Path("/mnt/remote/tmp")
    assert settings.timeout == 30.0


@pytest.mark.parametrize("name", ["ADA_BABEL_VERSION", "ADA_BABEL_TIMEOUT"])
def test_invalid_numbers(name):
    with pytest.raises(ValueError, match=name):
        load_settings({name: "soon"})



def test_unsupported_language_version():
    with pytest.raises(ValueError, match="ADA_BABEL_VERSION"):
        load_settings({"ADA_BABEL_VERSION": "2020"})

def test_metadata():
    metadata = build_metadata("9.9.9")
    assert metadata.version == "9.9.9"
    assert metadata.generated_at.endswith("+00:00")
