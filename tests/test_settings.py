"""Tests for floxsdk.settings."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from floxsdk.errors import MissingRequiredField
from floxsdk.flox import Flox
from floxsdk.nix import NixCommandLine
from floxsdk.settings import FloxSettings, builder_from_file, expand_refs, load


def _write_hcl(tmp_path: Path, content: str, filename: str = "flox.hcl") -> Path:
    f = tmp_path / filename
    f.write_text(content)
    return f


class TestLoad:
    def test_load_attributes(self, tmp_path):
        f = _write_hcl(
            tmp_path,
            """
            config_dir = "/c"
            collect_metrics = true
            """,
        )
        result = load(f)
        assert result["config_dir"] == "/c"
        assert result["collect_metrics"] is True

    def test_load_renders_template(self, tmp_path):
        f = _write_hcl(tmp_path, 'cache_dir = "{{ root }}/cache"\n')
        result = load(f, context={"root": "/srv"})
        assert result["cache_dir"] == "/srv/cache"

    def test_load_undefined_template_variable(self, tmp_path):
        f = _write_hcl(tmp_path, 'cache_dir = "{{ missing }}"\n')
        with pytest.raises(ValueError, match="flox.hcl"):
            load(f)

    def test_load_exposes_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FLOXSDK_ROOT", "/srv")
        f = _write_hcl(tmp_path, 'data_dir = "{{ env.FLOXSDK_ROOT }}/data"\n')
        assert load(f)["data_dir"] == "/srv/data"


class TestExpandRefs:
    def test_plain_value(self):
        assert expand_refs("plain") == "plain"

    def test_non_string_passes_through(self):
        assert expand_refs(True) is True

    def test_env_reference(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/user")
        assert expand_refs("${env.HOME}/.config/flox") == "/home/user/.config/flox"

    def test_cwd_reference(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert expand_refs("${CWD}/data") == f"{os.getcwd()}/data"

    def test_unset_env_raises(self, monkeypatch):
        monkeypatch.delenv("FLOXSDK_UNSET", raising=False)
        with pytest.raises(ValueError, match="FLOXSDK_UNSET"):
            expand_refs("${env.FLOXSDK_UNSET}")

    def test_unknown_reference_untouched(self):
        assert expand_refs("${other}/x") == "${other}/x"

    def test_walks_lists(self, monkeypatch):
        monkeypatch.setenv("FLOXSDK_JOBS", "4")
        assert expand_refs(["--max-jobs", "${env.FLOXSDK_JOBS}"]) == ["--max-jobs", "4"]


class TestFloxSettings:
    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            FloxSettings.model_validate({"config_dirs": "/c"})


class TestBuilderFromFile:
    def test_complete_file(self, tmp_path):
        f = _write_hcl(
            tmp_path,
            """
            config_dir = "/c"
            cache_dir = "/k"
            data_dir = "/d"
            collect_metrics = true
            extra_nix_args = ["--max-jobs", "4"]
            """,
        )
        flox = builder_from_file(f).build()
        assert isinstance(flox, Flox)
        assert flox.config_dir == Path("/c")
        assert flox.cache_dir == Path("/k")
        assert flox.data_dir == Path("/d")
        assert flox.collect_metrics is True
        assert flox.extra_nix_args == ("--max-jobs", "4")
        assert flox.nix_backend is NixCommandLine

    def test_env_references(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", "/home/user")
        f = _write_hcl(
            tmp_path,
            """
            config_dir = "${env.HOME}/.config/flox"
            cache_dir = "${env.HOME}/.cache/flox"
            data_dir = "${env.HOME}/.local/share/flox"
            """,
        )
        flox = builder_from_file(f).build()
        assert flox.config_dir == Path("/home/user/.config/flox")
        assert flox.data_dir == Path("/home/user/.local/share/flox")

    def test_missing_directory_left_to_builder(self, tmp_path):
        f = _write_hcl(
            tmp_path,
            """
            config_dir = "/c"
            data_dir = "/d"
            """,
        )
        builder = builder_from_file(f)
        with pytest.raises(MissingRequiredField, match="cache_dir"):
            builder.build()

    def test_builder_can_fill_gaps(self, tmp_path):
        f = _write_hcl(tmp_path, 'config_dir = "/c"\n')
        flox = builder_from_file(f).cache_dir("/k").data_dir("/d").build()
        assert flox.config_dir == Path("/c")
        assert flox.extra_nix_args == ()
