"""
Tests for the generate_maps.py command line entry point.

Run with: pytest tests/test_generate_maps.py -v
"""
import json
import os
import sys
import types

import pytest

from conftest import FakeEngine, write_map_assets
from generate_maps import main


@pytest.fixture
def engine_spec(monkeypatch):
    module = types.ModuleType("cli_test_engine")
    module.engine = FakeEngine()
    module.failing = FakeEngine(fail_on=["paris"])
    monkeypatch.setitem(sys.modules, "cli_test_engine", module)
    return module


def write_catalog(workdir, entries):
    path = workdir / "maps.json"
    path.write_text(json.dumps({"maps": entries}))
    return path


class TestMain:

    def test_success(self, workdir, engine_spec, capsys):
        write_map_assets(workdir / "assets" / "maps", "paris", {"name": "Paris"})
        catalog = write_catalog(workdir, [{"name": "paris"}])

        code = main(["--engine", "cli_test_engine:engine", "--catalog", str(catalog)])

        assert code == 0
        assert capsys.readouterr().out.rstrip().endswith("Terrain maps generated successfully")
        assert (workdir.parent / "resources" / "maps" / "paris" / "manifest.json").exists()

    def test_failure_exits_nonzero(self, workdir, engine_spec, capsys):
        for name in ("paris", "annecy"):
            write_map_assets(workdir / "assets" / "maps", name, {"name": name})
        catalog = write_catalog(workdir, [{"name": "paris"}, {"name": "annecy"}])

        code = main(["--engine", "cli_test_engine:failing", "--catalog", str(catalog)])

        out = capsys.readouterr().out
        assert code == 1
        assert "Error generating terrain maps: [generate] paris:" in out
        assert "Terrain maps generated successfully" not in out
        assert [c.name for c in engine_spec.failing.calls] == ["paris"]

    def test_engine_from_settings(self, workdir, engine_spec):
        write_map_assets(workdir / "assets" / "test_maps", "plains", {"name": "Plains"})
        write_catalog(workdir, [{"name": "plains", "is_test": True}])
        (workdir / "settings.json").write_text(json.dumps({
            "engine": "cli_test_engine:engine",
            "catalog": "maps.json",
        }))

        assert main([]) == 0
        assert [c.name for c in engine_spec.engine.calls] == ["plains"]

    def test_no_engine_is_usage_error(self, workdir):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_bad_engine(self, workdir, capsys):
        assert main(["--engine", "not_a_real_engine_module:run"]) == 1
        assert "Cannot import engine module" in capsys.readouterr().out

    def test_bad_catalog(self, workdir, capsys):
        catalog = workdir / "maps.json"
        catalog.write_text("[{}]")
        assert main(["--catalog", str(catalog), "--list-maps"]) == 1

    def test_list_maps_default_catalog(self, workdir, capsys):
        assert main(["--list-maps"]) == 0
        out = capsys.readouterr().out
        assert "3 map(s) in catalog" in out
        assert "plains (test)" in out

    def test_check_only(self, workdir, engine_spec, capsys):
        write_map_assets(workdir / "assets" / "maps", "paris", {"name": "Paris"})
        catalog = write_catalog(workdir, [{"name": "paris"}])

        assert main(["--catalog", str(catalog), "--check-only"]) == 1
        assert main(["--engine", "cli_test_engine:engine", "--catalog", str(catalog)]) == 0
        capsys.readouterr()
        assert main(["--catalog", str(catalog), "--check-only"]) == 0
        assert "- paris: bundle_ok" in capsys.readouterr().out
        assert len(engine_spec.engine.calls) == 1

    def test_check_only_missing_working_directory(self, workdir, monkeypatch, capsys):
        def broken_getcwd():
            raise FileNotFoundError(2, "No such file or directory")

        monkeypatch.setattr(os, "getcwd", broken_getcwd)

        assert main(["--check-only"]) == 1
        assert "working directory" in capsys.readouterr().out
