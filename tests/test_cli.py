"""Tests for the vtpool command-line interface."""

import json

import pytest

from tests.pool_test_helpers import basic_pool, container_with_button, make_object, make_pool
from vtpool.cli import create_parser, main
from vtpool.codec import ProjectFile, decode_pool_strict
from vtpool.codec.iop import encode_pool
from vtpool.document import ObjectInfo
from vtpool.pool import ObjectRef, ObjectType


@pytest.fixture
def pool_file(tmp_path):
    path = tmp_path / "pool.iop"
    path.write_bytes(encode_pool(basic_pool()))
    return path


@pytest.fixture
def project_file(tmp_path):
    path = tmp_path / "project.aitp"
    data = ProjectFile.new(basic_pool(), {1000: ObjectInfo(name="Main")}, 480, 1000)
    path.write_bytes(data.to_bytes())
    return path


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: vtpool" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("vtpool ")

    def test_import_select_repeatable(self):
        args = create_parser().parse_args(["import", "a.aitp", "b.iop", "--select", "1", "--select", "2"])
        assert args.select == [1, 2]


class TestInfo:
    """Tests for the info command."""

    def test_text(self, project_file, capsys):
        assert main(["info", str(project_file)]) == 0
        out = capsys.readouterr().out
        assert "Objects: 2" in out
        assert "Data Mask: 1" in out
        assert "Mask size: 480" in out
        assert "Last selected: 1000" in out

    def test_json(self, pool_file, capsys):
        assert main(["info", str(pool_file), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["objects"] == 2
        assert data["types"] == {"Working Set": 1, "Data Mask": 1}
        assert data["broken_references"] == []

    def test_broken_references_listed(self, tmp_path, capsys):
        path = tmp_path / "broken.iop"
        pool = make_pool(make_object(ObjectType.CONTAINER, 3000, object_refs=[ObjectRef(6000)]))
        path.write_bytes(encode_pool(pool))
        assert main(["info", str(path)]) == 0
        assert "3000 --[object_refs]--> 6000 (missing)" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["info", str(tmp_path / "nope.iop")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_garbage_file(self, tmp_path, capsys):
        path = tmp_path / "bad.iop"
        path.write_bytes(b"\x01\x00")
        assert main(["info", str(path)]) == 1
        assert "Failed to parse object pool" in capsys.readouterr().err


class TestConvert:
    """Tests for convert and export-iop."""

    def test_pool_to_project(self, pool_file, tmp_path):
        output = tmp_path / "out.aitp"
        assert main(["-q", "convert", str(pool_file), str(output)]) == 0
        project = ProjectFile.from_bytes(output.read_bytes())
        assert project.load_pool() == basic_pool()
        assert project.object_metadata[1000].name == "Data Mask 1"

    def test_project_to_pool(self, project_file, tmp_path, capsys):
        output = tmp_path / "out.iop"
        assert main(["convert", str(project_file), str(output)]) == 0
        assert decode_pool_strict(output.read_bytes()) == basic_pool()
        assert "Wrote" in capsys.readouterr().err

    def test_export_iop(self, project_file, tmp_path):
        output = tmp_path / "exported.iop"
        assert main(["export-iop", str(project_file), "-o", str(output)]) == 0
        assert output.read_bytes() == encode_pool(basic_pool())


class TestHeaderCommand:
    def test_stdout(self, project_file, capsys):
        assert main(["header", str(project_file)]) == 0
        out = capsys.readouterr().out
        assert "#pragma once" in out
        assert "#define MAIN 1000" in out


class TestImportCommand:
    """Tests for the import command."""

    def test_merge(self, tmp_path, capsys):
        target = tmp_path / "target.iop"
        target.write_bytes(encode_pool(container_with_button()))
        source = tmp_path / "source.iop"
        source.write_bytes(encode_pool(container_with_button()))
        output = tmp_path / "merged.aitp"

        assert main(["import", str(target), str(source), "--select", "3000", "-o", str(output)]) == 0
        err = capsys.readouterr().err
        assert "3000 -> 3001" in err
        assert "6000 -> 6001" in err
        assert "Imported 2 objects" in err

        pool = ProjectFile.from_bytes(output.read_bytes()).load_pool()
        assert pool.object_by_id(3001)["object_refs"][0].id == 6001

    def test_unknown_selection(self, pool_file, project_file, capsys):
        assert main(["import", str(project_file), str(pool_file), "--select", "4242"]) == 1
        assert "objects not found" in capsys.readouterr().err


class TestNameCommand:
    def test_without_file(self, capsys):
        assert main(["name", "Data Mask"]) == 0
        assert capsys.readouterr().out.strip() == "Data Mask 1"

    def test_with_file(self, pool_file, capsys):
        assert main(["name", "DATA_MASK", str(pool_file)]) == 0
        assert capsys.readouterr().out.strip() == "Data Mask 2"

    def test_unknown_type(self, capsys):
        assert main(["name", "Spaceship"]) == 1
        assert "Unknown object type" in capsys.readouterr().err


class TestLargestCommand:
    def test_lists_ranked(self, project_file, capsys):
        assert main(["largest", str(project_file), "-n", "1"]) == 0
        out = capsys.readouterr().out.strip().splitlines()
        assert len(out) == 1
        assert out[0].startswith("1. id: 0, type: Working Set")


class TestConfigCommand:
    """Tests for config show, path and set."""

    def test_path_without_file(self, capsys):
        assert main(["config", "path"]) == 1
        assert "No .vtpool.toml found" in capsys.readouterr().out

    def test_set_then_show(self, tmp_path, capsys):
        assert main(["config", "set", "project.mask_size", "320"]) == 0
        assert (tmp_path / ".vtpool.toml").is_file()
        capsys.readouterr()

        assert main(["config", "show", "--section", "project", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == {"project": {"mask_size": 320}}

        assert main(["config", "path"]) == 0
        assert capsys.readouterr().out.strip().endswith(".vtpool.toml")

    def test_show_toml(self, capsys):
        assert main(["config", "show"]) == 0
        out = capsys.readouterr().out
        assert "[autosave]" in out
        assert "interval_secs = 30" in out

    def test_unknown_section(self, capsys):
        assert main(["config", "show", "--section", "nope"]) == 1

    def test_bad_key(self, capsys):
        assert main(["config", "set", "mask_size", "1"]) == 1

    def test_no_action(self, capsys):
        assert main(["config"]) == 1

    def test_config_option_used(self, tmp_path, pool_file, capsys):
        config = tmp_path / "custom.toml"
        config.write_text("[designer]\napply_smart_naming_on_import = false\n")
        output = tmp_path / "out.aitp"
        assert main(["--config", str(config), "-q", "convert", str(pool_file), str(output)]) == 0
        assert ProjectFile.from_bytes(output.read_bytes()).object_metadata == {}

    def test_invalid_config_value(self, tmp_path, pool_file, capsys):
        config = tmp_path / "custom.toml"
        config.write_text("[history]\npool_depth = 0\n")
        assert main(["--config", str(config), "info", str(pool_file)]) == 1
        assert "history.pool_depth" in capsys.readouterr().err
