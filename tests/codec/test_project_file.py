"""Tests for the .aitp project wrapper."""

import base64
import json

import pytest

from vtpool.codec import PROJECT_FILE_VERSION, ObjectMetadata, ProjectFile, ProjectSettings
from vtpool.codec.iop import encode_pool
from vtpool.document import ObjectInfo
from vtpool.errors import ProjectFileError


def _wrapper(**overrides):
    data = {
        "version": 1,
        "object_pool_data": [],
        "object_metadata": {},
        "settings": {"mask_size": 500, "last_selected": None},
    }
    data.update(overrides)
    return json.dumps(data).encode("utf-8")


class TestProjectFileWrite:
    """Tests for building and serializing project files."""

    def test_new_captures_pool_and_metadata(self, basic_pool):
        project_file = ProjectFile.new(
            basic_pool,
            {1000: ObjectInfo(name="Main", notes="first screen")},
            mask_size=480,
            selected=1000,
        )
        assert project_file.version == PROJECT_FILE_VERSION
        assert project_file.object_pool_data == encode_pool(basic_pool)
        assert project_file.object_metadata == {1000: ObjectMetadata("Main", "first screen")}
        assert project_file.settings == ProjectSettings(480, 1000)

    def test_json_layout(self, basic_pool):
        project_file = ProjectFile.new(basic_pool, {0: ObjectInfo(name="WS")}, 500, None)
        data = json.loads(project_file.to_bytes())
        assert set(data) == {"version", "object_pool_data", "object_metadata", "settings"}
        assert data["object_pool_data"] == list(encode_pool(basic_pool))
        assert data["object_metadata"] == {"0": {"name": "WS", "notes": None}}
        assert data["settings"] == {"mask_size": 500, "last_selected": None}

    def test_metadata_keys_sorted(self, basic_pool):
        project_file = ProjectFile.new(
            basic_pool, {1000: ObjectInfo(name="B"), 0: ObjectInfo(name="A")}, 500, None
        )
        assert list(json.loads(project_file.to_bytes())["object_metadata"]) == ["0", "1000"]

    def test_round_trip(self, full_pool):
        project_file = ProjectFile.new(full_pool, {6000: ObjectInfo(name="OK")}, 320, 6000)
        restored = ProjectFile.from_bytes(project_file.to_bytes())
        assert restored == project_file
        assert restored.load_pool() == full_pool


class TestProjectFileRead:
    """Tests for parsing and validation."""

    def test_base64_pool_data_accepted(self, basic_pool):
        raw = encode_pool(basic_pool)
        project_file = ProjectFile.from_bytes(
            _wrapper(object_pool_data=base64.b64encode(raw).decode("ascii"))
        )
        assert project_file.object_pool_data == raw

    def test_settings_defaults(self):
        project_file = ProjectFile.from_bytes(_wrapper(settings={}))
        assert project_file.settings == ProjectSettings(500, None)

    @pytest.mark.parametrize(
        "raw",
        [
            b"not json",
            b"[1, 2]",
            json.dumps({"version": 1}).encode(),
        ],
    )
    def test_malformed_documents(self, raw):
        with pytest.raises(ProjectFileError):
            ProjectFile.from_bytes(raw)

    @pytest.mark.parametrize("version", [0, -1, "1", True])
    def test_invalid_version(self, version):
        with pytest.raises(ProjectFileError, match="Invalid project file version"):
            ProjectFile.from_bytes(_wrapper(version=version))

    def test_newer_version_rejected(self):
        with pytest.raises(ProjectFileError, match="newer than supported"):
            ProjectFile.from_bytes(_wrapper(version=2))

    @pytest.mark.parametrize(
        "metadata",
        [
            {"abc": {"name": "x"}},
            {"70000": {"name": "x"}},
            {"1000": {"name": 5}},
            {"1000": "Main"},
        ],
    )
    def test_invalid_metadata(self, metadata):
        with pytest.raises(ProjectFileError):
            ProjectFile.from_bytes(_wrapper(object_metadata=metadata))

    @pytest.mark.parametrize(
        "settings",
        [{"mask_size": -1}, {"mask_size": 0}, {"mask_size": "big"}, {"last_selected": 65536}, []],
    )
    def test_invalid_settings(self, settings):
        with pytest.raises(ProjectFileError):
            ProjectFile.from_bytes(_wrapper(settings=settings))

    @pytest.mark.parametrize("pool_data", [[256], [-1], "@@not-base64@@", 12])
    def test_invalid_pool_data(self, pool_data):
        with pytest.raises(ProjectFileError):
            ProjectFile.from_bytes(_wrapper(object_pool_data=pool_data))


class TestLoadPool:
    """Tests for decoding the embedded pool."""

    def test_too_small(self):
        with pytest.raises(ProjectFileError, match="too small"):
            ProjectFile(object_pool_data=b"\x00\x00\x00").load_pool()

    def test_truncated_pool_fails(self, basic_pool):
        data = encode_pool(basic_pool)[:-1]
        with pytest.raises(ProjectFileError, match="Failed to parse object pool"):
            ProjectFile(object_pool_data=data).load_pool()

    def test_valid_pool(self, basic_pool):
        project_file = ProjectFile(object_pool_data=encode_pool(basic_pool))
        assert project_file.load_pool() == basic_pool
