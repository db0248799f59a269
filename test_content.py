import asyncio
from pathlib import Path

from tileset_validator.config import ValidatorConfig
from tileset_validator.content import ContentDispatcher, content_uri
from tileset_validator.results import ContentCheckOutcome


class FakeReader:
    """记录请求路径的内存读取器"""

    def __init__(self, files):
        self.files = files
        self.requested = []

    async def read(self, path):
        self.requested.append(Path(path))
        return self.files.get(Path(path).name)


def test_content_uri_prefers_uri():
    assert content_uri({"uri": "a.b3dm", "url": "b.b3dm"}) == "a.b3dm"
    assert content_uri({"url": "legacy.b3dm"}) == "legacy.b3dm"
    assert content_uri({"boundingVolume": {}}) is None
    assert content_uri(None) is None


def test_valid_b3dm(tmp_path, write_tile, b3dm_factory):
    write_tile("tile.b3dm", b3dm_factory())
    outcome = asyncio.run(ContentDispatcher().validate_content({"uri": "tile.b3dm"}, tmp_path))
    assert outcome.valid


def test_invalid_pnts_message_is_propagated(tmp_path, write_tile, pnts_factory):
    write_tile("points.pnts", pnts_factory(feature_table={"POSITION": {"byteOffset": 0}}))
    outcome = asyncio.run(ContentDispatcher().validate_content({"uri": "points.pnts"}, tmp_path))
    assert outcome == ContentCheckOutcome(
        valid=False,
        message="Invalid pnts: Feature table must define POINTS_LENGTH"
    )


def test_missing_file_is_skipped(tmp_path):
    outcome = asyncio.run(ContentDispatcher().validate_content({"uri": "missing.b3dm"}, tmp_path))
    assert outcome.valid


def test_unknown_signature_passes(tmp_path, write_tile):
    write_tile("composite.cmpt", b'cmpt' + b'\x00' * 12)
    write_tile("external.json", b'{"asset": {"version": "1.0"}}')
    dispatcher = ContentDispatcher()
    assert asyncio.run(dispatcher.validate_content({"uri": "composite.cmpt"}, tmp_path)).valid
    assert asyncio.run(dispatcher.validate_content({"uri": "external.json"}, tmp_path)).valid


def test_gzipped_content_is_validated(tmp_path, write_tile, i3dm_factory):
    write_tile("tree.i3dm", i3dm_factory(gltf_format=7), compress=True)
    outcome = asyncio.run(ContentDispatcher().validate_content({"url": "tree.i3dm"}, tmp_path))
    assert not outcome.valid
    assert "gltfFormat" in outcome.message


def test_disabled_format_is_not_validated(tmp_path, write_tile, pnts_factory):
    write_tile("points.pnts", pnts_factory(feature_table={}))
    config = ValidatorConfig(content_formats=["b3dm", "i3dm"])
    dispatcher = ContentDispatcher.from_config(config)
    assert asyncio.run(dispatcher.validate_content({"uri": "points.pnts"}, tmp_path)).valid


def test_path_resolved_against_base_directory(b3dm_factory):
    reader = FakeReader({"tile.b3dm": b3dm_factory()})
    dispatcher = ContentDispatcher(reader=reader)
    outcome = asyncio.run(dispatcher.validate_content({"uri": "sub/tile.b3dm"}, "/data/tileset"))
    assert outcome.valid
    assert reader.requested == [Path("/data/tileset/sub/tile.b3dm")]


def test_dict_results_are_normalized():
    reader = FakeReader({"tile.b3dm": b'b3dm' + b'\x00' * 24})
    validators = {"b3dm": lambda data: {"result": False, "message": "invalid b3dm"}}
    dispatcher = ContentDispatcher(reader=reader, validators=validators)
    outcome = asyncio.run(dispatcher.validate_content({"uri": "tile.b3dm"}, "."))
    assert outcome == ContentCheckOutcome(valid=False, message="invalid b3dm")


def test_percent_encoded_uri(tmp_path, write_tile, pnts_factory):
    write_tile("my points.pnts", pnts_factory(feature_table={}))
    outcome = asyncio.run(ContentDispatcher().validate_content({"uri": "my%20points.pnts"}, tmp_path))
    assert not outcome.valid
    assert "POINTS_LENGTH" in outcome.message


def test_empty_file_is_skipped(tmp_path, write_tile):
    write_tile("empty.b3dm", b'')
    outcome = asyncio.run(ContentDispatcher().validate_content({"uri": "empty.b3dm"}, tmp_path))
    assert outcome == ContentCheckOutcome.passed("Content is empty: empty.b3dm")


def test_missing_file_message(tmp_path):
    outcome = asyncio.run(ContentDispatcher().validate_content({"uri": "gone.b3dm"}, tmp_path))
    assert outcome.message == "Content not found: gone.b3dm"
