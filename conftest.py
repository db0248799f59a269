"""
测试夹具

提供构造b3dm/i3dm/pnts二进制内容和tileset目录的工厂函数
"""

import gzip
import json
import struct

import pytest


def _pad_json(table) -> bytes:
    """JSON按8字节对齐，用空格填充"""
    if table is None:
        return b''
    data = json.dumps(table).encode('utf-8')
    return data + b' ' * (-len(data) % 8)


@pytest.fixture
def b3dm_factory():
    """创建测试用的 B3DM 内容"""
    def _make(feature_table=None, gltf_data=b'glTF\x02\x00\x00\x00', magic=b'b3dm',
              version=1, byte_length=None):
        if feature_table is None:
            feature_table = {"BATCH_LENGTH": 0}
        ft_json = _pad_json(feature_table)
        body = ft_json + gltf_data
        if byte_length is None:
            byte_length = 28 + len(body)

        header = struct.pack('<4sIIIIII',
                             magic,
                             version,
                             byte_length,
                             len(ft_json),
                             0,
                             0,
                             0)
        return header + body
    return _make


@pytest.fixture
def i3dm_factory():
    """创建测试用的 I3DM 内容"""
    def _make(feature_table=None, gltf_format=1, gltf_data=b'glTF\x02\x00\x00\x00'):
        if feature_table is None:
            feature_table = {"INSTANCES_LENGTH": 1, "POSITION": {"byteOffset": 0}}
        ft_json = _pad_json(feature_table)
        ft_binary = struct.pack('<fff', 0.0, 0.0, 0.0) + b'\x00' * 4
        body = ft_json + ft_binary + gltf_data

        header = struct.pack('<4sIIIIIII',
                             b'i3dm',
                             1,
                             32 + len(body),
                             len(ft_json),
                             len(ft_binary),
                             0,
                             0,
                             gltf_format)
        return header + body
    return _make


@pytest.fixture
def pnts_factory():
    """创建测试用的 PNTS 内容"""
    def _make(feature_table=None):
        if feature_table is None:
            feature_table = {"POINTS_LENGTH": 1, "POSITION": {"byteOffset": 0}}
        ft_json = _pad_json(feature_table)
        ft_binary = struct.pack('<fff', 1.0, 2.0, 3.0) + b'\x00' * 4
        body = ft_json + ft_binary

        header = struct.pack('<4sIIIIII',
                             b'pnts',
                             1,
                             28 + len(body),
                             len(ft_json),
                             len(ft_binary),
                             0,
                             0)
        return header + body
    return _make


@pytest.fixture
def write_tile(tmp_path):
    """把瓦片内容写入临时tileset目录"""
    def _write(name, data, compress=False):
        if compress:
            data = gzip.compress(data)
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path
    return _write


@pytest.fixture
def sphere_tile():
    """创建使用包围球的瓦片"""
    def _make(geometric_error, radius=100.0, center=(0.0, 0.0, 0.0), content=None, children=None):
        tile = {
            "boundingVolume": {"sphere": [*center, radius]},
            "geometricError": geometric_error,
        }
        if content is not None:
            tile["content"] = content
        if children is not None:
            tile["children"] = children
        return tile
    return _make


@pytest.fixture
def valid_tileset():
    """
    三层region瓦片树，没有内容，geometricError逐层递减，子包围体都在父包围体内
    """
    return {
        "asset": {"version": "1.0"},
        "geometricError": 500.0,
        "root": {
            "boundingVolume": {"region": [-1.0, -1.0, 1.0, 1.0, 0.0, 100.0]},
            "geometricError": 100.0,
            "refine": "ADD",
            "children": [
                {
                    "boundingVolume": {"region": [-1.0, -1.0, 0.0, 0.0, 0.0, 50.0]},
                    "geometricError": 10.0,
                    "children": [
                        {
                            "boundingVolume": {"region": [-1.0, -1.0, -0.5, -0.5, 0.0, 25.0]},
                            "geometricError": 0.0,
                        }
                    ],
                },
                {
                    "boundingVolume": {"region": [0.0, 0.0, 1.0, 1.0, 0.0, 50.0]},
                    "geometricError": 10.0,
                },
            ],
        },
    }
