"""
瓦片二进制头部解析

b3dm/i3dm/pnts 共用的头部结构:
- magic (4) + version (4) + byteLength (4) +
  featureTableJSONByteLength (4) + featureTableBinaryByteLength (4) +
  batchTableJSONByteLength (4) + batchTableBinaryByteLength (4)
- i3dm 额外多一个 gltfFormat (4)
"""

import json
import struct
from dataclasses import dataclass
from typing import Iterable


B3DM_HEADER = struct.Struct('<4sIIIIII')
I3DM_HEADER = struct.Struct('<4sIIIIIII')
PNTS_HEADER = struct.Struct('<4sIIIIII')

SUPPORTED_VERSION = 1


class TileFormatError(Exception):
    """瓦片负载结构错误"""


@dataclass
class TileHeader:
    """解析后的瓦片头部"""
    magic: bytes
    version: int
    byte_length: int
    feature_table_json_byte_length: int
    feature_table_binary_byte_length: int
    batch_table_json_byte_length: int
    batch_table_binary_byte_length: int
    header_byte_length: int
    gltf_format: int = 0

    @property
    def feature_table_json_offset(self) -> int:
        return self.header_byte_length

    @property
    def body_byte_length(self) -> int:
        return (self.feature_table_json_byte_length + self.feature_table_binary_byte_length +
                self.batch_table_json_byte_length + self.batch_table_binary_byte_length)


def unpack_header(data: bytes, layout: struct.Struct, magic: bytes) -> TileHeader:
    """
    解析并检查瓦片头部

    Raises:
        TileFormatError: 头部长度、magic、version 或 byteLength 不合法
    """
    if len(data) < layout.size:
        raise TileFormatError(f"Header must be {layout.size} bytes, got {len(data)}")

    fields = layout.unpack_from(data, 0)
    header = TileHeader(*fields[:7], header_byte_length=layout.size)
    if len(fields) > 7:
        header.gltf_format = fields[7]

    if header.magic != magic:
        raise TileFormatError(
            f"Invalid magic: {header.magic.decode('ascii', errors='replace')}, "
            f"expected {magic.decode('ascii')}"
        )

    if header.version != SUPPORTED_VERSION:
        raise TileFormatError(f"Invalid version: {header.version}. Version must be {SUPPORTED_VERSION}")

    if header.byte_length != len(data):
        raise TileFormatError(
            f"byteLength of {header.byte_length} does not equal the tile's actual byte length of {len(data)}"
        )

    if header.header_byte_length + header.body_byte_length > header.byte_length:
        raise TileFormatError(
            f"Feature table and batch table byte lengths ({header.body_byte_length}) "
            f"exceed the tile's byteLength of {header.byte_length}"
        )

    return header


def parse_feature_table(data: bytes, header: TileHeader) -> dict:
    """解析Feature Table JSON，不存在时返回空字典"""
    length = header.feature_table_json_byte_length
    if length == 0:
        return {}

    offset = header.feature_table_json_offset
    raw = data[offset:offset + length]
    try:
        # JSON尾部按规范用空格填充，旧数据可能用 \0 填充
        table = json.loads(raw.decode('utf-8').rstrip(' \x00'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TileFormatError(f"Feature table JSON could not be parsed: {e}")

    if not isinstance(table, dict):
        raise TileFormatError("Feature table JSON must be an object")
    return table


def require_semantics(feature_table: dict, required: Iterable[str], one_of: Iterable[str] = ()) -> None:
    """检查Feature Table中必需的语义"""
    for semantic in required:
        if semantic not in feature_table:
            raise TileFormatError(f"Feature table must define {semantic}")

    one_of = list(one_of)
    if one_of and not any(semantic in feature_table for semantic in one_of):
        raise TileFormatError(f"Feature table must define one of: {', '.join(one_of)}")
