"""
Instanced 3D Model (i3dm) 验证器
"""

from ..results import FormatCheck
from .header import I3DM_HEADER, TileFormatError, parse_feature_table, require_semantics, unpack_header

# 0: glTF通过uri引用，1: 内嵌glb
GLTF_FORMATS = (0, 1)


def validate_i3dm(data: bytes) -> FormatCheck:
    """检查i3dm负载的头部、gltfFormat和Feature Table"""
    try:
        header = unpack_header(data, I3DM_HEADER, b'i3dm')
        if header.gltf_format not in GLTF_FORMATS:
            raise TileFormatError(f"gltfFormat must be 0 or 1, got {header.gltf_format}")

        feature_table = parse_feature_table(data, header)
        require_semantics(
            feature_table,
            ["INSTANCES_LENGTH"],
            one_of=["POSITION", "POSITION_QUANTIZED"]
        )
    except TileFormatError as e:
        return FormatCheck(result=False, message=f"Invalid i3dm: {e}")

    return FormatCheck(result=True, message="i3dm is valid")
