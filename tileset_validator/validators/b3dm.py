"""
Batched 3D Model (b3dm) 验证器
"""

from ..results import FormatCheck
from .header import B3DM_HEADER, TileFormatError, parse_feature_table, require_semantics, unpack_header


def validate_b3dm(data: bytes) -> FormatCheck:
    """
    检查b3dm负载的头部和Feature Table

    Args:
        data: 瓦片二进制内容

    Returns:
        FormatCheck: 验证结果
    """
    try:
        header = unpack_header(data, B3DM_HEADER, b'b3dm')
        feature_table = parse_feature_table(data, header)
        if header.feature_table_json_byte_length > 0:
            require_semantics(feature_table, ["BATCH_LENGTH"])
    except TileFormatError as e:
        return FormatCheck(result=False, message=f"Invalid b3dm: {e}")

    return FormatCheck(result=True, message="b3dm is valid")
