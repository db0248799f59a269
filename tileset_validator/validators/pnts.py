"""
Point Cloud (pnts) 验证器
"""

from ..results import FormatCheck
from .header import PNTS_HEADER, TileFormatError, parse_feature_table, require_semantics, unpack_header


def validate_pnts(data: bytes) -> FormatCheck:
    """检查pnts负载，Feature Table必须定义POINTS_LENGTH和点位置"""
    try:
        header = unpack_header(data, PNTS_HEADER, b'pnts')
        feature_table = parse_feature_table(data, header)
        require_semantics(
            feature_table,
            ["POINTS_LENGTH"],
            one_of=["POSITION", "POSITION_QUANTIZED"]
        )
    except TileFormatError as e:
        return FormatCheck(result=False, message=f"Invalid pnts: {e}")

    return FormatCheck(result=True, message="pnts is valid")
