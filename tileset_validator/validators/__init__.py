"""
瓦片内容格式验证器模块初始化
"""

from .b3dm import validate_b3dm
from .i3dm import validate_i3dm
from .pnts import validate_pnts
from .header import TileFormatError

FORMAT_VALIDATORS = {
    "b3dm": validate_b3dm,
    "i3dm": validate_i3dm,
    "pnts": validate_pnts,
}

__all__ = [
    "validate_b3dm",
    "validate_i3dm",
    "validate_pnts",
    "TileFormatError",
    "FORMAT_VALIDATORS",
]
