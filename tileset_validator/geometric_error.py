"""
几何误差规则

子瓦片的geometricError不能大于父瓦片的geometricError
"""

from typing import Optional


def check_error_monotonic(tile: dict, parent: Optional[dict]) -> bool:
    """
    检查瓦片与其直接父瓦片之间的geometricError是否单调不增

    Args:
        tile: 当前瓦片
        parent: 父瓦片，根瓦片为None

    Returns:
        bool: tile.geometricError > parent.geometricError 时返回False
    """
    if parent is None:
        return True

    tile_error = tile.get("geometricError")
    parent_error = parent.get("geometricError")
    if tile_error is None or parent_error is None:
        return True

    return tile_error <= parent_error
