"""
包围体包含关系模块

3D Tiles 支持 box/sphere/region 三种包围体，这里实现 region 和 sphere 的包含判断：
- region: [west, south, east, north, minHeight, maxHeight]，经纬度为弧度
- sphere: [centerX, centerY, centerZ, radius]

所有判断都使用非严格不等式，边界相接视为包含
"""

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Region:
    """地理矩形 + 高度范围"""
    west: float
    south: float
    east: float
    north: float
    minimum_height: float
    maximum_height: float

    @classmethod
    def unpack(cls, values: Sequence[float]) -> "Region":
        """从tileset.json中的6元素数组构造"""
        west, south, east, north, minimum_height, maximum_height = values[:6]
        return cls(west, south, east, north, minimum_height, maximum_height)

    def corners(self) -> Iterator[Tuple[float, float]]:
        """依次返回 northwest, southwest, northeast, southeast 四个角点 (经度, 纬度)"""
        yield self.west, self.north
        yield self.west, self.south
        yield self.east, self.north
        yield self.east, self.south

    def contains_point(self, longitude: float, latitude: float) -> bool:
        return (self.west <= longitude <= self.east and
                self.south <= latitude <= self.north)


@dataclass(frozen=True)
class Sphere:
    """包围球"""
    center: Tuple[float, float, float]
    radius: float

    @classmethod
    def unpack(cls, values: Sequence[float]) -> "Sphere":
        """从tileset.json中的4元素数组构造"""
        x, y, z, radius = values[:4]
        return cls((x, y, z), radius)


def region_contains(inner: Region, outer: Region) -> bool:
    """inner的四个角点都在outer矩形内，且高度范围也被outer包含"""
    corners_inside = all(outer.contains_point(lon, lat) for lon, lat in inner.corners())
    heights_inside = (inner.maximum_height <= outer.maximum_height and
                      inner.minimum_height >= outer.minimum_height)
    return corners_inside and heights_inside


def sphere_contains(inner: Sphere, outer: Sphere) -> bool:
    """球心距离 <= outer.radius - inner.radius"""
    distance = math.dist(inner.center, outer.center)
    return distance <= outer.radius - inner.radius


def content_volume_contained(content_volume: Optional[dict], tile_volume: Optional[dict]) -> Optional[bool]:
    """
    检查内容包围体是否被瓦片包围体包含

    Args:
        content_volume: content.boundingVolume
        tile_volume: tile.boundingVolume

    Returns:
        两者类型相同(region/region 或 sphere/sphere)时返回包含判断结果，
        类型不同或缺失时不做比较，返回None
    """
    if not content_volume or not tile_volume:
        return None

    content_region = content_volume.get("region")
    tile_region = tile_volume.get("region")
    if content_region is not None and tile_region is not None:
        return region_contains(Region.unpack(content_region), Region.unpack(tile_region))

    content_sphere = content_volume.get("sphere")
    tile_sphere = tile_volume.get("sphere")
    if content_sphere is not None and tile_sphere is not None:
        return sphere_contains(Sphere.unpack(content_sphere), Sphere.unpack(tile_sphere))

    return None
