"""
3D Tiles tileset验证器

遍历tileset的瓦片树，检查包围体包含关系、geometricError单调性，并验证b3dm/i3dm/pnts瓦片内容
"""

__version__ = "1.0.0"

from .bounding_volumes import Region, Sphere, region_contains, sphere_contains, content_volume_contained
from .geometric_error import check_error_monotonic
from .config import ValidatorConfig
from .content import ContentDispatcher, content_uri
from .reader import FileTileReader, read_tile_bytes, is_gzipped
from .reporter import ReportGenerator
from .results import ContentCheckOutcome, FormatCheck, Verdict, WalkState
from .validators import validate_b3dm, validate_i3dm, validate_pnts
from .walker import TilesetWalker, validate_tileset

__all__ = [
    # Bounding volumes
    "Region",
    "Sphere",
    "region_contains",
    "sphere_contains",
    "content_volume_contained",
    # Geometric error
    "check_error_monotonic",
    # Config
    "ValidatorConfig",
    # Content
    "ContentDispatcher",
    "content_uri",
    "FileTileReader",
    "read_tile_bytes",
    "is_gzipped",
    # Results
    "ContentCheckOutcome",
    "FormatCheck",
    "Verdict",
    "WalkState",
    # Validators
    "validate_b3dm",
    "validate_i3dm",
    "validate_pnts",
    # Walker
    "TilesetWalker",
    "validate_tileset",
    # Reporter
    "ReportGenerator",
]
