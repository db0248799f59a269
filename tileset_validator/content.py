"""
瓦片内容分发模块

读取content引用的二进制内容，按前4字节magic分发到对应格式的验证器：
- b3dm / i3dm / pnts: 交给对应验证器检查
- 其他格式(cmpt、外部tileset.json等): 不在此层验证，视为通过
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Union
from urllib.parse import unquote

from .config import ValidatorConfig
from .reader import FileTileReader
from .results import ContentCheckOutcome
from .validators import FORMAT_VALIDATORS

logger = logging.getLogger(__name__)

MAGIC_LENGTH = 4


def content_uri(content: Optional[dict]) -> Optional[str]:
    """获取content的引用路径，兼容旧版本的url字段"""
    if not content:
        return None
    return content.get("uri") or content.get("url")


class ContentDispatcher:
    """内容验证分发器"""

    def __init__(
        self,
        reader=None,
        validators: Optional[Dict[str, Callable]] = None,
        formats: Optional[Iterable[str]] = None
    ):
        """
        初始化分发器

        Args:
            reader: 内容读取器，需提供 async read(path) -> Optional[bytes]
            validators: magic到验证器的映射，默认为内置的b3dm/i3dm/pnts验证器
            formats: 启用的格式，None表示全部启用
        """
        self.reader = reader or FileTileReader()
        validators = dict(FORMAT_VALIDATORS if validators is None else validators)
        if formats is not None:
            enabled = set(formats)
            validators = {magic: v for magic, v in validators.items() if magic in enabled}
        self.validators = validators

    @classmethod
    def from_config(cls, config: ValidatorConfig, reader=None) -> "ContentDispatcher":
        if reader is None:
            reader = FileTileReader(
                gunzip=config.gunzip_content,
                max_concurrent_reads=config.max_concurrent_reads
            )
        return cls(reader=reader, formats=config.content_formats)

    async def validate_content(self, content: dict, base_directory: Union[str, Path]) -> ContentCheckOutcome:
        """
        读取并验证一个content引用

        Args:
            content: tile.content
            base_directory: tileset所在目录

        Returns:
            ContentCheckOutcome: 内容不存在、无法读取或为空时返回通过
        """
        uri = content_uri(content)
        if uri is None:
            return ContentCheckOutcome.passed()

        data = await self.reader.read(Path(base_directory) / unquote(uri))
        if data is None:
            logger.debug("跳过不存在的内容: %s", uri)
            return ContentCheckOutcome.passed(f"Content not found: {uri}")
        if not data:
            logger.debug("跳过空内容: %s", uri)
            return ContentCheckOutcome.passed(f"Content is empty: {uri}")

        outcome = self.validate_bytes(data)
        if not outcome.valid:
            logger.info("内容验证失败 %s: %s", uri, outcome.message)
        return outcome

    def validate_bytes(self, data: bytes) -> ContentCheckOutcome:
        """按magic分发到对应验证器"""
        magic = data[:MAGIC_LENGTH].decode('ascii', errors='replace')
        validator = self.validators.get(magic)
        if validator is None:
            return ContentCheckOutcome.passed(f"Content format not validated: {magic}")

        return ContentCheckOutcome.from_format_check(validator(data))
