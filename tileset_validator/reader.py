"""
瓦片内容读取模块

从磁盘读取瓦片内容，文件不存在或无法读取时返回None而不是抛出异常，gzip压缩的内容会被自动解压
"""

import asyncio
import gzip
import logging
import zlib
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

GZIP_MAGIC = b'\x1f\x8b'
GZIP_ERRORS = (OSError, EOFError, zlib.error)


def is_gzipped(data: bytes) -> bool:
    """检查数据是否以gzip magic开头"""
    return data[:2] == GZIP_MAGIC


def read_tile_bytes(path: Union[str, Path], gunzip: bool = True) -> Optional[bytes]:
    """
    同步读取瓦片内容

    Args:
        path: 瓦片文件路径
        gunzip: 是否自动解压gzip内容

    Returns:
        文件内容；文件不存在、无法读取或gzip内容无法解压时返回None
    """
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except FileNotFoundError:
        logger.debug("瓦片内容不存在: %s", path)
        return None
    except OSError as e:
        logger.warning("瓦片内容无法读取 %s: %s", path, e)
        return None

    if gunzip and is_gzipped(data):
        try:
            data = gzip.decompress(data)
        except GZIP_ERRORS as e:
            logger.warning("瓦片内容gzip解压失败 %s: %s", path, e)
            return None
    return data


class FileTileReader:
    """基于文件系统的瓦片内容读取器"""

    def __init__(self, gunzip: bool = True, max_concurrent_reads: Optional[int] = None):
        """
        初始化读取器

        Args:
            gunzip: 是否自动解压gzip内容
            max_concurrent_reads: 同时进行的读取数上限，None表示不限制
        """
        self.gunzip = gunzip
        self.max_concurrent_reads = max_concurrent_reads
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._semaphore_loop: Optional[asyncio.AbstractEventLoop] = None

    async def read(self, path: Union[str, Path]) -> Optional[bytes]:
        """异步读取瓦片内容，实际IO在线程中执行"""
        if self.max_concurrent_reads is None:
            return await asyncio.to_thread(read_tile_bytes, path, self.gunzip)

        # 信号量绑定到创建它的事件循环
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrent_reads)
            self._semaphore_loop = loop
        async with self._semaphore:
            return await asyncio.to_thread(read_tile_bytes, path, self.gunzip)
