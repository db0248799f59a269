"""
瓦片树遍历模块

从根瓦片开始深度优先遍历整个tileset，对每个瓦片执行:
1. 内容包围体包含检查
2. 内容负载验证(异步，不阻塞遍历)
3. geometricError单调性检查
同步检查的第一个错误直接决定结论；否则等待所有内容验证完成后给出结论
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from .bounding_volumes import content_volume_contained
from .config import ValidatorConfig
from .content import ContentDispatcher, content_uri
from .geometric_error import check_error_monotonic
from .results import (
    BOUNDING_VOLUME_VIOLATION,
    GEOMETRIC_ERROR_VIOLATION,
    VALID_TILESET_MESSAGE,
    ContentCheckOutcome,
    Verdict,
    WalkState,
)

logger = logging.getLogger(__name__)


@dataclass
class _WorkItem:
    """待访问的瓦片，根瓦片的parent为None"""
    tile: dict
    parent: Optional[dict]
    path: str


class _WalkRun:
    """单次验证的遍历状态"""

    def __init__(self, dispatcher: ContentDispatcher, check_content: bool, tileset_directory: Union[str, Path]):
        self.dispatcher = dispatcher
        self.check_content = check_content
        self.tileset_directory = tileset_directory
        self.state = WalkState.PENDING
        self.pending: Dict[str, asyncio.Task] = {}
        self.outcomes: Dict[str, ContentCheckOutcome] = {}
        self._verdict: asyncio.Future = asyncio.get_running_loop().create_future()

    @property
    def resolved(self) -> bool:
        return self._verdict.done()

    @property
    def verdict(self) -> Verdict:
        return self._verdict.result()

    def settle(self, verdict: Verdict) -> bool:
        """设置结论，已有结论时忽略并返回False"""
        if self.resolved:
            return False
        self._verdict.set_result(verdict)
        self.state = WalkState.RESOLVED
        return True

    def walk(self, root: dict) -> None:
        stack: List[_WorkItem] = [_WorkItem(tile=root, parent=None, path="root")]

        while stack:
            item = stack.pop()
            tile = item.tile
            content = tile.get("content")

            if content and content_volume_contained(content.get("boundingVolume"),
                                                    tile.get("boundingVolume")) is False:
                logger.info("%s: 内容包围体超出瓦片包围体", item.path)
                self.settle(Verdict(valid=False, message=BOUNDING_VOLUME_VIOLATION))
                return

            if self.check_content and content_uri(content) is not None:
                self.pending[item.path] = asyncio.ensure_future(
                    self.dispatcher.validate_content(content, self.tileset_directory)
                )

            if not check_error_monotonic(tile, item.parent):
                logger.info("%s: geometricError %s 大于父瓦片的 %s",
                            item.path, tile.get("geometricError"), item.parent.get("geometricError"))
                self.settle(Verdict(valid=False, message=GEOMETRIC_ERROR_VIOLATION))
                return

            for index, child in enumerate(tile.get("children") or []):
                stack.append(_WorkItem(tile=child, parent=tile, path=f"{item.path}.children[{index}]"))

        self.state = WalkState.VISITED

    async def aggregate(self) -> None:
        """按完成顺序收集内容验证结果，第一个失败结果决定结论"""
        self.state = WalkState.AGGREGATING
        paths = {task: path for path, task in self.pending.items()}
        remaining = set(paths)

        while remaining:
            done, remaining = await asyncio.wait(remaining, return_when=asyncio.FIRST_COMPLETED)
            for task in sorted(done, key=paths.get):
                outcome = task.result()
                self.outcomes[paths[task]] = outcome
                if not outcome.valid:
                    logger.info("%s: %s", paths[task], outcome.message)
                    self.settle(Verdict(valid=False, message=outcome.message))
                    return

    async def discard(self) -> None:
        """取消未完成的内容验证，并回收所有任务的结果"""
        for task in self.pending.values():
            if not task.done():
                task.cancel()
        if self.pending:
            await asyncio.gather(*self.pending.values(), return_exceptions=True)


class TilesetWalker:
    """tileset验证器"""

    def __init__(self, config: Optional[ValidatorConfig] = None, dispatcher: Optional[ContentDispatcher] = None):
        """
        初始化验证器

        Args:
            config: 验证配置，默认使用ValidatorConfig()
            dispatcher: 内容分发器，默认按配置创建
        """
        self.config = config or ValidatorConfig()
        self.dispatcher = dispatcher or ContentDispatcher.from_config(self.config)

    async def validate(self, tileset: dict, tileset_directory: Union[str, Path]) -> Verdict:
        """
        遍历tileset并给出结论

        Args:
            tileset: 已解析的tileset.json对象
            tileset_directory: tileset所在目录，用于解析content路径

        Returns:
            Verdict: 验证结论，结构错误不会抛出异常

        Raises:
            ValueError: tileset缺少root
        """
        root = tileset.get("root")
        if root is None:
            raise ValueError("tileset is missing 'root'")

        run = _WalkRun(self.dispatcher, self.config.check_content, tileset_directory)
        try:
            run.walk(root)
            if not run.resolved:
                await run.aggregate()
            run.settle(Verdict(valid=True, message=VALID_TILESET_MESSAGE))
        finally:
            await run.discard()

        logger.info("验证完成: %s", run.verdict.message)
        return run.verdict


async def validate_tileset(
    tileset: dict,
    tileset_directory: Union[str, Path],
    config: Optional[ValidatorConfig] = None,
    dispatcher: Optional[ContentDispatcher] = None
) -> Verdict:
    """验证tileset的入口函数"""
    walker = TilesetWalker(config=config, dispatcher=dispatcher)
    return await walker.validate(tileset, tileset_directory)
