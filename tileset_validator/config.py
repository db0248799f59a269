"""
配置解析模块
负责加载和解析验证器的JSON配置文件
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .validators import FORMAT_VALIDATORS


@dataclass
class ValidatorConfig:
    """验证器配置数据类"""
    check_content: bool = True
    content_formats: List[str] = field(default_factory=lambda: list(FORMAT_VALIDATORS))
    gunzip_content: bool = True
    max_concurrent_reads: Optional[int] = None

    def __post_init__(self):
        unknown = [f for f in self.content_formats if f not in FORMAT_VALIDATORS]
        if unknown:
            raise ValueError(
                f"不支持的内容格式: {unknown}，可选: {sorted(FORMAT_VALIDATORS)}"
            )
        if self.max_concurrent_reads is not None and self.max_concurrent_reads < 1:
            raise ValueError(f"max_concurrent_reads 必须 >= 1，当前为 {self.max_concurrent_reads}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidatorConfig":
        """从字典构造配置"""
        return cls(
            check_content=data.get("check_content", True),
            content_formats=data.get("content_formats", list(FORMAT_VALIDATORS)),
            gunzip_content=data.get("gunzip_content", True),
            max_concurrent_reads=data.get("max_concurrent_reads")
        )

    @classmethod
    def load(cls, config_path: Path) -> "ValidatorConfig":
        """
        加载配置文件

        Args:
            config_path: 配置文件路径

        Raises:
            FileNotFoundError: 配置文件不存在
            ValueError: 配置内容不合法
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"配置文件不存在: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"配置文件格式错误: {config_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"配置文件必须是JSON对象: {config_path}")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "check_content": self.check_content,
            "content_formats": list(self.content_formats),
            "gunzip_content": self.gunzip_content,
            "max_concurrent_reads": self.max_concurrent_reads,
        }
