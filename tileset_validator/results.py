"""
验证结果模块

定义整个验证流程对外的结果类型：单个内容负载的检查结果和整个tileset的最终结论
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


VALID_TILESET_MESSAGE = "Tileset is valid"
BOUNDING_VOLUME_VIOLATION = "Child bounding volume is not contained within parent"
GEOMETRIC_ERROR_VIOLATION = "Child has geometricError greater than parent"


class WalkState(Enum):
    """遍历状态枚举"""
    PENDING = "pending"
    VISITED = "visited"
    AGGREGATING = "aggregating"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class FormatCheck:
    """二进制格式验证器的返回值 (result, message)"""
    result: bool
    message: str


@dataclass(frozen=True)
class ContentCheckOutcome:
    """单个内容负载的检查结果"""
    valid: bool
    message: str

    @classmethod
    def passed(cls, message: str = "") -> "ContentCheckOutcome":
        return cls(valid=True, message=message)

    @classmethod
    def from_format_check(cls, check: Any) -> "ContentCheckOutcome":
        """
        将格式验证器的结果规范化为ContentCheckOutcome

        验证器可以返回FormatCheck，也可以返回 {"result": ..., "message": ...} 字典
        """
        if isinstance(check, dict):
            return cls(valid=bool(check.get("result")), message=check.get("message", ""))
        return cls(valid=bool(check.result), message=check.message)


@dataclass(frozen=True)
class Verdict:
    """整个tileset验证的最终结论"""
    valid: bool
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "message": self.message}
