"""
报告生成器模块

负责把验证结论写成JSON格式报告
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .results import Verdict


class ReportGenerator:
    """报告生成器"""

    def build_report(
        self,
        verdict: Verdict,
        tileset_path: Path,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """生成报告内容"""
        return {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "tileset": str(tileset_path),
            "metadata": metadata or {},
            "result": verdict.to_dict(),
        }

    def generate_json(
        self,
        verdict: Verdict,
        tileset_path: Path,
        output_path: Path,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        生成JSON格式报告

        Args:
            verdict: 验证结论
            tileset_path: 被验证的tileset路径
            output_path: 输出文件路径
            metadata: 元数据

        Returns:
            写入文件的报告内容
        """
        report = self.build_report(verdict, tileset_path, metadata)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return report
