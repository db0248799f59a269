"""
命令行接口模块

提供命令行参数解析和子命令处理
"""

import argparse
import asyncio
import gzip
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import ValidatorConfig
from .reader import GZIP_ERRORS, is_gzipped
from .reporter import ReportGenerator
from .walker import validate_tileset

TILESET_FILENAME = "tileset.json"


def main(argv: Optional[List[str]] = None) -> int:
    """主入口函数"""
    parser = argparse.ArgumentParser(
        description="3D Tiles tileset验证工具",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"tileset-validator {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    # validate子命令
    validate_parser = subparsers.add_parser("validate", help="验证tileset")
    validate_parser.add_argument(
        "path",
        type=str,
        help="tileset.json文件或其所在目录"
    )
    validate_parser.add_argument(
        "--config",
        type=str,
        help="配置文件路径"
    )
    validate_parser.add_argument(
        "--no-content",
        action="store_true",
        help="不验证瓦片内容"
    )
    validate_parser.add_argument(
        "--report",
        type=str,
        help="保存JSON报告到文件"
    )
    validate_parser.add_argument(
        "--verbose",
        action="store_true",
        help="显示详细信息"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "validate":
        return cmd_validate(args)
    return 1


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s"
    )


def resolve_tileset_path(path: Path) -> Path:
    """目录参数解析为其中的tileset.json"""
    if path.is_dir():
        return path / TILESET_FILENAME
    return path


def load_tileset(tileset_path: Path) -> dict:
    """
    读取tileset.json，支持gzip压缩

    Raises:
        FileNotFoundError: 文件不存在
        OSError: 文件无法读取
        ValueError: gzip无法解压或JSON不合法
    """
    if not tileset_path.exists():
        raise FileNotFoundError(f"tileset文件不存在: {tileset_path}")

    with open(tileset_path, 'rb') as f:
        data = f.read()

    if is_gzipped(data):
        try:
            data = gzip.decompress(data)
        except GZIP_ERRORS as e:
            raise ValueError(f"tileset gzip解压失败: {tileset_path}: {e}")

    tileset = json.loads(data.decode('utf-8'))
    if not isinstance(tileset, dict):
        raise ValueError(f"tileset必须是JSON对象: {tileset_path}")
    return tileset


def cmd_validate(args) -> int:
    """执行validate命令"""
    configure_logging(args.verbose)

    try:
        config = ValidatorConfig.load(Path(args.config)) if args.config else ValidatorConfig()
        if args.no_content:
            config.check_content = False

        tileset_path = resolve_tileset_path(Path(args.path))
        print(f"[INFO] 验证tileset: {tileset_path}")

        tileset = load_tileset(tileset_path)
        verdict = asyncio.run(validate_tileset(tileset, tileset_path.parent, config=config))
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 2

    if verdict.valid:
        print(f"[SUCCESS] {verdict.message}")
    else:
        print(f"[FAILED] {verdict.message}")

    if args.report:
        ReportGenerator().generate_json(
            verdict,
            tileset_path,
            Path(args.report),
            metadata={"config": config.to_dict()}
        )
        print(f"[INFO] 报告已保存: {args.report}")

    return 0 if verdict.valid else 1


if __name__ == "__main__":
    sys.exit(main())
