#!/usr/bin/env python3

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from fastmcp.utilities.logging import configure_logging, get_logger

from qweather_mcp.config.constants import DEFAULT_CONFIG_PATH, VALID_TRANSPORTS
from qweather_mcp.config.settings import load_settings
from qweather_mcp.exceptions import ConfigError, SigningError
from qweather_mcp.server import create_server

logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="qweather-mcp", description="Real-time weather MCP server"
    )
    parser.add_argument(
        "-t",
        "--transport",
        choices=VALID_TRANSPORTS,
        default="stdio",
        help="传输类型 (stdio 或 sse)",
    )
    parser.add_argument(
        "-c", "--config", default=DEFAULT_CONFIG_PATH, help="配置文件路径"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override MCP_LOG_LEVEL",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        logger.error(f"加载配置文件失败: {e}")
        return 1

    configure_logging(level=args.log_level or settings.log_level)

    try:
        mcp = create_server(settings)
    except SigningError as e:
        logger.error(f"签名密钥初始化失败: {e}")
        return 1

    # ============= SERVER ENTRY POINT =============

    if args.transport == "sse":
        logger.info(f"SSE 服务器监听于 {settings.host}:{settings.port}")
        asyncio.run(
            mcp.run_async(transport="sse", host=settings.host, port=settings.port)
        )
    else:
        asyncio.run(mcp.run_async(transport="stdio"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
