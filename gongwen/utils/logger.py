"""日志配置模块.

控制台只输出精简信息，文件日志按配置轮转，写在输出目录下，便于追查生成与导出过程。
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from gongwen.config.settings import settings


def setup_logger(level: Optional[str] = None, log_dir: Optional[Path] = None) -> None:
    """配置日志系统.

    重复调用会替换已有的处理器，命令行的 --verbose 即通过再次调用切换到调试级别。

    Args:
        level: 日志级别，None时使用配置
        log_dir: 日志文件目录，None时使用输出目录
    """
    level = (level or settings.log.level).upper()

    # 清除已有的处理器
    logger.remove()
    logger.add(sys.stderr, format=settings.log.format, level=level, colorize=True)

    if settings.log.log_file:
        log_dir = Path(log_dir) if log_dir else settings.output_dir
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / settings.log.log_file,
            format=settings.log.format,
            level=level,
            rotation=settings.log.rotation,
            retention=settings.log.retention,
            encoding="utf-8",  # 中文日志
        )

    logger.debug(f"日志级别：{level}")
