"""日志工具（loguru）"""

import sys
from loguru import logger
from slidecharts.core.config import settings


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logger():
    """按配置初始化日志输出"""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level.upper(), format=LOG_FORMAT)

    if settings.log_file is not None:
        logger.add(
            settings.log_file,
            level=settings.log_level.upper(),
            rotation="10 MB",
            retention="7 days",
            encoding="utf-8"
        )
    return logger


log = setup_logger()
