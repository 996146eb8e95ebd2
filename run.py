"""启动脚本"""

import uvicorn
from slidecharts.core.config import settings
from slidecharts.core.constants import CHART_KINDS
from slidecharts.utils.logger import log


def log_startup():
    """打印渲染相关配置"""
    log.info(f"Slide Charts 启动: http://{settings.api_host}:{settings.api_port}/docs")
    log.info(f"参考画布: {settings.reference_width}x{settings.reference_height}")
    log.info(f"支持的图表类型 ({len(CHART_KINDS)}): {', '.join(sorted(CHART_KINDS))}")
    log.info(f"默认调色板: {len(settings.default_palette)} 色，堆叠调色板: {len(settings.stacked_palette)} 色")
    log.info(f"固定名称颜色: {', '.join(settings.canonical_colors) or '无'}")
    if settings.lenient_series_length:
        log.warning("已开启宽松长度校验：系列长度不一致时补 None 或截断")


if __name__ == "__main__":
    log_startup()
    uvicorn.run(
        "slidecharts.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
