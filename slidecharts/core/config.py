"""系统配置管理"""

from pathlib import Path
from typing import Dict, List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from slidecharts.core.constants import (
    CANONICAL_COLORS,
    DEFAULT_PALETTE,
    REFERENCE_HEIGHT,
    REFERENCE_WIDTH,
    STACKED_PALETTE
)


class Settings(BaseSettings):
    """系统配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # 颜色配置
    default_palette: List[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    stacked_palette: List[str] = Field(default_factory=lambda: list(STACKED_PALETTE))
    canonical_colors: Dict[str, str] = Field(default_factory=lambda: dict(CANONICAL_COLORS))

    # 数据校验
    lenient_series_length: bool = False

    # 响应式参考画布
    reference_width: int = REFERENCE_WIDTH
    reference_height: int = REFERENCE_HEIGHT

    # 服务器配置
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # 日志配置
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # 确保日志目录存在
        if self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# 全局配置实例
settings = Settings()
