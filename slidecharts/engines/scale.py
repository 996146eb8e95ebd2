"""Responsive Scale Adapter - 响应式缩放"""

from typing import Dict, Mapping, Optional
from slidecharts.core.config import settings

# 趋势图版式的参考尺寸（基于 1280x720 设计稿）
TREND_LAYOUT: Dict[str, float] = {
    "padding": 24,
    "padding_top": 48,
    "title_font_size": 24,
    "metric_font_size": 24,
    "label_font_size": 14,
    "insight_font_size": 16,
    "margin_bottom": 24,
    "margin_left": 24,
    "chart_margin_left": -16,
    "padding_right": 24,
    "padding_left": 16,
    "insight_spacing": 12,
    "bullet_margin_right": 8,
    "bullet_margin_top": 4,
}


def compute_scale(
    canvas_width: Optional[float],
    canvas_height: Optional[float],
    reference_width: Optional[float] = None,
    reference_height: Optional[float] = None
) -> float:
    """
    计算缩放系数：min(width / 1280, height / 720)

    未提供的宽高按参考尺寸处理。
    """
    reference_width = reference_width or settings.reference_width
    reference_height = reference_height or settings.reference_height
    width = reference_width if canvas_width is None else canvas_width
    height = reference_height if canvas_height is None else canvas_height
    if width <= 0 or height <= 0:
        raise ValueError(f"画布尺寸必须为正数: {width}x{height}")
    return min(width / reference_width, height / reference_height)


class ScaleAdapter:
    """按画布尺寸等比缩放版式中的所有尺寸"""

    def __init__(self, canvas_width: Optional[float] = None, canvas_height: Optional[float] = None):
        self.scale = compute_scale(canvas_width, canvas_height)

    def px(self, value: float) -> float:
        return value * self.scale

    def css(self, value: float) -> str:
        return f"{self.px(value)}px"

    def scale_measurements(self, measurements: Mapping[str, float]) -> Dict[str, float]:
        return {name: self.px(value) for name, value in measurements.items()}
