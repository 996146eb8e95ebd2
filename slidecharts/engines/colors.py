"""Color Resolver - 系列颜色分配"""

import re
from typing import Dict, List, Mapping, Optional, Tuple
from slidecharts.core.config import settings
from slidecharts.core.constants import FALLBACK_RGB
from slidecharts.models.chart import ChartSeries

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """#RRGGBB -> (r, g, b)，无法解析时回退到主色"""
    match = _HEX_PATTERN.match(color.strip()) if color else None
    if not match:
        return FALLBACK_RGB
    return tuple(int(part, 16) for part in match.groups())


def rgba(color: str, alpha: float) -> str:
    r, g, b = hex_to_rgb(color)
    return f"rgba({r}, {g}, {b}, {alpha})"


class ColorResolver:
    """
    颜色分配器

    优先级：series.color > 固定名称颜色 > 调色板循环。
    固定名称颜色由宿主传入，默认取配置。
    """

    def __init__(
        self,
        canonical_colors: Optional[Mapping[str, str]] = None,
        palette: Optional[List[str]] = None,
        stacked_palette: Optional[List[str]] = None
    ):
        if canonical_colors is None:
            canonical_colors = settings.canonical_colors
        self.canonical_colors = dict(canonical_colors)
        self.palette = list(palette or settings.default_palette)
        self.stacked_palette = list(stacked_palette or settings.stacked_palette)

    def palette_for(self, kind: str) -> List[str]:
        return self.stacked_palette if kind == "stacked-bar" else self.palette

    def resolve_one(self, series: ChartSeries, index: int, palette: List[str]) -> str:
        if series.color:
            return series.color
        if series.id in self.canonical_colors:
            return self.canonical_colors[series.id]
        return palette[index % len(palette)]

    def resolve(self, series: List[ChartSeries], kind: str) -> Dict[str, str]:
        """
        为每个系列分配颜色

        Args:
            series: 系列列表（按插入顺序）
            kind: 解析后的图表类型

        Returns:
            有序的 {series.id: color}
        """
        palette = self.palette_for(kind)
        return {
            s.id: self.resolve_one(s, index, palette)
            for index, s in enumerate(series)
        }
