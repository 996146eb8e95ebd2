"""系统常量定义"""

from typing import Dict, List, Set

# 图表类型
CHART_KINDS: Set[str] = {
    "line", "bar", "stacked-bar", "area", "pie", "scatter",
    "combo", "table", "heatmap", "waterfall", "funnel"
}

# 图表类型别名（历史命名）
KIND_ALIASES: Dict[str, str] = {
    "stackedBar": "stacked-bar",
    "bar-stacked": "stacked-bar",
}

# 以 labels 为索引的图表类型
LABELED_KINDS: Set[str] = {
    "line", "bar", "stacked-bar", "area", "combo", "waterfall", "funnel"
}

# 至少需要一个系列的图表类型
SERIES_REQUIRED_KINDS: Set[str] = {"combo", "waterfall", "funnel"}

# 默认调色板：深蓝 -> 紫色
DEFAULT_PALETTE: List[str] = [
    "#1e3a8a",  # blue-900
    "#1e40af",  # blue-800
    "#2563eb",  # blue-600
    "#6366f1",  # indigo-500
    "#7c3aed",  # violet-600
    "#8b5cf6",  # violet-500
    "#a78bfa",  # violet-400
    "#c4b5fd",  # violet-300
]

# 堆叠柱状图调色板：底部深紫 -> 顶部浅紫
STACKED_PALETTE: List[str] = [
    "#962DFF",
    "#C893FD",
    "#E0C6FD",
    "#F0E5FC",
]

# 常用系列名的固定颜色
CANONICAL_COLORS: Dict[str, str] = {
    "Revenue": "#4A3AFF",
    "Sales": "#4A3AFF",
    "GMV": "#C893FD",
    "Operating Profit": "#C893FD",
    "Profit": "#C893FD",
    "Target": "#C893FD",
}

# hex 解析失败时的回退颜色
FALLBACK_RGB = (74, 58, 255)

# 瀑布图涨跌颜色
WATERFALL_UP_COLOR = "#10b981"
WATERFALL_DOWN_COLOR = "#ef4444"

# 热力图基色与文字颜色
HEATMAP_BASE_RGB = (30, 58, 138)
HEATMAP_LIGHT_LABEL = "white"
HEATMAP_DARK_LABEL = "#1e3a8a"
HEATMAP_MIN_OPACITY = 0.1
HEATMAP_LABEL_THRESHOLD = 0.5

# 网格样式
GRID_STYLE = {"stroke_dasharray": "1 1", "stroke": "#e2e8f0", "opacity": 0.5}

# 坐标轴样式
AXIS_STYLE = {"stroke": "#64748b", "font_size": 12, "tick_line": False, "axis_line": False}

# Tooltip 样式
TOOLTIP_STYLE = {
    "background_color": "#1E1B39",
    "border": "1px solid #1E1B39",
    "border_radius": 12,
    "color": "white",
    "padding": "12px 16px",
    "label_font_size": 14,
    "value_font_size": 20,
}

# 图例尺寸预设：(圆点直径, 字号)
LEGEND_SIZES: Dict[str, Dict[str, int]] = {
    "small": {"marker_size": 6, "font_size": 10},
    "medium": {"marker_size": 8, "font_size": 12},
    "large": {"marker_size": 12, "font_size": 14},
}

# 布局与动画
ANIMATION_DURATION_MS = 1000
SINGLE_SERIES_BAR_SIZE = 40
BAR_RADIUS = [8, 8, 8, 8]
STACK_TOP_RADIUS = [8, 8, 0, 0]
FLAT_RADIUS = [0, 0, 0, 0]
WATERFALL_RADIUS = [4, 4, 0, 0]
LINE_STROKE_WIDTH = 2
DOT_RADIUS = 4
ACTIVE_DOT_RADIUS = 6
PIE_OUTER_RADIUS = 120
FUNNEL_MIN_WIDTH = 120
LABEL_MAX_LENGTH = 10

# 响应式参考画布
REFERENCE_WIDTH = 1280
REFERENCE_HEIGHT = 720

# 占位提示
LOADING_MESSAGE = "Loading chart..."
