"""Legend / Tooltip Formatter - 图例与提示框"""

from typing import Any, Dict, List, Optional, Tuple
from slidecharts.core.constants import LEGEND_SIZES, TOOLTIP_STYLE
from slidecharts.engines.renderers import format_value
from slidecharts.models.chart import ChartOptions
from slidecharts.models.render import Legend, LegendEntry

# 按标签触发 tooltip 的类型
AXIS_TOOLTIP_KINDS = {"line", "bar", "stacked-bar", "area", "combo", "waterfall"}

# 只展示第一个系列的类型
FIRST_SERIES_KINDS = {"waterfall", "funnel"}

# 无图例的类型
NO_LEGEND_KINDS = {"table", "heatmap"}


def _legend_colors(kind: str, colors: Dict[str, str]) -> Dict[str, str]:
    if kind in FIRST_SERIES_KINDS and colors:
        first = next(iter(colors))
        return {first: colors[first]}
    return colors


def build_legend(kind: str, colors: Dict[str, str], options: ChartOptions) -> Optional[Legend]:
    """
    构建图例

    饼图按扇区展示且单扇区也显示；其他类型按系列展示，仅在多于一个系列时显示。
    图例位于底部时渲染在图表下方，其余位置渲染在标题区域。
    """
    if not options.show_legend or kind in NO_LEGEND_KINDS:
        return None
    if kind != "pie" and len(colors) <= 1:
        return None

    size = LEGEND_SIZES[options.legend_size]
    entries = [
        LegendEntry(id=item_id, label=item_id, color=color)
        for item_id, color in _legend_colors(kind, colors).items()
    ]
    return Legend(
        position=options.legend_position,
        placement="bottom" if options.legend_position == "bottom" else "header",
        size=options.legend_size,
        marker_size=size["marker_size"],
        font_size=size["font_size"],
        entries=entries
    )


def _axis_items(rows: List[Dict[str, Any]], colors: Dict[str, str]) -> List[Dict[str, Any]]:
    return [
        {
            "label": row["name"],
            "entries": [
                {"name": sid, "value": format_value(row["values"].get(sid)), "color": color}
                for sid, color in colors.items()
            ],
        }
        for row in rows
    ]


def build_tooltip(kind: str, rows: Any, colors: Dict[str, str]) -> Optional[Dict[str, Any]]:
    """
    构建 tooltip 内容

    Returns:
        {"trigger", "style", "cursor", "items"}，表格返回 None
    """
    if kind == "table":
        return None

    if kind in AXIS_TOOLTIP_KINDS:
        trigger = "axis"
        items = _axis_items(rows, _legend_colors(kind, colors))
    elif kind == "pie":
        trigger = "item"
        items = [
            {"label": row["name"], "entries": [
                {"name": row["name"], "value": format_value(row["value"]), "color": colors[row["name"]]}
            ]}
            for row in rows
        ]
    elif kind == "scatter":
        trigger = "item"
        items = [
            {"label": row["name"], "entries": [
                {"name": row["name"], "value": f"({format_value(p.x)}, {format_value(p.y)})", "color": colors[row["name"]]}
                for p in row["points"]
            ]}
            for row in rows
        ]
    elif kind == "heatmap":
        trigger = "item"
        items = [
            {"label": f"{cell.x}, {cell.y}", "entries": [{"name": str(cell.y), "value": format_value(cell.value)}]}
            for cell in rows
        ]
    else:
        trigger = "item"
        series_id = next(iter(colors), None)
        items = [
            {"label": row["name"], "entries": [{"name": series_id, "value": format_value(row["values"].get(series_id))}]}
            for row in rows
        ]

    cursor = None
    if kind in ("bar", "stacked-bar") and len(colors) > 1:
        cursor = {"fill": "#F2F1FF", "radius": 8}

    return {"trigger": trigger, "style": dict(TOOLTIP_STYLE), "cursor": cursor, "items": items}


def build_caption(kind: str, title: Optional[str], series_count: int, label_count: int) -> Tuple[str, str]:
    """无障碍标签与说明"""
    aria_label = title or f"{kind} chart"
    caption = f"{aria_label} displaying {series_count} data series"
    if label_count > 0:
        caption += f" with {label_count} data points"
    return aria_label, caption
