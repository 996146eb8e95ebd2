"""
Chart Renderers - 各图表类型的渲染函数

每个渲染函数签名一致：(rows, colors, options) -> geometry dict。
rows 为规整后的数据：折线/柱状等为按标签的行（{"name", "values"}），饼图为扇区行，散点为点集行，
表格为 TableData，热力图为 HeatmapCell 列表。colors 为按系列顺序的 {id: color}。
"""

from typing import Any, Callable, Dict, List, Optional
from slidecharts.core.config import settings
from slidecharts.core.constants import (
    ACTIVE_DOT_RADIUS,
    ANIMATION_DURATION_MS,
    AXIS_STYLE,
    BAR_RADIUS,
    DOT_RADIUS,
    FLAT_RADIUS,
    FUNNEL_MIN_WIDTH,
    GRID_STYLE,
    HEATMAP_BASE_RGB,
    LABEL_MAX_LENGTH,
    LINE_STROKE_WIDTH,
    PIE_OUTER_RADIUS,
    SINGLE_SERIES_BAR_SIZE,
    STACK_TOP_RADIUS,
    WATERFALL_DOWN_COLOR,
    WATERFALL_RADIUS,
    WATERFALL_UP_COLOR
)
from slidecharts.engines.colors import rgba
from slidecharts.engines.metrics import (
    as_number,
    funnel_widths,
    heat_intensity,
    pie_proportions,
    stack_totals,
    waterfall_ladder
)
from slidecharts.models.chart import ChartOptions, HeatmapCell, TableData

Renderer = Callable[[Any, Dict[str, str], ChartOptions], Dict[str, Any]]


def truncate_label(label: Any, max_length: int = LABEL_MAX_LENGTH) -> str:
    text = str(label)
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _animation(options: ChartOptions) -> int:
    return ANIMATION_DURATION_MS if options.animate else 0


def _grid(options: ChartOptions) -> Optional[Dict[str, Any]]:
    return dict(GRID_STYLE) if options.show_grid else None


def _domain(values: List[Any]) -> Dict[str, float]:
    numbers = [float(v) for v in values if v is not None]
    if not numbers:
        return {"min": 0.0, "max": 0.0}
    return {"min": min(0.0, min(numbers)), "max": max(0.0, max(numbers))}


def _cartesian_base(chart_type: str, rows: List[Dict[str, Any]], options: ChartOptions, values: List[Any]) -> Dict[str, Any]:
    categories = [row["name"] for row in rows]
    return {
        "type": chart_type,
        "categories": categories,
        "x_axis": {**AXIS_STYLE, "data_key": "name", "ticks": [truncate_label(c) for c in categories]},
        "y_axis": {**AXIS_STYLE, **_domain(values)},
        "grid": _grid(options),
        "animation_duration": _animation(options),
    }


def _series_values(rows: List[Dict[str, Any]], series_ids: List[str]) -> List[Any]:
    return [row["values"].get(sid) for row in rows for sid in series_ids]


def _active_marker(color: str) -> Dict[str, Any]:
    return {"radius": ACTIVE_DOT_RADIUS, "stroke": color, "stroke_width": 2, "fill": "white"}


def _line_series(
    rows: List[Dict[str, Any]],
    series_id: str,
    color: str,
    curved: bool,
    show_dots: bool
) -> Dict[str, Any]:
    """单条折线：None 处断开为多段，不插值"""
    segments: List[List[Dict[str, Any]]] = []
    current: List[Dict[str, Any]] = []
    markers = []
    for index, row in enumerate(rows):
        value = row["values"].get(series_id)
        if value is None:
            if current:
                segments.append(current)
                current = []
            continue
        point = {"index": index, "label": row["name"], "value": value}
        current.append(point)
        if show_dots:
            markers.append({**point, "radius": DOT_RADIUS, "fill": color})
    if current:
        segments.append(current)

    return {
        "id": series_id,
        "color": color,
        "stroke_width": LINE_STROKE_WIDTH,
        "interpolation": "monotone" if curved else "linear",
        "segments": segments,
        "markers": markers,
        "active_marker": _active_marker(color),
    }


def _bars(rows: List[Dict[str, Any]], series_id: str) -> List[Dict[str, Any]]:
    bars = []
    for index, row in enumerate(rows):
        value = row["values"].get(series_id)
        if value is None:
            continue
        bars.append({"index": index, "label": row["name"], "value": value, "base": 0.0, "top": value})
    return bars


def render_line(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """折线图"""
    geometry = _cartesian_base("line", rows, options, _series_values(rows, list(colors)))
    geometry["series"] = [
        _line_series(rows, sid, color, options.curved, options.show_dots)
        for sid, color in colors.items()
    ]
    return geometry


def render_bar(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """分组柱状图；单系列时为固定宽度的窄柱"""
    single = len(colors) == 1
    geometry = _cartesian_base("bar", rows, options, _series_values(rows, list(colors)))
    geometry["layout"] = "single" if single else "grouped"
    geometry["max_bar_size"] = SINGLE_SERIES_BAR_SIZE if single else None
    geometry["series"] = [
        {"id": sid, "color": color, "radius": list(BAR_RADIUS), "stack_id": None, "bars": _bars(rows, sid)}
        for sid, color in colors.items()
    ]
    return geometry


def render_stacked_bar(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """
    堆叠柱状图

    按系列插入顺序自下而上累加，只有每根柱最顶部的片段带圆角。
    """
    series_ids = list(colors)
    series = {
        sid: {"id": sid, "color": color, "stack_id": "stack", "segments": []}
        for sid, color in colors.items()
    }
    extents: List[float] = []

    for index, row in enumerate(rows):
        base = 0.0
        placed = []
        for sid in series_ids:
            value = row["values"].get(sid)
            if value is None:
                continue
            segment = {
                "index": index,
                "label": row["name"],
                "value": value,
                "base": base,
                "top": base + value,
                "radius": list(FLAT_RADIUS),
            }
            base += value
            series[sid]["segments"].append(segment)
            placed.append(segment)
            extents.extend([segment["base"], segment["top"]])
        if placed:
            placed[-1]["radius"] = list(STACK_TOP_RADIUS)

    geometry = _cartesian_base("stacked-bar", rows, options, extents)
    geometry["layout"] = "stacked"
    geometry["max_bar_size"] = SINGLE_SERIES_BAR_SIZE if len(series_ids) == 1 else None
    geometry["stack_totals"] = stack_totals(rows, series_ids)
    geometry["series"] = list(series.values())
    return geometry


def render_area(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """面积图：渐变填充，靠近折线不透明，向基线渐淡"""
    running = [0.0 for _ in rows]
    extents: List[float] = []
    series = []

    for position, (sid, color) in enumerate(colors.items()):
        segments: List[List[Dict[str, Any]]] = []
        current: List[Dict[str, Any]] = []
        for index, row in enumerate(rows):
            value = row["values"].get(sid)
            if value is None:
                if current:
                    segments.append(current)
                    current = []
                continue
            base = running[index] if options.stacked else 0.0
            top = base + value
            if options.stacked:
                running[index] = top
            current.append({"index": index, "label": row["name"], "value": value, "base": base, "top": top})
            extents.extend([base, top])
        if current:
            segments.append(current)

        series.append({
            "id": sid,
            "color": color,
            "stroke_width": LINE_STROKE_WIDTH,
            "interpolation": "monotone" if options.curved else "linear",
            "stack_id": "stack" if options.stacked else str(position),
            "fill": {
                "gradient_id": f"areaGradient-{sid}",
                "direction": "vertical",
                "stops": [
                    {"offset": "0%", "color": color, "opacity": 0.9},
                    {"offset": "50%", "color": rgba(color, 0.7)},
                    {"offset": "100%", "color": rgba(color, 0.5)},
                ],
            },
            "segments": segments,
            "active_marker": {"radius": ACTIVE_DOT_RADIUS, "stroke": "white", "stroke_width": 2, "fill": color},
        })

    geometry = _cartesian_base("area", rows, options, extents)
    geometry["stacked"] = options.stacked
    geometry["series"] = series
    return geometry


def render_pie(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """饼图：按原始数值分配角度，不做 100% 归一"""
    values = [row["value"] for row in rows]
    proportions = pie_proportions(values)
    slices = []
    angle = 0.0
    for row, proportion in zip(rows, proportions):
        sweep = proportion * 360
        slices.append({
            "id": row["name"],
            "value": as_number(row["value"]),
            "proportion": proportion,
            "start_angle": angle,
            "end_angle": angle + sweep,
            "color": colors[row["name"]],
        })
        angle += sweep

    return {
        "type": "pie",
        "total": sum(as_number(v) for v in values),
        "inner_radius": 0,
        "outer_radius": PIE_OUTER_RADIUS,
        "slices": slices,
        "animation_duration": _animation(options),
    }


def render_scatter(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """散点图：每个系列独立的 {x, y, z} 点集"""
    xs, ys = [], []
    series = []
    for row in rows:
        points = []
        for point in row["points"]:
            xs.append(point.x)
            ys.append(point.y)
            points.append({"x": point.x, "y": point.y, "z": point.z})
        series.append({"id": row["name"], "color": colors[row["name"]], "points": points})

    return {
        "type": "scatter",
        "x_axis": {**AXIS_STYLE, "data_key": "x", **_domain(xs)},
        "y_axis": {**AXIS_STYLE, "data_key": "y", **_domain(ys)},
        "grid": _grid(options),
        "animation_duration": _animation(options),
        "series": series,
    }


def render_combo(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """组合图：第一个系列为柱，其余为折线"""
    items = list(colors.items())
    bar_id, bar_color = items[0]
    geometry = _cartesian_base("combo", rows, options, _series_values(rows, list(colors)))
    geometry["bars"] = {
        "id": bar_id,
        "color": bar_color,
        "radius": list(STACK_TOP_RADIUS),
        "bars": _bars(rows, bar_id),
    }
    geometry["lines"] = [
        _line_series(rows, sid, color, curved=True, show_dots=True)
        for sid, color in items[1:]
    ]
    return geometry


def render_table(rows: TableData, colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """表格：原样透传表头与数据行"""
    return {
        "type": "table",
        "headers": list(rows.headers),
        "rows": [list(row) for row in rows.rows],
        "column_count": len(rows.headers),
        "row_count": len(rows.rows),
    }


def render_heatmap(rows: List[HeatmapCell], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """热力图：网格尺寸取 x/y 去重后的数量，单元格透明度按最大值归一"""
    x_categories = list(dict.fromkeys(cell.x for cell in rows))
    y_categories = list(dict.fromkeys(cell.y for cell in rows))
    x_index = {x: i for i, x in enumerate(x_categories)}
    y_index = {y: i for i, y in enumerate(y_categories)}
    max_value = max(cell.value for cell in rows)
    r, g, b = HEATMAP_BASE_RGB

    cells = []
    for cell in rows:
        intensity, opacity, label_color = heat_intensity(cell.value, max_value)
        cells.append({
            "x": cell.x,
            "y": cell.y,
            "column": x_index[cell.x],
            "row": y_index[cell.y],
            "value": cell.value,
            "label": format_value(cell.value),
            "intensity": intensity,
            "opacity": opacity,
            "background": f"rgba({r}, {g}, {b}, {opacity})",
            "label_color": label_color,
            "title": f"{cell.x}, {cell.y}: {format_value(cell.value)}",
        })

    return {
        "type": "heatmap",
        "columns": len(x_categories),
        "rows": len(y_categories),
        "x_categories": x_categories,
        "y_categories": y_categories,
        "max_value": max_value,
        "cells": cells,
    }


def render_waterfall(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """瀑布图：取第一个系列，基线为此前累计值，按正负着色"""
    series_id = next(iter(colors))
    ladder = waterfall_ladder([row["values"].get(series_id) for row in rows])
    bars = []
    for index, (row, step) in enumerate(zip(rows, ladder)):
        positive = step["value"] >= 0
        bars.append({
            "index": index,
            "label": row["name"],
            "value": step["value"],
            "base": step["base"],
            "top": step["top"],
            "cumulative": step["base"],
            "is_positive": positive,
            "color": WATERFALL_UP_COLOR if positive else WATERFALL_DOWN_COLOR,
            "radius": list(WATERFALL_RADIUS),
        })

    extents = [step["base"] for step in ladder] + [step["top"] for step in ladder]
    geometry = _cartesian_base("waterfall", rows, options, extents)
    geometry["series_id"] = series_id
    geometry["bars"] = bars
    geometry["total"] = ladder[-1]["top"] if ladder else 0.0
    return geometry


def render_funnel(rows: List[Dict[str, Any]], colors: Dict[str, str], options: ChartOptions) -> Dict[str, Any]:
    """漏斗图：按输入顺序排列，宽度为相对最大值的百分比"""
    series_id = next(iter(colors))
    values = [row["values"].get(series_id) for row in rows]
    widths = funnel_widths(values)
    palette = settings.default_palette
    stages = []
    for index, (row, width) in enumerate(zip(rows, widths)):
        value = as_number(row["values"].get(series_id))
        stages.append({
            "index": index,
            "label": row["name"],
            "value": value,
            "width": width,
            "min_width": FUNNEL_MIN_WIDTH,
            "color": palette[index % len(palette)],
            "text": f"{row['name']}: {format_value(value)}",
        })

    return {
        "type": "funnel",
        "series_id": series_id,
        "stages": stages,
        "animation_duration": _animation(options),
    }


# 渲染函数注册表：新增图表类型只需加一项
RENDERERS: Dict[str, Renderer] = {
    "line": render_line,
    "bar": render_bar,
    "stacked-bar": render_stacked_bar,
    "area": render_area,
    "pie": render_pie,
    "scatter": render_scatter,
    "combo": render_combo,
    "table": render_table,
    "heatmap": render_heatmap,
    "waterfall": render_waterfall,
    "funnel": render_funnel,
}


def get_renderer(kind: str) -> Optional[Renderer]:
    return RENDERERS.get(kind)
