"""渲染函数测试"""

import pytest
from slidecharts.core.constants import (
    CHART_KINDS,
    FLAT_RADIUS,
    STACK_TOP_RADIUS,
    WATERFALL_DOWN_COLOR,
    WATERFALL_UP_COLOR
)
from slidecharts.engines.renderers import (
    RENDERERS,
    format_value,
    get_renderer,
    render_area,
    render_bar,
    render_combo,
    render_funnel,
    render_heatmap,
    render_line,
    render_pie,
    render_stacked_bar,
    render_table,
    render_waterfall,
    truncate_label
)
from slidecharts.models.chart import ChartOptions, HeatmapCell, TableData


def _rows(labels, **series):
    return [
        {"name": label, "values": {sid: values[i] for sid, values in series.items()}}
        for i, label in enumerate(labels)
    ]


def test_registry_covers_all_kinds():
    """测试注册表覆盖全部类型"""
    assert set(RENDERERS) == CHART_KINDS
    assert get_renderer("pizza") is None


def test_helpers():
    """测试标签截断与数值格式化"""
    assert truncate_label("January") == "January"
    assert truncate_label("A very long category") == "A very lon..."
    assert format_value(12.0) == "12"
    assert format_value(12.5) == "12.5"
    assert format_value(None) == "-"


def test_line_splits_at_none():
    """测试折线在 None 处断开"""
    rows = _rows(["a", "b", "c", "d"], A=[1, None, 3, 4])
    geometry = render_line(rows, {"A": "#111111"}, ChartOptions())
    series = geometry["series"][0]
    assert len(series["segments"]) == 2
    assert [p["value"] for p in series["segments"][1]] == [3, 4]
    assert len(series["markers"]) == 3
    assert series["interpolation"] == "linear"
    assert geometry["categories"] == ["a", "b", "c", "d"]


def test_line_options():
    """测试曲线与圆点选项"""
    rows = _rows(["a", "b"], A=[1, 2])
    geometry = render_line(rows, {"A": "#111111"}, ChartOptions(curved=True, show_dots=False, show_grid=False, animate=False))
    assert geometry["series"][0]["interpolation"] == "monotone"
    assert geometry["series"][0]["markers"] == []
    assert geometry["grid"] is None
    assert geometry["animation_duration"] == 0


def test_single_series_bar():
    """测试单系列柱状图"""
    rows = _rows(["Q1", "Q2", "Q3"], Revenue=[100, 150, 120])
    geometry = render_bar(rows, {"Revenue": "#4A3AFF"}, ChartOptions())
    assert geometry["layout"] == "single"
    assert geometry["max_bar_size"] == 40
    bars = geometry["series"][0]["bars"]
    assert [bar["value"] for bar in bars] == [100, 150, 120]
    assert all(bar["base"] == 0.0 for bar in bars)


def test_grouped_bar_skips_none():
    """测试分组柱状图跳过缺失值"""
    rows = _rows(["Q1", "Q2"], A=[1, None], B=[3, 4])
    geometry = render_bar(rows, {"A": "#111111", "B": "#222222"}, ChartOptions())
    assert geometry["layout"] == "grouped"
    assert geometry["max_bar_size"] is None
    assert len(geometry["series"][0]["bars"]) == 1
    assert len(geometry["series"][1]["bars"]) == 2


def test_stacked_bar_totals_and_radius():
    """测试堆叠总和与顶部圆角"""
    rows = _rows(["Q1", "Q2", "Q3"], A=[10, 20, None], B=[5, None, 7])
    geometry = render_stacked_bar(rows, {"A": "#962DFF", "B": "#C893FD"}, ChartOptions(stacked=True))
    assert geometry["stack_totals"] == [15.0, 20.0, 7.0]

    segments = {s["id"]: s["segments"] for s in geometry["series"]}
    # Q1: A 在下、B 在上
    assert segments["A"][0]["radius"] == FLAT_RADIUS
    assert segments["B"][0]["radius"] == STACK_TOP_RADIUS
    assert segments["B"][0]["base"] == 10
    # Q2 只有 A，A 为顶部
    assert segments["A"][1]["radius"] == STACK_TOP_RADIUS
    # Q3 只有 B，从 0 开始
    assert segments["B"][1]["base"] == 0.0
    assert segments["B"][1]["top"] == 7

    heights = [0.0, 0.0, 0.0]
    for series in geometry["series"]:
        for segment in series["segments"]:
            heights[segment["index"]] += segment["top"] - segment["base"]
    assert heights == geometry["stack_totals"]


def test_area_gradient_and_stacking():
    """测试面积图渐变与堆叠"""
    rows = _rows(["a", "b"], A=[1, 2], B=[3, 4])
    colors = {"A": "#1e3a8a", "B": "#3b82f6"}

    geometry = render_area(rows, colors, ChartOptions(stacked=True))
    stops = geometry["series"][0]["fill"]["stops"]
    assert stops[0] == {"offset": "0%", "color": "#1e3a8a", "opacity": 0.9}
    assert stops[1]["color"] == "rgba(30, 58, 138, 0.7)"
    assert stops[2]["color"] == "rgba(30, 58, 138, 0.5)"
    assert geometry["series"][1]["stack_id"] == "stack"
    assert geometry["series"][1]["segments"][0][0]["base"] == 1
    assert geometry["series"][1]["segments"][0][1]["top"] == 6

    unstacked = render_area(rows, colors, ChartOptions())
    assert [s["stack_id"] for s in unstacked["series"]] == ["0", "1"]
    assert unstacked["series"][1]["segments"][0][0]["base"] == 0.0


def test_pie_angles():
    """测试饼图扇区"""
    rows = [{"name": "Mobile", "value": 45}, {"name": "Desktop", "value": 35}, {"name": "Tablet", "value": 20}]
    colors = {"Mobile": "#1e3a8a", "Desktop": "#1e40af", "Tablet": "#1d4ed8"}
    geometry = render_pie(rows, colors, ChartOptions())
    slices = geometry["slices"]
    assert geometry["total"] == 100
    assert slices[0]["start_angle"] == 0.0
    assert slices[-1]["end_angle"] == pytest.approx(360.0)
    assert slices[0]["proportion"] == pytest.approx(0.45)
    assert slices[1]["color"] == "#1e40af"


def test_combo_splits_bar_and_lines():
    """测试组合图"""
    rows = _rows(["a", "b"], Sales=[10, 20], Margin=[1, 2], Target=[15, 15])
    colors = {"Sales": "#4A3AFF", "Margin": "#1e40af", "Target": "#C893FD"}
    geometry = render_combo(rows, colors, ChartOptions())
    assert geometry["bars"]["id"] == "Sales"
    assert geometry["bars"]["radius"] == STACK_TOP_RADIUS
    assert [line["id"] for line in geometry["lines"]] == ["Margin", "Target"]
    assert all(line["interpolation"] == "monotone" for line in geometry["lines"])
    assert all(len(line["markers"]) == 2 for line in geometry["lines"])


def test_table_passthrough():
    """测试表格透传"""
    table = TableData(headers=["Name", "Value"], rows=[["A", 1], ["B", None]])
    geometry = render_table(table, {}, ChartOptions())
    assert geometry["headers"] == ["Name", "Value"]
    assert geometry["rows"] == [["A", 1], ["B", None]]
    assert geometry["column_count"] == 2
    assert geometry["row_count"] == 2


def test_heatmap_grid():
    """测试热力图网格与透明度"""
    cells = [
        HeatmapCell(x="Mon", y="AM", value=100),
        HeatmapCell(x="Tue", y="AM", value=2),
        HeatmapCell(x="Mon", y="PM", value=40),
    ]
    geometry = render_heatmap(cells, {}, ChartOptions())
    assert geometry["columns"] == 2
    assert geometry["rows"] == 2
    assert geometry["x_categories"] == ["Mon", "Tue"]
    hot, cold, mid = geometry["cells"]
    assert hot["opacity"] == 1.0
    assert hot["label_color"] == "white"
    assert cold["opacity"] == pytest.approx(0.1)
    assert mid["label_color"] == "#1e3a8a"
    assert mid["row"] == 1
    assert hot["title"] == "Mon, AM: 100"


def test_waterfall_colors():
    """测试瀑布图正负着色"""
    rows = _rows(["Start", "Loss", "Gain"], Flow=[100, -30, 50])
    geometry = render_waterfall(rows, {"Flow": "#111111", "Other": "#222222"}, ChartOptions())
    bars = geometry["bars"]
    assert geometry["series_id"] == "Flow"
    assert [bar["color"] for bar in bars] == [WATERFALL_UP_COLOR, WATERFALL_DOWN_COLOR, WATERFALL_UP_COLOR]
    assert bars[1]["base"] == 100
    assert bars[1]["top"] == 70
    assert bars[2]["cumulative"] == 70
    assert geometry["total"] == 120


def test_funnel_stages():
    """测试漏斗阶段"""
    rows = _rows(["Visit", "Signup", "Buy"], Users=[1000, 600, 300])
    geometry = render_funnel(rows, {"Users": "#111111"}, ChartOptions())
    stages = geometry["stages"]
    assert [stage["width"] for stage in stages] == pytest.approx([100.0, 60.0, 30.0])
    assert stages[0]["text"] == "Visit: 1000"
    assert stages[0]["min_width"] == 120
    assert stages[0]["color"] != stages[1]["color"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
