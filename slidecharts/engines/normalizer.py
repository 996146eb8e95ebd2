"""Data Normalizer - 数据规整"""

from typing import Any, Dict, List, Optional
from slidecharts.core.constants import LABELED_KINDS, SERIES_REQUIRED_KINDS
from slidecharts.models.chart import ChartSeries, ChartSpec, ScatterPoint
from slidecharts.utils.logger import log


class ChartShapeError(Exception):
    """图表数据结构错误（结构化）"""

    def __init__(self, code: str, message: str, detail: Dict[str, Any] | None = None):
        super().__init__(message)
        self.code = code
        self.detail = detail or {}


def validate_shape(spec: ChartSpec, kind: str, lenient: bool = False) -> None:
    """
    校验图表数据结构

    Args:
        spec: 图表规范
        kind: 解析后的图表类型
        lenient: 是否容忍 series 与 labels 长度不一致

    Raises:
        ChartShapeError: 结构不满足该类型要求
    """
    if kind == "table":
        if spec.table_data is None:
            raise ChartShapeError("missing_table_data", "No table data provided")
        return

    if kind == "heatmap":
        if not spec.heatmap_data:
            raise ChartShapeError("missing_heatmap_data", "No heatmap data provided")
        return

    ids = spec.series_ids
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ChartShapeError(
            "duplicate_series",
            f"Duplicate series id: {', '.join(duplicates)}",
            {"series": duplicates}
        )

    if kind in SERIES_REQUIRED_KINDS and not spec.series:
        raise ChartShapeError("missing_series", "No data series provided")

    if kind not in LABELED_KINDS or lenient:
        return

    expected = len(spec.labels)
    for series in spec.series:
        if len(series.data) != expected:
            raise ChartShapeError(
                "length_mismatch",
                f"Series '{series.id}' has {len(series.data)} values for {expected} labels",
                {"series": series.id, "values": len(series.data), "labels": expected}
            )


def _scalar(value: Any) -> Optional[float]:
    if isinstance(value, ScatterPoint):
        return None
    return value


def _value_at(series: ChartSeries, index: int) -> Optional[float]:
    if index < len(series.data):
        return _scalar(series.data[index])
    return None


def normalize_rows(spec: ChartSpec) -> List[Dict[str, Any]]:
    """
    按 labels 生成行数据

    row[i]["name"] = labels[i]，row[i]["values"][series.id] = series.data[i]，保留 None。
    标签与数值分开存放，系列 ID 不会覆盖标签。
    数据不足时读到 None，多余的数值丢弃。
    """
    for series in spec.series:
        if len(series.data) != len(spec.labels):
            log.warning(
                f"系列长度与标签不一致: series={series.id}, "
                f"values={len(series.data)}, labels={len(spec.labels)}"
            )

    rows = []
    for index, label in enumerate(spec.labels):
        values = {series.id: _value_at(series, index) for series in spec.series}
        rows.append({"name": label, "values": values})
    return rows


def normalize_pie(spec: ChartSpec) -> List[Dict[str, Any]]:
    """饼图：每个系列一个扇区，只取 data[0]"""
    return [
        {"name": series.id, "value": _value_at(series, 0)}
        for series in spec.series
    ]


def normalize_scatter(spec: ChartSpec) -> List[Dict[str, Any]]:
    """散点图：每个系列一组点，跳过标量"""
    rows = []
    for series in spec.series:
        points = [p for p in series.data if isinstance(p, ScatterPoint)]
        skipped = len(series.data) - len(points)
        if skipped:
            log.debug(f"散点系列忽略非点数据: series={series.id}, skipped={skipped}")
        rows.append({"name": series.id, "points": points})
    return rows


def normalize(spec: ChartSpec, kind: str) -> Any:
    """
    按图表类型规整数据

    表格与热力图直接返回专用结构，不做行转换。
    """
    if kind == "pie":
        return normalize_pie(spec)
    if kind == "scatter":
        return normalize_scatter(spec)
    if kind == "table":
        return spec.table_data
    if kind == "heatmap":
        return list(spec.heatmap_data or [])
    return normalize_rows(spec)
