"""Derived-Metric Calculator - 衍生指标计算"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple
from slidecharts.core.constants import (
    HEATMAP_DARK_LABEL,
    HEATMAP_LABEL_THRESHOLD,
    HEATMAP_LIGHT_LABEL,
    HEATMAP_MIN_OPACITY
)
from slidecharts.models.render import Comparison
from slidecharts.utils.logger import log


def as_number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return 0.0


def percent_change(current: Optional[float], reference: Optional[float]) -> Optional[float]:
    """(current - reference) / reference * 100，基准为 0 或缺失时返回 None"""
    if current is None or reference is None:
        return None
    if reference == 0:
        log.debug("对比基准为 0，跳过百分比计算")
        return None
    return (current - reference) / reference * 100


def compute_comparison(
    values: Sequence[Optional[float]],
    hover_index: Optional[int] = None
) -> Optional[Comparison]:
    """
    计算对比指标

    默认比较最后两个点；传入悬停下标时：
    悬停最后一个点则与前一个点比较，否则与最后一个点比较。

    Args:
        values: 第一个系列的数值
        hover_index: 悬停的数据点下标（越界视为未悬停）

    Returns:
        Comparison，数据不足或基准为 0 时返回 None
    """
    if len(values) < 2:
        return None

    last = len(values) - 1
    if hover_index is None or not 0 <= hover_index <= last:
        index, reference_index = last, last - 1
    elif hover_index == last:
        index, reference_index = last, last - 1
    else:
        index, reference_index = hover_index, last

    pct = percent_change(values[index], values[reference_index])
    if pct is None:
        return None

    magnitude = abs(pct)
    return Comparison(
        is_increase=pct > 0,
        percentage=magnitude,
        change=pct,
        text=f"{magnitude:.1f}%",
        index=index,
        reference_index=reference_index
    )


def waterfall_ladder(values: Sequence[Optional[float]]) -> List[Dict[str, float]]:
    """
    瀑布图阶梯

    第 i 根柱的基线为前 i 个值之和，高度为自身值（可为负），None 计为 0。
    """
    steps = []
    cumulative = 0.0
    for value in values:
        amount = as_number(value)
        steps.append({
            "value": amount,
            "base": cumulative,
            "top": cumulative + amount,
        })
        cumulative += amount
    return steps


def funnel_widths(values: Sequence[Optional[float]]) -> List[float]:
    """漏斗宽度：value / max * 100，不强制递减"""
    numbers = [as_number(v) for v in values]
    if not numbers:
        return []
    max_value = max(numbers)
    if max_value <= 0:
        log.debug("漏斗最大值不为正，宽度全部置 0")
        return [0.0 for _ in numbers]
    return [n / max_value * 100 for n in numbers]


def heat_intensity(value: float, max_value: float) -> Tuple[float, float, str]:
    """
    热力图单元格强度

    Returns:
        (normalized, opacity, label_color)
    """
    normalized = value / max_value if max_value > 0 else 0.0
    opacity = max(HEATMAP_MIN_OPACITY, normalized)
    label_color = HEATMAP_LIGHT_LABEL if normalized > HEATMAP_LABEL_THRESHOLD else HEATMAP_DARK_LABEL
    return normalized, opacity, label_color


def pie_proportions(values: Sequence[Optional[float]]) -> List[float]:
    numbers = [as_number(v) for v in values]
    total = sum(numbers)
    if total == 0:
        return [0.0 for _ in numbers]
    return [n / total for n in numbers]


def stack_totals(rows: Sequence[Dict[str, Any]], series_ids: Sequence[str]) -> List[float]:
    """每个标签上各系列之和（None 计为 0）"""
    return [sum(as_number(row["values"].get(sid)) for sid in series_ids) for row in rows]


def trend_performance(values: Sequence[Optional[float]]) -> Optional[float]:
    """首尾增长率：(last - first) / first * 100"""
    if len(values) < 2:
        return None
    return percent_change(values[-1], values[0])


def target_performance(actual_total: Optional[float], target_total: Optional[float]) -> Optional[float]:
    """实际对目标：(actual - target) / target * 100"""
    return percent_change(actual_total, target_total)


def format_performance(pct: Optional[float]) -> Optional[str]:
    if pct is None:
        return None
    sign = "+" if pct > 0 else ""
    return f"{sign}{pct:.1f}%"


_METRIC_VALUE_PATTERN = re.compile(r"[$,K]")


def parse_metric_value(text: Any) -> Optional[float]:
    """
    解析展示用数值，如 "$156K" -> 156000.0

    只去掉 $、逗号与大写 K，小写 k 不视为千位单位；无法解析时返回 None。
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)
    if not isinstance(text, str):
        return None
    cleaned = _METRIC_VALUE_PATTERN.sub("", text)
    try:
        parsed = float(cleaned)
    except ValueError:
        return None
    return parsed * 1000 if "K" in text else parsed
