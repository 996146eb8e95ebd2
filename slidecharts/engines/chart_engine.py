"""Chart Engine - 图表渲染引擎"""

from typing import Any, Dict, Mapping, Optional, Union
from pydantic import ValidationError
from slidecharts.core.config import settings
from slidecharts.core.constants import KIND_ALIASES, LABELED_KINDS, LOADING_MESSAGE
from slidecharts.engines.colors import ColorResolver
from slidecharts.engines.legend import build_caption, build_legend, build_tooltip
from slidecharts.engines.metrics import compute_comparison, format_performance, trend_performance
from slidecharts.engines.normalizer import ChartShapeError, normalize, validate_shape
from slidecharts.engines.renderers import RENDERERS, Renderer
from slidecharts.models.chart import ChartSpec, ScatterPoint
from slidecharts.models.render import DerivedMetrics, RenderTree
from slidecharts.utils.logger import log


def resolve_kind(spec: ChartSpec) -> str:
    """解析别名；bar + stacked 视为堆叠柱状图"""
    kind = KIND_ALIASES.get(spec.kind, spec.kind)
    if kind == "bar" and spec.options.stacked:
        return "stacked-bar"
    return kind


class ChartEngine:
    """
    图表渲染引擎

    render 是纯函数：不持有可变状态，不修改输入 spec。
    悬停下标与就绪状态由宿主作为参数传入。
    """

    def __init__(
        self,
        canonical_colors: Optional[Mapping[str, str]] = None,
        lenient_series_length: Optional[bool] = None,
        renderers: Optional[Dict[str, Renderer]] = None
    ):
        self.color_resolver = ColorResolver(canonical_colors=canonical_colors)
        if lenient_series_length is None:
            lenient_series_length = settings.lenient_series_length
        self.lenient_series_length = lenient_series_length
        self.renderers = dict(renderers or RENDERERS)

    def render(
        self,
        spec: Union[ChartSpec, Dict[str, Any]],
        hover_index: Optional[int] = None,
        ready: bool = True
    ) -> RenderTree:
        """
        渲染图表

        Args:
            spec: 图表规范（ChartSpec 或原始 dict）
            hover_index: 悬停的数据点下标，只影响对比指标
            ready: 宿主未就绪时返回加载占位

        Returns:
            RenderTree: 渲染指令树；任何结构问题都以占位返回，不抛异常
        """
        if not isinstance(spec, ChartSpec):
            try:
                spec = ChartSpec.model_validate(spec)
            except ValidationError as e:
                kind = spec.get("kind") or spec.get("type") if isinstance(spec, dict) else None
                log.warning(f"图表规范校验失败: {e.error_count()} 个错误")
                return self._placeholder(str(kind or "unknown"), "Invalid chart specification")

        kind = resolve_kind(spec)

        if not ready:
            return self._placeholder(kind, LOADING_MESSAGE, spec=spec, status="loading")

        renderer = self.renderers.get(kind)
        if renderer is None:
            log.warning(f"不支持的图表类型: {spec.kind}")
            return self._placeholder(kind, f"Unsupported chart type: {spec.kind}", spec=spec)

        try:
            validate_shape(spec, kind, lenient=self.lenient_series_length)
        except ChartShapeError as e:
            log.warning(f"图表数据结构错误: kind={kind}, code={e.code}, detail={e.detail}")
            return self._placeholder(kind, str(e), spec=spec)

        log.debug(f"渲染图表: kind={kind}, series={len(spec.series)}, labels={len(spec.labels)}")

        rows = normalize(spec, kind)
        colors = self.color_resolver.resolve(spec.series, kind)
        geometry = renderer(rows, colors, spec.options)
        aria_label, caption = build_caption(
            kind, spec.title, len(spec.series), len(spec.labels) if kind in LABELED_KINDS else 0
        )

        return RenderTree(
            kind=kind,
            status="rendered",
            title=spec.title,
            description=spec.description,
            geometry=geometry,
            colors=colors,
            legend=build_legend(kind, colors, spec.options),
            tooltip=build_tooltip(kind, rows, colors),
            metrics=self.derive_metrics(spec, kind, hover_index),
            aria_label=aria_label,
            caption=caption
        )

    def derive_metrics(self, spec: ChartSpec, kind: str, hover_index: Optional[int] = None) -> DerivedMetrics:
        """
        计算对比指标与整体表现

        只读取第一个系列；基准为 0 时对应指标置空，图表照常渲染。
        """
        if kind not in LABELED_KINDS or not spec.series:
            return DerivedMetrics()

        values = [None if isinstance(v, ScatterPoint) else v for v in spec.series[0].data]
        metrics = DerivedMetrics(overall_performance=format_performance(trend_performance(values)))

        if spec.options.show_comparison:
            if spec.options.comparison_text:
                metrics.comparison_text = spec.options.comparison_text
            else:
                metrics.comparison = compute_comparison(values, hover_index)
        return metrics

    def _placeholder(
        self,
        kind: str,
        message: str,
        spec: Optional[ChartSpec] = None,
        status: str = "placeholder"
    ) -> RenderTree:
        title = spec.title if spec else None
        aria_label, caption = build_caption(kind, title, len(spec.series) if spec else 0, 0)
        return RenderTree(
            kind=kind,
            status=status,
            message=message,
            title=title,
            description=spec.description if spec else None,
            aria_label=aria_label,
            caption=caption
        )


# 全局单例
_chart_engine = None


def get_chart_engine() -> ChartEngine:
    """获取 ChartEngine 单例"""
    global _chart_engine
    if _chart_engine is None:
        _chart_engine = ChartEngine()
    return _chart_engine


def render_chart(spec: Union[ChartSpec, Dict[str, Any]], hover_index: Optional[int] = None, ready: bool = True) -> RenderTree:
    """使用默认引擎渲染"""
    return get_chart_engine().render(spec, hover_index=hover_index, ready=ready)
