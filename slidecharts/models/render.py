"""渲染输出相关模型"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field


class Comparison(BaseModel):
    """对比指标"""
    is_increase: bool = Field(..., description="是否上涨")
    percentage: float = Field(..., ge=0.0, description="变化幅度绝对值（百分比）")
    change: float = Field(..., description="带符号的变化百分比")
    text: str = Field(..., description="展示文案，如 50.0%")
    index: int = Field(..., description="当前点下标")
    reference_index: int = Field(..., description="对比基准点下标")


class DerivedMetrics(BaseModel):
    """衍生指标"""
    comparison: Optional[Comparison] = Field(None, description="对比指标")
    comparison_text: Optional[str] = Field(None, description="自定义对比文案")
    overall_performance: Optional[str] = Field(None, description="整体表现，如 +24.8%")


class LegendEntry(BaseModel):
    """图例项"""
    id: str = Field(..., description="系列/扇区 ID")
    label: str = Field(..., description="显示名称")
    color: str = Field(..., description="颜色")


class Legend(BaseModel):
    """图例"""
    position: str = Field(..., description="top, bottom, left, right")
    placement: Literal["header", "bottom"] = Field(..., description="渲染区域")
    size: str = Field(..., description="small, medium, large")
    marker_size: int = Field(..., description="圆点直径")
    font_size: int = Field(..., description="字号")
    entries: List[LegendEntry] = Field(default_factory=list, description="图例项")


class RenderTree(BaseModel):
    """渲染指令树"""
    kind: str = Field(..., description="图表类型")
    status: Literal["rendered", "placeholder", "loading"] = Field("rendered", description="渲染状态")
    message: Optional[str] = Field(None, description="占位提示")
    title: Optional[str] = Field(None, description="图表标题")
    description: Optional[str] = Field(None, description="图表描述")
    geometry: Dict[str, Any] = Field(default_factory=dict, description="类型相关的几何数据")
    colors: Dict[str, str] = Field(default_factory=dict, description="系列/扇区颜色")
    legend: Optional[Legend] = Field(None, description="图例")
    tooltip: Optional[Dict[str, Any]] = Field(None, description="Tooltip 内容与样式")
    metrics: DerivedMetrics = Field(default_factory=DerivedMetrics, description="衍生指标")
    aria_label: str = Field("", description="无障碍标签")
    caption: str = Field("", description="无障碍说明")

    @property
    def is_placeholder(self) -> bool:
        return self.status != "rendered"
