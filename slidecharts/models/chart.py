"""图表规范相关模型"""

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class ScatterPoint(BaseModel):
    """散点"""
    x: float = Field(..., description="X 坐标")
    y: float = Field(..., description="Y 坐标")
    z: Optional[float] = Field(None, description="点大小（可选）")


class ChartSeries(BaseModel):
    """数据系列"""
    id: str = Field(..., description="系列名称（唯一，用于图例）")
    data: List[Optional[Union[ScatterPoint, float]]] = Field(
        default_factory=list,
        description="按 labels 对齐的数值，散点图为 {x, y, z} 点"
    )
    color: Optional[str] = Field(None, description="显式指定的颜色")

    @field_validator("data", mode="before")
    @classmethod
    def wrap_scalar(cls, v: Any) -> Any:
        # 饼图允许直接给单个数值
        if v is None:
            return []
        if isinstance(v, (int, float, dict)):
            return [v]
        return v


class TableData(BaseModel):
    """表格数据"""
    headers: List[str] = Field(..., description="表头")
    rows: List[List[Optional[Union[str, float, int]]]] = Field(default_factory=list, description="数据行")


class HeatmapCell(BaseModel):
    """热力图单元格"""
    x: Union[str, float, int] = Field(..., description="X 分类")
    y: Union[str, float, int] = Field(..., description="Y 分类")
    value: float = Field(..., description="数值")


class ChartOptions(BaseModel):
    """图表展示选项"""
    model_config = ConfigDict(populate_by_name=True)

    show_legend: bool = Field(True, alias="showLegend", description="是否显示图例")
    legend_position: Literal["top", "bottom", "left", "right"] = Field(
        "bottom", alias="legendPosition", description="图例位置"
    )
    legend_size: Literal["small", "medium", "large"] = Field(
        "small", alias="legendSize", description="图例尺寸"
    )
    show_grid: bool = Field(True, alias="showGrid", description="是否显示网格")
    curved: bool = Field(False, description="折线/面积是否平滑")
    stacked: bool = Field(False, description="柱状/面积是否堆叠")
    animate: bool = Field(True, description="是否动画")
    show_dots: bool = Field(True, alias="showDots", description="折线是否显示数据点")
    show_comparison: bool = Field(False, alias="showComparison", description="是否显示对比指标")
    comparison_text: Optional[str] = Field(None, alias="comparisonText", description="自定义对比文案")


# 允许平铺在 spec 顶层的选项字段（兼容旧的 props 结构），驼峰与下划线写法都映射到字段名
_OPTION_KEYS: Dict[str, str] = {}
for _name, _field in ChartOptions.model_fields.items():
    _OPTION_KEYS[_name] = _name
    if _field.alias:
        _OPTION_KEYS[_field.alias] = _name


def _canonical_option_keys(options: Dict[str, Any]) -> Dict[str, Any]:
    return {_OPTION_KEYS.get(key, key): value for key, value in options.items()}


class ChartSpec(BaseModel):
    """图表规范"""
    model_config = ConfigDict(populate_by_name=True)

    # kind 不做枚举校验：未知类型交给引擎渲染占位
    kind: str = Field(..., validation_alias=AliasChoices("kind", "type"), description="图表类型")
    labels: List[str] = Field(default_factory=list, description="分类/时间标签（饼图不需要）")
    series: List[ChartSeries] = Field(default_factory=list, description="数据系列")
    options: ChartOptions = Field(default_factory=ChartOptions, description="展示选项")
    title: Optional[str] = Field(None, description="图表标题")
    description: Optional[str] = Field(None, description="图表描述")
    table_data: Optional[TableData] = Field(
        None, validation_alias=AliasChoices("table_data", "tableData"), description="表格数据"
    )
    heatmap_data: Optional[List[HeatmapCell]] = Field(
        None, validation_alias=AliasChoices("heatmap_data", "heatmapData"), description="热力图数据"
    )

    @model_validator(mode="before")
    @classmethod
    def lift_flat_options(cls, data: Any) -> Any:
        """
        把平铺在顶层的选项字段收进 options

        同一选项同时出现时 options 中的值优先，与写法（驼峰/下划线）无关。
        """
        if not isinstance(data, dict):
            return data
        flat = {k: v for k, v in data.items() if k in _OPTION_KEYS}
        if not flat:
            return data
        data = {k: v for k, v in data.items() if k not in _OPTION_KEYS}
        options = data.get("options")
        if isinstance(options, ChartOptions):
            options = options.model_dump(exclude_unset=True)
        elif options is None:
            options = {}
        elif not isinstance(options, dict):
            raise ValueError("options 必须是对象")
        data["options"] = {**_canonical_option_keys(flat), **_canonical_option_keys(options)}
        return data

    @field_validator("labels", mode="before")
    @classmethod
    def stringify_labels(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]
        return v

    @property
    def series_ids(self) -> List[str]:
        return [s.id for s in self.series]


class ChartRenderRequest(BaseModel):
    """渲染请求"""
    spec: Dict[str, Any] = Field(..., description="图表规范（原始 JSON）")
    hover_index: Optional[int] = Field(None, description="当前悬停的数据点下标")
    ready: bool = Field(True, description="宿主是否已就绪（False 时返回加载占位）")
