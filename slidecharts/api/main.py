"""FastAPI 主应用"""

from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from slidecharts.core.config import settings
from slidecharts.core.constants import CHART_KINDS, KIND_ALIASES
from slidecharts.engines.chart_engine import get_chart_engine
from slidecharts.engines.scale import TREND_LAYOUT, ScaleAdapter
from slidecharts.models.chart import ChartRenderRequest
from slidecharts.models.render import RenderTree
from slidecharts.utils.logger import log


# 创建应用
app = FastAPI(
    title="Slide Charts",
    description="演示文稿图表渲染引擎",
    version="0.1.0",
    debug=settings.debug
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """根路径"""
    return {
        "name": "Slide Charts",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health():
    """健康检查"""
    return {"status": "healthy"}


@app.get("/kinds")
async def kinds():
    """支持的图表类型"""
    return {
        "kinds": sorted(CHART_KINDS),
        "aliases": KIND_ALIASES
    }


@app.post("/render", response_model=RenderTree)
async def render(request: ChartRenderRequest):
    """
    渲染图表

    Args:
        spec: 图表规范
        hover_index: 悬停的数据点下标（可选）
        ready: 宿主是否已就绪
    """
    log.info(f"收到渲染请求: kind={request.spec.get('kind') or request.spec.get('type')}")

    engine = get_chart_engine()
    return engine.render(request.spec, hover_index=request.hover_index, ready=request.ready)


@app.get("/scale")
async def scale(
    width: Optional[float] = Query(None, description="画布宽度"),
    height: Optional[float] = Query(None, description="画布高度")
):
    """
    计算响应式缩放系数

    返回缩放系数与趋势图版式的缩放后尺寸
    """
    try:
        adapter = ScaleAdapter(width, height)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "scale": adapter.scale,
        "measurements": adapter.scale_measurements(TREND_LAYOUT)
    }
