"""
身份提供方引导路由
获取管理令牌并注册配置中的演示用户
"""

from fastapi import APIRouter, Depends

from core.deps import get_identity_bridge
from utils.identity import IdentityBridge

router = APIRouter(tags=["身份提供方"])


@router.get("/admin", summary="注册演示用户")
async def register_demo_user(
    bridge: IdentityBridge = Depends(get_identity_bridge)
):
    """每次调用都会重新获取令牌；外部调用失败时返回 500"""
    return await bridge.register_demo_user()
