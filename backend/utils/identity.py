"""
身份提供方桥接
通过管理 API 获取令牌并注册演示用户（Keycloak 兼容）
"""

import logging
from typing import Optional

import httpx

from core.config import Settings, get_settings
from core.errors import ExternalServiceException

logger = logging.getLogger(__name__)


class IdentityBridge:
    """
    身份提供方客户端

    每次调用都重新获取令牌，不缓存、不重试；超时沿用 httpx 默认值
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient()

    async def fetch_access_token(self) -> str:
        """使用密码模式获取管理员访问令牌"""
        s = self.settings
        form = {
            "grant_type": "password",
            "client_id": s.idp_client_id,
            "username": s.idp_admin_username,
            "password": s.idp_admin_password,
            "client_secret": s.idp_client_secret,
        }
        response = await self.client.post(s.idp_token_url, data=form)
        response.raise_for_status()
        token = response.json().get("access_token")
        if not token:
            raise ExternalServiceException("Token response did not contain an access_token")
        return token

    def build_user_payload(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        attributes: Optional[dict] = None
    ) -> dict:
        """构建用户注册请求体，未指定的字段取配置中的演示用户"""
        s = self.settings
        return {
            "enabled": True,
            "username": username or s.idp_demo_username,
            "email": email or s.idp_demo_email,
            "attributes": dict(attributes if attributes is not None else s.idp_demo_attributes),
            "credentials": [
                {
                    "type": "password",
                    "value": password or s.idp_demo_password,
                    "temporary": False,
                }
            ],
        }

    async def register_user(self, token: str, payload: dict) -> dict:
        """调用管理端点创建用户"""
        response = await self.client.post(
            self.settings.idp_admin_users_url,
            json=payload,
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()

        try:
            data = response.json() if response.content else None
        except ValueError:
            data = response.text
        return {
            "status": response.status_code,
            "location": response.headers.get("Location"),
            "data": data,
        }

    async def register_demo_user(self) -> dict:
        """获取新令牌并注册演示用户"""
        payload = self.build_user_payload()
        try:
            token = await self.fetch_access_token()
            result = await self.register_user(token, payload)
        except httpx.HTTPStatusError as e:
            logger.error(f"身份提供方返回错误: {e.response.status_code} {e.request.url}")
            raise ExternalServiceException(str(e))
        except httpx.HTTPError as e:
            logger.error(f"身份提供方请求失败: {e!r}")
            raise ExternalServiceException(str(e) or e.__class__.__name__)

        logger.info(f"已注册演示用户: {payload['username']} (HTTP {result['status']})")
        return result

    async def aclose(self):
        await self.client.aclose()
