"""
系统配置管理
统一管理所有配置项，支持环境变量覆盖
"""

import logging
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import Optional, Dict
from urllib.parse import quote_plus

# 获取backend目录的绝对路径
BACKEND_DIR = Path(__file__).parent.parent.resolve()
ENV_FILE = BACKEND_DIR / ".env"


class Settings(BaseSettings):
    """系统配置"""

    # 应用信息
    app_name: str = "Exam Records Service"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # 服务监听
    host: str = "0.0.0.0"
    port: int = 3000

    # 数据库配置（DATABASE_URL 优先，否则按 MySQL 参数拼接）
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "exam_records"
    db_time_zone: str = "+00:00"

    @property
    def db_url(self) -> str:
        if self.database_url:
            return self.database_url
        encoded_user = quote_plus(self.db_user)
        encoded_pwd = quote_plus(self.db_password)
        return f"mysql+aiomysql://{encoded_user}:{encoded_pwd}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def is_mysql(self) -> bool:
        return self.db_url.startswith("mysql")

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # 文件存储
    upload_dir: str = "uploads"
    public_base_url: str = "http://localhost:3000"

    # 身份提供方（Keycloak 兼容）
    idp_token_url: str = "http://localhost:8080/realms/master/protocol/openid-connect/token"
    idp_admin_users_url: str = "http://localhost:8080/admin/realms/master/users"
    idp_client_id: str = "admin-cli"
    idp_client_secret: str = ""
    idp_admin_username: str = ""
    idp_admin_password: str = ""

    # 演示用户（GET /admin 注册）
    idp_demo_username: str = "demo"
    idp_demo_email: str = "demo@example.com"
    idp_demo_password: str = ""
    idp_demo_attributes: Dict[str, str] = {"nokp": "", "nama": "", "phone": ""}

    # PDF 顶部徽章图片（可选，文件不存在时跳过）
    pdf_crest_image: Optional[str] = None

    class Config:
        env_file = str(ENV_FILE)
        env_file_encoding = "utf-8"
        extra = "ignore"


_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """
    获取配置单例
    支持运行时重新加载
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()

        # 身份提供方凭据必须来自外部配置
        if not _settings_instance.idp_admin_password or not _settings_instance.idp_client_secret:
            logging.getLogger("core.config").warning(
                "身份提供方凭据未配置（IDP_ADMIN_PASSWORD / IDP_CLIENT_SECRET），GET /admin 将无法获取令牌"
            )
    return _settings_instance


def reload_settings():
    """重新加载配置"""
    global _settings_instance
    _settings_instance = Settings()
    return _settings_instance
