"""
chewcrew.core.config
~~~~~~~~~~~~~~~~~~~~

集中式配置管理，基于 pydantic-settings 自动从 ``.env`` 文件加载。

支持多环境配置（dev / test / prod），加载顺序为:
  1. 环境变量（最高优先级）
  2. ``.env.{ENVIRONMENT}`` 环境专属文件
  3. ``.env`` 基础文件
  4. 字段默认值（最低优先级）
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 项目根目录（chewcrew/core/config.py → 上三级）
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent

# 读取当前环境标识（在 Settings 类定义之前，用于决定加载哪个 .env 文件）
_CURRENT_ENV: str = os.getenv("ENVIRONMENT", "dev")


class Settings(BaseSettings):
    """全局配置对象，字段值按如下优先级加载：环境变量 > .env.{env} > .env > 默认值。"""

    # ── 基础 ──────────────────────────────────────────────────────────
    PROJECT_NAME: str = Field(default="ChewCrew API", description="项目名称")
    VERSION: str = Field(default="0.1.0", description="版本号")
    ENVIRONMENT: Literal["dev", "test", "prod"] = Field(
        default="dev",
        description="运行环境：dev / test / prod",
    )

    # ── 房间 ──────────────────────────────────────────────────────────
    ID_LENGTH: int = Field(default=11, ge=4, description="房间 ID 与 host ID 的长度")
    ID_MAX_ATTEMPTS: int = Field(
        default=5, ge=1, description="房间 ID 碰撞时的最大重新生成次数",
    )

    # ── 地点查询 ──────────────────────────────────────────────────────
    PLACE_PROVIDER: Literal["static", "http"] = Field(
        default="static",
        description="地点查询实现：static（本地 YAML 目录）/ http（外部服务）",
    )
    PLACE_CATALOG_FILE: str = Field(
        default="data/places.yaml",
        description="静态地点目录文件的相对路径（相对项目根目录）",
    )
    PLACE_API_URL: str = Field(
        default="http://127.0.0.1:9000",
        description="外部地点服务的根地址",
    )
    PLACE_API_KEY: str | None = Field(default=None, description="外部地点服务的 API Key")
    PLACE_LOOKUP_TIMEOUT: float = Field(
        default=5.0, gt=0, description="单次地点查询的超时时间（秒）",
    )
    PLACE_LOOKUP_ATTEMPTS: int = Field(
        default=2, ge=1, description="结束投票时地点查询的最大尝试次数",
    )

    # ── 服务 ──────────────────────────────────────────────────────────
    HOST: str = Field(default="0.0.0.0", description="服务监听地址")
    PORT: int = Field(default=8080, description="服务监听端口")
    LOG_LEVEL: str = Field(default="INFO", description="日志级别（可被环境属性覆盖）")
    LEGACY_ERROR_STATUS: bool = Field(
        default=False,
        description="为 True 时所有业务错误统一返回 HTTP 500（兼容旧客户端）",
    )
    RATE_LIMIT_ENABLED: bool | None = Field(
        default=None,
        description="是否开启接口限流；未设置时除 test 环境外均开启",
    )

    # ── Pydantic Settings ─────────────────────────────────────────────
    # 先加载 .env.{env} 再加载 .env，前者优先级更高
    model_config = SettingsConfigDict(
        env_file=(f".env.{_CURRENT_ENV}", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── 环境判断 ──────────────────────────────────────────────────────

    @property
    def is_prod(self) -> bool:
        """当前是否为生产环境。"""
        return self.ENVIRONMENT == "prod"

    @property
    def is_test(self) -> bool:
        """当前是否为测试环境。"""
        return self.ENVIRONMENT == "test"

    @property
    def is_dev(self) -> bool:
        """当前是否为开发环境。"""
        return self.ENVIRONMENT == "dev"

    # ── 环境差异化行为 ────────────────────────────────────────────────

    @property
    def debug(self) -> bool:
        """是否开启 debug 模式。仅 dev 环境开启。"""
        return self.is_dev

    @property
    def reload(self) -> bool:
        """是否开启热重载。仅 dev 环境开启。"""
        return self.is_dev

    @property
    def effective_log_level(self) -> str:
        """根据环境自动推断日志级别。

        - dev  → INFO
        - test → DEBUG（方便排查测试失败）
        - prod → WARNING（减少噪音）

        如果环境变量中显式设置了 LOG_LEVEL，会覆盖此默认推断。
        """
        env_log = os.getenv("LOG_LEVEL")
        if env_log:
            return env_log
        return {
            "dev": "INFO",
            "test": "DEBUG",
            "prod": "WARNING",
        }.get(self.ENVIRONMENT, "INFO")

    @property
    def rate_limit_enabled(self) -> bool:
        """是否开启限流。显式配置优先，否则仅 test 环境关闭。"""
        if self.RATE_LIMIT_ENABLED is not None:
            return self.RATE_LIMIT_ENABLED
        return not self.is_test

    @property
    def place_catalog_path(self) -> Path:
        """静态地点目录的绝对路径。"""
        path = Path(self.PLACE_CATALOG_FILE)
        return path if path.is_absolute() else PROJECT_ROOT / path


@lru_cache
def get_settings() -> Settings:
    """获取全局 Settings 单例（带缓存，避免重复解析 .env）。"""
    return Settings()


settings: Settings = get_settings()
