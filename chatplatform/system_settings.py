# chatplatform/system_settings.py
"""
Cấu hình kết nối Agent Chat API:
- URL + version của API
- Access token và auth scheme
- Region, timeout, số lần retry

Đọc từ file config (KEY=VALUE) trước, sau đó tới biến môi trường.
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

AGENT_API_CONFIG_FILE = Path(os.environ.get("AGENT_API_CONFIG_FILE", "agent_api.env"))


def load_config_file(path: Path) -> Dict[str, str]:
    """Parse file KEY=VALUE; bỏ qua dòng trống và comment (#)."""
    config: Dict[str, str] = {}
    if not path.exists():
        return config
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                config[key.strip()] = value.strip()
    except OSError as e:
        logger.warning(f"[system_settings] Error loading config file {path}: {e}")
    return config


_file_config = load_config_file(AGENT_API_CONFIG_FILE)


def env(key: str, default: str = "") -> str:
    return _file_config.get(key) or os.environ.get(key, default)


# ================== AGENT API ==================

@dataclass
class AgentAPIConfig:
    API_URL: str
    API_VERSION: str
    ACCESS_TOKEN: str
    AUTH_SCHEME: str
    REGION: Optional[str]
    TIMEOUT: int
    RETRY: int

    @property
    def base_url(self) -> str:
        """URL gốc cho Agent API, vd: https://api.livechatinc.com/v3.5/agent"""
        return f"{self.API_URL.rstrip('/')}/v{self.API_VERSION}/agent"


def load_agent_api_config() -> AgentAPIConfig:
    return AgentAPIConfig(
        API_URL=env("AGENT_API_URL", "https://api.livechatinc.com"),
        API_VERSION=env("AGENT_API_VERSION", "3.5"),
        ACCESS_TOKEN=env("AGENT_API_TOKEN", ""),
        AUTH_SCHEME=env("AGENT_API_AUTH_SCHEME", "Bearer"),
        REGION=env("AGENT_API_REGION") or None,
        TIMEOUT=int(env("AGENT_API_TIMEOUT", "30")),
        RETRY=int(env("AGENT_API_RETRY", "3")),
    )


AGENT_API = load_agent_api_config()
