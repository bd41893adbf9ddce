from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5572


@dataclass
class RcConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    user: str | None = None
    password: str | None = None
    timeout: float | None = None

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def auth(self) -> tuple[str, str] | None:
        if not self.user:
            return None
        return self.user, self.password or ""


def parse_port(value: str) -> int:
    port = int(value)
    if port < 1 or port > 65535:
        raise ValueError(f"port out of range: {port}")
    return port


def config_from_env(environ: dict[str, str] | None = None) -> RcConfig:
    env = os.environ if environ is None else environ
    port_value = env.get("LAZYFILE_RC_PORT")
    return RcConfig(
        host=env.get("LAZYFILE_RC_HOST") or DEFAULT_HOST,
        port=parse_port(port_value) if port_value else DEFAULT_PORT,
        user=env.get("RCLONE_RC_USER") or None,
        password=env.get("RCLONE_RC_PASS") or None,
    )
