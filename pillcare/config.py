"""Bot configuration read from the process environment.

``load_config`` never raises: it returns a ``ConfigResult`` and the entry
point decides whether to abort.
"""
import os
from dataclasses import dataclass
from typing import NamedTuple, Optional

DEFAULT_PORT = 3000


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class BotConfig:
    bot_token: str
    supabase_url: str
    supabase_service_key: str
    webhook_url: Optional[str] = None
    port: int = DEFAULT_PORT


class ConfigResult(NamedTuple):
    config: Optional[BotConfig]
    error: Optional[ConfigError]

    @property
    def ok(self):
        return self.error is None


def load_config(environ=None) -> ConfigResult:
    env = os.environ if environ is None else environ
    token = env.get("BOT_TOKEN")
    if not token:
        return ConfigResult(None, ConfigError("BOT_TOKEN is required"))
    url = env.get("SUPABASE_URL")
    key = env.get("SUPABASE_SERVICE_KEY")
    if not url or not key:
        return ConfigResult(None, ConfigError("SUPABASE_URL and SUPABASE_SERVICE_KEY are required"))
    raw_port = env.get("PORT") or str(DEFAULT_PORT)
    try:
        port = int(raw_port)
    except ValueError:
        return ConfigResult(None, ConfigError(f"PORT must be an integer, got {raw_port!r}"))
    return ConfigResult(BotConfig(
        bot_token=token,
        supabase_url=url,
        supabase_service_key=key,
        webhook_url=env.get("WEBHOOK_URL") or None,
        port=port,
    ), None)
