"""PillCare bot bootstrap.

Loads configuration, builds the one shared database client and the Telegram
application that carries it. Command handlers live elsewhere and reach the
client through ``context.bot_data["db"]``.
"""
import logging
from urllib.parse import urlparse
from dotenv import load_dotenv
from supabase import create_client
from telegram.ext import Application
from pillcare import setup_logging
from pillcare.config import load_config

log = logging.getLogger("pillcare.bot")

WEBHOOK_PATH = "webhook"

def create_db_client(config):
    return create_client(config.supabase_url, config.supabase_service_key)

def webhook_route(webhook_url):
    """Return (url_path, webhook_url) so the listener serves the path Telegram posts to."""
    path = urlparse(webhook_url).path.strip("/")
    if path:
        return path, webhook_url
    return WEBHOOK_PATH, webhook_url.rstrip("/") + "/" + WEBHOOK_PATH

def build_application(config, db):
    app = Application.builder().token(config.bot_token).build()
    app.bot_data["config"] = config
    app.bot_data["db"] = db
    return app

def main():
    load_dotenv()
    setup_logging()
    result = load_config()
    if not result.ok:
        # fatal: fix the environment and restart
        log.error("Startup aborted: %s", result.error)
        raise SystemExit(1)
    config = result.config
    db = create_db_client(config)
    log.info("Database client ready: %s", config.supabase_url)
    app = build_application(config, db)
    if config.webhook_url:
        url_path, webhook_url = webhook_route(config.webhook_url)
        log.info("Webhook mode on port %s: %s", config.port, webhook_url)
        app.run_webhook(listen="0.0.0.0", port=config.port, url_path=url_path, webhook_url=webhook_url)
    else:
        log.info("WEBHOOK_URL not set, polling")
        app.run_polling()

if __name__ == "__main__":
    main()
