"""
Telegram Bot — the user-facing interface.

Connects Telegram to the weather controller: any text message is a
city search. Also serves the weather dashboard.

Usage:
  python bot.py
"""

import logging
import threading

from telegram import Update
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CommandHandler,
    MessageHandler,
    filters,
    ContextTypes,
)

from config import LOG_LEVEL, TELEGRAM_BOT_TOKEN, OWNER_CHAT_ID
from models import ViewState
from orchestrator import WeatherController
from render import LOADING_TEXT, render_text

logging.basicConfig(
    format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    level=LOG_LEVEL,
)
logging.getLogger("httpx").setLevel(logging.WARNING)
log = logging.getLogger("bot")

controller = WeatherController()

TELEGRAM_LIMIT = 4000


# ── Auth ────────────────────────────────────────────────────────

def owner_only(func):
    """Restrict to OWNER_CHAT_ID. Set to 0 in .env to allow everyone."""
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE):
        if OWNER_CHAT_ID and update.effective_chat.id != OWNER_CHAT_ID:
            await update.message.reply_text("Not authorized.")
            return
        return await func(update, context)
    return wrapper


# ── Controller → Telegram callback ──────────────────────────────

_app_ref = None  # set after app is built


def chunks(text: str, size: int = TELEGRAM_LIMIT):
    for i in range(0, len(text), size):
        yield text[i : i + size]


async def send_to_telegram(state: ViewState):
    """Callback: push finished searches to the owner chat."""
    if _app_ref and OWNER_CHAT_ID:
        for part in chunks(render_text(state)):
            await _app_ref.bot.send_message(chat_id=OWNER_CHAT_ID, text=part)


# ── Command handlers ────────────────────────────────────────────

@owner_only
async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(
        "Weather Now. Commands:\n\n"
        "/weather <city>  — current conditions and forecast\n"
        "/now  — show the last result again\n"
        "/help  — show this message\n\n"
        "Or just send a city name."
    )


@owner_only
async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await cmd_start(update, context)


@owner_only
async def cmd_now(update: Update, context: ContextTypes.DEFAULT_TYPE):
    for part in chunks(render_text(controller.state)):
        await update.message.reply_text(part)


async def _search(update: Update, text: str):
    if not text.strip():
        await update.message.reply_text("Usage: /weather <city>")
        return
    await update.message.reply_text(LOADING_TEXT)
    state = await controller.submit(text)
    if state is None:
        return  # a newer search will answer
    # The owner chat already got the result through the state callback.
    if OWNER_CHAT_ID and update.effective_chat.id == OWNER_CHAT_ID:
        return
    for part in chunks(render_text(state)):
        await update.message.reply_text(part)


@owner_only
async def cmd_weather(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await _search(update, " ".join(context.args or []))


@owner_only
async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Treat plain text messages as a city search."""
    text = update.message.text
    if not text or not text.strip():
        return
    await _search(update, text)


# ── Main ────────────────────────────────────────────────────────

async def on_startup(app: Application):
    await controller.start()


def start_dashboard_in_thread():
    """Run the Flask dashboard in a background thread."""
    try:
        from dashboard import create_app
        app = create_app(controller)
        # Suppress Flask request logs in the main console
        flask_log = logging.getLogger("werkzeug")
        flask_log.setLevel(logging.WARNING)
        from config import DASHBOARD_HOST, DASHBOARD_PORT
        log.info(f"Dashboard: http://{DASHBOARD_HOST}:{DASHBOARD_PORT}")
        app.run(host=DASHBOARD_HOST, port=DASHBOARD_PORT, use_reloader=False)
    except Exception as e:
        log.error(f"Dashboard failed to start: {e}")


def main():
    global _app_ref

    if not TELEGRAM_BOT_TOKEN:
        raise SystemExit("TELEGRAM_BOT_TOKEN is not set")

    controller.set_state_callback(send_to_telegram)

    # Start dashboard in background thread
    dash_thread = threading.Thread(target=start_dashboard_in_thread, daemon=True)
    dash_thread.start()

    # Build Telegram bot
    app = ApplicationBuilder().token(TELEGRAM_BOT_TOKEN).post_init(on_startup).build()
    _app_ref = app

    app.add_handler(CommandHandler("start", cmd_start))
    app.add_handler(CommandHandler("help", cmd_help))
    app.add_handler(CommandHandler("now", cmd_now))
    app.add_handler(CommandHandler("weather", cmd_weather))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    log.info("Bot starting (Telegram polling)...")
    app.run_polling()


if __name__ == "__main__":
    main()
