"""
Weather Dashboard — Flask web UI over the weather controller.

Provides:
  - Search form with loading/error banner
  - Current conditions, details, 7-day and 24-hour forecast
  - REST API for programmatic access

Runs in a background thread alongside the Telegram bot.
"""

import asyncio

from flask import Flask, render_template, request, jsonify, redirect, url_for

from config import DASHBOARD_SECRET
from render import DAYS_SHOWN, HOURS_SHOWN, LOADING_TEXT, state_payload


_controller = None  # set via create_app()


def _run_search(text: str):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(_controller.submit(text, notify=False))
    finally:
        loop.close()


def create_app(controller):
    global _controller
    _controller = controller

    app = Flask(__name__)
    app.secret_key = DASHBOARD_SECRET

    # ── Pages ───────────────────────────────────────────────

    @app.route("/")
    def index():
        view = state_payload(_controller.state)
        return render_template(
            "weather.html",
            view=view,
            loading_text=LOADING_TEXT,
            days_shown=DAYS_SHOWN,
            hours_shown=HOURS_SHOWN,
        )

    # ── API endpoints ───────────────────────────────────────

    @app.route("/api/state", methods=["GET"])
    def api_state():
        return jsonify(state_payload(_controller.state))

    @app.route("/api/search", methods=["POST"])
    def api_search():
        data = request.json or {}
        city = str(data.get("city", "")).strip()
        if not city:
            return jsonify({"error": "city is required"}), 400
        _run_search(city)
        return jsonify(state_payload(_controller.state))

    # ── Form actions (from dashboard UI) ────────────────────

    @app.route("/action/search", methods=["POST"])
    def action_search():
        city = request.form.get("city", "").strip()
        if city:
            _run_search(city)
        return redirect(url_for("index"))

    return app
