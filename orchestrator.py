"""
Orchestrator — owns the view state and runs searches.

Each search resolves the place name, then fetches the forecast, with a
loading flag and an error slot around the pair. The Telegram bot and the
dashboard both drive the same controller instance.

Overlapping searches are not cancelled. Every submit takes a sequence
number and only the most recently submitted search may write its result;
earlier ones that finish late are dropped.
"""

from __future__ import annotations
import asyncio
import logging
import threading
from typing import Awaitable, Callable, Optional

from abilities.weather import WeatherError, fetch_forecast, resolve
from config import DEFAULT_CITY
from models import ResolvedLocation, ViewState, WeatherSnapshot

log = logging.getLogger(__name__)

Resolver = Callable[[str], ResolvedLocation]
Fetcher = Callable[[ResolvedLocation], WeatherSnapshot]


class WeatherController:
    def __init__(
        self,
        resolver: Resolver = resolve,
        fetcher: Fetcher = fetch_forecast,
        default_city: str = DEFAULT_CITY,
    ):
        self.state = ViewState()
        self._resolver = resolver
        self._fetcher = fetcher
        self._default_city = default_city
        self._sequence = 0
        self._lock = threading.Lock()  # the dashboard submits from its own threads
        self._started = False
        self._state_callback: Optional[Callable] = None

    def set_state_callback(self, callback: Callable[[ViewState], Awaitable[None]]):
        """
        Register a callback for finished searches.
        callback(state) — called after a search that was not superseded.
        """
        self._state_callback = callback

    # ── Lifecycle ───────────────────────────────────────────────

    async def start(self) -> Optional[ViewState]:
        """Run the default search. Only the first call does anything."""
        if self._started:
            return None
        self._started = True
        log.info(f"Initial search for {self._default_city!r}")
        return await self.submit(self._default_city)

    # ── Search ──────────────────────────────────────────────────

    async def submit(self, text: str, notify: bool = True) -> Optional[ViewState]:
        """
        Search for a place. Returns the resulting state, or None when the
        input was blank or a newer search finished the cycle instead.
        Pass notify=False to skip the state callback.
        """
        query = (text or "").strip()
        if not query:
            return None

        with self._lock:
            self._sequence += 1
            seq = self._sequence
            self.state.query = query
            self.state.is_loading = True
            self.state.error_message = None
        log.info(f"Search #{seq}: {query!r}")

        snapshot: Optional[WeatherSnapshot] = None
        error: Optional[str] = None
        try:
            location = await asyncio.to_thread(self._resolver, query)
            snapshot = await asyncio.to_thread(self._fetcher, location)
        except WeatherError as e:
            error = e.message
        except Exception:
            log.exception(f"Search #{seq} failed unexpectedly")
            error = WeatherError.default_message
        finally:
            with self._lock:
                current = seq == self._sequence
                if current:
                    self.state.is_loading = False
                    if error is not None:
                        self.state.error_message = error
                    elif snapshot is not None:
                        self.state.snapshot = snapshot
                        self.state.error_message = None

        if not current:
            log.info(f"Search #{seq} superseded by #{self._sequence}, result dropped")
            return None
        if error is not None:
            log.info(f"Search #{seq} failed: {error}")

        if notify and self._state_callback:
            try:
                await self._state_callback(self.state)
            except Exception:
                log.exception(f"State callback failed after search #{seq}")
        return self.state
