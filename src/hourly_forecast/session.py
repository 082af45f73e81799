"""Session controller for the dashboard.

Owns the single ``SessionState`` and drives it through
idle -> loading -> ready/failed on every fetch trigger: the initial load,
a submitted search, a picked suggestion and the periodic refresh. A
separate clock timer only updates the displayed time.

Overlapping fetches are not coordinated. Whichever completes last wins, and
the snapshot is always swapped as one object.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type, Union

from hourly_forecast.config import (
    DEFAULT_LOCATION, REFRESH_INTERVAL_SECONDS, CLOCK_TICK_SECONDS,
    SUGGESTION_LIMIT, SUGGESTION_HIDE_DELAY_SECONDS
)
from hourly_forecast.weather.errors import (
    FetchFailed, LocationNotFound, LookupFailed, MalformedResponse, WeatherError
)
from hourly_forecast.weather.models import (
    ErrorKind, ForecastTab, Place, SessionState, SessionStatus
)
from hourly_forecast.weather.service import WeatherService, utc_now

logger = logging.getLogger(__name__)

ERROR_KINDS: Dict[Type[WeatherError], ErrorKind] = {
    LocationNotFound: ErrorKind.LOCATION_NOT_FOUND,
    LookupFailed: ErrorKind.LOOKUP_FAILED,
    FetchFailed: ErrorKind.FETCH_FAILED,
    MalformedResponse: ErrorKind.MALFORMED_RESPONSE,
}


class SessionController:
    """Single-user dashboard session."""

    def __init__(
        self,
        service: Optional[WeatherService] = None,
        default_location: str = DEFAULT_LOCATION,
        refresh_interval: float = REFRESH_INTERVAL_SECONDS,
        clock_interval: float = CLOCK_TICK_SECONDS,
        hide_delay: float = SUGGESTION_HIDE_DELAY_SECONDS,
        clock: Callable[[], datetime] = utc_now
    ):
        """Initialize the session controller.

        Args:
            service: Weather service (creates default if None)
            default_location: Place name loaded on start
            refresh_interval: Seconds between silent forecast refreshes
            clock_interval: Seconds between clock updates
            hide_delay: Grace period before blur hides the suggestion panel
            clock: Source of the current time
        """
        self.service = service or WeatherService(clock=clock)
        self.default_location = default_location
        self.refresh_interval = refresh_interval
        self.clock_interval = clock_interval
        self.hide_delay = hide_delay
        self.clock = clock
        self.state = SessionState(current_time=clock())
        self._timers: List[asyncio.Task] = []
        self._background: List[asyncio.Task] = []
        self._hide_task: Optional[asyncio.Task] = None

    # Lifecycle

    async def start(self) -> None:
        """Load the default place and start the refresh and clock timers."""
        logger.info(f"Starting session with default location '{self.default_location}'")
        self._spawn(self.load(self.default_location))
        self._timers = [
            asyncio.create_task(self._refresh_loop(), name="forecast-refresh"),
            asyncio.create_task(self._clock_loop(), name="clock-tick"),
        ]

    async def stop(self) -> None:
        """Cancel timers and pending work, then close the HTTP clients."""
        tasks = self._timers + self._background
        if self._hide_task is not None:
            tasks.append(self._hide_task)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._timers, self._background, self._hide_task = [], [], None
        await self.service.aclose()
        logger.info("Session stopped")

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._background.append(task)
        task.add_done_callback(self._background.remove)
        return task

    # Fetch state machine

    async def load(self, query: str) -> None:
        """Run the resolve -> fetch pipeline for ``query``.

        On failure the previous snapshot stays in place and the error is
        recorded for display.
        """
        self.state.status = SessionStatus.LOADING
        self.state.error = None
        self.state.error_kind = None

        try:
            snapshot = await self.service.get_forecast(query)

        except WeatherError as e:
            logger.error(f"Failed to load weather for '{query}': {e}")
            self.state.status = SessionStatus.FAILED
            self.state.error = e.message
            self.state.error_kind = ERROR_KINDS.get(type(e))
        except Exception as e:
            logger.exception(f"Unexpected error loading weather for '{query}': {e}")
            self.state.status = SessionStatus.FAILED
            self.state.error = WeatherError.default_message
        else:
            self.state.snapshot = snapshot
            self.state.status = SessionStatus.READY
        finally:
            self.state.show_suggestions = False

    async def submit(self, text: Optional[str] = None) -> None:
        """Search for the submitted text. Blank input is ignored."""
        if text is not None:
            self.state.search_query = text
        query = self.state.search_query
        if not query.strip():
            logger.debug("Ignoring blank search submission")
            return
        await self.load(query)

    async def pick_suggestion(self, suggestion: Union[Place, str]) -> None:
        """Load the forecast for a picked suggestion by its name."""
        name = suggestion.display_name if isinstance(suggestion, Place) else suggestion
        self.state.search_query = name
        await self.load(name)

    async def refresh(self) -> None:
        """Re-resolve and re-fetch the currently displayed place."""
        snapshot = self.state.snapshot
        if snapshot is None:
            logger.debug("Nothing to refresh yet")
            return
        logger.info(f"Refreshing forecast for '{snapshot.place.display_name}'")
        await self.load(snapshot.place.display_name)

    # Suggestion panel

    async def text_changed(self, text: str) -> List[Place]:
        """Store the search text and replace the suggestion list.

        Suggestion lookups are best effort: failures give an empty list.
        """
        self.state.search_query = text
        try:
            suggestions = await self.service.suggest(text, SUGGESTION_LIMIT)
        except WeatherError as e:
            logger.warning(f"Error fetching suggestions for '{text}': {e}")
            suggestions = []
        self.state.suggestions = suggestions
        return suggestions

    def focus(self) -> None:
        """Show the suggestion panel, cancelling a pending hide."""
        self._cancel_hide()
        self.state.show_suggestions = True

    def blur(self) -> None:
        """Hide the suggestion panel after the grace delay."""
        self._cancel_hide()
        self._hide_task = asyncio.create_task(self._hide_later())

    async def _hide_later(self) -> None:
        await asyncio.sleep(self.hide_delay)
        self.state.show_suggestions = False
        self._hide_task = None

    def _cancel_hide(self) -> None:
        if self._hide_task is not None and not self._hide_task.done():
            self._hide_task.cancel()
        self._hide_task = None

    # Tabs and clock

    def change_tab(self, tab: Union[ForecastTab, str]) -> None:
        """Switch between the hourly and 8-day views.

        Raises:
            ValueError: If the tab name is unknown
        """
        self.state.active_tab = ForecastTab(tab)

    def tick(self) -> datetime:
        """Update the displayed wall-clock time."""
        self.state.current_time = self.clock()
        return self.state.current_time

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval)
            await self.refresh()

    async def _clock_loop(self) -> None:
        while True:
            await asyncio.sleep(self.clock_interval)
            self.tick()
