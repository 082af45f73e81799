"""API endpoints for the dashboard page."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field

from hourly_forecast.config import DEFAULT_LOCATION, REFRESH_INTERVAL_SECONDS, SUGGESTION_LIMIT, VERSION
from hourly_forecast.dashboard import DashboardView, build_dashboard
from hourly_forecast.session import SessionController
from hourly_forecast.weather.errors import WeatherError
from hourly_forecast.weather.models import ForecastTab, Place, SessionState

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api", tags=["dashboard"])


class SearchRequest(BaseModel):
    query: Optional[str] = Field(None, description="Search text; the stored search text is used if omitted")


class TextChange(BaseModel):
    text: str = Field("", description="Current content of the search box")


class SuggestionPick(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the picked suggestion")


class TabChange(BaseModel):
    tab: ForecastTab


def get_session(request: Request) -> SessionController:
    """Dependency returning the process-wide session controller."""
    return request.app.state.session


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "hourly-forecast"}


@router.get("/info")
async def get_service_info() -> dict:
    """Service information including the default location and timers."""
    return {
        "service": "Hour-by-Hour Forecast",
        "version": VERSION,
        "default_location": DEFAULT_LOCATION,
        "refresh_interval_seconds": REFRESH_INTERVAL_SECONDS,
        "data_source": "Open-Meteo geocoding and forecast APIs"
    }


@router.get("/dashboard", response_model=DashboardView)
async def get_dashboard(session: SessionController = Depends(get_session)) -> DashboardView:
    """Formatted dashboard for the page to render."""
    return build_dashboard(session.state)


@router.get("/session", response_model=SessionState)
async def get_session_state(session: SessionController = Depends(get_session)) -> SessionState:
    """Raw session state, including the full forecast snapshot."""
    return session.state


@router.get("/suggestions", response_model=List[Place])
async def get_suggestions(
    q: str = Query("", description="Text to look up"),
    limit: int = Query(SUGGESTION_LIMIT, ge=1, le=20, description="Maximum number of candidates"),
    session: SessionController = Depends(get_session)
) -> List[Place]:
    """Look up candidate places without touching the session state."""
    try:
        return await session.service.suggest(q, limit)
    except WeatherError as e:
        logger.warning(f"Error fetching suggestions for '{q}': {e}")
        return []


@router.post("/search/text", response_model=DashboardView)
async def change_search_text(
    change: TextChange,
    session: SessionController = Depends(get_session)
) -> DashboardView:
    """Keystroke in the search box: refresh the suggestion list."""
    await session.text_changed(change.text)
    return build_dashboard(session.state)


@router.post("/search/focus", response_model=DashboardView)
async def focus_search(session: SessionController = Depends(get_session)) -> DashboardView:
    session.focus()
    return build_dashboard(session.state)


@router.post("/search/blur", response_model=DashboardView)
async def blur_search(session: SessionController = Depends(get_session)) -> DashboardView:
    session.blur()
    return build_dashboard(session.state)


@router.post("/search", response_model=DashboardView)
async def submit_search(
    search: SearchRequest,
    session: SessionController = Depends(get_session)
) -> DashboardView:
    """Submit the search box and load the forecast for the best match."""
    await session.submit(search.query)
    return build_dashboard(session.state)


@router.post("/suggestions/select", response_model=DashboardView)
async def select_suggestion(
    pick: SuggestionPick,
    session: SessionController = Depends(get_session)
) -> DashboardView:
    """Load the forecast for a picked suggestion."""
    await session.pick_suggestion(pick.name)
    return build_dashboard(session.state)


@router.post("/tab", response_model=DashboardView)
async def change_tab(
    change: TabChange,
    session: SessionController = Depends(get_session)
) -> DashboardView:
    session.change_tab(change.tab)
    return build_dashboard(session.state)
