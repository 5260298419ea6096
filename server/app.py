"""FastAPI server for cardquiz application."""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Literal, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from core.config import (
    LOG_LEVEL_ENV, MIN_TOLERANCE_PCT, MAX_TOLERANCE_PCT, RECENT_RESULTS_COUNT
)
from core.demo_deck import get_demo_cards
from core.errors import QuizError
from core.export import results_to_csv
from core.importer import parse_cards
from core.interfaces import Storage
from core.models import QuizState

from server.file_storage import FileStorage

logging.basicConfig(level=os.environ.get(LOG_LEVEL_ENV, 'INFO').upper())
logger = logging.getLogger(__name__)


# Pydantic models for API
class SubmitRequest(BaseModel):
    name: str = ''
    price: str | float | None = None


class SettingsRequest(BaseModel):
    user: Optional[str] = None
    tolerance_pct: Optional[int] = Field(None, ge=MIN_TOLERANCE_PCT, le=MAX_TOLERANCE_PCT)
    strict_name: Optional[bool] = None
    grade_filter: Optional[Literal['all', 'grade-10-only', 'below-grade-10']] = None


class ImportRequest(BaseModel):
    format: Literal['csv', 'json'] = 'csv'
    content: str


class QuestionResponse(BaseModel):
    card_id: str
    img: str
    grade: Optional[str]
    pool_size: int
    miss_count: int


class SubmitResponse(BaseModel):
    correct: bool
    name_ok: bool
    price_ok: bool
    answered_name: str
    answered_price: float
    correct_name: str
    correct_price: float
    grade: Optional[str]
    miss_count: int
    summary_display: str


class SettingsResponse(BaseModel):
    user: str
    tolerance_pct: int
    strict_name: bool
    grade_filter: str


class StatusResponse(BaseModel):
    user: str
    total: int
    correct: int
    rate: int
    recent: list[dict]
    tolerance_pct: int
    strict_name: bool
    grade_filter: str
    card_count: int
    pool_size: int
    summary_display: str


# Global state (single local player, one state blob)
storage: Storage = None
quiz_state: QuizState = None


def get_state() -> QuizState:
    """Get the quiz state, loading it from storage on first use."""
    global quiz_state
    if quiz_state is None:
        saved = storage.load_state()
        if saved:
            quiz_state = QuizState.from_dict(saved)
            logger.info(f"Loaded state: {len(quiz_state.cards)} cards, "
                        f"{len(quiz_state.results)} results")
        else:
            quiz_state = QuizState(cards=get_demo_cards())
            logger.info("No saved state, starting with the demo deck")
    return quiz_state


def save_state(background_tasks: BackgroundTasks) -> None:
    """Queue a save of the current state; the response does not wait for it."""
    background_tasks.add_task(storage.save_state, get_state().to_dict())


def settings_response(state: QuizState) -> SettingsResponse:
    return SettingsResponse(
        user=state.user,
        tolerance_pct=state.tolerance_pct,
        strict_name=state.strict_name,
        grade_filter=state.grade_filter
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage and load state on startup."""
    global storage
    if storage is None:
        storage = FileStorage()
        logger.info(f"Using file storage at {storage.state_file}")
    get_state()
    yield


app = FastAPI(title="Card Quiz API", description="Trading card name and price quiz API",
              lifespan=lifespan)


@app.get("/")
async def root():
    """Health check."""
    return {"service": "cardquiz", "status": "ok"}


@app.get("/api/next", response_model=QuestionResponse)
async def next_question():
    """Draw the next question. The card name and price stay hidden."""
    state = get_state()
    try:
        card = state.advance()
    except QuizError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return QuestionResponse(
        card_id=card.id,
        img=card.img,
        grade=card.grade,
        pool_size=len(state.eligible_pool()),
        miss_count=state.miss_count(card.id)
    )


@app.post("/api/submit", response_model=SubmitResponse)
async def submit_answer(request: SubmitRequest, background_tasks: BackgroundTasks):
    """Grade an answer for the current question."""
    state = get_state()
    try:
        entry = state.submit(request.name, request.price)
    except QuizError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    save_state(background_tasks)
    card = state.current_card
    return SubmitResponse(
        correct=entry.correct,
        name_ok=entry.name_ok,
        price_ok=entry.price_ok,
        answered_name=entry.answered_name,
        answered_price=entry.answered_price,
        correct_name=entry.correct_name,
        correct_price=entry.correct_price,
        grade=card.grade if card else None,
        miss_count=state.miss_count(entry.card_id),
        summary_display=state.get_summary_display()
    )


@app.get("/api/status", response_model=StatusResponse)
async def get_status(recent: int = RECENT_RESULTS_COUNT):
    """Get the current user's score summary and settings."""
    state = get_state()
    summary = state.summary()
    return StatusResponse(
        user=summary.user,
        total=summary.total,
        correct=summary.correct,
        rate=summary.rate,
        recent=[r.to_dict() for r in summary.recent(recent)],
        tolerance_pct=state.tolerance_pct,
        strict_name=state.strict_name,
        grade_filter=state.grade_filter,
        card_count=len(state.cards),
        pool_size=len(state.eligible_pool()),
        summary_display=state.get_summary_display()
    )


@app.get("/api/history")
async def get_history(limit: Optional[int] = None):
    """Get the current user's results, most recent first."""
    state = get_state()
    results = state.user_results(limit)
    return {
        "user": state.user,
        "total": len(results),
        "results": [r.to_dict() for r in results]
    }


@app.get("/api/cards")
async def get_cards():
    """Get the deck with per-card miss counts."""
    state = get_state()
    return {
        "total": len(state.cards),
        "cards": [{**c.to_dict(), 'miss_count': state.miss_count(c.id)} for c in state.cards]
    }


@app.post("/api/cards/import")
async def import_cards(request: ImportRequest, background_tasks: BackgroundTasks):
    """Replace the deck with imported cards. Miss counts are reset."""
    try:
        cards = parse_cards(request.content, request.format)
    except QuizError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    state = get_state()
    state.replace_cards(cards)
    save_state(background_tasks)
    return {"success": True, "imported": len(cards)}


@app.put("/api/settings", response_model=SettingsResponse)
async def update_settings(request: SettingsRequest, background_tasks: BackgroundTasks):
    """Update user, tolerance, strict name mode or grade filter."""
    state = get_state()
    try:
        state.update_settings(
            user=request.user,
            tolerance_pct=request.tolerance_pct,
            strict_name=request.strict_name,
            grade_filter=request.grade_filter
        )
    except QuizError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    save_state(background_tasks)
    return settings_response(state)


@app.get("/api/settings", response_model=SettingsResponse)
async def get_settings():
    """Get current settings."""
    return settings_response(get_state())


@app.post("/api/reset")
async def reset(background_tasks: BackgroundTasks):
    """Clear all results and miss counts."""
    state = get_state()
    state.reset_all()
    save_state(background_tasks)
    return {"success": True}


@app.get("/api/export")
async def export_results():
    """Download the full result history as CSV."""
    csv_text = results_to_csv(get_state().results)
    filename = f"quiz_results_{int(time.time() * 1000)}.csv"
    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
