"""
Host event routes: events, teams, fun facts and analytics
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.event import (
    EventCreate,
    EventStatusUpdate,
    EventUpdate,
    FunFactCreate,
    FunFactUpdate,
    GenerateCopyRequest,
    TeamCreate,
)
from app.services import projections
from app.services.analytics_service import AnalyticsService
from app.services.event_service import EventService
from app.services.fun_fact_service import FunFactService
from app.services.qr_service import QRService
from app.services.team_service import TeamService
from app.utils.responses import bad_request_error, not_found_error, unauthorized_error
from app.utils.security import (
    get_current_user_id,
    get_optional_user_id,
    is_seed_event,
    require_event_host,
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _host_event(db: Session, event_id: str, user_id: str):
    return require_event_host(EventService.get_event(db, event_id), user_id)

# -------- Events --------

@router.get("/events/home")
async def home_events(
    limit: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    """Upcoming public events for the landing page"""
    events = EventService.list_public_upcoming(db, limit)
    return [projections.home_event_dict(e) for e in events]

@router.get("/events")
async def list_events(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return [projections.event_dict(e) for e in EventService.list_for_host(db, user_id)]

@router.get("/events/active")
async def list_active_events(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return [projections.event_dict(e) for e in EventService.list_active(db, user_id)]

@router.get("/events/upcoming")
async def list_upcoming_events(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return [projections.event_dict(e) for e in EventService.list_upcoming(db, user_id)]

@router.post("/events", status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        event = EventService.create_event(db, user_id, event_data)
    except ValueError as e:
        bad_request_error(str(e))
    return projections.event_dict(event)

@router.get("/events/{event_id}")
async def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return projections.event_dict(_host_event(db, event_id, user_id))

@router.put("/events/{event_id}")
async def update_event(
    event_id: str,
    event_update: EventUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    event = _host_event(db, event_id, user_id)
    try:
        event = EventService.update_event(db, event, event_update)
    except ValueError as e:
        bad_request_error(str(e))
    return projections.event_dict(event)

@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    EventService.delete_event(db, _host_event(db, event_id, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/events/{event_id}/start")
async def start_event(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    event = EventService.start_event(db, _host_event(db, event_id, user_id))
    return projections.event_dict(event)

@router.patch("/events/{event_id}/status")
async def update_event_status(
    event_id: str,
    status_update: EventStatusUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    event = _host_event(db, event_id, user_id)
    if not status_update.status:
        bad_request_error("Status is required")
    try:
        event = EventService.update_status(db, event, status_update.status)
    except ValueError as e:
        bad_request_error(str(e))
    return projections.event_dict(event)

@router.post("/events/{event_id}/generate-copy")
async def generate_copy(
    event_id: str,
    body: GenerateCopyRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    event = _host_event(db, event_id, user_id)
    return {
        "type": body.type,
        "copy": EventService.generate_copy(event, body.type),
        "eventId": event.id
    }

@router.get("/events/{event_id}/qr.png")
async def get_event_qr(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """Join QR code for printing at the venue"""
    event = _host_event(db, event_id, user_id)
    if not event.qr_code:
        not_found_error("QR code")

    return Response(
        content=QRService.generate_join_qr(event.qr_code),
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename={QRService.download_filename(event.title)}"}
    )

# -------- Teams --------

@router.get("/events/{event_id}/teams")
async def list_teams(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    _host_event(db, event_id, user_id)
    return [projections.team_dict(t, with_participants=True) for t in TeamService.list_for_event(db, event_id)]

@router.post("/events/{event_id}/teams", status_code=status.HTTP_201_CREATED)
async def create_team(
    event_id: str,
    team_data: TeamCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    if not team_data.name or not team_data.name.strip():
        bad_request_error("Team name is required")
    _host_event(db, event_id, user_id)

    team = TeamService.create_team(db, event_id, team_data.name, team_data.table_number)
    return projections.team_dict(team)

@router.get("/events/{qr_code}/teams-public")
async def list_public_teams(
    qr_code: str,
    db: Session = Depends(get_db)
):
    """Teams a participant can pick from while joining"""
    event = EventService.get_event_by_qr_code(db, qr_code)
    if event is None:
        not_found_error("Event")
    if not event.allow_participants:
        return []

    return [
        {
            "Id": t.id,
            "EventId": t.event_id,
            "Name": t.name,
            "TableNumber": t.table_number,
            "participantCount": len(t.participants),
        }
        for t in TeamService.list_for_event(db, event.id)
    ]

# -------- Fun facts --------

@router.get("/events/{event_id}/fun-facts")
async def list_fun_facts(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_optional_user_id)
):
    event = EventService.get_event(db, event_id)
    if is_seed_event(event_id):
        if event is None:
            not_found_error("Event")
    else:
        if user_id is None:
            unauthorized_error()
        require_event_host(event, user_id)

    return [projections.fun_fact_dict(f) for f in FunFactService.list_for_event(db, event_id)]

@router.post("/events/{event_id}/fun-facts", status_code=status.HTTP_201_CREATED)
async def create_fun_fact(
    event_id: str,
    fact_data: FunFactCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    _host_event(db, event_id, user_id)
    try:
        fact = FunFactService.create_fun_fact(db, event_id, fact_data)
    except ValueError as e:
        bad_request_error(str(e))
    return projections.fun_fact_dict(fact)

@router.put("/fun-facts/{fact_id}")
async def update_fun_fact(
    fact_id: str,
    fact_update: FunFactUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    fact = FunFactService.get_fun_fact(db, fact_id)
    if fact is None:
        not_found_error("Fun fact")
    _host_event(db, fact.event_id, user_id)

    return projections.fun_fact_dict(FunFactService.update_fun_fact(db, fact, fact_update))

@router.delete("/fun-facts/{fact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fun_fact(
    fact_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    fact = FunFactService.get_fun_fact(db, fact_id)
    if fact is None:
        not_found_error("Fun fact")
    _host_event(db, fact.event_id, user_id)

    FunFactService.delete_fun_fact(db, fact)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# -------- Analytics --------

@router.get("/events/{event_id}/analytics")
async def event_analytics(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return AnalyticsService.event_analytics(db, _host_event(db, event_id, user_id))

@router.get("/events/{event_id}/leaderboard")
async def event_leaderboard(
    event_id: str,
    type: Optional[str] = Query("teams"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    _host_event(db, event_id, user_id)
    return AnalyticsService.leaderboard(db, event_id, type)

@router.get("/events/{event_id}/responses/summary")
async def response_summary(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    _host_event(db, event_id, user_id)
    return AnalyticsService.response_summary(db, event_id)
