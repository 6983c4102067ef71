"""
Participant routes: anonymous join, returning-player check and team switching
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.schemas.participant import JoinEventRequest, SwitchTeamRequest
from app.services import projections
from app.services.event_service import EventService
from app.services.participant_service import (
    DEFAULT_INACTIVE_MINUTES,
    JoinRejectedError,
    ParticipantService,
    TeamNotFoundError,
)
from app.utils.responses import (
    bad_request_error,
    forbidden_error,
    not_found_error,
    rate_limit_error,
    unauthorized_error,
)
from app.utils.security import (
    get_client_ip,
    get_current_user_id,
    rate_limit_check,
    require_event_host,
)

logger = logging.getLogger(__name__)

router = APIRouter()

PARTICIPANT_COOKIE_MAX_AGE = 24 * 60 * 60

def _join_payload(participant, team, event, returning: bool) -> dict:
    return {
        "participant": projections.participant_dict(participant),
        "team": projections.team_dict(team) if team is not None else None,
        "event": projections.event_summary(event),
        "returning": returning
    }

@router.get("/events/{event_id}/participants")
async def list_participants(
    event_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    require_event_host(EventService.get_event(db, event_id), user_id)
    return [projections.participant_dict(p) for p in ParticipantService.list_for_event(db, event_id)]

@router.get("/events/join/{qr_code}/check")
async def check_participant(
    qr_code: str,
    request: Request,
    db: Session = Depends(get_db)
):
    """Recognise a returning participant by their cookie"""
    token = request.cookies.get(settings.PARTICIPANT_COOKIE_NAME)
    if not token:
        not_found_error("Participant token")

    participant = ParticipantService.get_by_token(db, token)
    if participant is None:
        not_found_error("Participant")

    event = EventService.get_event(db, participant.event_id)
    if event is None or event.qr_code != qr_code:
        not_found_error("Participant for this event")

    return _join_payload(participant, participant.team, event, returning=True)

@router.post("/events/join/{qr_code}", status_code=status.HTTP_201_CREATED)
async def join_event(
    qr_code: str,
    body: JoinEventRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    """Join an event by its QR code, optionally joining or creating a team"""
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        logger.warning(f"Join rate limit exceeded for {client_ip}")
        rate_limit_error()

    if not body.name or not body.name.strip():
        bad_request_error("Name is required")

    event = EventService.get_event_by_qr_code(db, qr_code)
    if event is None:
        not_found_error("Event")
    if not event.allow_participants and event.status != "cancelled":
        forbidden_error("Event is not accepting participants")

    try:
        participant, team = ParticipantService.join_event(
            db, event, body.name, body.team_action, body.team_identifier
        )
    except TeamNotFoundError:
        not_found_error("Team")
    except JoinRejectedError as e:
        bad_request_error(str(e))

    response.set_cookie(
        key=settings.PARTICIPANT_COOKIE_NAME,
        value=participant.participant_token,
        max_age=PARTICIPANT_COOKIE_MAX_AGE,
        httponly=True,
        samesite="strict",
        secure=settings.COOKIE_SECURE
    )
    return _join_payload(participant, team, event, returning=False)

@router.put("/participants/{participant_id}/team")
async def switch_team(
    participant_id: str,
    body: SwitchTeamRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    token = request.cookies.get(settings.PARTICIPANT_COOKIE_NAME)
    if not token:
        unauthorized_error()

    participant = ParticipantService.get_by_token(db, token)
    if participant is None or participant.id != participant_id:
        forbidden_error()

    try:
        participant = ParticipantService.switch_team(db, participant, body.team_id)
    except TeamNotFoundError:
        not_found_error("Team")
    except JoinRejectedError as e:
        bad_request_error(str(e))

    return projections.participant_dict(participant)

@router.delete("/events/{event_id}/participants/inactive")
async def remove_inactive_participants(
    event_id: str,
    inactive_threshold_minutes: Optional[int] = Query(None, alias="inactiveThresholdMinutes"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    require_event_host(EventService.get_event(db, event_id), user_id)

    threshold = inactive_threshold_minutes or DEFAULT_INACTIVE_MINUTES
    removed, remaining = ParticipantService.remove_inactive(db, event_id, threshold)
    return {
        "message": f"Removed {removed} inactive participants",
        "removedCount": removed,
        "thresholdMinutes": threshold,
        "remainingParticipants": remaining
    }
