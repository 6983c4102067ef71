"""
Repository layer for the event-scoped read endpoints.

Two storage paths read the same tables: ORM queries (``*_orm``) and hand
written SQL (``*_raw``). Both return rows shaped by ``projections``; the raw
statements declare their date and boolean column types so SQLAlchemy decodes
them through the same converters the ORM uses.
"""

from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import Boolean, Integer, func, text
from sqlalchemy.orm import Session

from app.models import FunFact, Participant, Question, Team
from app.models.types import IsoTimestamp
from app.services import projections


# -------- Teams --------

class TeamRepo:
    @staticmethod
    def list_orm(db: Session, event_id: str) -> List[Dict[str, Any]]:
        member_count = (
            db.query(func.count(Participant.id))
            .filter(Participant.team_id == Team.id)
            .correlate(Team)
            .scalar_subquery()
        )
        rows = (
            db.query(Team, member_count)
            .filter(Team.event_id == event_id)
            .order_by(Team.table_number.is_(None), Team.table_number, Team.name, Team.id)
            .all()
        )
        return [projections.legacy_team(team, count) for team, count in rows]

    @staticmethod
    def list_raw(db: Session, event_id: str) -> List[Dict[str, Any]]:
        stmt = text(
            """
            SELECT t.id, t.event_id, t.name, t.table_number, t.max_members, t.created_at,
                   (SELECT COUNT(p.id) FROM participants p WHERE p.team_id = t.id) AS member_count
            FROM teams t
            WHERE t.event_id = :event_id
            ORDER BY t.table_number IS NULL, t.table_number, t.name, t.id
            """
        ).columns(created_at=IsoTimestamp, table_number=Integer, max_members=Integer, member_count=Integer)
        rows = db.execute(stmt, {"event_id": event_id}).all()
        return [projections.legacy_team(row, row.member_count) for row in rows]


# -------- Questions --------

class QuestionRepo:
    @staticmethod
    def list_orm(db: Session, event_id: str) -> List[Dict[str, Any]]:
        questions = (
            db.query(Question)
            .filter(Question.event_id == event_id)
            .order_by(Question.order_index, Question.id)
            .all()
        )
        return [projections.legacy_question(q) for q in questions]

    @staticmethod
    def list_raw(db: Session, event_id: str) -> List[Dict[str, Any]]:
        stmt = text(
            """
            SELECT id, event_id, type, question, options, correct_answer, explanation,
                   points, time_limit, difficulty, category, background_image_url,
                   ai_generated, order_index, created_at
            FROM questions
            WHERE event_id = :event_id
            ORDER BY order_index, id
            """
        ).columns(created_at=IsoTimestamp, ai_generated=Boolean)
        rows = db.execute(stmt, {"event_id": event_id}).all()
        return [projections.legacy_question(row) for row in rows]


# -------- Participants --------

class ParticipantRepo:
    @staticmethod
    def list_orm(db: Session, event_id: str) -> List[Dict[str, Any]]:
        participants = (
            db.query(Participant)
            .filter(Participant.event_id == event_id)
            .order_by(Participant.name, Participant.id)
            .all()
        )
        return [projections.legacy_participant(p) for p in participants]

    @staticmethod
    def list_raw(db: Session, event_id: str) -> List[Dict[str, Any]]:
        stmt = text(
            """
            SELECT id, event_id, team_id, name, participant_token, joined_at,
                   last_active_at, is_active, can_switch_team
            FROM participants
            WHERE event_id = :event_id
            ORDER BY name, id
            """
        ).columns(
            joined_at=IsoTimestamp,
            last_active_at=IsoTimestamp,
            is_active=Boolean,
            can_switch_team=Boolean,
        )
        rows = db.execute(stmt, {"event_id": event_id}).all()
        return [projections.legacy_participant(row) for row in rows]


# -------- Fun facts --------

class FunFactRepo:
    @staticmethod
    def list_orm(db: Session, event_id: str) -> List[Dict[str, Any]]:
        facts = (
            db.query(FunFact)
            .filter(FunFact.event_id == event_id)
            .order_by(FunFact.order_index, FunFact.id)
            .all()
        )
        return [projections.legacy_fun_fact(f) for f in facts]

    @staticmethod
    def list_raw(db: Session, event_id: str) -> List[Dict[str, Any]]:
        stmt = text(
            """
            SELECT id, event_id, title, content, order_index, is_active, created_at
            FROM fun_facts
            WHERE event_id = :event_id
            ORDER BY order_index, id
            """
        ).columns(created_at=IsoTimestamp, is_active=Boolean)
        rows = db.execute(stmt, {"event_id": event_id}).all()
        return [projections.legacy_fun_fact(row) for row in rows]
