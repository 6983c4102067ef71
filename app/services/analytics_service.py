"""
Event analytics, leaderboards and per-question response summaries
"""

from collections import defaultdict
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.models import Event, Question, Response, Team
from app.services.participant_service import ParticipantService
from app.services.question_service import QuestionService
from app.services.response_service import MAX_POINTS_PER_RESPONSE
from app.services.team_service import TeamService


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0


def _average(total: float, count: int) -> float:
    return total / count if count else 0


def _responses_for_event(db: Session, event_id: str) -> List[Response]:
    return (
        db.query(Response)
        .join(Question, Response.question_id == Question.id)
        .filter(Question.event_id == event_id)
        .all()
    )


class AnalyticsService:
    """Aggregates over an event's responses"""

    @staticmethod
    def event_analytics(db: Session, event: Event) -> Dict[str, Any]:
        participants = ParticipantService.list_for_event(db, event.id)
        teams = TeamService.list_for_event(db, event.id)
        questions = QuestionService.list_for_event(db, event.id)

        by_question = defaultdict(list)
        by_participant = defaultdict(list)
        for response in _responses_for_event(db, event.id):
            by_question[response.question_id].append(response)
            by_participant[response.participant_id].append(response)

        question_performance = []
        total_responses = correct_responses = total_points = 0
        for question in questions:
            responses = by_question[question.id]
            correct = sum(1 for r in responses if r.is_correct)
            points = sum(r.points for r in responses)
            question_performance.append({
                "id": question.id,
                "question": question.question,
                "totalResponses": len(responses),
                "correctResponses": correct,
                "accuracy": _percent(correct, len(responses)),
                "averagePoints": _average(points, len(responses)),
                "difficulty": question.difficulty,
            })
            total_responses += len(responses)
            correct_responses += correct
            total_points += points

        team_performance = []
        for team in teams:
            members = list(team.participants)
            member_responses = [r for p in members for r in by_participant[p.id]]
            team_points = sum(r.points for r in member_responses)
            team_performance.append({
                "id": team.id,
                "name": team.name,
                "participantCount": len(members),
                "totalPoints": team_points,
                "totalResponses": len(member_responses),
                "averagePointsPerParticipant": _average(team_points, len(members)),
            })

        return {
            "event": {
                "id": event.id,
                "title": event.title,
                "status": event.status,
                "participantCount": len(participants),
                "teamCount": len(teams),
                "questionCount": len(questions),
            },
            "performance": {
                "totalResponses": total_responses,
                "correctResponses": correct_responses,
                "overallAccuracy": _percent(correct_responses, total_responses),
                "totalPoints": total_points,
                "averagePointsPerResponse": _average(total_points, total_responses),
            },
            "questionPerformance": question_performance,
            "teamPerformance": team_performance,
        }

    @staticmethod
    def leaderboard(db: Session, event_id: str, board_type: str = "teams") -> Dict[str, Any]:
        """Entries sorted by total points (stable for ties) and ranked from 1"""
        by_participant = defaultdict(list)
        for response in _responses_for_event(db, event_id):
            by_participant[response.participant_id].append(response)

        entries = []
        if (board_type or "teams").lower() == "teams":
            board_type = "teams"
            for team in TeamService.list_for_event(db, event_id):
                members = list(team.participants)
                responses = [r for p in members for r in by_participant[p.id]]
                points = sum(r.points for r in responses)
                correct = sum(1 for r in responses if r.is_correct)
                entries.append({
                    "team": {"id": team.id, "name": team.name, "tableNumber": team.table_number},
                    "participantCount": len(members),
                    "totalPoints": points,
                    "totalResponses": len(responses),
                    "correctResponses": correct,
                    "accuracy": _percent(correct, len(responses)),
                    "averagePointsPerParticipant": _average(points, len(members)),
                })
        else:
            board_type = "participants"
            teams = {t.id: t for t in db.query(Team).filter(Team.event_id == event_id)}
            for participant in ParticipantService.list_for_event(db, event_id):
                responses = by_participant[participant.id]
                correct = sum(1 for r in responses if r.is_correct)
                team = teams.get(participant.team_id)
                entries.append({
                    "participant": {"id": participant.id, "name": participant.name},
                    "team": {"id": team.id, "name": team.name} if team else None,
                    "totalPoints": sum(r.points for r in responses),
                    "totalResponses": len(responses),
                    "correctResponses": correct,
                    "accuracy": _percent(correct, len(responses)),
                })

        entries.sort(key=lambda e: e["totalPoints"], reverse=True)
        ranked = [{"rank": position, **entry} for position, entry in enumerate(entries, start=1)]
        return {"type": board_type, "leaderboard": ranked}

    @staticmethod
    def response_summary(db: Session, event_id: str) -> Dict[str, Any]:
        by_question = defaultdict(list)
        for response in _responses_for_event(db, event_id):
            by_question[response.question_id].append(response)

        summary = []
        for question in QuestionService.list_for_event(db, event_id):
            responses = by_question[question.id]

            # Answers are grouped case-insensitively under the first spelling seen
            distribution: Dict[str, int] = {}
            spellings: Dict[str, str] = {}
            for r in responses:
                answer = r.answer if r.answer and r.answer.strip() else "No Answer"
                key = spellings.setdefault(answer.casefold(), answer)
                distribution[key] = distribution.get(key, 0) + 1

            times = [r.response_time for r in responses if r.response_time is not None]
            correct = sum(1 for r in responses if r.is_correct)
            points = sum(r.points for r in responses)

            summary.append({
                "question": {
                    "id": question.id,
                    "text": question.question,
                    "correctAnswer": question.correct_answer,
                    "type": question.type,
                    "difficulty": question.difficulty,
                    "orderIndex": question.order_index,
                },
                "responses": {
                    "total": len(responses),
                    "correct": correct,
                    "incorrect": len(responses) - correct,
                    "accuracy": _percent(correct, len(responses)),
                },
                "scoring": {
                    "totalPoints": points,
                    "averagePoints": _average(points, len(responses)),
                    "maxPossiblePoints": len(responses) * MAX_POINTS_PER_RESPONSE,
                },
                "timing": {
                    "fastestResponseTime": min(times) if times else None,
                    "slowestResponseTime": max(times) if times else None,
                    "averageResponseTime": round(sum(times) / len(times)) if times else None,
                },
                "answerDistribution": distribution,
            })

        return {"eventId": event_id, "summary": summary}
