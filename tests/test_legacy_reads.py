"""
Tests for the compatibility read endpoints (raw SQL vs ORM)
"""

from datetime import datetime, timezone

import pytest

from app.models import FunFact, Participant, Question, Team
from app.services.repositories import FunFactRepo, ParticipantRepo, QuestionRepo, TeamRepo

CREATED = datetime(2025, 2, 3, 4, 5, 6, 789000, tzinfo=timezone.utc)
CREATED_SECONDS = str(int(CREATED.timestamp()))

RESOURCES = ["teams", "questions", "participants", "fun-facts"]


@pytest.fixture
def event_rows(db_session, event):
    """Rows with deliberately scrambled insertion order"""
    unnumbered = Team(event_id=event.id, name="Zeta", table_number=None, created_at=CREATED)
    table_two = Team(event_id=event.id, name="Bravo", table_number=2, created_at=CREATED)
    table_one = Team(event_id=event.id, name="Alpha", table_number=1, created_at=CREATED)
    db_session.add_all([unnumbered, table_two, table_one])
    db_session.flush()

    db_session.add_all([
        Question(event_id=event.id, question="Second?", correct_answer="B", options='["A","B"]',
                 order_index=2, created_at=CREATED),
        Question(event_id=event.id, question="First?", correct_answer="A", options='["A","B"]',
                 order_index=1, ai_generated=True, created_at=CREATED),
        Participant(event_id=event.id, team_id=table_one.id, name="Yolanda", participant_token="tok-y",
                    joined_at=CREATED, last_active_at=CREATED),
        Participant(event_id=event.id, team_id=table_one.id, name="Abe", participant_token="tok-a",
                    joined_at=CREATED, last_active_at=CREATED, is_active=False),
        Participant(event_id=event.id, name="Mia", participant_token="tok-m",
                    joined_at=CREATED, last_active_at=CREATED, can_switch_team=False),
        FunFact(event_id=event.id, title="Later", content="...", order_index=5, created_at=CREATED),
        FunFact(event_id=event.id, title="Sooner", content="...", order_index=1, is_active=False,
                created_at=CREATED),
    ])
    db_session.commit()
    return event


class TestRepositoryParity:
    """Both read paths produce identical rows"""

    @pytest.mark.parametrize("repo", [TeamRepo, QuestionRepo, ParticipantRepo, FunFactRepo])
    def test_raw_matches_orm(self, db_session, event_rows, repo):
        assert repo.list_raw(db_session, event_rows.id) == repo.list_orm(db_session, event_rows.id)

    @pytest.mark.parametrize("repo", [TeamRepo, QuestionRepo, ParticipantRepo, FunFactRepo])
    def test_unknown_event_is_empty(self, db_session, event_rows, repo):
        assert repo.list_raw(db_session, "missing") == []
        assert repo.list_orm(db_session, "missing") == []

    def test_team_order_and_member_count(self, db_session, event_rows):
        teams = TeamRepo.list_raw(db_session, event_rows.id)
        assert [t["Name"] for t in teams] == ["Alpha", "Bravo", "Zeta"]
        assert [t["MemberCount"] for t in teams] == [2, 0, 0]
        assert teams[0]["CreatedAt"] == CREATED_SECONDS

    def test_question_order_and_types(self, db_session, event_rows):
        questions = QuestionRepo.list_raw(db_session, event_rows.id)
        assert [q["Question"] for q in questions] == ["First?", "Second?"]
        assert questions[0]["AiGenerated"] is True
        assert questions[1]["AiGenerated"] is False
        assert questions[0]["Options"] == '["A","B"]'

    def test_participant_order_and_flags(self, db_session, event_rows):
        participants = ParticipantRepo.list_raw(db_session, event_rows.id)
        assert [p["Name"] for p in participants] == ["Abe", "Mia", "Yolanda"]
        assert participants[0]["IsActive"] is False
        assert participants[1]["CanSwitchTeam"] is False
        assert participants[1]["TeamId"] is None
        assert participants[2]["JoinedAt"] == CREATED_SECONDS

    def test_fun_fact_order(self, db_session, event_rows):
        facts = FunFactRepo.list_raw(db_session, event_rows.id)
        assert [f["Title"] for f in facts] == ["Sooner", "Later"]
        assert facts[0]["IsActive"] is False


class TestLegacyEndpoints:

    @pytest.mark.parametrize("resource", RESOURCES)
    def test_v2_and_efcore_agree(self, client, event_rows, resource):
        raw = client.get(f"/api/v2/events/{event_rows.id}/{resource}")
        orm = client.get(f"/api/efcore/events/{event_rows.id}/{resource}")
        assert raw.status_code == 200
        assert orm.status_code == 200
        assert raw.json() == orm.json()
        assert raw.json()

    def test_no_sign_in_needed(self, client, event_rows):
        assert client.get(f"/api/v2/events/{event_rows.id}/teams").status_code == 200
