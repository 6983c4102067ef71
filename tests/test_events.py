"""
Tests for host event management, teams and fun facts
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.models import Event, FunFact, Participant, Question, Team
from app.services.event_service import EventService
from app.utils.dates import utcnow


@pytest.fixture
def signed_in_host(host, login):
    login("host")
    return host


class TestEventService:

    def test_public_home_events(self, db_session, host):
        now = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
        rows = [
            ("Soon", "draft", now + timedelta(days=1)),
            ("Later", "active", now + timedelta(days=5)),
            ("Just started", "active", now - timedelta(hours=1)),
            ("Long gone", "active", now - timedelta(days=2)),
            ("Finished", "completed", now + timedelta(days=2)),
            ("Undated", "draft", None),
        ]
        for title, status, when in rows:
            db_session.add(Event(title=title, host_id=host.id, status=status, event_date=when))
        db_session.commit()

        titles = [e.title for e in EventService.list_public_upcoming(db_session, now=now)]
        assert titles == ["Just started", "Soon", "Later", "Undated"]

        assert len(EventService.list_public_upcoming(db_session, limit=2, now=now)) == 2

    def test_upcoming_for_host(self, db_session, host, other_host):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        db_session.add_all([
            Event(title="Next week", host_id=host.id, event_date=now + timedelta(days=7)),
            Event(title="Tomorrow", host_id=host.id, event_date=now + timedelta(days=1)),
            Event(title="Yesterday", host_id=host.id, event_date=now - timedelta(days=1)),
            Event(title="Cancelled", host_id=host.id, status="cancelled", event_date=now + timedelta(days=2)),
            Event(title="Someone else's", host_id=other_host.id, event_date=now + timedelta(days=1)),
        ])
        db_session.commit()

        titles = [e.title for e in EventService.list_upcoming(db_session, host.id, now=now)]
        assert titles == ["Tomorrow", "Next week"]

    def test_generate_copy_templates(self, event):
        assert EventService.generate_copy(event, "welcome") == "Welcome to Wine Trivia Night!"
        assert EventService.generate_copy(event, "Promotional").startswith("Join us for Wine Trivia Night!")
        assert EventService.generate_copy(event, "other") == "Sip and answer"


class TestEventRoutes:

    def test_requires_sign_in(self, client, event):
        assert client.get("/api/events").status_code == 401
        assert client.get(f"/api/events/{event.id}").status_code == 401

    def test_create_event(self, client, signed_in_host):
        response = client.post("/api/events", json={
            "title": "Pub Quiz",
            "description": "Weekly",
            "eventDate": "2030-03-01T19:00:00Z",
            "maxParticipants": 40
        })
        assert response.status_code == 201
        body = response.json()
        assert body["HostId"] == signed_in_host.id
        assert body["Status"] == "draft"
        assert body["MaxParticipants"] == 40
        assert body["EventDate"] == "2030-03-01T19:00:00.000Z"
        assert body["QrCode"]
        assert body["AllowParticipants"] is False

    def test_create_event_requires_title(self, client, signed_in_host):
        response = client.post("/api/events", json={"description": "no title"})
        assert response.status_code == 400
        assert response.json() == {"error": "Event title is required"}

    def test_list_only_own_events(self, client, event, other_host, login):
        login("other")
        assert client.get("/api/events").json() == []
        login("host")
        assert [e["Id"] for e in client.get("/api/events").json()] == [event.id]

    def test_other_host_is_forbidden(self, client, event, other_host, login):
        login("other")
        response = client.get(f"/api/events/{event.id}")
        assert response.status_code == 403
        assert response.json() == {"error": "You do not have access to this event"}

    def test_missing_event(self, client, signed_in_host):
        response = client.get("/api/events/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Event not found"}

    def test_update_event(self, client, event, signed_in_host):
        response = client.put(f"/api/events/{event.id}", json={
            "location": "The Cellar",
            "allowParticipants": False,
            "primaryColor": "#000000"
        })
        assert response.status_code == 200
        body = response.json()
        assert body["Location"] == "The Cellar"
        assert body["AllowParticipants"] is False
        assert body["PrimaryColor"] == "#000000"
        assert body["Title"] == "Wine Trivia Night"

    def test_update_event_rejects_blank_title(self, client, event, signed_in_host):
        assert client.put(f"/api/events/{event.id}", json={"title": " "}).status_code == 400

    def test_update_event_ignores_null_required_fields(self, client, event, signed_in_host):
        response = client.put(f"/api/events/{event.id}", json={
            "allowParticipants": None,
            "maxParticipants": None,
            "difficulty": None,
            "location": None
        })
        assert response.status_code == 200
        body = response.json()
        assert body["AllowParticipants"] is True
        assert body["MaxParticipants"] == 50
        assert body["Difficulty"] == "medium"
        assert body["Location"] is None

    def test_create_event_rejects_unknown_status(self, client, signed_in_host):
        response = client.post("/api/events", json={"title": "Pub Quiz", "status": "bogus"})
        assert response.status_code == 400
        assert "Invalid status 'bogus'" in response.json()["error"]
        assert client.get("/api/events").json() == []

    def test_start_locks_team_switching(self, client, db_session, event, signed_in_host):
        db_session.add(Participant(event_id=event.id, name="Pat", participant_token="tok-1"))
        db_session.commit()

        response = client.post(f"/api/events/{event.id}/start")
        assert response.status_code == 200
        assert response.json()["Status"] == "active"
        assert response.json()["StartedAt"] is not None

        db_session.expire_all()
        assert db_session.query(Participant).one().can_switch_team is False

    def test_status_transitions(self, client, event, signed_in_host):
        response = client.patch(f"/api/events/{event.id}/status", json={"status": "completed"})
        assert response.status_code == 200
        assert response.json()["Status"] == "completed"
        assert response.json()["CompletedAt"] is not None

        assert client.patch(f"/api/events/{event.id}/status", json={"status": "paused"}).status_code == 400
        assert client.patch(f"/api/events/{event.id}/status", json={}).status_code == 400

    def test_generate_copy(self, client, event, signed_in_host):
        response = client.post(f"/api/events/{event.id}/generate-copy", json={"type": "thankyou"})
        assert response.json() == {
            "type": "thankyou",
            "copy": "Thanks for playing Wine Trivia Night!",
            "eventId": event.id,
        }

    def test_qr_code_png(self, client, event, signed_in_host):
        response = client.get(f"/api/events/{event.id}/qr.png")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")
        assert "wine-trivia-night-qr.png" in response.headers["content-disposition"]

    def test_home_is_public(self, client, event):
        response = client.get("/api/events/home")
        assert response.status_code == 200
        assert response.json() == [{
            "id": event.id,
            "title": "Wine Trivia Night",
            "description": "Sip and answer",
            "eventDate": "2030-06-01T19:00:00.000Z",
            "eventTime": None,
            "location": None,
            "status": "draft",
            "difficulty": "medium",
        }]

    def test_active_events(self, client, db_session, event, signed_in_host):
        assert client.get("/api/events/active").json() == []
        client.post(f"/api/events/{event.id}/start")
        assert [e["Id"] for e in client.get("/api/events/active").json()] == [event.id]


class TestTeams:

    def test_create_and_list(self, client, event, signed_in_host):
        response = client.post(f"/api/events/{event.id}/teams", json={"name": "Corks", "tableNumber": 3})
        assert response.status_code == 201
        assert response.json()["TableNumber"] == 3
        assert response.json()["MaxMembers"] == 6

        teams = client.get(f"/api/events/{event.id}/teams").json()
        assert teams[0]["Name"] == "Corks"
        assert teams[0]["participantCount"] == 0
        assert teams[0]["participants"] == []

    def test_team_name_required(self, client, event, signed_in_host):
        response = client.post(f"/api/events/{event.id}/teams", json={"tableNumber": 3})
        assert response.status_code == 400
        assert response.json() == {"error": "Team name is required"}

    def test_public_teams_by_qr_code(self, client, db_session, event):
        team = Team(event_id=event.id, name="Corks", table_number=1)
        db_session.add(team)
        db_session.flush()
        db_session.add(Participant(event_id=event.id, team_id=team.id, name="Pat", participant_token="tok"))
        db_session.commit()

        teams = client.get(f"/api/events/{event.qr_code}/teams-public").json()
        assert teams == [{
            "Id": team.id,
            "EventId": event.id,
            "Name": "Corks",
            "TableNumber": 1,
            "participantCount": 1,
        }]

    def test_public_teams_closed_event(self, client, db_session, event):
        event.allow_participants = False
        db_session.commit()
        assert client.get(f"/api/events/{event.qr_code}/teams-public").json() == []

    def test_public_teams_unknown_code(self, client):
        assert client.get("/api/events/NOPE/teams-public").status_code == 404


class TestFunFacts:

    def test_crud(self, client, event, signed_in_host):
        response = client.post(f"/api/events/{event.id}/fun-facts", json={
            "title": "Grapes",
            "content": "There are over 10,000 varieties",
            "orderIndex": 2
        })
        assert response.status_code == 201
        fact = response.json()
        assert fact["IsActive"] is True

        response = client.put(f"/api/fun-facts/{fact['Id']}", json={"isActive": False})
        assert response.json()["IsActive"] is False
        assert response.json()["Title"] == "Grapes"

        assert [f["Id"] for f in client.get(f"/api/events/{event.id}/fun-facts").json()] == [fact["Id"]]

        assert client.delete(f"/api/fun-facts/{fact['Id']}").status_code == 204
        assert client.get(f"/api/events/{event.id}/fun-facts").json() == []

    def test_title_and_content_required(self, client, event, signed_in_host):
        response = client.post(f"/api/events/{event.id}/fun-facts", json={"title": "Only title"})
        assert response.status_code == 400

    def test_other_host_cannot_edit(self, client, db_session, event, other_host, login):
        fact = FunFact(event_id=event.id, title="T", content="C")
        db_session.add(fact)
        db_session.commit()

        login("other")
        assert client.put(f"/api/fun-facts/{fact.id}", json={"title": "Mine"}).status_code == 403
        assert client.delete(f"/api/fun-facts/{fact.id}").status_code == 403

    def test_seed_event_is_readable_anonymously(self, client, db_session, host):
        db_session.add(Event(id="seed-event-wine", title="Demo", host_id=host.id))
        db_session.add(FunFact(event_id="seed-event-wine", title="T", content="C"))
        db_session.add(Question(event_id="seed-event-wine", question="Q?", correct_answer="A"))
        db_session.commit()

        assert len(client.get("/api/events/seed-event-wine/fun-facts").json()) == 1
        assert len(client.get("/api/events/seed-event-wine/questions").json()) == 1
        assert client.get("/api/events/seed-event-missing/fun-facts").status_code == 404

    def test_regular_event_needs_sign_in(self, client, event):
        assert client.get(f"/api/events/{event.id}/fun-facts").status_code == 401
        assert client.get(f"/api/events/{event.id}/questions").status_code == 401


def test_started_at_uses_current_time(db_session, event):
    before = utcnow()
    started = EventService.start_event(db_session, event)
    assert started.started_at >= before


class TestDeleteEvent:

    def test_delete_removes_event_and_children(self, client, db_session, signed_in_host):
        event_id = client.post("/api/events", json={"title": "Pub Quiz"}).json()["Id"]
        qr_code = client.put(f"/api/events/{event_id}", json={"allowParticipants": True}).json()["QrCode"]

        client.post(f"/api/events/{event_id}/teams", json={"name": "Corks", "tableNumber": 1})
        client.post(f"/api/events/{event_id}/fun-facts", json={"title": "Grapes", "content": "Many kinds"})
        client.post("/api/questions/bulk", json={
            "eventId": event_id,
            "questions": [{"question": "Red or white?", "correctAnswer": "Red"}]
        })
        assert client.post(f"/api/events/join/{qr_code}", json={"name": "Pat"}).status_code == 201

        response = client.delete(f"/api/events/{event_id}")
        assert response.status_code == 204
        assert client.get(f"/api/events/{event_id}").status_code == 404

        for model in (Event, Question, Team, Participant, FunFact):
            assert db_session.query(model).count() == 0, model.__name__

    def test_delete_missing_event(self, client, signed_in_host):
        response = client.delete("/api/events/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Event not found"}

    def test_other_host_cannot_delete(self, client, db_session, event, other_host, login):
        login("other")
        assert client.delete(f"/api/events/{event.id}").status_code == 403
        assert db_session.query(Event).count() == 1

    def test_delete_requires_sign_in(self, client, event):
        assert client.delete(f"/api/events/{event.id}").status_code == 401
