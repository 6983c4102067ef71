"""
Response shapes for every resource the API returns.

Field names follow the JSON the web client was built against (PascalCase for
entity bodies, camelCase for composed payloads). Both storage read paths in
``repositories`` feed their rows through the ``legacy_*`` functions here, so
the ORM and raw-SQL endpoints cannot drift apart.

Rows are read by attribute, so ORM instances and SQLAlchemy ``Row`` objects
are interchangeable as long as the date columns arrive as datetimes.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from app.utils.dates import to_iso, to_unix_seconds_str

logger = logging.getLogger(__name__)


def parse_options(raw: Optional[str]) -> List[Any]:
    """Decode a stored options string; anything unreadable becomes []"""
    if not raw:
        return []
    try:
        options = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Question options are not valid JSON; returning empty list")
        return []
    return options if isinstance(options, list) else []


# -------- Legacy read path shapes (timestamps as Unix-seconds strings) --------

def legacy_team(row, member_count: int) -> Dict[str, Any]:
    return {
        "Id": row.id,
        "EventId": row.event_id,
        "Name": row.name,
        "TableNumber": row.table_number,
        "MaxMembers": row.max_members,
        "CreatedAt": to_unix_seconds_str(row.created_at),
        "MemberCount": int(member_count or 0),
    }


def legacy_question(row) -> Dict[str, Any]:
    return {
        "Id": row.id,
        "EventId": row.event_id,
        "Type": row.type,
        "Question": row.question,
        "Options": row.options,
        "CorrectAnswer": row.correct_answer,
        "Explanation": row.explanation,
        "Points": row.points,
        "TimeLimit": row.time_limit,
        "Difficulty": row.difficulty,
        "Category": row.category,
        "BackgroundImageUrl": row.background_image_url,
        "AiGenerated": bool(row.ai_generated),
        "OrderIndex": row.order_index,
        "CreatedAt": to_unix_seconds_str(row.created_at),
    }


def legacy_participant(row) -> Dict[str, Any]:
    return {
        "Id": row.id,
        "EventId": row.event_id,
        "TeamId": row.team_id,
        "Name": row.name,
        "ParticipantToken": row.participant_token,
        "JoinedAt": to_unix_seconds_str(row.joined_at),
        "LastActiveAt": to_unix_seconds_str(row.last_active_at),
        "IsActive": bool(row.is_active),
        "CanSwitchTeam": bool(row.can_switch_team),
    }


def legacy_fun_fact(row) -> Dict[str, Any]:
    return {
        "Id": row.id,
        "EventId": row.event_id,
        "Title": row.title,
        "Content": row.content,
        "OrderIndex": row.order_index,
        "IsActive": bool(row.is_active),
        "CreatedAt": to_unix_seconds_str(row.created_at),
    }


# -------- Entity bodies --------

def event_dict(event) -> Dict[str, Any]:
    return {
        "Id": event.id,
        "Title": event.title,
        "Description": event.description,
        "HostId": event.host_id,
        "EventType": event.event_type,
        "MaxParticipants": event.max_participants,
        "Difficulty": event.difficulty,
        "Status": event.status,
        "QrCode": event.qr_code,
        "EventDate": to_iso(event.event_date),
        "EventTime": event.event_time,
        "Location": event.location,
        "SponsoringOrganization": event.sponsoring_organization,
        "LogoUrl": event.logo_url,
        "BackgroundImageUrl": event.background_image_url,
        "EventCopy": event.event_copy,
        "WelcomeMessage": event.welcome_message,
        "ThankYouMessage": event.thank_you_message,
        "PrimaryColor": event.primary_color,
        "SecondaryColor": event.secondary_color,
        "FontFamily": event.font_family,
        "ContactEmail": event.contact_email,
        "ContactPhone": event.contact_phone,
        "WebsiteUrl": event.website_url,
        "SocialLinks": event.social_links,
        "PrizeInformation": event.prize_information,
        "EventRules": event.event_rules,
        "SpecialInstructions": event.special_instructions,
        "AccessibilityInfo": event.accessibility_info,
        "DietaryAccommodations": event.dietary_accommodations,
        "DressCode": event.dress_code,
        "AgeRestrictions": event.age_restrictions,
        "TechnicalRequirements": event.technical_requirements,
        "RegistrationDeadline": to_iso(event.registration_deadline),
        "CancellationPolicy": event.cancellation_policy,
        "RefundPolicy": event.refund_policy,
        "SponsorInformation": event.sponsor_information,
        "Settings": event.settings,
        "AllowParticipants": bool(event.allow_participants),
        "CreatedAt": to_iso(event.created_at),
        "StartedAt": to_iso(event.started_at),
        "CompletedAt": to_iso(event.completed_at),
    }


def home_event_dict(event) -> Dict[str, Any]:
    """Minimal public projection for the landing page"""
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "eventDate": to_iso(event.event_date),
        "eventTime": event.event_time,
        "location": event.location,
        "status": event.status,
        "difficulty": event.difficulty,
    }


def event_summary(event) -> Dict[str, Any]:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "status": event.status,
    }


def question_dict(question, parse: bool = False) -> Dict[str, Any]:
    return {
        "Id": question.id,
        "EventId": question.event_id,
        "Type": question.type,
        "Question": question.question,
        "Options": parse_options(question.options) if parse else question.options,
        "CorrectAnswer": question.correct_answer,
        "Explanation": question.explanation,
        "Points": question.points,
        "TimeLimit": question.time_limit,
        "Difficulty": question.difficulty,
        "Category": question.category,
        "BackgroundImageUrl": question.background_image_url,
        "AiGenerated": bool(question.ai_generated),
        "OrderIndex": question.order_index,
        "QuestionType": question.question_type,
        "CreatedAt": to_unix_seconds_str(question.created_at) if parse else to_iso(question.created_at),
    }


def participant_dict(participant) -> Dict[str, Any]:
    return {
        "Id": participant.id,
        "EventId": participant.event_id,
        "TeamId": participant.team_id,
        "Name": participant.name,
        "ParticipantToken": participant.participant_token,
        "JoinedAt": to_iso(participant.joined_at),
        "LastActiveAt": to_iso(participant.last_active_at),
        "IsActive": bool(participant.is_active),
        "CanSwitchTeam": bool(participant.can_switch_team),
    }


def team_dict(team, with_participants: bool = False) -> Dict[str, Any]:
    data = {
        "Id": team.id,
        "EventId": team.event_id,
        "Name": team.name,
        "TableNumber": team.table_number,
        "MaxMembers": team.max_members,
        "CreatedAt": to_iso(team.created_at),
    }
    if with_participants:
        members = list(team.participants)
        data["participantCount"] = len(members)
        data["participants"] = [participant_dict(p) for p in members]
    return data


def fun_fact_dict(fact) -> Dict[str, Any]:
    return {
        "Id": fact.id,
        "EventId": fact.event_id,
        "Title": fact.title,
        "Content": fact.content,
        "OrderIndex": fact.order_index,
        "IsActive": bool(fact.is_active),
        "CreatedAt": to_iso(fact.created_at),
    }


def response_dict(response) -> Dict[str, Any]:
    return {
        "Id": response.id,
        "ParticipantId": response.participant_id,
        "QuestionId": response.question_id,
        "Answer": response.answer,
        "IsCorrect": bool(response.is_correct),
        "Points": response.points,
        "ResponseTime": response.response_time,
        "TimeRemaining": response.time_remaining,
        "SubmittedAt": to_iso(response.submitted_at),
    }


def session_user_dict(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "fullName": user.full_name,
        "email": user.email,
    }


def role_summary(role) -> Optional[Dict[str, Any]]:
    if role is None:
        return None
    return {"Id": role.id, "Name": role.name, "Description": role.description}


def admin_user_dict(user) -> Dict[str, Any]:
    return {
        "Id": user.id,
        "Username": user.username,
        "Email": user.email,
        "FullName": user.full_name,
        "CreatedAt": to_iso(user.created_at),
        "Role": role_summary(user.role),
    }


def admin_role_dict(role, user_count: int) -> Dict[str, Any]:
    return {
        "Id": role.id,
        "Name": role.name,
        "Description": role.description,
        "CreatedAt": to_iso(role.created_at),
        "UserCount": user_count,
    }


def event_image_dict(image) -> Dict[str, Any]:
    return {
        "id": image.id,
        "questionId": image.question_id,
        "unsplashImageId": image.unsplash_image_id,
        "imageUrl": image.image_url,
        "thumbnailUrl": image.thumbnail_url,
        "description": image.description,
        "attributionText": image.attribution_text,
        "attributionUrl": image.attribution_url,
        "width": image.width,
        "height": image.height,
        "color": image.color,
        "sizeVariant": image.size_variant,
        "usageContext": image.usage_context,
        "createdAt": to_iso(image.created_at),
        "expiresAt": to_iso(image.expires_at),
    }
