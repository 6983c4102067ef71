"""
OpenAI-backed trivia question generation.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from app.core.config import settings
from app.core.exceptions import InvalidOperationError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert trivia question generator. Generate engaging, accurate, "
    "and well-researched trivia questions. Always respond with valid JSON in the "
    "exact format specified."
)

DIFFICULTY_DESCRIPTIONS = {
    "easy": "suitable for beginners with basic knowledge",
    "medium": "requiring moderate knowledge and some deeper understanding",
    "hard": "challenging questions for experts or enthusiasts",
    "mixed": "a mix of easy, medium, and hard questions",
}


def build_prompt(topic: str, difficulty: str, count: int, event_context: str = "") -> str:
    description = DIFFICULTY_DESCRIPTIONS.get((difficulty or "").lower(), "medium difficulty")
    context = f"\n\nEvent Context: {event_context}" if event_context and event_context.strip() else ""

    return f"""Generate {count} trivia questions about {topic}. The difficulty should be {description}.{context}

Requirements:
- All questions should be multiple choice with exactly 4 options (A, B, C, D)
- Questions should be engaging, accurate, and well-researched
- Include a brief explanation for each correct answer
- Vary the topics within the main subject to keep it interesting
- Ensure questions are appropriate for a trivia event setting

Return the response as a JSON array with this exact structure:
[
  {{
    "question": "Your question text here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": "Option A",
    "explanation": "Brief explanation of why this is correct",
    "difficulty": "easy",
    "category": "{topic}"
  }}
]

Make sure the JSON is valid and contains exactly {count} questions."""


def parse_generated_questions(content: str) -> List[Dict[str, Any]]:
    """Parse the model output, tolerating a ```json fenced block"""
    text = (content or "").strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    try:
        data = json.loads(text)
    except ValueError as e:
        logger.error(f"OpenAI returned invalid JSON: {e}")
        raise InvalidOperationError("Failed to parse OpenAI response. The AI returned invalid JSON.") from e

    if not isinstance(data, list) or not data:
        raise InvalidOperationError("Failed to parse questions from OpenAI response")

    questions = []
    for item in data:
        if not isinstance(item, dict):
            continue
        questions.append({
            "question": str(item.get("question") or ""),
            "options": [str(o) for o in item.get("options") or []],
            "correctAnswer": str(item.get("correctAnswer") or ""),
            "explanation": str(item.get("explanation") or ""),
            "difficulty": str(item.get("difficulty") or ""),
            "category": str(item.get("category") or ""),
        })
    if not questions:
        raise InvalidOperationError("Failed to parse questions from OpenAI response")
    return questions


class OpenAIService:
    """Generates trivia questions with the chat completions API"""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self._client = client
        self.model = settings.OPENAI_MODEL

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not settings.OPENAI_API_KEY:
                raise InvalidOperationError("OpenAI API key is not configured")
            self._client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        return self._client

    async def generate_questions(
        self,
        topic: str,
        difficulty: str = "mixed",
        count: int = 5,
        event_context: str = ""
    ) -> List[Dict[str, Any]]:
        logger.info(f"Generating {count} questions for topic '{topic}' with difficulty '{difficulty}'")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=settings.OPENAI_TEMPERATURE,
                max_tokens=settings.OPENAI_MAX_TOKENS,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(topic, difficulty, count, event_context)},
                ]
            )
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise InvalidOperationError("Failed to communicate with OpenAI") from e

        if not response.choices:
            raise InvalidOperationError("OpenAI returned empty response")

        questions = parse_generated_questions(response.choices[0].message.content)
        logger.info(f"Generated {len(questions)} questions from OpenAI")
        return questions
