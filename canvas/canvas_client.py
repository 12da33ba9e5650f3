"""
CanvasClient Module (Async Version)
===================================
Fetches quiz questions from the Canvas REST API using httpx.AsyncClient.
"""

from typing import Any, Dict, List, Optional

import httpx

from canvas.config import HTTP_TIMEOUT, CanvasConfig
from models.quiz_models import Question
from utils.logging import get_logger

logger = get_logger(__name__)


class CanvasClient:
    def __init__(self, config: CanvasConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {config.token}"
            },
            follow_redirects=True,
            timeout=HTTP_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "CanvasClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        resp = await self.client.get(url, params=params)
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError:
            logger.error("Canvas request failed: %s %s", resp.status_code, url)
            raise
        return resp

    async def fetch_question(self, question_id: str) -> Question:
        """Fetches a single quiz question by its identifier."""
        resp = await self._get(f"{self.config.quiz_url}/questions/{question_id}")
        question = Question.from_canvas(resp.json())
        logger.debug("Question %s: %s (%s)", question.id, question.name, question.canvas_type)
        return question

    async def fetch_questions(self) -> List[Question]:
        """
        Fetches the whole question catalog of the quiz, following Canvas
        pagination links.
        """
        questions = []
        url: Optional[str] = f"{self.config.quiz_url}/questions"
        params: Optional[Dict[str, Any]] = {"per_page": 100}
        while url:
            resp = await self._get(url, params=params)
            questions.extend(Question.from_canvas(q) for q in resp.json())
            next_link = resp.links.get("next")
            url = next_link["url"] if next_link else None
            # The next link already carries the query string
            params = None
        return questions

    async def close(self):
        """Closes the async client session."""
        await self.client.aclose()
