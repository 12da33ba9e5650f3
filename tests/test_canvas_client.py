import httpx
import pytest

from canvas.canvas_client import CanvasClient
from canvas.config import CanvasConfig
from models.quiz_models import Question, QuestionType, RosterEntry

CONFIG = CanvasConfig(site="school.instructure.com", course="42", quiz="7", token="2096~secret")

QUESTION_PAYLOAD = {
    "id": 101,
    "quiz_id": 7,
    "position": 2,
    "question_name": "Question 1",
    "question_type": "fill_in_multiple_blanks_question",
    "question_text": "<p>The [a] jumps over the [b]</p>",
    "points_possible": 2.5,
}


def test_question_from_canvas():
    question = Question.from_canvas(QUESTION_PAYLOAD)

    assert question.id == "101"
    assert question.type is QuestionType.FITB
    assert question.position == 2
    assert question.points == 2.5
    assert question.name == "Question 1"
    assert question.canvas_type == "fill_in_multiple_blanks_question"


@pytest.mark.parametrize(
    "canvas_type,expected",
    [
        ("essay_question", QuestionType.ESSAY),
        ("multiple_choice_question", QuestionType.OTHER),
        (None, QuestionType.OTHER),
    ],
)
def test_question_type_mapping(canvas_type, expected):
    payload = dict(QUESTION_PAYLOAD, question_type=canvas_type, position=None)
    question = Question.from_canvas(payload)
    assert question.type is expected
    assert question.position == 0


def test_roster_entry_from_canvas():
    entry = RosterEntry.from_canvas(
        {"id": 11896, "name": "Mason Murphy", "login_id": "mmurphy3", "sis_user_id": None}
    )
    assert entry == RosterEntry(id=11896, login="mmurphy3", email="", name="Mason Murphy", sis_id="")


def test_config_from_env(monkeypatch):
    for key, value in {"SITE": "s.instructure.com", "COURSE": "1", "QUIZ": "2", "TOKEN": "t"}.items():
        monkeypatch.setenv(f"CANVAS_{key}", value)

    config = CanvasConfig.from_env()
    assert config.quiz_url == "https://s.instructure.com/api/v1/courses/1/quizzes/2"


def test_config_from_env_missing(monkeypatch):
    for key in ("SITE", "COURSE", "QUIZ", "TOKEN"):
        monkeypatch.delenv(f"CANVAS_{key}", raising=False)
    with pytest.raises(KeyError, match="CANVAS_SITE"):
        CanvasConfig.from_env()


@pytest.mark.asyncio
async def test_fetch_question():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=QUESTION_PAYLOAD)

    async with CanvasClient(CONFIG, transport=httpx.MockTransport(handler)) as client:
        question = await client.fetch_question("101")

    assert question.id == "101"
    assert str(seen[0].url) == "https://school.instructure.com/api/v1/courses/42/quizzes/7/questions/101"
    assert seen[0].headers["Authorization"] == "Bearer 2096~secret"


@pytest.mark.asyncio
async def test_fetch_question_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"errors": []}))

    async with CanvasClient(CONFIG, transport=transport) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await client.fetch_question("999")


@pytest.mark.asyncio
async def test_fetch_questions_follows_pagination():
    next_url = "https://school.instructure.com/api/v1/courses/42/quizzes/7/questions?page=2&per_page=100"

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("page") == "2":
            return httpx.Response(200, json=[dict(QUESTION_PAYLOAD, id=102, position=3)])
        assert request.url.params.get("per_page") == "100"
        return httpx.Response(
            200,
            json=[QUESTION_PAYLOAD],
            headers={"Link": f'<{next_url}>; rel="next"'},
        )

    async with CanvasClient(CONFIG, transport=httpx.MockTransport(handler)) as client:
        questions = await client.fetch_questions()

    assert [q.id for q in questions] == ["101", "102"]
