"""
Canvas Configuration
====================

Connection settings for the Canvas REST API. Values can be passed directly or
read from the CANVAS_SITE, CANVAS_COURSE, CANVAS_QUIZ and CANVAS_TOKEN
environment variables.
"""

import os
from dataclasses import dataclass

HTTP_TIMEOUT = 60.0


@dataclass(frozen=True)
class CanvasConfig:
    site: str
    course: str
    quiz: str
    token: str

    @classmethod
    def from_env(cls) -> "CanvasConfig":
        values = {}
        for field_name in ("site", "course", "quiz", "token"):
            var = f"CANVAS_{field_name.upper()}"
            value = os.getenv(var)
            if not value:
                raise KeyError(f"Environment variable {var} is not set")
            values[field_name] = value
        return cls(**values)

    @property
    def api_base(self) -> str:
        return f"https://{self.site}/api/v1"

    @property
    def quiz_url(self) -> str:
        return f"{self.api_base}/courses/{self.course}/quizzes/{self.quiz}"
