# storyprompt_cli/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Tuple, Union

from storyprompt_cli import config

Number = Union[int, float]


# ─── editing state (snake_case, camelCase aliases accepted) ───────────────
class _State(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

class Story(_State):
    genre: str
    plot: str
    specifics: List[str]

class Moderation(_State):
    vulgar: bool
    cussing: bool

class Limits(_State):
    min_words: int = Field(..., ge=0, alias="minWords")
    max_words: int = Field(..., ge=0, alias="maxWords")
    chapters: int = Field(..., ge=0)
    uniqueness: Number

class PromptState(_State):
    main_task: str = Field(..., alias="mainTask")
    rules: List[str]
    story: Story
    moderation: Moderation
    limits: Limits

    @classmethod
    def default(cls) -> "PromptState":
        return cls(
            main_task="",
            rules=[],
            story=Story(genre=config.DEFAULT_GENRE, plot="", specifics=[]),
            moderation=Moderation(vulgar=False, cussing=False),
            limits=Limits(
                min_words=config.DEFAULT_MIN_WORDS,
                max_words=config.DEFAULT_MAX_WORDS,
                chapters=config.DEFAULT_CHAPTERS,
                uniqueness=config.DEFAULT_UNIQUENESS,
            ),
        )


# ─── JSON output (camelCase on the wire) ──────────────────────────────────
class _Output(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

class StoryConfig(_Output):
    genre: str
    plot: str
    specifics: Tuple[str, ...]

class OutputModeration(_Output):
    allow_vulgar: bool = Field(..., alias="allowVulgar")
    allow_cussing: bool = Field(..., alias="allowCussing")

class OutputLimits(_Output):
    min_words: int = Field(..., alias="minWords")
    max_words: int = Field(..., alias="maxWords")
    max_chapters: int = Field(..., alias="maxChapters")
    uniqueness: Number

class JSONOutput(_Output):
    task: str
    rules: Tuple[str, ...]
    story_config: StoryConfig = Field(..., alias="storyConfig")
    moderation: OutputModeration
    limits: OutputLimits

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with the wire field names."""
        return self.model_dump(by_alias=True, mode="json")


# ─── intermediate shape returned by the extraction LLM ────────────────────
class IntermediateModeration(BaseModel):
    allow_vulgar: bool = False
    allow_cussing: bool = False

class IntermediateLimits(BaseModel):
    min_words: Number = config.DEFAULT_MIN_WORDS
    max_words: Number = config.DEFAULT_MAX_WORDS
    max_chapters: Number = config.DEFAULT_CHAPTERS
    uniqueness: Number = config.DEFAULT_UNIQUENESS

class IntermediateFormat(BaseModel):
    main_task: str = ""
    rules: List[str] = []
    genre: str = config.DEFAULT_GENRE
    plot: str = ""
    specifics: List[str] = []
    moderation: IntermediateModeration = IntermediateModeration()
    limits: IntermediateLimits = IntermediateLimits()
