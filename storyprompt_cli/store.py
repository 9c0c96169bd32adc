"""
Editing-session state container.

The caller owns the store; every mutation goes through a named setter and
``build()`` hands the current state to the JSON projection.
"""

from __future__ import annotations

import logging
from typing import List

from storyprompt_cli.generators.build_json import build_json
from storyprompt_cli.models import JSONOutput, Limits, Moderation, PromptState, Story

logger = logging.getLogger(__name__)


class PromptStore:
    def __init__(self, state: PromptState | None = None):
        self.state = state if state is not None else PromptState.default()
        self.generated_json: JSONOutput | None = None
        self.generated_toon: str | None = None
        self.is_generating = False
        self.generation_error: str | None = None

    # ── task & rules ----------------------------------------------------------
    def set_main_task(self, task: str) -> None:
        self.state.main_task = task
        logger.debug("main_task set (%d chars)", len(task))

    def add_rule(self, rule: str) -> None:
        self.state.rules = [*self.state.rules, rule]
        logger.debug("rule added: %s", rule)

    def delete_rule(self, index: int) -> None:
        if not 0 <= index < len(self.state.rules):
            logger.debug("delete_rule: index %d out of range", index)
            return
        self.state.rules = [r for i, r in enumerate(self.state.rules) if i != index]
        logger.debug("rule %d deleted", index)

    # ── story -----------------------------------------------------------------
    def set_genre(self, genre: str) -> None:
        self.state.story.genre = genre

    def set_plot(self, plot: str) -> None:
        self.state.story.plot = plot

    def set_specifics(self, specifics: List[str]) -> None:
        self.state.story.specifics = list(specifics)

    # ── moderation ------------------------------------------------------------
    def set_vulgar(self, value: bool) -> None:
        self.state.moderation.vulgar = value

    def set_cussing(self, value: bool) -> None:
        self.state.moderation.cussing = value

    # ── limits ----------------------------------------------------------------
    def set_min_words(self, value: int) -> None:
        self.state.limits.min_words = value

    def set_max_words(self, value: int) -> None:
        self.state.limits.max_words = value

    def set_max_chapters(self, value: int) -> None:
        self.state.limits.chapters = value

    def set_uniqueness(self, value: float) -> None:
        self.state.limits.uniqueness = value

    # ── generation ------------------------------------------------------------
    def load_from_output(self, data: JSONOutput) -> None:
        """Replace the editing state with the inverse projection of *data*."""
        self.state = PromptState(
            main_task=data.task,
            rules=list(data.rules),
            story=Story(
                genre=data.story_config.genre,
                plot=data.story_config.plot,
                specifics=list(data.story_config.specifics),
            ),
            moderation=Moderation(
                vulgar=data.moderation.allow_vulgar,
                cussing=data.moderation.allow_cussing,
            ),
            limits=Limits(
                min_words=data.limits.min_words,
                max_words=data.limits.max_words,
                chapters=data.limits.max_chapters,
                uniqueness=data.limits.uniqueness,
            ),
        )
        self.generated_json = data
        logger.info("State loaded from generated output (task=%r)", data.task)

    def set_generated_json(self, data: JSONOutput | None) -> None:
        self.generated_json = data

    def set_generated_toon(self, toon: str | None) -> None:
        self.generated_toon = toon

    def set_is_generating(self, loading: bool) -> None:
        self.is_generating = loading

    def set_generation_error(self, error: str | None) -> None:
        self.generation_error = error
        if error:
            logger.warning("Generation error: %s", error)

    def reset_generation(self) -> None:
        self.generated_json = None
        self.generated_toon = None
        self.is_generating = False
        self.generation_error = None

    def build(self) -> JSONOutput:
        return build_json(self.state)
