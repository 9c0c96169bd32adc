"""
State → JSON output projection.

One-to-one remap of the editing state onto the wire shape:
  • mainTask          → task
  • story             → storyConfig
  • vulgar / cussing  → allowVulgar / allowCussing
  • chapters          → maxChapters
Nothing is dropped, merged, sorted or validated for consistency here.
"""

from __future__ import annotations

from typing import Any, Mapping

from storyprompt_cli.models import (
    JSONOutput,
    OutputLimits,
    OutputModeration,
    PromptState,
    StoryConfig,
)


def build_json(state: PromptState | Mapping[str, Any]) -> JSONOutput:
    """
    Project *state* onto a fresh ``JSONOutput``.

    A plain mapping is validated as a ``PromptState`` first, so missing or
    mistyped fields raise ``pydantic.ValidationError`` instead of leaking
    ``None`` into the output.
    """
    if not isinstance(state, PromptState):
        state = PromptState.model_validate(state)

    return JSONOutput(
        task=state.main_task,
        rules=tuple(state.rules),
        story_config=StoryConfig(
            genre=state.story.genre,
            plot=state.story.plot,
            specifics=tuple(state.story.specifics),
        ),
        moderation=OutputModeration(
            allow_vulgar=state.moderation.vulgar,
            allow_cussing=state.moderation.cussing,
        ),
        limits=OutputLimits(
            min_words=state.limits.min_words,
            max_words=state.limits.max_words,
            max_chapters=state.limits.chapters,
            uniqueness=state.limits.uniqueness,
        ),
    )
