"""Shared pytest fixtures for storyprompt tests."""
import pytest


@pytest.fixture
def sample_state():
    """Editing state as the web UI serializes it (camelCase keys)."""
    return {
        "mainTask": "Write a story",
        "rules": ["no violence"],
        "story": {"genre": "fantasy", "plot": "a quest", "specifics": ["dragons"]},
        "moderation": {"vulgar": False, "cussing": False},
        "limits": {"minWords": 100, "maxWords": 500, "chapters": 3, "uniqueness": 0.8},
    }


@pytest.fixture
def sample_output_dict():
    return {
        "task": "Write a story",
        "rules": ["no violence"],
        "storyConfig": {"genre": "fantasy", "plot": "a quest", "specifics": ["dragons"]},
        "moderation": {"allowVulgar": False, "allowCussing": False},
        "limits": {"minWords": 100, "maxWords": 500, "maxChapters": 3, "uniqueness": 0.8},
    }
