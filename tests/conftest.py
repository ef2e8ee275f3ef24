import pytest


@pytest.fixture
def objective() -> str:
    return "Write a blog post"


@pytest.fixture
def initial_task() -> str:
    return "Research topic"
