"""
Unit tests for the host application (topic entry <-> learning session).
"""

import pytest

from backbench.content.samples import SampleContentProvider
from backbench.core.modes import AppState, LearningMode
from backbench.engine.host import LearningApp


@pytest.fixture
def learning_app(settings):
    return LearningApp(SampleContentProvider(), settings=settings)


def test_starts_home(learning_app):
    assert learning_app.state == AppState.HOME
    assert learning_app.session is None
    assert learning_app.topic is None


def test_initiate_starts_fresh_session(learning_app):
    session = learning_app.initiate("  Bloom filters  ")

    assert learning_app.state == AppState.LEARNING_ENGINE
    assert learning_app.topic.query == "Bloom filters"
    assert session.mode == LearningMode.DIAGNOSTIC
    assert session.settings is learning_app.settings


@pytest.mark.parametrize("raw", ["", "    "])
def test_blank_topic_stays_home(learning_app, raw):
    with pytest.raises(ValueError):
        learning_app.initiate(raw)

    assert learning_app.state == AppState.HOME
    assert learning_app.session is None


def test_new_topic_replaces_session(learning_app):
    first = learning_app.initiate("Bloom filters")
    second = learning_app.initiate("Cuckoo hashing")

    assert first.closed
    assert not second.closed
    assert learning_app.session is second
    assert learning_app.state == AppState.LEARNING_ENGINE


def test_return_home_destroys_session(learning_app):
    session = learning_app.initiate("Bloom filters")

    learning_app.return_home()
    learning_app.return_home()

    assert session.closed
    assert learning_app.session is None
    assert learning_app.state == AppState.HOME


def test_session_exit_returns_home(learning_app):
    session = learning_app.initiate("Bloom filters")

    session.exit()

    assert learning_app.state == AppState.HOME
    assert learning_app.session is None
