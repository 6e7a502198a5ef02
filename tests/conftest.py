"""
Shared fakes: a scripted generation backend, an in-memory artifact store
and a fixed plot skeleton.  No test touches the network.
"""

import logging
from typing import Callable, Dict, List

import pytest

from draftsmith.generators.prompt_builders import CONTINUE_PROMPT
from draftsmith.models import CastMember, Completion, PlotSkeleton, Usage

SUMMARY_TEXT = """Title: "Fresh Beginnings"

Plot Summary: Two strangers share a network connection and a secret.

Chapter Summaries

- "The Signal" - A mysterious packet arrives.
- "The Handshake" - They finally meet online."""


class FakeBackend:
    """Replays canned responses (or asks *responder*) and records every call."""

    def __init__(self, responses: List = None, responder: Callable = None):
        self.responses = list(responses or [])
        self.responder = responder
        self.calls: List[List[Dict[str, str]]] = []
        self.models: List[str] = []

    def complete(self, model, messages):
        self.models.append(model)
        self.calls.append([dict(m) for m in messages])
        out = self.responder(messages) if self.responder else self.responses.pop(0)
        if isinstance(out, Exception):
            raise out
        return Completion(text=out, usage=Usage(prompt_tokens=10, completion_tokens=5, total_tokens=15))


class MemoryStore:
    def __init__(self):
        self.files: Dict[str, str] = {}
        self.order: List[str] = []

    def write(self, path, content):
        self.files[path] = content
        self.order.append(path)

    def write_json(self, path, obj):
        import json
        self.write(path, json.dumps(obj))


def story_responder(messages):
    """Answers each pipeline prompt kind with deterministic text."""
    last = messages[-1]["content"]
    if last == CONTINUE_PROMPT:
        return "The story went on."
    if last.startswith("Write me the following"):
        return SUMMARY_TEXT
    if last.startswith("Given the following plot summary"):
        return "S1\n\nS2\n\nS3\n\nS4"
    return "Rain fell on the server farm.\nShe logged in."


@pytest.fixture
def plot():
    return PlotSkeleton(
        plot="Arthur Hale, a person in love, is drawn into trouble.",
        cast=[
            CastMember(name="Arthur Hale", symbol="A", description="the male protagonist"),
            CastMember(name="Nora Vance", symbol="B", description="the female protagonist"),
        ],
    )


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def summary_text():
    return SUMMARY_TEXT


@pytest.fixture
def restore_root():
    """Undo logconf.init: drop the handlers it installed on the root logger."""
    root = logging.getLogger()
    level = root.level
    yield root
    ours = [h for h in root.handlers if type(h) in (logging.StreamHandler, logging.FileHandler)]
    for h in ours:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)
