import json

import pytest
from pydantic import ValidationError

from draftsmith.config import MODEL_DEFAULT, load_config


def test_defaults():
    cfg = load_config()
    assert cfg.model == MODEL_DEFAULT
    assert (cfg.chapter_count, cfg.min_scenes, cfg.continuation_rounds, cfg.max_attempts) == (10, 4, 1, 1)
    assert cfg.strict_counts is True


def test_file_then_flags(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"model": "gpt-4o", "chapter_count": 15, "theme": "t"}), "utf-8")
    cfg = load_config(path, chapter_count=12, model=None)
    assert (cfg.model, cfg.chapter_count, cfg.theme) == ("gpt-4o", 12, "t")


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"chapters": 3}), "utf-8")
    with pytest.raises(ValidationError):
        load_config(path)


def test_max_tokens_from_file_and_flag(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"max_tokens": 800}), "utf-8")
    assert load_config(path).max_tokens == 800
    assert load_config(path, max_tokens=200).max_tokens == 200
    assert load_config().max_tokens is None


def test_max_tokens_must_be_positive():
    with pytest.raises(ValidationError):
        load_config(max_tokens=0)
