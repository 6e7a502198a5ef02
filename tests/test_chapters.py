import pytest

from conftest import FakeBackend
from draftsmith.errors import SceneCountMismatch
from draftsmith.generators.chapters import check_scene_count, generate_chapter, split_scenes
from draftsmith.models import Chapter
from draftsmith.parsing import parse_summary


def test_split_on_double_newlines():
    assert split_scenes("S1\n\nS2\n\nS3\n\nS4") == ["S1", "S2", "S3", "S4"]


def test_split_trims_and_drops_empty_segments():
    assert split_scenes("\n\n  S1  \n\n\n\nS2\n \nS3\r\n\r\nS4\n") == ["S1", "S2", "S3", "S4"]


def test_single_newlines_stay_inside_a_scene():
    assert split_scenes("line one\nline two\n\nnext") == ["line one\nline two", "next"]


def test_generate_chapter_prompt_and_result(summary_text, plot):
    summary = parse_summary(summary_text, plot.cast)
    backend = FakeBackend(["S1\n\nS2\n\nS3\n\nS4"])

    ch = generate_chapter(backend, "m", summary, summary.chapter_list[0])

    assert ch.title == "The Signal"
    assert ch.summary == "A mysterious packet arrives."
    assert ch.scene_descriptions == ["S1", "S2", "S3", "S4"]

    [messages] = backend.calls
    assert len(messages) == 1 and messages[0]["role"] == "user"
    prompt = messages[0]["content"]
    assert "Write at least 4 scenes" in prompt
    assert "DO NOT include the chapter title" in prompt
    assert "Plot summary: Two strangers share a network connection and a secret." in prompt
    assert "- Arthur Hale: the male protagonist\n- Nora Vance: the female protagonist" in prompt
    assert prompt.endswith("Chapter title: The Signal\nChapter summary: A mysterious packet arrives.")


def test_fewer_scenes_are_accepted_by_the_generator(summary_text):
    summary = parse_summary(summary_text)
    ch = generate_chapter(FakeBackend(["only one scene"]), "m", summary, summary.chapter_list[1])
    assert ch.scene_descriptions == ["only one scene"]


def test_scene_count_check():
    ch = Chapter(title="T", summary="S", scene_descriptions=["a", "b"])
    check_scene_count(ch, 3, 2)
    with pytest.raises(SceneCountMismatch) as exc:
        check_scene_count(ch, 3, 4)
    assert (exc.value.chapter, exc.value.expected, exc.value.actual) == (3, 4, 2)
    check_scene_count(ch, 3, 4, strict=False)
