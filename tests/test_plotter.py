"""
Slide Preview Test Suite.

Covers slide copy selection and the rendered image format.
"""

import struct

import pytest

from analyzers.models import CodingPattern, DeveloperProfile, RepoCommitCount
from visualization.plotter import (
    SLIDE_GRADIENTS,
    SlidePreviewRenderer,
    share_card,
    slide_content,
    top_language,
)


@pytest.fixture
def busy_stats(empty_stats):
    """Statistics of an active year."""
    return empty_stats.model_copy(
        update={
            "total_commits": 1234,
            "total_repos": 12,
            "top_languages": {"Go": 10, "Python": 900},
            "lines_added": 11106,
            "lines_deleted": 7404,
            "top_repos": [RepoCommitCount(name="octocat/spoon-knife", commits=700)],
            "coding_pattern": CodingPattern.NIGHT_OWL,
            "developer_profile": DeveloperProfile.COMMIT_MACHINE,
        }
    )


def png_size(data):
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    return struct.unpack(">II", data[16:24])


def test_top_language_by_bytes(busy_stats, empty_stats):
    assert top_language(busy_stats) == "Python"
    assert top_language(empty_stats) == "Code"


@pytest.mark.parametrize(
    "slide,title",
    [
        (1, "1,234"),
        (2, "Python"),
        (3, "Night Owl"),
        (4, "spoon-knife"),
        (5, "+11,106"),
        (6, "Commit Machine"),
        (7, "2024 Wrapped"),
        (8, "Git Wrapped 2024"),
    ],
)
def test_slide_titles(busy_stats, slide, title):
    assert slide_content(slide, busy_stats, 2024).title == title


def test_slide_descriptions(busy_stats):
    assert slide_content(1, busy_stats, 2024).description == "commits in 2024"
    assert slide_content(4, busy_stats, 2024).description == "700 commits"
    assert slide_content(5, busy_stats, 2024).description == "-7,404 removed"


def test_favorite_repo_slide_without_repositories(empty_stats):
    content = slide_content(4, empty_stats, 2024)

    assert content.title == "GitHub"
    assert content.description == "0 commits"


def test_render_is_1200_by_630_png(busy_stats):
    renderer = SlidePreviewRenderer()

    image = renderer.render(slide_content(1, busy_stats, 2024), 2024)

    assert png_size(image) == (1200, 630)


def test_share_card_renders_year_on_first_gradient():
    content = share_card(2025)

    assert content.title == "2025"
    assert content.background == SLIDE_GRADIENTS[0]
    assert png_size(SlidePreviewRenderer().render(content, 2025)) == (1200, 630)
