"""
Slide Preview Rendering Module.

Provides the social-sharing preview images of the wrapped slides:
- Slide copy derived from the statistics object
- Fixed-size 1200x630 PNG rendering with a gradient background

Uses matplotlib's object-oriented API with the Agg canvas, so rendering does
not touch pyplot's global state and can run in worker threads.
"""

import io
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from analyzers.models import GitHubStats

SLIDE_GRADIENTS = [
    ("#1DB954", "#1ED760", "#34d399"),
    ("#9333ea", "#7c3aed", "#c026d3"),
    ("#1DB954", "#14b8a6", "#06b6d4"),
    ("#db2777", "#f43f5e", "#f97316"),
    ("#2563eb", "#4f46e5", "#9333ea"),
    ("#1DB954", "#10b981", "#0d9488"),
    ("#f97316", "#ec4899", "#9333ea"),
    ("#9333ea", "#1DB954", "#06b6d4"),
]


@dataclass(frozen=True)
class SlideContent:
    """Copy and colours of one preview slide. Sizes are in pixels."""

    title: str
    background: Tuple[str, ...]
    subtitle: Optional[str] = None
    description: Optional[str] = None
    title_size: int = 120


def _number(value: int) -> str:
    return f"{value:,}"


def top_language(stats: GitHubStats) -> str:
    """Language with the most bytes, "Code" when none was sampled."""
    if not stats.top_languages:
        return "Code"
    return max(stats.top_languages.items(), key=lambda item: item[1])[0]


def slide_content(slide_number: int, stats: GitHubStats, year: int) -> SlideContent:
    """
    Describe the preview of one slide.

    Args:
        slide_number (int): Slide index; 1-7 are stat slides, anything else
            renders the intro card
        stats (GitHubStats): Statistics to summarise
        year (int): Wrapped year

    Returns:
        SlideContent: Copy and colours for the slide
    """
    top_repo = stats.top_repos[0] if stats.top_repos else None

    if slide_number == 1:
        return SlideContent(
            title=_number(stats.total_commits),
            subtitle="You made",
            description=f"commits in {year}",
            title_size=180,
            background=SLIDE_GRADIENTS[1],
        )
    if slide_number == 2:
        return SlideContent(
            title=top_language(stats),
            subtitle="Your favorite language",
            description=f"across {stats.total_repos} repositories",
            title_size=100,
            background=SLIDE_GRADIENTS[2],
        )
    if slide_number == 3:
        return SlideContent(
            title=stats.coding_pattern.value,
            subtitle="Your coding pattern",
            title_size=80,
            background=SLIDE_GRADIENTS[3],
        )
    if slide_number == 4:
        return SlideContent(
            title=top_repo.name.split("/")[-1] if top_repo else "GitHub",
            subtitle="Favorite repository",
            description=f"{top_repo.commits if top_repo else 0} commits",
            title_size=80,
            background=SLIDE_GRADIENTS[4],
        )
    if slide_number == 5:
        return SlideContent(
            title=f"+{_number(stats.lines_added)}",
            subtitle="Lines of code",
            description=f"-{_number(stats.lines_deleted)} removed",
            title_size=140,
            background=SLIDE_GRADIENTS[5],
        )
    if slide_number == 6:
        return SlideContent(
            title=stats.developer_profile.value,
            subtitle="Your developer profile",
            title_size=70,
            background=SLIDE_GRADIENTS[6],
        )
    if slide_number == 7:
        return SlideContent(
            title=f"{year} Wrapped",
            subtitle="Your year in code",
            description=(
                f"{_number(stats.total_commits)} commits • {stats.total_repos} repos"
            ),
            title_size=100,
            background=SLIDE_GRADIENTS[7],
        )
    return SlideContent(
        title=f"Git Wrapped {year}",
        subtitle="Your year in code",
        title_size=100,
        background=SLIDE_GRADIENTS[0],
    )


def share_card(year: int) -> SlideContent:
    """Generic share card used when no account is named."""
    return SlideContent(
        title=str(year),
        description="Your year in code",
        title_size=200,
        background=SLIDE_GRADIENTS[0],
    )


class SlidePreviewRenderer:
    """
    Renders slide previews as PNG images.

    Attributes:
        width (int): Image width in pixels
        height (int): Image height in pixels
        dpi (int): Rendering resolution; must divide both dimensions
    """

    def __init__(self, width: int = 1200, height: int = 630, dpi: int = 30):
        self.width = width
        self.height = height
        self.dpi = dpi

    def _points(self, pixels: float) -> float:
        """Convert a pixel size to font points at the rendering dpi."""
        return pixels * 72 / self.dpi

    def create_slide_figure(self, content: SlideContent, year: int) -> Figure:
        """Create the figure for one slide.

        Args:
            content (SlideContent): Slide copy and colours
            year (int): Year shown in the footer

        Returns:
            Figure: Figure sized to ``width`` x ``height`` pixels
        """
        fig = Figure(figsize=(self.width / self.dpi, self.height / self.dpi), dpi=self.dpi)
        FigureCanvasAgg(fig)
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_axis_off()
        ax.set_xlim(0, 1)
        ax.set_ylim(0, 1)

        # Diagonal gradient, top-left to bottom-right
        x, y = np.meshgrid(np.linspace(0, 1, 240), np.linspace(1, 0, 126))
        cmap = LinearSegmentedColormap.from_list("slide", list(content.background))
        ax.imshow(
            (x + y) / 2,
            cmap=cmap,
            extent=(0, 1, 0, 1),
            aspect="auto",
            interpolation="bicubic",
        )

        ax.add_patch(Circle((0.95, 1.05), 0.25, color="white", alpha=0.1))
        ax.add_patch(Circle((0.02, -0.05), 0.2, color="black", alpha=0.2))

        if content.subtitle:
            ax.text(
                0.5,
                0.78,
                content.subtitle.upper(),
                ha="center",
                va="center",
                color="white",
                alpha=0.8,
                fontsize=self._points(28),
            )
        ax.text(
            0.5,
            0.5,
            content.title,
            ha="center",
            va="center",
            color="white",
            fontweight="heavy",
            fontsize=self._points(content.title_size),
        )
        if content.description:
            ax.text(
                0.5,
                0.24,
                content.description,
                ha="center",
                va="center",
                color="white",
                alpha=0.9,
                fontsize=self._points(36),
            )
        ax.text(
            0.5,
            0.06,
            f"Git Wrapped {year}",
            ha="center",
            va="center",
            color="white",
            alpha=0.6,
            fontsize=self._points(24),
        )
        return fig

    def render(self, content: SlideContent, year: int) -> bytes:
        """Render one slide to PNG bytes.

        Args:
            content (SlideContent): Slide copy and colours
            year (int): Year shown in the footer

        Returns:
            bytes: PNG image data
        """
        fig = self.create_slide_figure(content, year)
        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", dpi=self.dpi)
        return buffer.getvalue()
