"""
Backbench Visual Components.

Rich renderables for the terminal front end: session header, question and
feedback panels, explanation slides, the verification case study and the
completion card. Everything here is pure presentation; renderers take
engine objects and return Rich renderables.
"""

from __future__ import annotations

from rich import box
from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from backbench.core.models import Feedback, Question
from backbench.core.modes import LearningMode, MasteryLevel

# =============================================================================
# COLOR THEME
# =============================================================================

ENGINE_THEME = {
    "primary": "#4FC3F7",  # Sky blue - main accent
    "secondary": "#81D4FA",  # Light blue - secondary accent
    "accent": "#29B6F6",  # Bright blue - highlights
    "success": "#00E676",  # Green - correct answers
    "warning": "#FFD54F",  # Amber - notices
    "error": "#FF5252",  # Red - incorrect
    "dim": "#607D8B",  # Blue-gray - secondary text
    "white": "#ECEFF1",  # Primary text
}

STYLES = {
    "engine_primary": Style(color=ENGINE_THEME["primary"], bold=True),
    "engine_secondary": Style(color=ENGINE_THEME["secondary"]),
    "engine_accent": Style(color=ENGINE_THEME["accent"], bold=True),
    "engine_success": Style(color=ENGINE_THEME["success"], bold=True),
    "engine_warning": Style(color=ENGINE_THEME["warning"], bold=True),
    "engine_error": Style(color=ENGINE_THEME["error"], bold=True),
    "engine_dim": Style(color=ENGINE_THEME["dim"]),
}

BANNER = r"""
  ___          _   _                  _
 | _ ) __ _ __| |_| |__  ___ _ _  __| |_
 | _ \/ _` / _| / / '_ \/ -_) ' \/ _| ' \
 |___/\__,_\__|_\_\_.__/\___|_||_\__|_||_|
"""


# =============================================================================
# SPINNER FOR LOADING STATES
# =============================================================================


class EngineSpinner:
    """
    Spinner for content loads and pending transitions.

    Usage:
        with EngineSpinner(console, "Generating practice item..."):
            await session.settle()
    """

    def __init__(self, console: Console, message: str = "Processing..."):
        self.console = console
        self.message = message
        self._status = None

    def __enter__(self):
        self._status = self.console.status(f"[cyan]{self.message}[/cyan]", spinner="dots")
        self._status.__enter__()
        return self

    def __exit__(self, *args):
        if self._status:
            self._status.__exit__(*args)

    def update_message(self, message: str):
        """Update the spinner message."""
        self.message = message
        if self._status:
            self._status.update(f"[cyan]{self.message}[/cyan]")


# =============================================================================
# SESSION HEADER
# =============================================================================


def create_progress_bar(percent: int, width: int = 20) -> Text:
    """ASCII progress bar for learning depth."""
    filled = int(width * percent / 100)
    bar = Text()
    bar.append("#" * filled, style=STYLES["engine_accent"])
    bar.append("-" * (width - filled), style=STYLES["engine_dim"])
    return bar


def render_session_header(
    topic: str,
    mode: LearningMode,
    mastery: MasteryLevel,
    progress_percent: int,
) -> Panel:
    """
    Render the header shown above every mode.

    Args:
        topic: Session topic
        mode: Current learning mode
        mastery: Current mastery level
        progress_percent: Learning depth (0-100)

    Returns:
        Rich Panel with topic, mode, depth bar and mastery
    """
    text = Text()
    text.append(f"{mode.label.upper()}", style=STYLES["engine_primary"])
    text.append("  ·  ", style=STYLES["engine_dim"])
    text.append("Depth ", style=STYLES["engine_dim"])
    text.append("[")
    text.append_text(create_progress_bar(progress_percent))
    text.append("] ")
    text.append(f"{progress_percent}%", style=STYLES["engine_secondary"])
    text.append("  ·  ", style=STYLES["engine_dim"])
    text.append(f"{mastery.emoji} {mastery.display_name}", style=Style(color=mastery.color, bold=True))

    return Panel(
        text,
        title=f"[bold]{topic}[/bold]",
        border_style=Style(color=ENGINE_THEME["primary"]),
        box=box.HEAVY,
        padding=(0, 1),
    )


# =============================================================================
# QUESTIONS & FEEDBACK
# =============================================================================


def render_question_panel(
    question: Question,
    title: str,
    selected: int | None = None,
) -> Panel:
    """
    Render a multiple-choice question with numbered options.

    Options are numbered from 1 for display. Once an answer is recorded the
    correct option is marked, and a wrong selection is struck through.
    """
    body = Text()
    body.append(question.text.strip() or "No prompt", style="bold")
    body.append("\n\n")

    for i, option in enumerate(question.options):
        style = STYLES["engine_secondary"]
        marker = " "
        if selected is not None:
            if i == question.correct_index:
                style, marker = STYLES["engine_success"], "✓"
            elif i == selected:
                style, marker = Style(color=ENGINE_THEME["error"], strike=True), "✗"
            else:
                style = STYLES["engine_dim"]
        body.append(f" {marker} {i + 1}. ", style=STYLES["engine_dim"])
        body.append(f"{option}\n", style=style)

    return Panel(
        body,
        title=title,
        border_style="cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )


def render_feedback_panel(feedback: Feedback, label: str | None = None) -> Panel:
    """
    Render immediate feedback for an answered question.

    Args:
        feedback: Correctness and explanation
        label: Heading override (defaults to Correct/Incorrect)
    """
    if feedback.is_correct:
        heading = label or "Correct"
        style = STYLES["engine_success"]
        border = ENGINE_THEME["success"]
        icon = "✓"
    else:
        heading = label or "Incorrect"
        style = STYLES["engine_error"]
        border = ENGINE_THEME["error"]
        icon = "✗"

    text = Text()
    text.append(f"{icon} {heading}\n\n", style=style)
    text.append(feedback.text, style=Style(color=ENGINE_THEME["white"]))

    return Panel(
        text,
        border_style=Style(color=border),
        box=box.ROUNDED,
        padding=(0, 1),
    )


def render_practice_stats(accuracy: int, answered: int, gate: int) -> Text:
    """One-line practice summary with verification gate status."""
    text = Text()
    text.append(f"Accuracy {accuracy}%", style=STYLES["engine_primary"])
    text.append(f"  ·  {answered} answered", style=STYLES["engine_dim"])
    if answered and accuracy < gate:
        text.append(f"  ·  Verification locked below {gate}%", style=STYLES["engine_warning"])
    else:
        text.append("  ·  Verification available", style=STYLES["engine_success"])
    return text


# =============================================================================
# EXPLANATION
# =============================================================================


def render_explanation_slide(
    deck_title: str,
    section_title: str,
    content: str,
    position_label: str,
) -> Panel:
    """Render one explanation section as a Markdown slide."""
    return Panel(
        Group(
            Text(section_title, style=STYLES["engine_accent"]),
            Text(""),
            Markdown(content),
        ),
        title=f"[bold]{deck_title}[/bold]",
        subtitle=f"[dim]{position_label}[/dim]",
        border_style=Style(color=ENGINE_THEME["secondary"]),
        box=box.ROUNDED,
        padding=(1, 2),
    )


# =============================================================================
# VERIFICATION
# =============================================================================


def render_scenario_panel(scenario: str, phase: str, step_label: str) -> Panel:
    """Case-study text with the current phase."""
    text = Text()
    text.append(scenario.strip(), style=Style(color=ENGINE_THEME["white"]))
    text.append("\n\n")
    text.append(f"Phase: {phase}", style=STYLES["engine_warning"])

    return Panel(
        text,
        title="[bold]Mastery Check[/bold]",
        subtitle=f"[dim]{step_label}[/dim]",
        border_style=Style(color=ENGINE_THEME["warning"]),
        box=box.DOUBLE,
        padding=(0, 1),
    )


def render_notice(message: str) -> Panel:
    """Warning banner, e.g. for the forced return to practice."""
    return Panel(
        Text(f"⚠ {message}", style=STYLES["engine_warning"]),
        border_style=Style(color=ENGINE_THEME["warning"]),
        box=box.ROUNDED,
        padding=(0, 1),
    )


# =============================================================================
# REFLECTION & COMPLETION
# =============================================================================


def render_reflection_prompt(topic: str, min_chars: int) -> Panel:
    text = Text()
    text.append("Summarize what you learned about ", style=STYLES["engine_secondary"])
    text.append(topic, style=STYLES["engine_primary"])
    text.append(" in your own words.\n\n", style=STYLES["engine_secondary"])
    text.append(f"At least {min_chars} characters to commit.", style=STYLES["engine_dim"])

    return Panel(
        text,
        title="[bold]Reflection[/bold]",
        border_style=Style(color=ENGINE_THEME["secondary"]),
        box=box.ROUNDED,
        padding=(0, 1),
    )


def render_completion_card(summary: dict) -> Panel:
    """
    Render the end-of-cycle summary.

    Args:
        summary: Output of CompletionController.summary()
    """
    mastery: MasteryLevel = summary["mastery"]
    diagnostic = summary.get("diagnostic_score")

    text = Text()
    text.append("Cycle complete\n\n", style=STYLES["engine_success"])
    text.append("Topic        ", style=STYLES["engine_dim"])
    text.append(f"{summary['topic']}\n", style=STYLES["engine_primary"])
    text.append("Mastery      ", style=STYLES["engine_dim"])
    text.append(f"{mastery.emoji} {mastery.display_name}\n", style=Style(color=mastery.color, bold=True))
    text.append("Diagnostic   ", style=STYLES["engine_dim"])
    text.append(f"{diagnostic if diagnostic is not None else '-'} / 3\n")
    text.append("Practice     ", style=STYLES["engine_dim"])
    text.append(
        f"{summary['practice_accuracy']}% over {summary['questions_answered']} questions"
    )

    return Panel(
        text,
        title="[bold]Mastery Achieved[/bold]",
        subtitle="[dim]Return to Engine Index[/dim]",
        border_style=Style(color=ENGINE_THEME["success"]),
        box=box.DOUBLE,
        padding=(1, 2),
    )


def render_stalled_panel(mode: LearningMode, error: Exception | None) -> Panel:
    """Shown when a mode's content could not be generated."""
    text = Text()
    text.append(f"Could not load {mode.label.lower()} content.\n\n", style=STYLES["engine_error"])
    if error is not None:
        text.append(f"{error}\n\n", style=STYLES["engine_dim"])
    text.append("Press q to return to the engine index.", style=STYLES["engine_secondary"])

    return Panel(
        text,
        title="[bold]Content Unavailable[/bold]",
        border_style=Style(color=ENGINE_THEME["error"]),
        box=box.ROUNDED,
        padding=(0, 1),
    )


def render_home(has_ai: bool) -> Panel:
    """Engine index: banner plus provider status."""
    text = Text(BANNER, style=STYLES["engine_primary"])
    text.append("\nDiagnose · Explain · Practice · Verify · Reflect\n\n", style=STYLES["engine_secondary"])
    if has_ai:
        text.append("● Gemini content provider", style=STYLES["engine_success"])
    else:
        text.append("○ Sample content (no API key configured)", style=STYLES["engine_warning"])

    return Panel(
        text,
        border_style=Style(color=ENGINE_THEME["primary"]),
        box=box.HEAVY,
        padding=(0, 2),
    )
