"""
Backbench CLI - Adaptive learning cycles in the terminal.

Walks a topic through the five-stage cycle:
1. Diagnostic    - three questions on prior knowledge
2. Explanation   - a slide deck of structured sections
3. Practice      - endless single questions, gated into verification
4. Verification  - a three-step case study
5. Reflection    - a written summary that locks the cycle in

Usage:
    backbench learn "TCP congestion control"   # Start a cycle
    backbench learn --sample                   # Offline sample content
    backbench config --show                    # Effective configuration
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from backbench.config import Settings, get_settings
from backbench.content.provider import get_content_provider
from backbench.core.log_setup import configure_logging
from backbench.core.modes import LearningMode
from backbench.delivery.visuals import (
    EngineSpinner,
    render_completion_card,
    render_explanation_slide,
    render_feedback_panel,
    render_home,
    render_notice,
    render_practice_stats,
    render_question_panel,
    render_reflection_prompt,
    render_scenario_panel,
    render_session_header,
    render_stalled_panel,
)
from backbench.engine.controllers import (
    FAILED_CHECK_NOTICE,
    RESTART_NOTICE,
    CompletionController,
    ControllerStatus,
    DiagnosticController,
    ExplanationController,
    PracticeController,
    ReflectionController,
    VerificationController,
)
from backbench.engine.host import LearningApp
from backbench.engine.session import LearningSession

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="backbench",
    help="Backbench - Adaptive learning cycles in the terminal",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

QUIT = "q"


def _ask(prompt: str, choices: list[str] | None = None, default: str | None = "") -> str | None:
    """
    Prompt for input. Returns None when the learner quits (q or EOF).

    With ``default=None`` an empty answer is re-prompted.
    """
    try:
        answer = Prompt.ask(
            prompt,
            console=console,
            choices=choices,
            default=... if default is None else default,
            show_choices=choices is not None,
            show_default=False,
            case_sensitive=False,
        )
    except (EOFError, KeyboardInterrupt):
        console.print()
        return None
    answer = (answer or "").strip()
    if answer.lower() == QUIT:
        return None
    return answer


def _ask_option(count: int, extra: list[str] | None = None) -> str | None:
    choices = [str(i) for i in range(1, count + 1)] + (extra or []) + [QUIT]
    return _ask("[cyan]>_[/cyan] Option", choices=choices, default=None)


def _pause(label: str = "Continue") -> bool:
    """Wait for Enter. False means the learner quit."""
    return _ask(f"[dim]Enter: {label} · q: exit[/dim]") is not None


# =============================================================================
# Mode Drivers
# =============================================================================


async def _drive_diagnostic(session: LearningSession, ctl: DiagnosticController) -> None:
    question = ctl.current_question
    title = f"Diagnostic · Question {ctl.index + 1} of {len(ctl.questions)}"
    console.print(render_question_panel(question, title))

    choice = _ask_option(len(question.options))
    if choice is None:
        session.close()
        return

    selected = int(choice) - 1
    feedback = ctl.answer(selected)
    console.print(render_question_panel(question, title, selected=selected))
    console.print(render_feedback_panel(feedback))

    if not _pause("Next question" if not ctl.is_last else "Begin explanation"):
        session.close()
        return
    ctl.proceed()


async def _drive_explanation(session: LearningSession, ctl: ExplanationController) -> None:
    section = ctl.current_section
    console.print(
        render_explanation_slide(ctl.content.title, section.title, section.content, ctl.position_label)
    )

    choices = []
    if not ctl.is_first:
        choices.append("p")
    choices.append("f" if ctl.is_last else "n")
    answer = _ask(
        "[cyan]>_[/cyan] n: next · p: previous · f: finish", choices=choices + [QUIT], default=choices[-1]
    )
    if answer is None:
        session.close()
    elif answer == "n":
        ctl.next()
    elif answer == "p":
        ctl.previous()
    elif answer == "f":
        ctl.finish()


async def _drive_practice(session: LearningSession, ctl: PracticeController) -> None:
    state = session.state
    gate = session.settings.verification_gate_accuracy
    console.print(render_practice_stats(state.practice_accuracy, state.questions_answered, gate))

    question = ctl.item.question
    title = f"Practice · {ctl.item.difficulty.value.title()}"
    console.print(render_question_panel(question, title))

    choice = _ask_option(len(question.options), extra=["v"])
    if choice is None:
        session.close()
        return
    if choice == "v":
        _request_verification(ctl, gate)
        return

    selected = int(choice) - 1
    feedback = ctl.answer(selected)
    console.print(render_question_panel(question, title, selected=selected))
    console.print(render_feedback_panel(feedback, label=ctl.feedback_label))

    state = session.state
    console.print(render_practice_stats(state.practice_accuracy, state.questions_answered, gate))
    answer = _ask("[cyan]>_[/cyan] n: next question · v: verify mastery", choices=["n", "v", QUIT], default="n")
    if answer is None:
        session.close()
    elif answer == "v":
        if not _request_verification(ctl, gate):
            await _next_practice_item(ctl)
    else:
        await _next_practice_item(ctl)


def _request_verification(ctl: PracticeController, gate: int) -> bool:
    if ctl.verify():
        return True
    console.print(f"[yellow]Verification locked: reach {gate}% accuracy first.[/yellow]")
    return False


async def _next_practice_item(ctl: PracticeController) -> None:
    with EngineSpinner(console, "Generating practice item..."):
        await ctl.next()


async def _drive_verification(session: LearningSession, ctl: VerificationController) -> None:
    question = ctl.current_question
    console.print(render_scenario_panel(ctl.scenario.scenario, ctl.phase, ctl.step_label))
    console.print(render_question_panel(question, ctl.phase))

    choice = _ask_option(len(question.options))
    if choice is None:
        session.close()
        return

    selected = int(choice) - 1
    feedback = ctl.answer(selected)
    console.print(render_question_panel(question, ctl.phase, selected=selected))
    console.print(render_feedback_panel(feedback))

    if feedback.is_correct:
        if not _pause(ctl.proceed_label):
            session.close()
            return
        ctl.proceed()
        return

    console.print(render_notice(FAILED_CHECK_NOTICE))
    with EngineSpinner(console, "Re-initializing practice..."):
        await ctl.restart.wait()
    if session.mode == LearningMode.PRACTICE:
        console.print(render_notice(RESTART_NOTICE))


async def _drive_reflection(session: LearningSession, ctl: ReflectionController) -> None:
    console.print(render_reflection_prompt(session.topic.query, ctl.min_chars))
    text = _ask("[cyan]>_[/cyan] Reflection")
    if text is None:
        session.close()
        return
    ctl.update(text)
    if not ctl.commit():
        console.print(
            f"[yellow]Reflection too short ({len(ctl.text)}/{ctl.min_chars} characters).[/yellow]"
        )


async def _drive_completion(session: LearningSession, ctl: CompletionController) -> None:
    console.print(render_completion_card(ctl.summary()))
    _pause("Return to Engine Index")
    ctl.exit()


DRIVERS: dict[LearningMode, Callable[..., Awaitable[None]]] = {
    LearningMode.DIAGNOSTIC: _drive_diagnostic,
    LearningMode.EXPLANATION: _drive_explanation,
    LearningMode.PRACTICE: _drive_practice,
    LearningMode.VERIFICATION: _drive_verification,
    LearningMode.REFLECTION: _drive_reflection,
    LearningMode.COMPLETE: _drive_completion,
}


# =============================================================================
# Session Loop
# =============================================================================


async def _run_session(session: LearningSession) -> None:
    while not session.closed:
        if session.loading:
            with EngineSpinner(console, f"Generating {session.mode.label.lower()} content..."):
                await session.settle()

        ctl = session.controller
        console.print()
        console.print(
            render_session_header(
                session.topic.query, session.mode, session.mastery, session.progress_percent
            )
        )

        if ctl.status == ControllerStatus.STALLED:
            console.print(render_stalled_panel(session.mode, ctl.error))
            _ask("[dim]q: exit[/dim]", choices=[QUIT], default=QUIT)
            session.close()
            return

        await DRIVERS[session.mode](session, ctl)


async def _run_app(learning_app: LearningApp, topic: str | None) -> None:
    """Home screen loop: ask for a topic, run its cycle, repeat."""
    while True:
        if topic is None:
            console.print(render_home(learning_app.settings.has_ai_configured))
            topic = _ask("[cyan]>_[/cyan] Topic to learn (empty or q to quit)")
            if not topic:
                console.print("[dim]Goodbye.[/dim]")
                return

        try:
            session = learning_app.initiate(topic)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            topic = None
            continue
        topic = None

        with EngineSpinner(console, "Generating diagnostic..."):
            await session.start()
        await _run_session(session)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def learn(
    topic: Annotated[
        str | None, typer.Argument(help="Topic to learn (prompted for if omitted)")
    ] = None,
    sample: Annotated[
        bool, typer.Option("--sample", help="Use built-in sample content instead of Gemini")
    ] = False,
    restart_delay: Annotated[
        float | None,
        typer.Option("--restart-delay", help="Seconds before a failed verification returns to practice"),
    ] = None,
) -> None:
    """
    Run a learning cycle.

    Examples:
        backbench learn "Raft consensus"
        backbench learn --sample
    """
    if topic is not None and not topic.strip():
        console.print("[red]Topic must not be empty[/red]")
        raise typer.Exit(1)

    settings = get_settings()
    if restart_delay is not None:
        settings = settings.model_copy(update={"restart_delay_seconds": restart_delay})

    provider = get_content_provider(settings, force_sample=sample)
    learning_app = LearningApp(provider, settings=settings)
    asyncio.run(_run_app(learning_app, topic))


@app.command()
def config(
    show: Annotated[
        bool, typer.Option("--show", help="Show current configuration")
    ] = False,
) -> None:
    """View configuration."""
    if not show:
        console.print("[dim]Values come from the environment and .env. Use --show to print them.[/dim]")
        return

    settings = get_settings()

    table = Table(title="Backbench Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for name in Settings.model_fields:
        if name == "gemini_api_key":
            value = settings.masked_api_key()
        else:
            value = getattr(settings, name)
        table.add_row(name, str(value) if value is not None else "(not set)")

    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================


@app.callback()
def callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Verbose output")
    ] = False,
) -> None:
    """
    Backbench - Adaptive learning cycles in the terminal

    \b
    Cycle:
      diagnostic -> explanation -> practice -> verification -> reflection
    """
    configure_logging(get_settings(), level="DEBUG" if verbose else None)


def main() -> None:
    """Entry point for the CLI."""
    # Quiet until the callback has read settings
    logger.remove()
    logger.add(sys.stderr, level="ERROR")

    app()


if __name__ == "__main__":
    main()
