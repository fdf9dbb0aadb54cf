"""
Delivery Module - Terminal presentation.

Components:
- visuals: Theme, spinner and Rich renderers for every learning mode
"""

from backbench.delivery.visuals import (
    ENGINE_THEME,
    STYLES,
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

__all__ = [
    "ENGINE_THEME",
    "STYLES",
    "EngineSpinner",
    "render_session_header",
    "render_question_panel",
    "render_feedback_panel",
    "render_practice_stats",
    "render_explanation_slide",
    "render_scenario_panel",
    "render_notice",
    "render_reflection_prompt",
    "render_completion_card",
    "render_stalled_panel",
    "render_home",
]
