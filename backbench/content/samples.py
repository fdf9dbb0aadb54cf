"""
Sample content for development and offline use.

Deterministic stand-in for the Gemini provider, used when no API key is
configured. Correct answers are fixed so a session can be walked through by
hand or in tests:

- diagnostic: options 0, 1, 2
- practice: option 1
- verification: options 1, 2, 0
"""

from __future__ import annotations

import itertools

from backbench.core.models import (
    DiagnosticAssessment,
    ExplanationContent,
    ExplanationSection,
    PracticeItem,
    Question,
    VerificationScenario,
)
from backbench.core.modes import Difficulty

PLACEHOLDER_OPTIONS = ["A", "B", "C", "D"]


def _question(qid: str, text: str, correct: int, explanation: str, options=None) -> Question:
    return Question(
        id=qid,
        text=text,
        options=list(options or PLACEHOLDER_OPTIONS),
        correct_index=correct,
        explanation=explanation,
    )


class SampleContentProvider:
    """Content provider returning fixed sample material."""

    def __init__(self):
        self._practice_ids = itertools.count(1)
        self.requests: list[tuple[str, str, Difficulty | None]] = []

    async def fetch_diagnostic(self, topic: str) -> DiagnosticAssessment:
        self.requests.append(("diagnostic", topic, None))
        return DiagnosticAssessment(
            questions=[
                _question("1", f"Diagnostic Q1 for {topic}", 0, "Test explanation."),
                _question("2", f"Diagnostic Q2 for {topic}", 1, "Test explanation."),
                _question("3", f"Diagnostic Q3 for {topic}", 2, "Test explanation."),
            ]
        )

    async def fetch_explanation(self, topic: str) -> ExplanationContent:
        self.requests.append(("explanation", topic, None))
        sections = [
            (
                "Core Principle & Definition",
                f"## Fundamental Definition\n\n**{topic}** is defined as...\n\n"
                "### Key Attributes\n* **Attribute 1**: Detail...\n* **Attribute 2**: Detail...",
            ),
            (
                "Mechanics & Internal Logic",
                "## How it Works\n\n* **Component A**: Role and interaction...\n"
                "* **Component B**: Role and interaction...",
            ),
            ("Historical Context", "## Evolution\n\n* **Origin**: ...\n* **Modern State**: ..."),
            (
                "Mental Models",
                "## Visualization\n\n* **Model 1**: Imagine a...\n"
                "* **Model 2**: Consider the analogy of...",
            ),
            (
                "Real-World Application",
                "## Case Studies\n\n* **System X**: Implemented for...\n"
                "* **Project Y**: Used to optimize...",
            ),
            ("Critical Analysis", "## Limitations\n\n* **Constraint 1**: ...\n* **Edge Case**: ..."),
            (
                "Cross-Disciplinary",
                "## Connections\n\n* **Physics**: Related to...\n* **Economics**: Similar to...",
            ),
            ("Key References", "## Sources\n\n* Standard Textbooks\n* IEEE Standards"),
        ]
        return ExplanationContent(
            title=f"Analysis of {topic}",
            sections=[ExplanationSection(title=t, content=c) for t, c in sections],
        )

    async def fetch_practice(self, topic: str, difficulty: Difficulty) -> PracticeItem:
        self.requests.append(("practice", topic, difficulty))
        return PracticeItem(
            difficulty=difficulty,
            question=_question(
                f"practice-{next(self._practice_ids)}",
                f"Practice Question for {topic}",
                1,
                "Because logic.",
                options=["Wrong", "Correct", "Wrong", "Wrong"],
            ),
        )

    async def fetch_verification(self, topic: str) -> VerificationScenario:
        self.requests.append(("verification", topic, None))
        return VerificationScenario(
            scenario=f"A complex scenario involving {topic} happens in a production environment.",
            questions=[
                _question("v1", "Diagnosis: What is the issue?", 1, "Diagnosis explanation."),
                _question("v2", "Implementation: How to fix?", 2, "Fix explanation."),
                _question("v3", "Consequence: What is the risk?", 0, "Risk explanation."),
            ],
        )
