"""
LLM prompts for learning content generation.

One prompt per mode that needs generated content:
- Diagnostic - three progressive questions assessing prior knowledge
- Explanation - eight fixed sections presented as slides
- Practice - a single application question of a requested difficulty
- Verification - a case study with Diagnosis/Implementation/Consequence steps

Every prompt is paired with a response schema (see schemas.py) so the model
answers in JSON.
"""
from __future__ import annotations

from backbench.core.modes import Difficulty, LearningMode

# =============================================================================
# System Prompt (Applied to All Generation)
# =============================================================================

SYSTEM_PROMPT = """You are an advanced academic learning engine.
You produce rigorous, structurally clear teaching material for any topic a
learner names. Stick to engineering and scientific facts, avoid filler, and
always answer in the JSON shape you are given."""


# =============================================================================
# Mode Prompts
# =============================================================================

DIAGNOSTIC_PROMPT = """
Topic: {topic}
Task: Generate 3 diagnostic multiple-choice questions to assess prior knowledge.
Difficulty: Progressive (Basic -> Intermediate -> Advanced).
Style: Clinical, evaluative, no filler.
"""

EXPLANATION_SECTIONS = (
    "Core Principle & Definition",
    "Mechanics & Internal Logic",
    "Historical Context & Evolution",
    "Mental Models & Visualization",
    "Real-World Application",
    "Critical Analysis & Limitations",
    "Cross-Disciplinary Connections",
    "Key References",
)

EXPLANATION_PROMPT = """
Topic: {topic}
System Role: Provide a deep, rigorous, and structurally clear explanation of the topic.

Execution Guidelines:
1. **Clarity & Depth**: Explain complex concepts simply but without losing technical depth.
2. **Structured Format**: Use **bullet points** heavily to break down dense information.
3. **Professional Tone**: Avoid metaphors, flowery language, or mythological terms.

Mandatory Sections (Strict Order):
1. "Core Principle & Definition":
   - Define the concept clearly.
   - Break the definition down into its fundamental attributes.
2. "Mechanics & Internal Logic":
   - Explain how the system/concept works internally.
   - List key components, variables, and their interactions.
3. "Historical Context & Evolution":
   - Why was this created? What problem did it solve?
   - Provide a bulleted timeline or evolution of the concept.
4. "Mental Models & Visualization":
   - Provide distinct conceptual frameworks to help visualize the topic.
   - Explain the mapping between the model and reality.
5. "Real-World Application":
   - Provide 3 distinct, detailed case studies or system examples.
   - Format as structured points (Context -> Application -> Outcome).
6. "Critical Analysis & Limitations":
   - What are the constraints? Where does it fail?
   - List common misconceptions or edge cases.
7. "Cross-Disciplinary Connections":
   - How does this concept relate to other fields (Physics, Economics, CS)?
8. "Key References":
   - Standard textbooks, standards, or authoritative bodies as a bulleted list.

Tone: Professional, Academic, Concise.
Format: Markdown inside each section's content.
"""

PRACTICE_PROMPT = """
Topic: {topic}
Task: Generate ONE {difficulty} practice question.
Type: Application-based multiple choice.
"""

VERIFICATION_PROMPT = """
Topic: {topic}
Task: Generate a complex, multi-faceted real-world case study scenario to verify mastery.
Style: Harvard Business School case study style (short, dense).

Requirement:
1. A rich scenario description.
2. THREE (3) distinct questions based on this exact scenario, in this order:
   - Question 1: Diagnosis (What is happening / what is the root cause?)
   - Question 2: Implementation (How do we apply the concept to fix/optimize?)
   - Question 3: Consequence (What is a potential side effect or constraint of the solution?)
"""


# =============================================================================
# Prompt Factory
# =============================================================================

def get_prompt(
    mode: LearningMode,
    topic: str,
    difficulty: Difficulty | None = None,
) -> str:
    """
    Get the prompt for a learning mode.

    Args:
        mode: Mode the content is for (must be one that fetches content)
        topic: Learner-supplied topic
        difficulty: Practice difficulty (practice mode only)

    Returns:
        Formatted prompt string
    """
    prompts = {
        LearningMode.DIAGNOSTIC: DIAGNOSTIC_PROMPT,
        LearningMode.EXPLANATION: EXPLANATION_PROMPT,
        LearningMode.PRACTICE: PRACTICE_PROMPT,
        LearningMode.VERIFICATION: VERIFICATION_PROMPT,
    }
    if mode not in prompts:
        raise ValueError(f"No generated content for {mode.value}")

    level = (difficulty or Difficulty.MEDIUM).value
    return prompts[mode].format(topic=topic, difficulty=level)


def get_system_prompt() -> str:
    """Get the system prompt for LLM initialization."""
    return SYSTEM_PROMPT
