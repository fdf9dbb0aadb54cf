"""
Backbench: terminal learning engine.

Walks a learner through diagnostic, explanation, practice, verification and
reflection for any topic, with content generated on demand by Gemini.
"""

__version__ = "2.1.0"
