# -*- coding: utf-8 -*-
"""
Game session on top of the merge engine.

This module provides the `GameSession` class, which tracks score, highest tile, win and game over.
"""

from .session import GameSession, SessionOutcome, StepResult

__all__ = ["GameSession", "SessionOutcome", "StepResult"]
