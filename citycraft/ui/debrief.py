"""Debrief — reflection questions shown to students after a game.

The questions sit behind a teacher password so that the class plays
first and discusses afterwards.  This is view state only; the engine
never sees it.
"""

from __future__ import annotations

from dataclasses import dataclass

DEBRIEF_PASSWORD = "hems"

DEBRIEF_QUESTIONS: tuple[tuple[str, str], ...] = (
    ("budget", "What sacrifices did you have to make to stay within budget?"),
    (
        "factories",
        "Why do factories provide many jobs but hurt green space and create "
        "noise? Can you think of real examples?",
    ),
    (
        "hdb-mrt",
        "Why do you think HDB blocks get bonus points when placed near MRT "
        "stations?",
    ),
    (
        "parks",
        "The game shows parks reducing noise. How do green spaces actually "
        "help with noise in real life?",
    ),
    (
        "realistic",
        "Is it realistic to meet all five targets in real city planning? "
        "Why or why not?",
    ),
    (
        "patterns",
        "Compare your winning layouts with classmates. What patterns do you "
        "notice?",
    ),
)


@dataclass
class DebriefGate:
    """Password lock around the debrief questions.

    Attributes:
        password: Expected password (compared case-insensitively).
        unlocked: Whether the questions are visible.
    """

    password: str = DEBRIEF_PASSWORD
    unlocked: bool = False

    def try_unlock(self, attempt: str) -> bool:
        """Unlock if ``attempt`` matches the password.

        Returns:
            True if the gate is now unlocked.
        """
        if attempt.strip().lower() == self.password.lower():
            self.unlocked = True
        return self.unlocked

    def questions(self) -> tuple[tuple[str, str], ...]:
        """Return the questions, or nothing while locked."""
        return DEBRIEF_QUESTIONS if self.unlocked else ()
