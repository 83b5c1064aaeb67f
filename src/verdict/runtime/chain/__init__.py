"""Chain runner: ordered Try/Let steps with first-failure short-circuiting."""

from .attempt import Chain, Let, Step, Try, attempt_all

__all__ = ["Chain", "Let", "Step", "Try", "attempt_all"]
