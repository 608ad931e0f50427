from .deutsch import DeutschResult, deutsch, deutsch_gate

__all__ = ["DeutschResult", "deutsch", "deutsch_gate"]
