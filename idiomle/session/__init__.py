from .core import GuessSession, replay

__all__ = ["GuessSession", "replay"]
