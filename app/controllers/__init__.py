"""FastAPI routers acting as controllers in the MVC architecture."""

from . import conversation, feedback, speech_analysis, story, tts

__all__ = ["conversation", "feedback", "speech_analysis", "story", "tts"]
