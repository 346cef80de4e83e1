from newsdesk.speech.base import SpeechSynthesizer
from newsdesk.speech.openai_tts import OpenAISpeechSynthesizer

__all__ = [
    "OpenAISpeechSynthesizer",
    "SpeechSynthesizer",
]
