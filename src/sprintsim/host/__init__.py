"""Host-side collaborators: quiz provider, audio sink and a headless driver."""

from .audio import AudioKey, AudioSink, NullAudio, RecordingAudio
from .headless import HeadlessHost, TapScript
from .quiz import ArithmeticQuizProvider, MathConfig, MathProblem, Operation, QuizProvider

__all__ = [
    "ArithmeticQuizProvider",
    "AudioKey",
    "AudioSink",
    "HeadlessHost",
    "MathConfig",
    "MathProblem",
    "NullAudio",
    "Operation",
    "QuizProvider",
    "RecordingAudio",
    "TapScript",
]
