from .base import AudioBuffer, AudioSink, ScheduledBuffer
from .recording import RecordingAudioSink

__all__ = [
    "AudioBuffer",
    "AudioSink",
    "ScheduledBuffer",
    "RecordingAudioSink",
]
