from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Union


NO_SPEECH_RECOGNIZED = "No speech recognized"


class SpeechError(str, Enum):
    NO_MATCH = "no_match"
    SPEECH_TIMEOUT = "speech_timeout"
    AUDIO = "audio"
    CLIENT = "client"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    NETWORK = "network"
    NETWORK_TIMEOUT = "network_timeout"
    SERVER = "server"
    RECOGNIZER_BUSY = "recognizer_busy"
    UNKNOWN = "unknown"


SPEECH_ERROR_MESSAGES = {
    SpeechError.NO_MATCH: "No speech detected. Please try again.",
    SpeechError.SPEECH_TIMEOUT: "Listening timeout. Please try again.",
    SpeechError.AUDIO: "Audio error. Please check microphone.",
    SpeechError.CLIENT: "Speech recognition error. Restarting...",
    SpeechError.INSUFFICIENT_PERMISSIONS: "Microphone permission required.",
    SpeechError.NETWORK: "Network error. Check internet connection.",
    SpeechError.NETWORK_TIMEOUT: "Network timeout. Check internet.",
    SpeechError.SERVER: "Server error. Please try again.",
    SpeechError.RECOGNIZER_BUSY: "Recognition busy. Please wait.",
}


def parse_speech_error(value: Union[str, SpeechError]) -> SpeechError:
    if isinstance(value, SpeechError):
        return value
    try:
        return SpeechError(str(value).strip().lower())
    except ValueError:
        return SpeechError.UNKNOWN


def speech_error_message(error: Union[str, SpeechError], code: Optional[str] = None) -> str:
    parsed = parse_speech_error(error)
    if parsed is SpeechError.UNKNOWN:
        if code is None:
            code = error.value if isinstance(error, SpeechError) else error
        return f"Unknown error: {code}"
    return SPEECH_ERROR_MESSAGES[parsed]


def best_transcript(matches: Optional[Sequence[str]]) -> str:
    if not matches:
        return NO_SPEECH_RECOGNIZED
    return matches[0]
