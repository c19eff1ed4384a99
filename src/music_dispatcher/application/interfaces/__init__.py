"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the dispatcher and the
audio-node client library that actually streams audio.
"""

from music_dispatcher.application.interfaces.audio_node import AudioNode
from music_dispatcher.application.interfaces.remote_player import PlayerListener, RemotePlayer
from music_dispatcher.application.interfaces.voice_gateway import VoiceGateway

__all__ = [
    "AudioNode",
    "PlayerListener",
    "RemotePlayer",
    "VoiceGateway",
]
