"""
Format selection: organizing a catalogue and choosing streams from it.
"""

from tubepick.selection.muxed import select_muxed
from tubepick.selection.organizer import CodecBucket, organize
from tubepick.selection.selector import AudioSelection, select_audio, select_video

__all__ = [
    "CodecBucket",
    "organize",
    "select_video",
    "select_audio",
    "AudioSelection",
    "select_muxed",
]
