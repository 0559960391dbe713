"""Concurrent tree scanning: walkers, classifier, channel and collector."""

from pmv.scanning.channel import ScanChannel, Sender
from pmv.scanning.classifier import is_text_file, sniff_media_type
from pmv.scanning.collector import ResultCollector
from pmv.scanning.walker import ParallelWalker, SerialWalker, Walker, select_walker

__all__ = [
    "ParallelWalker",
    "ResultCollector",
    "ScanChannel",
    "Sender",
    "SerialWalker",
    "Walker",
    "is_text_file",
    "select_walker",
    "sniff_media_type",
]
