"""Input-layer public API: raw key decoding and key-to-event translation."""

from .key_registry import KeyBinding, KeyBindingRegistry
from .keys import KeyTranslator
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyBindingRegistry",
    "KeyTranslator",
    "read_key",
]
