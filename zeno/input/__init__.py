"""Input-layer public API for key decoding.

Exports the low-level terminal decoder (`read_key`) and the key-token
helpers used by the session and the runtime loop.
"""

from .keys import NAVIGATION_KEYS, EnterNormalizer, is_printable
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "NAVIGATION_KEYS",
    "EnterNormalizer",
    "is_printable",
]
