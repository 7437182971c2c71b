"""
Text/binary classification.

Decides from a bounded prefix of a file whether it is text worth
scanning. The decision works on raw bytes so it holds for any
encoding; bytes >= 0x80 are always allowed.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet


logger = logging.getLogger(__name__)

# Only the first SAMPLE_SIZE bytes are inspected. Binary markers past
# this point are not detected.
SAMPLE_SIZE = 32 * 1024

REASON_NULL_BYTE = "null byte"
REASON_CONTROL_CHARS = "binary or control characters"

# C0 controls except tab, LF and CR, plus DEL.
CONTROL_BYTES: FrozenSet[int] = frozenset(
    set(range(0x00, 0x09)) | {0x0B, 0x0C} | set(range(0x0E, 0x20)) | {0x7F}
)
_CONTROL_TABLE = bytes(CONTROL_BYTES)


@dataclass(frozen=True)
class Classification:
    """
    Result of classifying a path.

    ``reason`` is empty for accepted paths and for paths that could not
    be read. The latter are excluded without being reported.
    """
    accepted: bool
    reason: str = ""

    @classmethod
    def accept(cls) -> "Classification":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: str) -> "Classification":
        return cls(accepted=False, reason=reason)

    @classmethod
    def unreadable(cls) -> "Classification":
        return cls(accepted=False)

    @property
    def rejected(self) -> bool:
        return not self.accepted and bool(self.reason)

    @property
    def excluded(self) -> bool:
        return not self.accepted and not self.reason


def classify_sample(sample: bytes) -> Classification:
    """
    Classify a byte sample.

    A null byte wins over any other control byte.
    """
    if not sample:
        return Classification.accept()
    if b"\x00" in sample:
        return Classification.reject(REASON_NULL_BYTE)
    # translate() with a delete table drops every control byte; any
    # length difference means at least one was present.
    if len(sample.translate(None, _CONTROL_TABLE)) != len(sample):
        return Classification.reject(REASON_CONTROL_CHARS)
    return Classification.accept()


def read_sample(path: str, sample_size: int = SAMPLE_SIZE) -> bytes:
    """Read at most ``sample_size`` bytes from the start of a file."""
    with open(path, "rb") as f:
        return f.read(sample_size)


def classify(path: str, sample_size: int = SAMPLE_SIZE) -> Classification:
    """Classify a file on disk by sampling its first bytes."""
    try:
        sample = read_sample(path, sample_size)
    except OSError as e:
        logger.debug("scanner: cannot read %s (%s)", path, e)
        return Classification.unreadable()
    return classify_sample(sample)
