"""Single-byte charset prober driven by a character-pair frequency model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

SAMPLE_SIZE = 64
SB_ENOUGH_REL_THRESHOLD = 1024
POSITIVE_SHORTCUT_THRESHOLD = 0.95
NEGATIVE_SHORTCUT_THRESHOLD = 0.05
SYMBOL_CAT_ORDER = 250
NUMBER_OF_SEQ_CAT = 4
POSITIVE_CAT = NUMBER_OF_SEQ_CAT - 1
NEGATIVE_CAT = 0

_NO_ORDER = 255


class ProbingState(Enum):
    """Verdict of a prober so far."""

    DETECTING = 0
    FOUND_IT = 1
    NOT_ME = 2


@dataclass(frozen=True)
class SequenceModel:
    """Byte-frequency statistics for one single-byte charset.

    ``char_to_order_map`` maps each of the 256 byte values to a frequency
    order; ``precedence_matrix`` holds SAMPLE_SIZE x SAMPLE_SIZE sequence
    categories, row by row.
    """

    char_to_order_map: bytes
    precedence_matrix: bytes
    typical_positive_ratio: float
    keep_english_letter: bool
    charset_name: str

    def __post_init__(self) -> None:
        order_map = bytes(self.char_to_order_map)
        matrix = bytes(self.precedence_matrix)
        if len(order_map) != 256:
            raise ValueError("char_to_order_map must have 256 entries")
        if len(matrix) != SAMPLE_SIZE * SAMPLE_SIZE:
            raise ValueError(
                f"precedence_matrix must have {SAMPLE_SIZE * SAMPLE_SIZE} entries"
            )
        if any(cat >= NUMBER_OF_SEQ_CAT for cat in matrix):
            raise ValueError("precedence_matrix holds an unknown sequence category")
        if self.typical_positive_ratio <= 0:
            raise ValueError("typical_positive_ratio must be positive")
        object.__setattr__(self, "char_to_order_map", order_map)
        object.__setattr__(self, "precedence_matrix", matrix)


class _NamedProber(Protocol):
    def charset_name(self) -> str: ...


class SingleByteCharSetProber:
    """Scores input against a SequenceModel by counting likely byte pairs."""

    def __init__(
        self,
        model: SequenceModel,
        reversed_pairs: bool = False,
        name_prober: Optional[_NamedProber] = None,
    ) -> None:
        self._model = model
        self._reversed = reversed_pairs
        self._name_prober = name_prober
        self.reset()

    def reset(self) -> None:
        """Forget all data seen so far."""
        self._state = ProbingState.DETECTING
        self._last_order = _NO_ORDER
        self._seq_counters = [0] * NUMBER_OF_SEQ_CAT
        self._total_seqs = 0
        self._total_char = 0
        self._freq_char = 0

    def handle_data(self, data: bytes) -> ProbingState:
        """Feed more bytes and return the resulting state."""
        order_map = self._model.char_to_order_map
        matrix = self._model.precedence_matrix
        for byte in bytes(data):
            order = order_map[byte]
            if order < SYMBOL_CAT_ORDER:
                self._total_char += 1
            if order < SAMPLE_SIZE:
                self._freq_char += 1
                last = self._last_order
                if last < SAMPLE_SIZE:
                    self._total_seqs += 1
                    if self._reversed:
                        category = matrix[order * SAMPLE_SIZE + last]
                    else:
                        category = matrix[last * SAMPLE_SIZE + order]
                    self._seq_counters[category] += 1
            self._last_order = order

        if (
            self._state is ProbingState.DETECTING
            and self._total_seqs > SB_ENOUGH_REL_THRESHOLD
        ):
            confidence = self.get_confidence()
            if confidence > POSITIVE_SHORTCUT_THRESHOLD:
                self._state = ProbingState.FOUND_IT
            elif confidence < NEGATIVE_SHORTCUT_THRESHOLD:
                self._state = ProbingState.NOT_ME
        return self._state

    def get_confidence(self) -> float:
        """Return a confidence between 0 and 0.99."""
        if self._total_seqs <= 0:
            return 0.01
        ratio = (
            self._seq_counters[POSITIVE_CAT]
            / self._total_seqs
            / self._model.typical_positive_ratio
        )
        ratio = ratio * self._freq_char / self._total_char
        return min(ratio, 0.99)

    def charset_name(self) -> str:
        """Return the charset name, deferring to the name prober if one is set."""
        if self._name_prober is None:
            return self._model.charset_name
        return self._name_prober.charset_name()

    def state(self) -> ProbingState:
        """Return the current probing state."""
        return self._state