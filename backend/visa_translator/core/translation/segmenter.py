"""Sentence segmentation for sentence-locked translation.

Each sentence is translated on its own so the model can never merge,
reorder, or reinterpret content across sentence boundaries.
"""

import re
from typing import List

DEFAULT_TERMINALS = "。！？"


class Segmenter:
    """Split text into sentences on runs of terminal punctuation or newlines.

    Terminal marks stay attached to the sentence they close; a run of marks
    never starts a sentence or stands alone.
    """

    def __init__(self, terminals: str = DEFAULT_TERMINALS):
        if not terminals:
            raise ValueError("At least one terminal punctuation mark is required")
        self.terminals = terminals
        # Capturing group keeps the delimiter runs at odd indexes of split()
        self._boundary = re.compile(f"([{re.escape(terminals)}\\n]+)")

    def segment(self, text: str) -> List[str]:
        """Split text into trimmed, non-empty sentences."""
        sentences: List[str] = []

        for index, part in enumerate(self._boundary.split(text)):
            if index % 2:
                marks = part.replace("\n", "").strip()
                if marks and sentences:
                    sentences[-1] += marks
                continue

            part = part.strip()
            if part:
                sentences.append(part)

        return sentences


_default_segmenter = Segmenter()


def segment(text: str) -> List[str]:
    """Split text into sentences using the default terminal marks."""
    return _default_segmenter.segment(text)
