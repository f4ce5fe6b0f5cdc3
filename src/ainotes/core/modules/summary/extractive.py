"""Deterministic extractive summary used when no provider answer is available."""

import re

from ainotes.errors import TooShortError

MIN_SUMMARY_LENGTH = 10

SENTENCE_BOUNDARY_RE = re.compile(r"[.!?]+")


def split_sentences(text: str) -> list[str]:
    """Split on runs of sentence terminators, dropping empty fragments."""
    return [sentence.strip() for sentence in SENTENCE_BOUNDARY_RE.split(text) if sentence.strip()]


def select_sentences(sentences: list[str]) -> list[str]:
    """Pick anchor sentences, in original order.

    Up to 3 sentences are kept whole. Up to 10 yield first, middle and last.
    Longer texts add the sentences at the 25th and 75th percentile positions.
    """
    count = len(sentences)
    if count <= 3:
        return sentences
    if count <= 10:
        indexes = [0, count // 2, count - 1]
    else:
        indexes = [0, int(count * 0.25), count // 2, int(count * 0.75), count - 1]
    return [sentences[i] for i in sorted(set(indexes))]


def extractive_summary(text: str) -> str:
    """Summarize by selecting existing sentences.

    Raises:
        TooShortError: If the text is shorter than MIN_SUMMARY_LENGTH characters
    """
    text = text.strip()
    if len(text) < MIN_SUMMARY_LENGTH:
        raise TooShortError
    sentences = split_sentences(text)
    if not sentences:
        # Only terminators, nothing to select from
        return text
    return ". ".join(select_sentences(sentences)) + "."
