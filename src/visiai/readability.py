"""
Flesch-based readability scoring for extracted page text.

Pure and total: any string (or None) yields a score in [0, 100], a Flesch value
in [0, 100] and one of the fixed grade labels.
"""

import logging
import re
from typing import List

from .data_models import ReadabilityResult
from .utils import clamp, round_half_up

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA = "Insufficient Data"

# (minimum Flesch value, label), highest first
GRADE_LABELS = [
    (90, "Grade 5 (Very Easy)"),
    (80, "Grade 6 (Easy)"),
    (70, "Grade 7 (Fairly Easy)"),
    (60, "Grade 8-9 (Standard)"),
    (50, "Grade 10-12 (Fairly Difficult)"),
    (30, "College (Difficult)"),
]
HARDEST_LABEL = "College Graduate (Very Difficult)"

_sentence_end_re = re.compile(r"[.!?]+")
_vowel_group_re = re.compile(r"[aeiouy]+")
_non_alpha_re = re.compile(r"[^a-z]")
_passive_re = re.compile(r"\b(is|are|was|were|be|been|being)\s+\w+ed\b", re.I)


def count_syllables(word: str) -> int:
    word = _non_alpha_re.sub("", (word or "").lower())
    if len(word) <= 3:
        return 1
    count = len(_vowel_group_re.findall(word)) or 1
    if word.endswith("e"):
        count -= 1  # silent e
    if word.endswith("le") and len(word) > 2:
        count += 1
    return max(1, count)


def grade_label(flesch: float) -> str:
    for threshold, label in GRADE_LABELS:
        if flesch >= threshold:
            return label
    return HARDEST_LABEL


def analyze_readability(text: str) -> ReadabilityResult:
    clean_text = re.sub(r"\s+", " ", text or "").strip()

    if len(clean_text) < 50:
        return ReadabilityResult(
            score=20,
            flesch_score=0.0,
            grade_level=INSUFFICIENT_DATA,
            issues=["Text content too short for analysis"],
        )

    sentence_count = len(_sentence_end_re.findall(clean_text)) or 1
    words = clean_text.split()
    word_count = len(words)
    logger.debug(f"Readability analysis - words: {word_count}, sentences: {sentence_count}")

    if word_count < 20:
        return ReadabilityResult(
            score=30,
            flesch_score=0.0,
            grade_level=INSUFFICIENT_DATA,
            issues=["Not enough content to analyze"],
            word_count=word_count,
            sentence_count=sentence_count,
        )

    syllable_count = sum(count_syllables(w) for w in words)
    avg_words_per_sentence = word_count / max(sentence_count, 1)
    avg_syllables_per_word = syllable_count / max(word_count, 1)

    flesch = 206.835 - 1.015 * avg_words_per_sentence - 84.6 * avg_syllables_per_word
    flesch = clamp(flesch, 0.0, 100.0)
    label = grade_label(flesch)

    issues: List[str] = []
    if flesch < 30:
        issues.append("Text is very difficult to read - consider simplifying")
    elif flesch < 50:
        issues.append("Text is fairly difficult - consider using simpler words")

    if avg_words_per_sentence > 25:
        issues.append(
            f"Long sentences detected (avg {avg_words_per_sentence:.1f} words/sentence) "
            "- break into shorter sentences"
        )
    if avg_syllables_per_word > 1.7:
        issues.append("Using many complex words - consider simplifying vocabulary")

    passive_count = len(_passive_re.findall(clean_text))
    if passive_count > word_count * 0.1:
        issues.append(f"High passive voice usage ({passive_count} instances) - prefer active voice")

    score = flesch
    if avg_words_per_sentence <= 15:
        score += 5
    if avg_syllables_per_word <= 1.5:
        score += 5
    if passive_count <= word_count * 0.05:
        score += 5

    if avg_words_per_sentence > 30:
        score -= 10
    if avg_syllables_per_word > 2:
        score -= 10
    if passive_count > word_count * 0.15:
        score -= 10

    score = clamp(score, 0.0, 100.0)
    logger.debug(
        f"Flesch={flesch:.1f} words/sentence={avg_words_per_sentence:.1f} "
        f"syllables/word={avg_syllables_per_word:.2f} final={score:.1f}"
    )

    return ReadabilityResult(
        score=int(round_half_up(score)),
        flesch_score=round_half_up(flesch, 1),
        grade_level=label,
        issues=issues,
        word_count=word_count,
        sentence_count=sentence_count,
        avg_words_per_sentence=round_half_up(avg_words_per_sentence, 2),
        avg_syllables_per_word=round_half_up(avg_syllables_per_word, 2),
        passive_count=passive_count,
    )
