"""Invariants that hold for every classification run."""

from __future__ import annotations

import pytest
from conftest import SAMPLE_CORPUS

from docsmith.analysis.signals import code_signal
from docsmith.cleaning import normalize_lines
from docsmith.config import ClassifierConfig
from docsmith.core.document import Bullet, CodeBlock, NumberedItem, SubBullet, flatten
from docsmith.segmentation import classify_lines

CORPUS = sorted(SAMPLE_CORPUS.items())


@pytest.fixture(params=[text for _, text in CORPUS], ids=[name for name, _ in CORPUS])
def sample(request):
    """Normalized lines and classified items for one corpus document."""
    lines = normalize_lines(request.param)
    return lines, classify_lines(lines)


class TestClassificationProperties:
    """Properties checked over the sample corpus."""

    def test_coverage(self, sample) -> None:
        """Every input line is consumed exactly once, in order."""
        lines, items = sample
        assert flatten(items) == [line.text for line in lines]

    def test_determinism(self, sample) -> None:
        """Classifying twice gives the same result."""
        lines, items = sample
        assert classify_lines(lines) == items

    def test_numbering_monotonic(self, sample) -> None:
        """Numbered runs start at 1 and increase by exactly 1."""
        _, items = sample
        previous = None
        for item in items:
            if isinstance(item, NumberedItem):
                expected = 1 if previous is None else previous + 1
                assert item.number in (1, expected)
                previous = item.number
            else:
                previous = None

    def test_sub_bullet_adjacency(self, sample) -> None:
        """Sub-bullets only follow bullets."""
        _, items = sample
        for i, item in enumerate(items):
            if isinstance(item, SubBullet):
                assert i > 0
                assert isinstance(items[i - 1], Bullet)

    def test_code_block_minimality(self, sample) -> None:
        """One-line code blocks only come from high-scoring lines."""
        lines, items = sample
        cfg = ClassifierConfig()
        index_of = {line.position: i for i, line in enumerate(lines)}
        for item in items:
            if isinstance(item, CodeBlock) and len(item.lines) == 1:
                index = index_of[item.source[0].position]
                assert code_signal(lines, index, cfg).score >= cfg.code_single_line_threshold

    def test_config_does_not_leak(self, sample) -> None:
        """A custom config run leaves default runs unchanged."""
        lines, items = sample
        classify_lines(lines, ClassifierConfig(bullet_threshold=0, header_threshold=0))
        assert classify_lines(lines) == items
