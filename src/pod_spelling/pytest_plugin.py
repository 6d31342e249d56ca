"""pytest plugin providing a fresh SpellingContext per test.

    def test_pod_spelling(pod_spelling):
        pod_spelling.add_stopwords("Frobnicate")
        result = pod_spelling.check_file("lib/My/Module.pm")
        assert result.passed, result.diagnostic
"""

from __future__ import annotations

import pytest

from pod_spelling.checker import SpellingContext
from pod_spelling.config import Settings
from pod_spelling.reporting import RecordingReporter


@pytest.fixture
def pod_spelling() -> SpellingContext:
    """A SpellingContext reporting into a RecordingReporter (``ctx.reporter``)."""
    return SpellingContext(reporter=RecordingReporter(), settings=Settings())
