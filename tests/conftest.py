"""Shared test fixtures for clonestream tests."""

import pytest

from clonestream.config import DetectorConfig
from clonestream.detection import CloneDetector, SourceFile
from clonestream.storage import InMemoryCorpus

BLOCK = [
    "public int add(int a, int b) {",
    "int sum = a + b;",
    "log(sum);",
    "return sum;",
    "}",
]

EIGHT_LINES = [f"int v{i} = {i};" for i in range(8)]


def java(*lines: str) -> str:
    return "\n".join(lines) + "\n"


def make_file(name: str, *lines: str) -> SourceFile:
    return SourceFile(name=name, contents=java(*lines))


@pytest.fixture
def corpus():
    return InMemoryCorpus()


@pytest.fixture
def detector(corpus):
    return CloneDetector(corpus, DetectorConfig(chunk_size=5))


@pytest.fixture
def block():
    return list(BLOCK)


@pytest.fixture
def eight_lines():
    return list(EIGHT_LINES)


@pytest.fixture(name="make_file")
def make_file_fixture():
    """Factory for SourceFile objects built from content lines."""
    return make_file
