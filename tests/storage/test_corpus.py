"""Tests for the in-memory and disk-backed corpora."""

import logging
import threading

import pytest

from clonestream.detection import Chunk, CloneDetector, SourceFile, SourceLine, StoredFile
from clonestream.exceptions import RejectedInputError
from clonestream.storage import DiskCorpus, InMemoryCorpus


def record(name, contents="int a;", chunks=None):
    return StoredFile(name=name, contents=contents, chunks=chunks)


class TestInMemoryCorpus:
    """Test the lock-guarded in-process corpus."""

    def test_membership_and_count(self):
        corpus = InMemoryCorpus()
        assert not corpus.is_file_processed("A.java")
        corpus.store_file(record("A.java"))
        assert corpus.is_file_processed("A.java")
        assert corpus.number_of_files == 1

    def test_files_returned_in_store_order(self):
        corpus = InMemoryCorpus()
        for name in ("B.java", "A.java", "C.java"):
            corpus.store_file(record(name))
        assert [f.name for f in corpus.get_all_files()] == ["B.java", "A.java", "C.java"]

    def test_duplicate_store_refused(self):
        corpus = InMemoryCorpus()
        corpus.store_file(record("A.java"))
        with pytest.raises(RejectedInputError):
            corpus.store_file(record("A.java", "other"))
        assert corpus.get_all_files()[0].contents == "int a;"

    def test_chunks_dropped_when_not_retained(self):
        chunk = Chunk(0, (SourceLine(1, "int a;"),))
        corpus = InMemoryCorpus(retain_chunks=False)
        corpus.store_file(record("A.java", chunks=(chunk,)))
        assert corpus.get_all_files()[0].chunks is None

    def test_concurrent_store_of_one_name(self):
        corpus = InMemoryCorpus()
        barrier = threading.Barrier(8)
        stored = []

        def submit():
            barrier.wait()
            try:
                corpus.store_file(record("A.java"))
                stored.append(True)
            except RejectedInputError:
                pass

        threads = [threading.Thread(target=submit) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(stored) == 1
        assert corpus.number_of_files == 1

    def test_clear(self):
        corpus = InMemoryCorpus()
        corpus.store_file(record("A.java"))
        corpus.clear()
        assert corpus.number_of_files == 0


class TestDiskCorpus:
    """Test the diskcache-backed corpus."""

    def test_store_and_reopen(self, tmp_path):
        with DiskCorpus(tmp_path / "corpus") as corpus:
            corpus.store_file(record("A.java", "int a;"))
            corpus.store_file(record("B.java", "int b;"))

        with DiskCorpus(tmp_path / "corpus") as corpus:
            assert corpus.number_of_files == 2
            assert corpus.is_file_processed("B.java")
            files = corpus.get_all_files()
            assert [(f.name, f.contents) for f in files] == [("A.java", "int a;"), ("B.java", "int b;")]
            assert all(f.chunks is None for f in files)

    def test_duplicate_store_refused(self, tmp_path):
        with DiskCorpus(tmp_path) as corpus:
            corpus.store_file(record("A.java"))
            with pytest.raises(RejectedInputError):
                corpus.store_file(record("A.java"))

    def test_clear_and_stats(self, tmp_path):
        with DiskCorpus(tmp_path) as corpus:
            corpus.store_file(record("A.java"))
            assert corpus.stats()["files"] == 1
            corpus.clear()
            assert corpus.number_of_files == 0
            assert corpus.stats()["directory"] == str(tmp_path)

    def test_detector_compares_across_runs(self, tmp_path, block):
        text = "\n".join(block)
        with DiskCorpus(tmp_path) as corpus:
            CloneDetector(corpus).process(SourceFile("A.java", text))

        with DiskCorpus(tmp_path) as corpus:
            detector = CloneDetector(corpus)
            result = detector.process(SourceFile("B.java", text))
            assert len(result.clones) == 1
            assert result.clones[0].targets[0].name == "A.java"
            assert detector.number_of_processed_files == 2

    def test_store_logged_lazily(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger="clonestream")
        with DiskCorpus(tmp_path) as corpus:
            corpus.store_file(record("A.java"))

        [stored] = [r for r in caplog.records if r.getMessage().startswith("Stored")]
        assert stored.msg == "Stored %s in %s"
        assert stored.args == ("A.java", str(tmp_path))
