"""
Tests for the core environment, logging and alignment containers.
"""

import os

import numpy as np
import pytest

from guidetree.container import Alignment, Sequence
from guidetree.core import *


class Configured(object):
    defaults = {'debug': 0, 'precision': 6, 'sub': Environment({'a': 1})}


class TestEnvironment:
    """Test option inheritance in environments."""

    def test_defaults(self):
        env = Environment(component=Configured())

        assert env['debug'] == 0
        assert env['precision'] == 6

    def test_precedence(self):
        parent = Environment({'debug': 1, 'precision': 3})
        env = Environment({'debug': 2}, component=Configured(),
                          parent=parent)

        assert env['debug'] == 2
        assert env['precision'] == 3
        assert 'sub' in env
        assert env.get('missing', 7) == 7

    def test_nested_environments_merge(self):
        parent = Environment({'sub': Environment({'b': 2})})
        env = Environment({'sub': Environment({'a': 3})},
                          component=Configured(), parent=parent)

        assert env['sub']['a'] == 3
        assert env['sub']['b'] == 2


class TestLogBundle:
    """Test packaging of debug logs."""

    def test_archive(self):
        log = LogBundle()
        log.message(ROOT_LOG_NAME, "hello")
        log.message(ROOT_LOG_NAME, "world")

        with open(log.path(ROOT_LOG_NAME)) as f:
            f.read()

        archive = log.archive()
        try:
            assert os.path.exists(archive)
            assert path_to_url(archive).startswith("file:")
        finally:
            os.remove(archive)
            log.delete()

    def test_messages_are_appended(self):
        log = LogBundle()
        try:
            log.message("steps.log", "one")
            log.message("steps.log", "two")
            log.flush()

            with open(log.path("steps.log")) as f:
                assert f.read() == "one\ntwo\n"
        finally:
            log.delete()

    def test_write_then_archive(self):
        """Whole files written into the bundle do not break archiving."""
        log = LogBundle()
        try:
            log.message(ROOT_LOG_NAME, "start")
            log.write("tree.nwk", "(A:0,B:0.5);")
            log.write("tree.nwk", "(A:0,B:0.25);")

            with open(log.path("tree.nwk")) as f:
                assert f.read() == "(A:0,B:0.25);"

            archive = log.archive()
            os.remove(archive)
        finally:
            log.delete()

        with pytest.raises(LogError):
            log.write("tree.nwk", "late")

    def test_deleted_bundle(self):
        log = LogBundle()
        log.delete()

        with pytest.raises(LogError):
            log.path("x.log")
        with pytest.raises(LogError):
            log.message("x.log", "late")


class TestAlignment:
    """Test the alignment profile container."""

    def test_from_sequence(self):
        seq = Sequence("s", "ACGT", accession="s")
        alignment = Alignment.from_sequence(seq)

        assert alignment.items == [seq]
        assert len(alignment) == 4
        np.testing.assert_array_equal(alignment.path[:, 0], [0, 1, 2, 3, 4])

    def test_path_with_gap(self):
        one, two = Sequence("one", "ACG"), Sequence("two", "AG")
        path = np.array([[0, 0], [1, 1], [2, 1], [3, 2]])

        alignment = Alignment([one, two], path)

        assert [seq.name for seq in alignment.items] == ["one", "two"]
        assert len(alignment) == 3
        assert "items=2 columns=3" in repr(alignment)

    def test_path_width_mismatch(self):
        with pytest.raises(DataError):
            Alignment([Sequence("s", "AC")], np.zeros((3, 2), dtype=int))
