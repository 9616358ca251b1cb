"""Tests for common/hashing.py module."""

import hashlib

from ovn_daemonset.common.hashing import file_hashes, hash_of_input_hashes, object_hash


class TestObjectHash:
    """Tests for object hashing."""

    def test_known_value(self):
        """Test the digest of a compact JSON encoding."""
        assert object_hash({"a": 1}) == hashlib.sha256(b'{"a":1}').hexdigest()

    def test_key_order_irrelevant(self):
        """Test mapping order does not change the digest."""
        assert object_hash({"a": 1, "b": 2}) == object_hash({"b": 2, "a": 1})

    def test_value_change(self):
        """Test a changed value changes the digest."""
        assert object_hash({"a": 1}) != object_hash({"a": 2})


class TestInputHashes:
    """Tests for combining input hashes."""

    def test_empty_mapping_is_stable(self):
        """Test an empty mapping yields a stable digest."""
        assert hash_of_input_hashes({}) == hash_of_input_hashes({})
        assert len(hash_of_input_hashes({})) == 64

    def test_file_hashes(self, tmp_path):
        """Test files are hashed by content and keyed by resolved path."""
        path = tmp_path / "ovn.conf"
        path.write_bytes(b"remote=tcp:10.0.0.1:6642\n")

        hashes = file_hashes([path])

        assert hashes == {str(path.resolve()): hashlib.sha256(b"remote=tcp:10.0.0.1:6642\n").hexdigest()}

    def test_content_change_changes_combined_hash(self, tmp_path):
        """Test editing a file changes the combined hash."""
        path = tmp_path / "ovn.conf"
        path.write_text("a")
        first = hash_of_input_hashes(file_hashes([path]))

        path.write_text("b")
        second = hash_of_input_hashes(file_hashes([path]))

        assert first != second

    def test_same_basename_in_different_directories(self, tmp_path):
        """Test files sharing a name in different directories both count."""
        first = tmp_path / "a" / "ovn.conf"
        second = tmp_path / "b" / "ovn.conf"
        first.parent.mkdir()
        second.parent.mkdir()
        first.write_text("remote=tcp:10.0.0.1:6642")
        second.write_text("remote=tcp:10.0.0.2:6642")
        before = hash_of_input_hashes(file_hashes([first, second]))

        first.write_text("remote=tcp:10.0.0.9:6642")
        after = hash_of_input_hashes(file_hashes([first, second]))

        assert len(file_hashes([first, second])) == 2
        assert before != after
