"""Unit tests for display path resolution"""

from pathlib import Path

from filedrop.domain.uploads import AbsolutePathRegistry


class TestRelativize:
    """Test prefix stripping"""

    def test_matching_prefix_stripped(self):
        registry = AbsolutePathRegistry(["/srv/uploads"])
        assert registry.relativize("/srv/uploads/tmp/a.txt") == "tmp/a.txt"

    def test_no_match_returns_path_unchanged(self):
        registry = AbsolutePathRegistry(["/srv/uploads"])
        assert registry.relativize("/var/data/a.txt") == "/var/data/a.txt"

    def test_empty_registry(self):
        registry = AbsolutePathRegistry()
        assert registry.relativize("/srv/uploads/a.txt") == "/srv/uploads/a.txt"

    def test_first_registered_prefix_wins(self):
        path = "/srv/uploads/tmp/a.txt"

        assert AbsolutePathRegistry(["/srv", "/srv/uploads"]).relativize(path) == "uploads/tmp/a.txt"
        assert AbsolutePathRegistry(["/srv/uploads", "/srv"]).relativize(path) == "tmp/a.txt"

    def test_prefix_must_end_at_separator(self):
        registry = AbsolutePathRegistry(["/srv/up"])
        assert registry.relativize("/srv/uploads/a.txt") == "/srv/uploads/a.txt"

    def test_trailing_separator_in_prefix(self):
        registry = AbsolutePathRegistry(["/srv/uploads/"])
        assert registry.relativize("/srv/uploads/tmp/a.txt") == "tmp/a.txt"

    def test_prefix_equal_to_path_not_stripped(self):
        registry = AbsolutePathRegistry(["/srv/uploads"])
        assert registry.relativize("/srv/uploads") == "/srv/uploads"

    def test_prefix_with_trailing_separator_only_stops_matching(self):
        registry = AbsolutePathRegistry(["/srv/uploads", "/srv"])
        assert registry.relativize("/srv/uploads/") == "/srv/uploads/"

    def test_filesystem_root_prefix(self):
        registry = AbsolutePathRegistry(["/"])
        assert registry.relativize("/srv/a.txt") == "srv/a.txt"

    def test_path_objects_accepted(self):
        registry = AbsolutePathRegistry([Path("/srv/uploads")])
        assert registry.relativize(Path("/srv/uploads/files/a.txt")) == "files/a.txt"


class TestImmutability:
    """Test the registry is fixed at construction"""

    def test_source_list_mutation_ignored(self):
        prefixes = ["/srv/uploads"]
        registry = AbsolutePathRegistry(prefixes)
        prefixes.insert(0, "/srv")

        assert registry.prefixes == ("/srv/uploads",)
        assert registry.relativize("/srv/uploads/a.txt") == "a.txt"

    def test_length(self):
        assert len(AbsolutePathRegistry(["/a", "/b"])) == 2
