import pytest

from patchforge import PATCH_FORMATS, apply_patch, get_patch_format


SR = "\n".join([
    "hello.txt",
    "```text",
    "<<<<<<< SEARCH",
    "=======",
    "hi",
    ">>>>>>> REPLACE",
    "```",
])

DIFF = "\n".join([
    "diff --git a/hello.txt b/hello.txt",
    "new file mode 100644",
    "--- /dev/null",
    "+++ b/hello.txt",
    "@@ -0,0 +1 @@",
    "+hi from diff",
])


def test_registry_exposes_both_formats():
    assert set(PATCH_FORMATS) == {"search_replace", "git_diff"}
    fmt = get_patch_format("git_diff")
    assert fmt.name == "git_diff"


def test_unknown_format_raises_value_error():
    with pytest.raises(ValueError):
        get_patch_format("mbox")


def test_default_format_is_search_replace(tmp_path, read_file):
    result = apply_patch(SR, str(tmp_path))
    assert result.success is True
    assert read_file("hello.txt") == "hi"


def test_format_is_never_auto_detected(tmp_path):
    result = apply_patch(DIFF, str(tmp_path))
    assert result.success is False
    assert result.message == "No valid SEARCH/REPLACE blocks found in the response."
    assert not (tmp_path / "hello.txt").exists()


def test_git_diff_format(tmp_path, read_file):
    result = apply_patch(DIFF, str(tmp_path), fmt="git_diff")
    assert result.success is True
    assert read_file("hello.txt") == "hi from diff"


def test_parse_then_apply_through_the_capability(tmp_path, read_file):
    fmt = get_patch_format("search_replace")
    blocks = fmt.parse(SR)
    assert len(blocks) == 1
    result = fmt.apply(blocks, str(tmp_path), dry_run=True)
    assert result.success is True
    assert not (tmp_path / "hello.txt").exists()


@pytest.mark.parametrize("fmt", sorted(PATCH_FORMATS))
def test_garbage_never_raises(tmp_path, fmt):
    result = apply_patch("\x00```\n<<<<<<<\ndiff --git", str(tmp_path), fmt=fmt)
    assert result.success is False
    assert result.errors
