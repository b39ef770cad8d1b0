import textwrap

from patchforge.extract import clean_diff_content, parse_git_diff
from patchforge.models.operations import ADDED, CONTEXT, REMOVED


def test_clean_drops_leading_prose_and_fence():
    content = "Sure, here it is:\n\n```diff\ndiff --git a/x b/x\n--- a/x\n+++ b/x\n```\n"
    cleaned = clean_diff_content(content)
    assert cleaned.startswith("diff --git a/x b/x")


def test_clean_returns_empty_without_header():
    assert clean_diff_content("--- a/x\n+++ b/x\n@@ -1 +1 @@\n-a\n+b") == ""
    assert clean_diff_content("") == ""


def test_parse_changed_file_with_two_hunks():
    diff = textwrap.dedent("""\
        diff --git a/m.txt b/m.txt
        index 1234567..abcdefg 100644
        --- a/m.txt
        +++ b/m.txt
        @@ -1,3 +1,3 @@
        -line 1
        +modified line 1
         line 2
         line 3
        @@ -4,3 +4,3 @@
         line 4
        -line 5
        +modified line 5
         line 6
    """)
    (entry,) = parse_git_diff(diff)
    assert entry.kind == "changed"
    assert entry.path == "m.txt"
    assert [(h.old_start, h.old_count, h.new_start, h.new_count) for h in entry.hunks] == [(1, 3, 1, 3), (4, 3, 4, 3)]
    assert [line.kind for line in entry.hunks[0].lines] == [REMOVED, ADDED, CONTEXT, CONTEXT]
    assert entry.hunks[1].lines[2].content == "modified line 5"


def test_parse_added_deleted_and_renamed_entries():
    diff = textwrap.dedent("""\
        diff --git a/new.txt b/new.txt
        new file mode 100644
        index 0000000..1234567
        --- /dev/null
        +++ b/new.txt
        @@ -0,0 +1 @@
        +hello
        diff --git a/gone.txt b/gone.txt
        deleted file mode 100644
        --- a/gone.txt
        +++ /dev/null
        @@ -1 +0,0 @@
        -bye
        diff --git a/old.md b/docs/new.md
        similarity index 100%
        rename from old.md
        rename to docs/new.md
    """)
    entries = parse_git_diff(diff)
    assert [(e.kind, e.path, e.prior_path) for e in entries] == [
        ("added", "new.txt", None),
        ("deleted", "gone.txt", None),
        ("renamed", "docs/new.md", "old.md"),
    ]
    assert entries[2].hunks == []


def test_no_newline_marker_is_not_content():
    diff = "\n".join([
        "diff --git a/f.txt b/f.txt",
        "--- a/f.txt",
        "+++ b/f.txt",
        "@@ -1 +1,2 @@",
        " first",
        "+second",
        "\\ No newline at end of file",
    ])
    (entry,) = parse_git_diff(diff)
    assert [(line.kind, line.content) for line in entry.hunks[0].lines] == [
        (CONTEXT, "first"),
        (ADDED, "second"),
    ]


def test_hunk_stops_at_declared_counts_so_trailing_fence_is_ignored():
    content = "\n".join([
        "```diff",
        "diff --git a/t.txt b/t.txt",
        "new file mode 100644",
        "--- /dev/null",
        "+++ b/t.txt",
        "@@ -0,0 +1 @@",
        "+test content",
        "```",
        "",
        "- a bullet point that is not part of the diff",
    ])
    (entry,) = parse_git_diff(content)
    assert [line.content for line in entry.hunks[0].lines] == ["test content"]


def test_blank_line_inside_hunk_counts_as_context():
    diff = "\n".join([
        "diff --git a/b.txt b/b.txt",
        "--- a/b.txt",
        "+++ b/b.txt",
        "@@ -1,3 +1,3 @@",
        " a",
        "",
        "-c",
        "+C",
    ])
    (entry,) = parse_git_diff(diff)
    assert [(line.kind, line.content) for line in entry.hunks[0].lines] == [
        (CONTEXT, "a"),
        (CONTEXT, ""),
        (REMOVED, "c"),
        (ADDED, "C"),
    ]


def test_binary_entry_is_marked_unsupported():
    diff = "diff --git a/img.png b/img.png\nindex 1..2 100644\nBinary files a/img.png and b/img.png differ\n"
    (entry,) = parse_git_diff(diff)
    assert entry.kind == "unsupported"
    assert entry.reason == "binary"


def test_prose_only_parses_to_nothing():
    assert parse_git_diff("not a valid diff") == []


def test_hunk_longer_than_its_header_is_malformed():
    diff = "\n".join([
        "diff --git a/f.txt b/f.txt",
        "--- a/f.txt",
        "+++ b/f.txt",
        "@@ -1,2 +1,2 @@",
        " a",
        "+inserted",
        " b",
        "+tail",
    ])
    (entry,) = parse_git_diff(diff)
    assert entry.kind == "malformed"
    assert entry.path == "f.txt"
    assert entry.reason


def test_lines_after_a_satisfied_hunk_make_it_malformed():
    diff = "\n".join([
        "diff --git a/f.txt b/f.txt",
        "--- a/f.txt",
        "+++ b/f.txt",
        "@@ -1 +1,2 @@",
        " a",
        "+x",
        "+tail",
    ])
    (entry,) = parse_git_diff(diff)
    assert entry.kind == "malformed"
    assert entry.hunks == []


def test_malformed_file_does_not_hide_the_next_one():
    diff = "\n".join([
        "diff --git a/bad.txt b/bad.txt",
        "--- a/bad.txt",
        "+++ b/bad.txt",
        "@@ -1,5 +1,5 @@",
        "-only one line",
        "+for five declared",
        "diff --git a/good.txt b/good.txt",
        "--- a/good.txt",
        "+++ b/good.txt",
        "@@ -1 +1 @@",
        "-old",
        "+new",
    ])
    entries = parse_git_diff(diff)
    assert [(e.kind, e.path) for e in entries] == [("malformed", "bad.txt"), ("changed", "good.txt")]
