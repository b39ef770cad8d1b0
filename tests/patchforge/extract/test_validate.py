import pytest

from patchforge.extract import validate_block
from patchforge.models import EditBlock
from patchforge.utils import get_protected_spec


def _block(path="src/a.py", search="old", replace="new", language="python"):
    return EditBlock(language=language, file_path=path, search_content=search, replace_content=replace, ordinal=1)


def test_well_formed_block_is_valid():
    outcome = validate_block(_block())
    assert outcome.valid is True
    assert outcome.errors == []


def test_new_file_block_is_valid():
    assert validate_block(_block(search="")).valid is True


@pytest.mark.parametrize(
    "path",
    ["../etc/passwd", "src/../../x.py", "..\\win.ini", "/etc/passwd", "\\share\\x.txt", "C:\\temp\\x.py", "C:/temp/x.py"],
)
def test_traversal_and_absolute_paths_are_rejected(path):
    outcome = validate_block(_block(path=path))
    assert outcome.valid is False
    assert "File path contains invalid characters or is absolute" in outcome.errors


def test_double_dot_inside_a_name_is_not_traversal():
    assert validate_block(_block(path="src/v1..2/notes.txt")).valid is True


def test_blank_path_and_language_report_every_error():
    outcome = validate_block(_block(path="  ", language=""))
    assert outcome.valid is False
    assert outcome.errors == [
        "File path is empty or missing",
        "Programming language not specified in fenced block",
    ]


def test_git_internals_are_protected_by_default():
    outcome = validate_block(_block(path=".git/config"))
    assert outcome.valid is False
    assert "File path targets a protected location" in outcome.errors


def test_custom_protected_patterns():
    spec = get_protected_spec(["*.lock", "secrets/"])
    assert validate_block(_block(path="poetry.lock"), protected=spec).valid is False
    assert validate_block(_block(path="secrets/key.pem"), protected=spec).valid is False
    assert validate_block(_block(path=".git/config"), protected=spec).valid is True


@pytest.mark.parametrize("search", ["", "   ", "\n\t\n"])
def test_hand_built_blank_search_is_a_new_file_not_an_empty_edit(search):
    block = _block(search=search)
    assert block.is_new_file is True
    outcome = validate_block(block)
    assert outcome.valid is True
    assert "Search content is empty for existing file modification" not in outcome.errors
