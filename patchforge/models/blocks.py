from dataclasses import dataclass, field
from typing import List


@dataclass
class EditBlock:
    """One SEARCH/REPLACE edit lifted out of free-form text."""

    language: str
    file_path: str
    search_content: str
    replace_content: str
    ordinal: int = 0

    @property
    def is_new_file(self) -> bool:
        # Always derived; an empty SEARCH section means "create this file".
        return self.search_content.strip() == ""

    @property
    def label(self) -> str:
        return f"Block {self.ordinal} ({self.file_path})"


@dataclass
class ValidationOutcome:
    valid: bool
    errors: List[str] = field(default_factory=list)
