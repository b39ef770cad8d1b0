from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ApplyResult:
    """
    Outcome of applying one block or a whole batch.

    The same shape is returned per block and in aggregate. `success` on an
    aggregate means at least one edit landed; inspect `errors` for the rest.
    """

    success: bool = False
    message: str = ""
    files_processed: int = 0
    blocks_processed: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    dry_run: bool = False

    def as_dict(self) -> Dict[str, Any]:
        """camelCase view for JSON consumers (webviews, RPC)."""
        return {
            "success": self.success,
            "message": self.message,
            "filesProcessed": self.files_processed,
            "blocksProcessed": self.blocks_processed,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "dryRun": self.dry_run,
        }
