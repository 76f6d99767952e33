"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..constants import ReconcileMode


@dataclass
class FlavorResult:
    """Outcome for a single flavor"""

    source_name: str
    source_uri: str
    version: str
    constraint: str
    recomputed: bool = False
    previous_version: Optional[str] = None

    @property
    def changed(self) -> bool:
        """Whether the locked version differs from the previous lock"""
        return self.previous_version != self.version

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "source_name": self.source_name,
            "source_uri": self.source_uri,
            "version": self.version,
            "constraint": self.constraint,
            "recomputed": self.recomputed,
            "previous_version": self.previous_version,
        }


@dataclass
class InstallResult:
    """Result of an install or upgrade operation"""

    mode: ReconcileMode
    vimfiles_path: Path
    lockfile_path: Path
    bootstrap_path: Optional[Path] = None
    flavors: List[FlavorResult] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    @property
    def changed_flavors(self) -> List[FlavorResult]:
        return [f for f in self.flavors if f.changed]

    def complete(self) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "mode": self.mode.value,
            "vimfiles_path": str(self.vimfiles_path),
            "lockfile_path": str(self.lockfile_path),
            "bootstrap_path": str(self.bootstrap_path) if self.bootstrap_path else None,
            "flavors": [f.to_dict() for f in self.flavors],
            "duration": self.duration,
        }
