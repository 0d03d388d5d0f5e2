"""Runtime configuration for shift generation."""
from dataclasses import dataclass
from typing import Dict, Optional

from .rules import RULES


@dataclass
class GenerationConfig:
    """Configuration shared by the service layer and the CLI."""

    # Weeks offered when no horizon is given
    weeks: int = RULES.default_weeks

    # Seconds a cached list (template masters, locations) stays fresh
    cache_ttl_seconds: float = 300.0

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/shiftgen.log"

    def to_dict(self) -> Dict:
        return {
            "weeks": self.weeks,
            "cache_ttl_seconds": self.cache_ttl_seconds,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "GenerationConfig":
        cfg = cls()
        for key, value in d.items():
            if hasattr(cfg, key):
                setattr(cfg, key, value)
        return cfg
