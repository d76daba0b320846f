"""Runtime configuration."""

import argparse
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Startup configuration and the display toggles changed at runtime."""

    double_height: bool = False
    use_colors: bool = True
    show_info: bool = True
    show_history: bool = True
    info_box_height: int = 10
    history_size: int = 100
    delay: float = 0.015
    seed: Optional[int] = None
    log_level: str = "DEBUG"
    log_path: str = "log.log"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Settings":
        """Build settings from parsed command-line arguments."""
        return cls(
            double_height=args.double_height,
            use_colors=not args.no_colors,
            show_info=not args.no_info,
            show_history=not args.no_history,
            seed=args.seed,
            log_level=args.log_level,
            log_path=args.log_file,
        )
