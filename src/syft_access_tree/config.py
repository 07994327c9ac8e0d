"""Configuration for the access tree."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from syft_access_tree.engine.disclosure import (
    FOLDERS_INCREMENT,
    INITIAL_FOLDERS_PER_LEVEL,
)
from syft_access_tree.engine.subjects import PermissionSubject

CONFIG_SECTION = "access_tree"


def get_default_config_path() -> Path:
    return Path.home() / ".syft-access-tree" / "config.yaml"


@dataclass
class AccessTreeConfig:
    """Pagination, default selections and layout spacing."""

    initial_page_size: int = INITIAL_FOLDERS_PER_LEVEL
    page_increment: int = FOLDERS_INCREMENT
    default_subject: PermissionSubject = PermissionSubject.SECRETS
    default_environment: Optional[str] = None
    node_width: float = 220
    node_height: float = 60
    rank_sep: float = 100
    node_sep: float = 40

    def __post_init__(self):
        self.default_subject = PermissionSubject(self.default_subject)
        for name in ("initial_page_size", "page_increment"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        for name in ("node_width", "node_height", "rank_sep", "node_sep"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must not be negative")

    @classmethod
    def from_dict(cls, data: dict) -> "AccessTreeConfig":
        return cls(
            initial_page_size=data.get("initial_page_size", INITIAL_FOLDERS_PER_LEVEL),
            page_increment=data.get("page_increment", FOLDERS_INCREMENT),
            default_subject=data.get("default_subject", PermissionSubject.SECRETS),
            default_environment=data.get("default_environment"),
            node_width=data.get("node_width", 220),
            node_height=data.get("node_height", 60),
            rank_sep=data.get("rank_sep", 100),
            node_sep=data.get("node_sep", 40),
        )

    def to_dict(self) -> dict:
        return {
            "initial_page_size": self.initial_page_size,
            "page_increment": self.page_increment,
            "default_subject": self.default_subject.value,
            "default_environment": self.default_environment,
            "node_width": self.node_width,
            "node_height": self.node_height,
            "rank_sep": self.rank_sep,
            "node_sep": self.node_sep,
        }

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AccessTreeConfig":
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = get_default_config_path()
        else:
            config_path = Path(config_path).expanduser()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"{config_path} must contain a mapping")
        section = data.get(CONFIG_SECTION) or {}
        if not isinstance(section, dict):
            raise ValueError(f"'{CONFIG_SECTION}' in {config_path} must be a mapping")
        return cls.from_dict(section)

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save configuration to YAML file, keeping other sections."""
        if config_path is None:
            config_path = get_default_config_path()
        else:
            config_path = Path(config_path).expanduser()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {}
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

        data[CONFIG_SECTION] = self.to_dict()

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
