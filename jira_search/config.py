from __future__ import annotations

from dataclasses import dataclass, asdict, field
from pathlib import Path
import yaml

from .models import SearchMode

APP_DIR = Path.home() / ".jira-search"
SITES_DIR = APP_DIR / "sites"

DEPLOYMENTS = ("auto", "cloud", "server")


def ensure_app_dirs() -> None:
    SITES_DIR.mkdir(parents=True, exist_ok=True)


@dataclass
class SiteProfile:
    name: str
    jira_base_url: str
    email: str

    search_mode: str = SearchMode.AUTO.value
    # auto = ask serverInfo, cloud/server = skip the probe
    deployment: str = "auto"

    default_fields: list[str] = field(default_factory=lambda: ["summary", "status", "assignee"])
    page_size: int = 100

    def __post_init__(self) -> None:
        SearchMode.parse(self.search_mode)
        if self.deployment not in DEPLOYMENTS:
            raise ValueError(
                f"Invalid deployment '{self.deployment}', expected one of {', '.join(DEPLOYMENTS)}"
            )


def profile_path(profile_name: str) -> Path:
    ensure_app_dirs()
    return SITES_DIR / f"{profile_name}.yaml"


def save_profile(profile: SiteProfile) -> None:
    ensure_app_dirs()
    p = profile_path(profile.name)
    with p.open("w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(profile), f, sort_keys=False)


def load_profile(profile_name: str) -> SiteProfile:
    p = profile_path(profile_name)
    if not p.exists():
        raise FileNotFoundError(
            f"Profile '{profile_name}' not found at {p}. Run: jira-search configure {profile_name}"
        )
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return SiteProfile(**data)
