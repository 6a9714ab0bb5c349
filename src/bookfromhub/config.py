from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .constraint import DEFAULT_CONFIG_PATH, GITHUB_ACCEPT, GITHUB_API_ROOT, USER_AGENT


@dataclass(slots=True)
class GitHubConfig:
    api_root: str = GITHUB_API_ROOT
    user_agent: str = USER_AGENT
    accept: str = GITHUB_ACCEPT
    timeout_s: float = 30.0

    @property
    def timeout(self) -> float | None:
        return self.timeout_s if self.timeout_s > 0 else None


@dataclass(slots=True)
class PandocConfig:
    binary: str = "pandoc"
    pdf_engine: str = "xelatex"
    main_font: str = "Latin Modern Roman"
    toc: bool = True
    timeout_s: float = 0.0

    @property
    def timeout(self) -> float | None:
        return self.timeout_s if self.timeout_s > 0 else None


@dataclass(slots=True)
class RuntimeConfig:
    temp_root: Path | None = None
    run_log: Path | None = None


@dataclass(slots=True)
class APIConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    github: GitHubConfig = field(default_factory=GitHubConfig)
    pandoc: PandocConfig = field(default_factory=PandocConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: APIConfig = field(default_factory=APIConfig)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _optional_path(value: object | None) -> Path | None:
    if value is None or str(value).strip() == "":
        return None
    return Path(str(value))


def _build_github(data: Mapping[str, object] | None) -> GitHubConfig:
    if not data:
        return GitHubConfig()
    return GitHubConfig(
        api_root=str(data.get("api_root", GITHUB_API_ROOT)).rstrip("/"),
        user_agent=str(data.get("user_agent", USER_AGENT)),
        accept=str(data.get("accept", GITHUB_ACCEPT)),
        timeout_s=float(data.get("timeout_s", 30.0)),
    )


def _build_pandoc(data: Mapping[str, object] | None) -> PandocConfig:
    if not data:
        return PandocConfig()
    return PandocConfig(
        binary=str(data.get("binary", "pandoc")),
        pdf_engine=str(data.get("pdf_engine", "xelatex")),
        main_font=str(data.get("main_font", "Latin Modern Roman")),
        toc=bool(data.get("toc", True)),
        timeout_s=float(data.get("timeout_s", 0.0)),
    )


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    return RuntimeConfig(
        temp_root=_optional_path(data.get("temp_root")),
        run_log=_optional_path(data.get("run_log")),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "127.0.0.1")), port=int(data.get("port", 8000)))


def _section(raw: Mapping[str, object], name: str) -> Mapping[str, object] | None:
    value = raw.get(name)
    return value if isinstance(value, Mapping) else None


def load_config(path: Path | None = None) -> AppConfig:
    path = path or DEFAULT_CONFIG_PATH
    raw = _read_toml(path)
    return AppConfig(
        github=_build_github(_section(raw, "github")),
        pandoc=_build_pandoc(_section(raw, "pandoc")),
        runtime=_build_runtime(_section(raw, "runtime")),
        api=_build_api(_section(raw, "api")),
    )


def dump_config(config: AppConfig, *, token: str | None = None) -> str:
    payload = {
        "github": {
            "api_root": config.github.api_root,
            "user_agent": config.github.user_agent,
            "accept": config.github.accept,
            "timeout_s": config.github.timeout_s,
            "token": "***" if token else None,
        },
        "pandoc": {
            "binary": config.pandoc.binary,
            "pdf_engine": config.pandoc.pdf_engine,
            "main_font": config.pandoc.main_font,
            "toc": config.pandoc.toc,
            "timeout_s": config.pandoc.timeout_s,
        },
        "runtime": {
            "temp_root": str(config.runtime.temp_root) if config.runtime.temp_root else None,
            "run_log": str(config.runtime.run_log) if config.runtime.run_log else None,
        },
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)


__all__ = [
    "AppConfig",
    "GitHubConfig",
    "PandocConfig",
    "RuntimeConfig",
    "APIConfig",
    "load_config",
    "dump_config",
]
