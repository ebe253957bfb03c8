from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .paths import (
    default_config_path,
    default_data_dir,
    default_reference_path,
    expand_path,
)

CONFIG_ENV_VAR = "FWMON_CONFIG"


class DatabaseConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str = Field(default_factory=lambda: str(default_data_dir()))


class ReferenceConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str = Field(default_factory=lambda: str(default_reference_path()))
    delimiter: str = Field(default=";", min_length=1, max_length=1)
    serial_column: str = "Serial"
    version_column: str = "LFV"
    encoding: str = "utf-8-sig"


class EmailConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = Field(default=587, ge=1, le=65535)
    use_tls: bool = True
    timeout: float = Field(default=20.0, gt=0)
    sender: str | None = None
    recipients: list[str] = Field(default_factory=list)


class ScheduleConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    # 0 = Monday ... 6 = Sunday
    weekday: int = Field(default=4, ge=0, le=6)
    hour: int = Field(default=9, ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)


class ServerConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    reference: ReferenceConfig = Field(default_factory=ReferenceConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.database.path)


def reference_path_from_settings(settings: Settings) -> Path:
    return expand_path(settings.reference.path)


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    email = settings.email
    lines = [
        "# fwmon configuration",
        "",
        "[database]",
        f"path = {_toml_string(settings.database.path)}",
        "",
        "[reference]",
        f"path = {_toml_string(settings.reference.path)}",
        f"delimiter = {_toml_string(settings.reference.delimiter)}",
        f"serial_column = {_toml_string(settings.reference.serial_column)}",
        f"version_column = {_toml_string(settings.reference.version_column)}",
        f"encoding = {_toml_string(settings.reference.encoding)}",
        "",
        "[email]",
        f"smtp_host = {_toml_string(email.smtp_host)}",
        f"smtp_port = {email.smtp_port}",
        f"use_tls = {'true' if email.use_tls else 'false'}",
        f"timeout = {email.timeout}",
    ]
    if email.sender:
        lines.append(f"sender = {_toml_string(email.sender)}")
    lines += [
        f"recipients = [{', '.join(_toml_string(r) for r in email.recipients)}]",
        "",
        "[schedule]",
        f"weekday = {settings.schedule.weekday}",
        f"hour = {settings.schedule.hour}",
        f"minute = {settings.schedule.minute}",
        "",
        "[server]",
        f"host = {_toml_string(settings.server.host)}",
        f"port = {settings.server.port}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
