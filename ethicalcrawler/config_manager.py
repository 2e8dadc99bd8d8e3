"""Deterministic configuration loader and CLI for the crawler."""
from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import (
    Any,
    Dict,
    Mapping,
    MutableMapping,
    Optional,
    Sequence,
    Union,
    get_args,
    get_origin,
)

import tomli_w
from dotenv import dotenv_values
from pydantic import ValidationError

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

from ethicalcrawler.config_schema import Config, DEFAULT_CONFIG, iter_field_docs

DEFAULT_ENV_PREFIX = "ETHICALCRAWLER"
DEFAULT_CONFIG_FILENAME = "config.toml"
DEFAULT_ENV_FILENAME = ".env"


@dataclass(frozen=True)
class ConfigValueOrigin:
    """Provenance metadata for a single configuration value."""

    layer: str
    source: str
    env_var: str | None = None

    def render(self) -> str:
        """Return a human-readable provenance description."""

        details = [item for item in (self.env_var, self.source) if item]
        if details:
            return f"{self.layer} ({', '.join(details)})"
        return self.layer


@dataclass
class ConfigMetadata:
    """Aggregated metadata returned alongside the loaded configuration."""

    config_path: Path
    env_path: Optional[Path]
    env_prefix: str
    provenance: Dict[str, ConfigValueOrigin] = field(default_factory=dict)
    load_order: tuple[str, ...] = ("defaults", "file", "env-file", "env")

    def describe_sources(self) -> list[str]:
        sources: list[str] = [
            "defaults: built into ethicalcrawler.config_schema",
            f"config file: {self.config_path}",
        ]
        if self.env_path:
            sources.append(f".env file: {self.env_path}")
        else:
            sources.append(".env file: not found")
        sources.append(f"environment prefix: {self.env_prefix}__*")
        return sources


class ConfigError(RuntimeError):
    """Raised when configuration loading or validation fails."""


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _default_paths() -> tuple[Path, Path]:
    root = _project_root()
    return root / DEFAULT_CONFIG_FILENAME, root / DEFAULT_ENV_FILENAME


def _deepcopy_mapping(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in mapping.items():
        if isinstance(value, Mapping):
            result[key] = _deepcopy_mapping(value)
        elif isinstance(value, list):
            result[key] = list(value)
        else:
            result[key] = value
    return result


def _is_secret(path: str) -> bool:
    lowered = path.lower()
    return any(token in lowered for token in ("password", "secret", "token", "key"))


def _merge_layer(
    target: MutableMapping[str, Any],
    updates: Mapping[str, Any],
    provenance: Dict[str, ConfigValueOrigin],
    *,
    origin: ConfigValueOrigin,
    prefix: str = "",
) -> None:
    for key, value in updates.items():
        composed = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            existing = target.get(key)
            if not isinstance(existing, MutableMapping):
                existing = {}
                target[key] = existing
            _merge_layer(existing, value, provenance, origin=origin, prefix=composed)
        else:
            target[key] = value
            provenance[composed] = origin


def _parse_kv_override(raw_key: str, raw_value: str, prefix: str) -> tuple[str, Any]:
    if not raw_key.startswith(prefix + "__"):
        raise ConfigError(
            f"Environment override '{raw_key}' does not start with prefix {prefix}__"
        )
    key_part = raw_key[len(prefix) + 2 :]
    segments = [segment for segment in key_part.split("__") if segment]
    if not segments:
        raise ConfigError(f"Environment override '{raw_key}' is missing key segments")
    path = ".".join(segment.lower() for segment in segments)
    # Credentials and text fields are opaque strings even when they look numeric.
    if _is_secret(path) or _is_text_field(path):
        value = raw_value.strip()
    else:
        value = _coerce_text(raw_value)
    return path, value


def _field_annotation(path: str) -> Any:
    model: Any = Config
    annotation: Any = None
    for segment in path.split("."):
        fields = getattr(model, "model_fields", None)
        if not fields or segment not in fields:
            return None
        annotation = fields[segment].annotation
        model = annotation
    return annotation


def _is_text_field(path: str) -> bool:
    annotation = _field_annotation(path)
    if annotation is str:
        return True
    if get_origin(annotation) is Union:
        args = set(get_args(annotation))
        return str in args and args <= {str, type(None)}
    return False


def _coerce_text(value: str) -> Any:
    text = value.strip()
    if not text:
        return ""
    lowered = text.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if text.isdigit() or (text.startswith("-") and text[1:].isdigit()):
        return int(text)
    try:
        return float(text)
    except ValueError:
        pass
    if (text.startswith("[") and text.endswith("]")) or (
        text.startswith("{") and text.endswith("}")
    ):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text
    return text


def _assign_path(target: MutableMapping[str, Any], path: str, value: Any) -> None:
    segments = path.split(".")
    current: MutableMapping[str, Any] = target
    for segment in segments[:-1]:
        next_value = current.get(segment)
        if not isinstance(next_value, MutableMapping):
            next_value = {}
            current[segment] = next_value
        current = next_value
    current[segments[-1]] = value


def _serialize_for_toml(value: Any) -> Any:
    if isinstance(value, Config):
        data = value.model_dump(mode="python")
        return {key: _serialize_for_toml(val) for key, val in data.items()}
    if value is None:
        # TOML has no null; unset optionals are written as empty strings.
        return ""
    if isinstance(value, Mapping):
        return {key: _serialize_for_toml(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_serialize_for_toml(item) for item in value]
    if isinstance(value, Path):
        return str(value)
    return value


def _load_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _detect_env_path(config_path: Path) -> Path:
    env_candidate = config_path.parent / DEFAULT_ENV_FILENAME
    if env_candidate.exists():
        return env_candidate
    _, default_env_path = _default_paths()
    if default_env_path.exists():
        return default_env_path
    return env_candidate


def _format_validation_error(
    error: ValidationError,
    provenance: Mapping[str, ConfigValueOrigin],
) -> ConfigError:
    messages: list[str] = []
    for record in error.errors():
        location = ".".join(str(part) for part in record.get("loc", ()))
        origin = provenance.get(location)
        origin_text = f" [{origin.render()}]" if origin else ""
        detail = record.get("msg", "invalid value")
        input_value = record.get("input")
        if input_value is not None and not _is_secret(location):
            detail += f" (received={input_value!r})"
        messages.append(f"{location or '<root>'}: {detail}{origin_text}")
    combined = "\n - ".join(messages)
    return ConfigError(f"Configuration validation failed:\n - {combined}")


def load_config(
    path: Path | None = None,
    *,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration by merging defaults, files and environment layers."""

    config_path = path if path else _default_paths()[0]
    env_path = _detect_env_path(config_path)
    runtime_env = os.environ if environ is None else environ

    defaults = DEFAULT_CONFIG.model_dump(mode="python")
    merged = _deepcopy_mapping(defaults)
    provenance: Dict[str, ConfigValueOrigin] = {}
    default_origin = ConfigValueOrigin(
        layer="defaults",
        source="ethicalcrawler.config_schema.DEFAULT_CONFIG",
    )
    _merge_layer(merged, defaults, provenance, origin=default_origin)

    file_data = _load_toml(config_path)
    if file_data:
        file_origin = ConfigValueOrigin(layer="file", source=str(config_path))
        _merge_layer(merged, file_data, provenance, origin=file_origin)

    if env_path.exists():
        env_file_data = {
            key: value
            for key, value in dotenv_values(env_path, verbose=False).items()
            if value is not None
        }
        for key, value in env_file_data.items():
            try:
                path_key, parsed_value = _parse_kv_override(key, value, env_prefix)
            except ConfigError:
                continue
            _assign_path(merged, path_key, parsed_value)
            provenance[path_key] = ConfigValueOrigin(
                layer="env-file",
                source=str(env_path),
                env_var=key,
            )

    for key, value in runtime_env.items():
        if not key.startswith(env_prefix + "__"):
            continue
        path_key, parsed_value = _parse_kv_override(key, value, env_prefix)
        _assign_path(merged, path_key, parsed_value)
        provenance[path_key] = ConfigValueOrigin(
            layer="env",
            source="process",
            env_var=key,
        )

    try:
        config = Config.model_validate(merged)
    except ValidationError as exc:
        raise _format_validation_error(exc, provenance) from exc
    config._metadata = ConfigMetadata(
        config_path=config_path,
        env_path=env_path if env_path.exists() else None,
        env_prefix=env_prefix,
        provenance=provenance,
    )
    return config


def _resolve_value(mapping: Mapping[str, Any], path: str) -> Any:
    current: Any = mapping
    for segment in path.split("."):
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
        else:
            raise ConfigError(f"Unknown configuration key: {path}")
    return current


def _safe_repr(value: Any) -> str:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    try:
        return json.dumps(value, ensure_ascii=False)
    except TypeError:
        return repr(value)


def _format_schema_table() -> str:
    headers = ["Field", "Type", "Default", "Description", "Constraints"]
    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(["---"] * len(headers)) + " |",
    ]
    for entry in iter_field_docs(DEFAULT_CONFIG):
        if entry["is_nested"]:
            continue
        default = ""
        if entry["default"] is not None and not _is_secret(str(entry["name"])):
            default = _safe_repr(entry["default"])
        row = [
            str(entry["name"]),
            str(entry["type"]),
            default,
            str(entry.get("description", "")),
            str(entry.get("constraints", "")),
        ]
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def _dump_defaults() -> str:
    return tomli_w.dumps(_serialize_for_toml(DEFAULT_CONFIG))


def _show_sources(metadata: ConfigMetadata) -> str:
    details = "\n".join(f"- {item}" for item in metadata.describe_sources())
    return f"Active configuration sources:\n{details}"


def _explain(config: Config, key: str) -> str:
    metadata: ConfigMetadata | None = getattr(config, "_metadata", None)
    if metadata is None:
        raise ConfigError("Configuration metadata is unavailable")
    data = config.model_dump(mode="python")
    value = _resolve_value(data, key)
    origin = metadata.provenance.get(key)
    origin_text = origin.render() if origin else "unknown"
    formatted_value = "***masked***" if _is_secret(key) else _safe_repr(value)
    return f"{key} = {formatted_value}\nsource: {origin_text}"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Ethical crawler configuration utilities",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", type=Path, help="Path to the TOML configuration file")
    parser.add_argument(
        "--env-prefix",
        default=DEFAULT_ENV_PREFIX,
        help="Environment variable prefix (e.g. ETHICALCRAWLER__NEWSAPI__API_KEY)",
    )
    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument("--validate", action="store_true", help="Validate the active configuration")
    actions.add_argument("--dump-defaults", action="store_true", help="Print built-in defaults as TOML")
    actions.add_argument("--print-schema", action="store_true", help="Print Markdown table documenting all fields")
    actions.add_argument("--show-sources", action="store_true", help="Show configuration source precedence")
    actions.add_argument("--explain", metavar="KEY", help="Explain where a field value originates")

    args = parser.parse_args(argv)

    try:
        if args.dump_defaults:
            sys.stdout.write(_dump_defaults())
            return 0
        if args.print_schema:
            sys.stdout.write(_format_schema_table() + "\n")
            return 0

        config = load_config(args.config, env_prefix=args.env_prefix)
        metadata: ConfigMetadata | None = getattr(config, "_metadata", None)
        if args.validate:
            print("Configuration OK")
            return 0
        if args.show_sources:
            if metadata is None:
                raise ConfigError("Metadata unavailable for source display")
            print(_show_sources(metadata))
            return 0
        if args.explain:
            print(_explain(config, args.explain))
            return 0
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI entry point
    raise SystemExit(main())
