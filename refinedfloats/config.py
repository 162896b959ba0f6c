"""Configuration system for refinedfloats.
Supports TOML configuration files with project-level and user-level settings.
"""
from __future__ import annotations
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from refinedfloats.analysis.registry import Operation
from refinedfloats.analysis.rounding import RoundingModel
from refinedfloats.core.exceptions import ConfigError
from refinedfloats.core.precision import FloatPrecision
from refinedfloats.logging import LogLevel, get_logger
CONFIG_FILES = [
    "refinedfloats.toml",
    ".refinedfloats.toml",
    "pyproject.toml",
]
@dataclass
class MatrixConfig:
    """Configuration for matrix generation."""
    precisions: list[str] = field(default_factory=lambda: ["f32", "f64"])
    rounding: str = "algebraic"
    max_workers: int = 1
    operations: list[str] | None = None
    def resolve_precisions(self) -> list[FloatPrecision]:
        return [FloatPrecision.from_name(name) for name in self.precisions]
    def resolve_rounding(self) -> RoundingModel:
        return RoundingModel.from_name(self.rounding)
    def resolve_operations(self) -> list[Operation] | None:
        if self.operations is None:
            return None
        resolved = []
        for name in self.operations:
            try:
                resolved.append(Operation.from_name(name))
            except KeyError:
                raise ConfigError("matrix.operations", name, "unknown operation") from None
        return resolved
    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "precisions": self.precisions,
            "rounding": self.rounding,
            "max_workers": self.max_workers,
            "operations": self.operations,
        }
@dataclass
class VerifyConfig:
    """Configuration for the IEEE verifier."""
    precision: str = "f16"
    timeout_ms: int = 10000
    def resolve_precision(self) -> FloatPrecision:
        return FloatPrecision.from_name(self.precision)
    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "precision": self.precision,
            "timeout_ms": self.timeout_ms,
        }
@dataclass
class OutputConfig:
    """Configuration for log output."""
    color: bool = True
    verbose: bool = False
    quiet: bool = False
    def log_level(self) -> LogLevel:
        if self.quiet:
            return LogLevel.QUIET
        if self.verbose:
            return LogLevel.VERBOSE
        return LogLevel.NORMAL
    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "color": self.color,
            "verbose": self.verbose,
            "quiet": self.quiet,
        }
@dataclass
class RefinedFloatsConfig:
    """Main configuration for refinedfloats."""
    matrix: MatrixConfig = field(default_factory=MatrixConfig)
    verify: VerifyConfig = field(default_factory=VerifyConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    project_root: Path | None = None
    config_file: Path | None = None
    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "matrix": self.matrix.to_dict(),
            "verify": self.verify.to_dict(),
            "output": self.output.to_dict(),
        }
    def to_toml(self) -> str:
        """Generate TOML configuration string."""
        lines = ["[tool.refinedfloats]"]
        for section, values in self.to_dict().items():
            lines.append("")
            lines.append(f"[tool.refinedfloats.{section}]")
            for key, value in values.items():
                if value is None:
                    continue
                lines.append(f"{key} = {_toml_value(value)}")
        return "\n".join(lines) + "\n"
def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list):
        return "[" + ", ".join(_toml_value(v) for v in value) + "]"
    return str(value)
def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file by walking up directory tree."""
    if start_dir is None:
        start_dir = Path.cwd()
    current = start_dir.resolve()
    while True:
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists() and _has_settings(config_path):
                return config_path
        if current == current.parent:
            break
        current = current.parent
    home = Path.home()
    for config_name in [".refinedfloats.toml", "refinedfloats.toml"]:
        config_path = home / config_name
        if config_path.exists():
            return config_path
    return None
def _has_settings(path: Path) -> bool:
    # A pyproject.toml only counts when it has a [tool.refinedfloats] table.
    if path.name != "pyproject.toml":
        return True
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return "refinedfloats" in data.get("tool", {})
def load_config(
    config_path: Path | None = None,
    start_dir: Path | None = None,
) -> RefinedFloatsConfig:
    """Load configuration from file or use defaults.
    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching for config
    Returns:
        Loaded configuration
    """
    config = RefinedFloatsConfig()
    if config_path is None:
        config_path = find_config_file(start_dir)
    if config_path is None or not config_path.exists():
        return config
    config.config_file = config_path
    config.project_root = config_path.parent
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        get_logger().warning(f"Failed to parse config file {config_path}: {e}")
        return config
    if config_path.name == "pyproject.toml":
        settings = data.get("tool", {}).get("refinedfloats", {})
    else:
        settings = data.get("tool", {}).get("refinedfloats", data)
    _apply_config(config, settings)
    get_logger().debug(f"Loaded configuration from {config_path}", category="config")
    return config
def _apply_config(config: RefinedFloatsConfig, data: dict[str, Any]) -> None:
    """Apply configuration data to config object."""
    if "matrix" in data:
        matrix_data = data["matrix"]
        if "precisions" in matrix_data:
            config.matrix.precisions = [str(p) for p in matrix_data["precisions"]]
        if "rounding" in matrix_data:
            config.matrix.rounding = str(matrix_data["rounding"])
        if "max_workers" in matrix_data:
            workers = matrix_data["max_workers"]
            if not isinstance(workers, int) or workers < 1:
                raise ConfigError("matrix.max_workers", workers, "expected a positive integer")
            config.matrix.max_workers = workers
        if "operations" in matrix_data:
            config.matrix.operations = [str(o) for o in matrix_data["operations"]]
    if "verify" in data:
        verify_data = data["verify"]
        if "precision" in verify_data:
            config.verify.precision = str(verify_data["precision"])
        if "timeout_ms" in verify_data:
            timeout = verify_data["timeout_ms"]
            if not isinstance(timeout, int) or timeout < 1:
                raise ConfigError("verify.timeout_ms", timeout, "expected a positive integer")
            config.verify.timeout_ms = timeout
    if "output" in data:
        out_data = data["output"]
        for key in ["color", "verbose", "quiet"]:
            if key in out_data:
                setattr(config.output, key, bool(out_data[key]))
def generate_default_config() -> str:
    """Generate default configuration file content."""
    return RefinedFloatsConfig().to_toml()
def init_config(directory: Path | None = None) -> Path:
    """Initialize a new configuration file in the given directory.
    Args:
        directory: Directory to create config in (default: current)
    Returns:
        Path to created config file
    """
    if directory is None:
        directory = Path.cwd()
    config_path = directory / "refinedfloats.toml"
    if config_path.exists():
        raise FileExistsError(f"Config file already exists: {config_path}")
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path
__all__ = [
    "RefinedFloatsConfig",
    "MatrixConfig",
    "VerifyConfig",
    "OutputConfig",
    "load_config",
    "find_config_file",
    "generate_default_config",
    "init_config",
]
