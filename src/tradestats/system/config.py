"""
System configuration for TradeStats.

One configuration for the whole system: analysis defaults used whenever a
caller does not pass explicit parameters, plus logging.

Search Order (SystemConfig.load):
1. Explicit path argument
2. $TRADESTATS_CONFIG environment variable
3. ./config/system.yaml
4. Built-in defaults (no file required)

Partial files are deep-merged over the built-in defaults and ``${VAR}``
placeholders are substituted from the environment.
"""

import os
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

import yaml

from tradestats.system.log_system import LoggingConfig as LoggerConfig

if TYPE_CHECKING:
    from tradestats.engine.config import AnalysisConfig

CONFIG_ENV_VAR = "TRADESTATS_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/system.yaml")

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


@dataclass
class AnalysisDefaults:
    """Default parameters for metric computation.

    Attributes:
        risk_free_rate: Per-period risk-free rate subtracted by Sharpe and friends
        confidence: VaR/CVaR confidence level
        var_method: VaR estimator ("historical", "parametric", "montecarlo")
        periods_per_year: Fixed annualization periods (None = infer from timestamps)
        annualization_factor: Volatility annualization factor (252 = trading days)
        monte_carlo_simulations: Number of simulated returns for Monte Carlo VaR
        monte_carlo_seed: Seed for Monte Carlo VaR (None = non-deterministic)
        drawdown_threshold: Minimum depth (%) for a drawdown period to be reported
        maintenance_margin: Maintenance margin fraction for liquidation prices
        return_mode: "fractional" (0.01 = 1%) or "percentage" (1.0 = 1%)
        tail_percentile: Percentile used by the tail ratio
    """

    risk_free_rate: float = 0.0
    confidence: float = 0.95
    var_method: Literal["historical", "parametric", "montecarlo"] = "historical"
    periods_per_year: float | None = None
    annualization_factor: float = 252
    monte_carlo_simulations: int = 10_000
    monte_carlo_seed: int | None = None
    drawdown_threshold: float = 0.0
    maintenance_margin: float = 0.006
    return_mode: Literal["fractional", "percentage"] = "fractional"
    tail_percentile: float = 0.05

    def to_analysis_config(self) -> "AnalysisConfig":
        """Convert to the engine's validated AnalysisConfig."""
        from tradestats.engine.config import AnalysisConfig

        return AnalysisConfig(**asdict(self))


@dataclass
class LoggingConfig:
    """Logging section of system.yaml."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json"] = "console"
    timestamp_format: Literal["iso", "compact", "time", "short"] = "compact"
    enable_file: bool = False
    file_path: str = "logs/tradestats.log"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_rotation: bool = True
    max_file_size_mb: int = 10
    backup_count: int = 3

    def to_logger_config(self) -> LoggerConfig:
        """Convert to log_system.LoggingConfig for LoggerFactory.configure()."""
        return LoggerConfig(
            level=self.level,
            format=self.format,
            timestamp_format=self.timestamp_format,
            enable_file=self.enable_file,
            file_path=Path(self.file_path),
            file_level=self.file_level,
            file_rotation=self.file_rotation,
            max_file_size_mb=self.max_file_size_mb,
            backup_count=self.backup_count,
        )


@dataclass
class SystemConfig:
    """Complete system configuration."""

    analysis: AnalysisDefaults = field(default_factory=AnalysisDefaults)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "SystemConfig":
        """
        Load system configuration from YAML.

        Args:
            path: Explicit config file. Falls back to $TRADESTATS_CONFIG, then
                  config/system.yaml. A missing file means built-in defaults.

        Returns:
            SystemConfig with file values merged over defaults

        Raises:
            ValueError: If the file is not valid YAML or not a mapping
        """
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        else:
            config_path = Path(path)

        defaults = asdict(cls())
        if not config_path.exists():
            return cls._from_dict(defaults)

        try:
            with open(config_path, "r") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML from {config_path}: {e}")

        if not isinstance(raw, dict):
            raise ValueError(f"System config {config_path} must be a mapping, got {type(raw).__name__}")

        merged = _deep_merge(defaults, _substitute_env_vars(raw))
        return cls._from_dict(merged)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "SystemConfig":
        """Build SystemConfig from a (possibly partial) dictionary."""
        analysis = data.get("analysis") or {}
        logging_section = data.get("logging") or {}
        return cls(
            analysis=AnalysisDefaults(**analysis),
            logging=LoggingConfig(**logging_section),
        )


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base (override wins)."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _substitute_env_vars(value: Any) -> Any:
    """Replace ${VAR} placeholders in strings; undefined variables are left as-is."""
    if isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    return value


_system_config: SystemConfig | None = None


def get_system_config() -> SystemConfig:
    """Get the process-wide system configuration (loaded on first use)."""
    global _system_config
    if _system_config is None:
        _system_config = SystemConfig.load()
    return _system_config


def reload_system_config(path: Path | str | None = None) -> SystemConfig:
    """Force reload of the system configuration."""
    global _system_config
    _system_config = SystemConfig.load(path)
    return _system_config
