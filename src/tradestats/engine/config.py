"""Configuration for a metrics computation run."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tradestats.libraries.performance.tail_risk import DEFAULT_SIMULATIONS


class AnalysisConfig(BaseModel):
    """
    Parameters of one compute_metrics() call.

    Units must agree with ``return_mode``: with fractional returns the
    risk-free rate is a fraction per period (0.0001), with percentage
    returns it is in percentage points (0.01).

    Example:
        >>> config = AnalysisConfig(confidence=0.99, var_method="parametric")
        >>> config = AnalysisConfig(periods_per_year=365, monte_carlo_seed=7)
    """

    risk_free_rate: float = Field(default=0.0, description="Per-period risk-free rate / minimum acceptable return")
    confidence: float = Field(default=0.95, description="VaR/CVaR confidence level, in (0, 1)")
    var_method: Literal["historical", "parametric", "montecarlo"] = Field(
        default="historical", description="Value-at-Risk estimator"
    )
    periods_per_year: float | None = Field(
        default=None, description="Annualization periods for ratios (None = infer from equity timestamps)"
    )
    annualization_factor: float = Field(default=252, description="Volatility annualization factor")
    monte_carlo_simulations: int = Field(default=DEFAULT_SIMULATIONS, description="Simulated returns for Monte Carlo VaR")
    monte_carlo_seed: int | None = Field(default=None, description="Seed for Monte Carlo VaR")
    drawdown_threshold: float = Field(default=0.0, description="Minimum drawdown depth (%) to report a period")
    maintenance_margin: float = Field(default=0.006, description="Maintenance margin fraction")
    return_mode: Literal["fractional", "percentage"] = Field(
        default="fractional", description="Return unit: 0.01 (fractional) or 1.0 (percentage) for 1%"
    )
    tail_percentile: float = Field(default=0.05, description="Percentile used by the tail ratio")

    model_config = ConfigDict(frozen=True)

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: float) -> float:
        """Validate confidence is a probability strictly between 0 and 1."""
        if not 0.0 < v < 1.0:
            raise ValueError(f"confidence must be in (0, 1), got {v}")
        return v

    @field_validator("periods_per_year")
    @classmethod
    def validate_periods_per_year(cls, v: float | None) -> float | None:
        """Validate a fixed annualization is positive."""
        if v is not None and v <= 0:
            raise ValueError(f"periods_per_year must be positive, got {v}")
        return v

    @field_validator("annualization_factor")
    @classmethod
    def validate_annualization_factor(cls, v: float) -> float:
        """Validate annualization factor is positive."""
        if v <= 0:
            raise ValueError(f"annualization_factor must be positive, got {v}")
        return v

    @field_validator("monte_carlo_simulations")
    @classmethod
    def validate_simulations(cls, v: int) -> int:
        """Validate at least one simulation is requested."""
        if v < 1:
            raise ValueError(f"monte_carlo_simulations must be >= 1, got {v}")
        return v

    @field_validator("drawdown_threshold")
    @classmethod
    def validate_drawdown_threshold(cls, v: float) -> float:
        """Validate drawdown threshold is non-negative."""
        if v < 0:
            raise ValueError(f"drawdown_threshold must be non-negative, got {v}")
        return v

    @field_validator("maintenance_margin")
    @classmethod
    def validate_maintenance_margin(cls, v: float) -> float:
        """Validate maintenance margin is a fraction."""
        if not 0.0 <= v < 1.0:
            raise ValueError(f"maintenance_margin must be in [0, 1), got {v}")
        return v

    @field_validator("tail_percentile")
    @classmethod
    def validate_tail_percentile(cls, v: float) -> float:
        """Validate tail percentile lies in the lower half of the distribution."""
        if not 0.0 < v < 0.5:
            raise ValueError(f"tail_percentile must be in (0, 0.5), got {v}")
        return v
