"""Default configuration parameters for the inventory engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BudgetDefaults:
    """Budget seeded for a category when it is first added."""
    device_category: float = 1000.0                  # CapEx budget per new device category
    repair_category: float = 250.0                   # OpEx budget per new repair category


@dataclass(frozen=True)
class ReportingParams:
    """Dashboard and financial report parameters."""
    warranty_window_months: int = 6                  # Look-ahead for expiring warranties
    budget_warning_pct: float = 75.0                 # Spend share flagged as warning
    budget_critical_pct: float = 90.0                # Spend share flagged as critical

    # Device age buckets (upper bounds in years, inclusive after the first)
    age_new_years: float = 1.0
    age_mid_years: float = 3.0
    age_old_years: float = 5.0


@dataclass(frozen=True)
class IdentityParams:
    """Prefixes for generated record ids."""
    device_prefix: str = "d"
    repair_prefix: str = "r"


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    budgets: BudgetDefaults
    reporting: ReportingParams
    identity: IdentityParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        budgets=BudgetDefaults(),
        reporting=ReportingParams(),
        identity=IdentityParams(),
        logging=LoggingParams(),
    )


def config_from_dict(data: dict) -> DefaultConfig:
    """Rebuild a DefaultConfig from a merged configuration dict."""
    return DefaultConfig(
        budgets=BudgetDefaults(**data.get("budgets", {})),
        reporting=ReportingParams(**data.get("reporting", {})),
        identity=IdentityParams(**data.get("identity", {})),
        logging=LoggingParams(**data.get("logging", {})),
    )
