"""Pydantic models describing the tax year configuration schema."""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxBand(ImmutableModel):
    """A slice of taxable income charged at a single marginal rate.

    ``width`` is the amount of income the band absorbs, not a cumulative
    ceiling. ``None`` marks the unbounded top band.
    """

    width: float | None = Field(default=None, alias="limit")
    rate: float
    label: str = ""

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBand:
        if self.rate < 0 or self.rate > 1:
            raise ConfigurationError("Band rates must be fractions between 0 and 1")
        if self.width is not None and self.width <= 0:
            raise ConfigurationError("Band widths must be positive values")
        return self

    @property
    def unbounded(self) -> bool:
        return self.width is None


def _default_bands() -> tuple[TaxBand, ...]:
    return (
        TaxBand(width=2_200_000, rate=0.15, label="First ₦2,200,000"),
        TaxBand(width=7_000_000, rate=0.18, label="Next ₦7,000,000"),
        TaxBand(width=15_000_000, rate=0.21, label="Next ₦15,000,000"),
        TaxBand(width=25_000_000, rate=0.23, label="Next ₦25,000,000"),
        TaxBand(width=None, rate=0.25, label="Above ₦49,200,000"),
    )


DEFAULT_DEDUCTION_SUGGESTIONS: tuple[str, ...] = (
    "NHF (Housing Fund)",
    "NHIS (Health Insurance)",
    "Life Assurance Premium",
    "Voluntary Pension",
    "Others",
)


def _validate_band_sequence(bands: Sequence[TaxBand]) -> None:
    if not bands:
        raise ConfigurationError("At least one tax band must be defined")
    for band in bands[:-1]:
        if band.unbounded:
            raise ConfigurationError("Only the final tax band may be unbounded")
    if not bands[-1].unbounded:
        raise ConfigurationError("Final tax band must have an open width")


class PersonalTaxConfig(ImmutableModel):
    """Statutory relief and band schedule for personal income tax.

    Every field defaults to the current statutory value so that an empty
    ``PersonalTaxConfig()`` is the schedule applied when callers do not pick a
    year.
    """

    threshold_relief: float = Field(default=800_000, ge=0)
    cra_floor: float = Field(default=200_000, ge=0)
    cra_gross_percentage: float = Field(default=0.01, ge=0, le=1)
    cra_gross_rate: float = Field(default=0.20, ge=0, le=1)
    bands: tuple[TaxBand, ...] = Field(default_factory=_default_bands)
    deduction_suggestions: tuple[str, ...] = DEFAULT_DEDUCTION_SUGGESTIONS

    @field_validator("deduction_suggestions", mode="before")
    @classmethod
    def _coerce_suggestions(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            raise ConfigurationError("Deduction suggestions must be a list of names")
        return tuple(str(item).strip() for item in value if str(item).strip())

    @model_validator(mode="after")
    def _validate_bands(self) -> PersonalTaxConfig:
        _validate_band_sequence(self.bands)
        return self


class RevenueBand(ImmutableModel):
    """Company income tax band selected by total revenue."""

    label: str
    upper_bound: float | None = Field(default=None, alias="upper")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> RevenueBand:
        if self.rate < 0 or self.rate > 100:
            raise ConfigurationError("Company income tax rates must be percentages")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


def _default_revenue_bands() -> tuple[RevenueBand, ...]:
    return (
        RevenueBand(label="Small (Exempted)", upper_bound=25_000_000, rate=0),
        RevenueBand(label="Medium", upper_bound=100_000_000, rate=20),
        RevenueBand(label="Large", upper_bound=None, rate=30),
    )


class BusinessTaxConfig(ImmutableModel):
    """Company income tax, VAT and levy settings for business analysis.

    Rates are expressed as percentages, matching how they are reported.
    """

    revenue_bands: tuple[RevenueBand, ...] = Field(default_factory=_default_revenue_bands)
    vat_rate: float = Field(default=7.5, ge=0, le=100)
    nhl_rate: float = Field(default=0.5, ge=0, le=100)
    standard_deduction_rate: float = Field(default=0.05, ge=0, le=1)

    @model_validator(mode="after")
    def _validate_revenue_bands(self) -> BusinessTaxConfig:
        if not self.revenue_bands:
            raise ConfigurationError("At least one revenue band must be defined")
        last_upper: float | None = None
        for band in self.revenue_bands[:-1]:
            if band.upper_bound is None:
                raise ConfigurationError("Only the final revenue band may be open")
            if last_upper is not None and band.upper_bound <= last_upper:
                raise ConfigurationError("Revenue bands must be in ascending order")
            last_upper = band.upper_bound
        if self.revenue_bands[-1].upper_bound is not None:
            raise ConfigurationError("Final revenue band must have an open upper bound")
        return self

    def band_for_revenue(self, revenue: float) -> RevenueBand:
        for band in self.revenue_bands:
            if band.upper_bound is None or revenue <= band.upper_bound:
                return band
        return self.revenue_bands[-1]


class YearConfiguration(ImmutableModel):
    """Configuration bundle for a single tax year."""

    year: int
    currency: str = "NGN"
    meta: dict[str, Any] = Field(default_factory=dict)
    personal: PersonalTaxConfig = Field(default_factory=PersonalTaxConfig)
    business: BusinessTaxConfig = Field(default_factory=BusinessTaxConfig)

    @field_validator("meta", mode="before")
    @classmethod
    def _coerce_meta(cls, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ConfigurationError("Year metadata must be a mapping")
        return value

    @model_validator(mode="after")
    def _validate_year(self) -> Self:
        if self.year < 1900:
            raise ConfigurationError("Configuration year must be a four digit year")
        return self


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported tax year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available tax year configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> TaxYearManifest:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "BusinessTaxConfig",
    "ConfigurationError",
    "DEFAULT_DEDUCTION_SUGGESTIONS",
    "ImmutableModel",
    "PersonalTaxConfig",
    "RevenueBand",
    "TaxBand",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "YearConfiguration",
]
