"""Utilities for validating year configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from typing import Sequence

from .year_config import (
    BusinessTaxConfig,
    ConfigurationError,
    PersonalTaxConfig,
    YearConfiguration,
    available_years,
    load_year_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_personal(personal: PersonalTaxConfig) -> list[str]:
    errors: list[str] = []
    scope = "personal.bands"

    rates = [band.rate for band in personal.bands]
    if rates != sorted(rates):
        errors.append(
            _format_scope(scope, "band rates must not decrease from one band to the next")
        )

    for index, band in enumerate(personal.bands, start=1):
        if not band.label.strip():
            errors.append(_format_scope(f"{scope}[{index}]", "band label must not be empty"))

    if personal.cra_floor <= 0 and personal.cra_gross_percentage <= 0:
        errors.append(
            _format_scope(
                "personal.cra",
                "either a floor or a gross percentage is required for the relief allowance",
            )
        )

    suggestions = list(personal.deduction_suggestions)
    duplicates = [name for name, count in Counter(suggestions).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "personal.deduction_suggestions",
                f"duplicate suggestion names detected: {sorted(duplicates)}",
            )
        )

    return errors


def _validate_business(business: BusinessTaxConfig) -> list[str]:
    errors: list[str] = []
    scope = "business.revenue_bands"

    labels = [band.label for band in business.revenue_bands]
    duplicates = [label for label, count in Counter(labels).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(scope, f"duplicate band labels detected: {sorted(duplicates)}")
        )

    rates = [band.rate for band in business.revenue_bands]
    if rates != sorted(rates):
        errors.append(
            _format_scope(scope, "company income tax rates must not decrease with revenue")
        )

    if business.vat_rate <= 0:
        errors.append(_format_scope("business.vat_rate", "VAT rate must be positive"))

    return errors


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    errors.extend(_validate_personal(config.personal))
    errors.extend(_validate_business(config.business))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured tax years and report issues found in the data files."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            config = load_year_configuration(year)
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
