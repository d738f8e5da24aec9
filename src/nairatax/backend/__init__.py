"""Backend services for the NairaTax calculators."""
