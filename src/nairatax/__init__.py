"""NairaTax: Nigerian personal and business tax calculations."""
