"""ThaiTax personal income tax service."""
