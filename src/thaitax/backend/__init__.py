"""Backend services for the ThaiTax calculator."""
