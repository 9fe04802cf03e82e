"""Storage layer: spreadsheet projection of aggregated transactions."""
