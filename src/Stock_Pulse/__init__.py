"""Stock Pulse: single-symbol stock quote dashboard and Alpha Vantage gateway."""
