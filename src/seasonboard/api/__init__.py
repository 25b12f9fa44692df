"""HTTP API for seasonboard."""
