"""HTTP API for lot dues reports."""
