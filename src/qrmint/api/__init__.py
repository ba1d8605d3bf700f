"""HTTP API for the QR record gateway."""
