"""QR record engine — models, repository and services."""
