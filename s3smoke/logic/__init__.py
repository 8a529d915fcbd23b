"""Step sequencing and result reporting for the smoke test."""
