"""Command groups registered on the otpbridge CLI."""
