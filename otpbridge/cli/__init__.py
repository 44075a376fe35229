"""CLI module for otpbridge."""
