"""Randomized, reproducible testnet manifest generation."""
