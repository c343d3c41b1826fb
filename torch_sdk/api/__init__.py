"""HTTP quote service exposing the SDK."""
