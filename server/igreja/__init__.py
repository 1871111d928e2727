"""Church management authentication core."""
