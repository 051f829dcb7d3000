"""HTTP surface for trip sessions."""
